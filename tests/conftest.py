from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An isolated FsContext (fake HOME, fixed platform) per test.
3. Small directory trees shared by the traversal and copy tests.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Generator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from fskit.domain.context import FsContext, set_default_context  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """A real directory standing in for the user's home."""
    home = tmp_path / "home" / "user"
    home.mkdir(parents=True)
    return home


@pytest.fixture
def posix_ctx(home_dir: Path) -> Generator[FsContext, None, None]:
    """
    Install a POSIX-flavoured default context whose HOME is home_dir.

    The previous default context is restored afterwards so no cached
    state leaks between tests.
    """
    env: Dict[str, str] = {"HOME": str(home_dir)}
    ctx = FsContext(platform="linux", environ=env)
    previous = set_default_context(ctx)
    yield ctx
    set_default_context(previous)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    Build:
        root/
          a
          b/
            c
    """
    root = tmp_path / "root"
    (root / "b").mkdir(parents=True)
    (root / "a").write_text("a", encoding="utf-8")
    (root / "b" / "c").write_text("c", encoding="utf-8")
    return root


@pytest.fixture
def nested_tree(tmp_path: Path) -> Path:
    """
    Build:
        project/
          README.md
          Alpha.txt
          src/
            main.py
            lib/
              util.py
          node_modules/
            dep.js
    """
    root = tmp_path / "project"
    (root / "src" / "lib").mkdir(parents=True)
    (root / "node_modules").mkdir()
    (root / "README.md").write_text("# readme", encoding="utf-8")
    (root / "Alpha.txt").write_text("alpha", encoding="utf-8")
    (root / "src" / "main.py").write_text("print('main')", encoding="utf-8")
    (root / "src" / "lib" / "util.py").write_text("x = 1", encoding="utf-8")
    (root / "node_modules" / "dep.js").write_text("var x;", encoding="utf-8")
    return root
