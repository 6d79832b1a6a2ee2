from __future__ import annotations

"""
Storage Location Infrastructure.

Resolves where fskit keeps its own state (configuration file, logs) and
creates that location on demand.
"""

import os
from typing import Optional, Tuple

from fskit.core.paths import get_home_directory
from fskit.domain.context import FsContext, resolve_context

APP_DIR_NAME = "fskit"
UNIX_APP_DIR_NAME = ".fskit"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir(ctx: Optional[FsContext] = None) -> str:
    """
    Resolve the per-user directory for fskit state.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/fskit
    - Linux/Mac: ~/.fskit

    Returns:
        str: Absolute path to the data directory.
    """
    ctx = resolve_context(ctx)
    path: str = ""

    if ctx.is_windows:
        base = ctx.environ.get("LOCALAPPDATA") or ctx.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = get_home_directory(ctx)
        path = os.path.join(home, UNIX_APP_DIR_NAME) if home else UNIX_APP_DIR_NAME

    safe_mkdir(path)
    return os.path.abspath(path)


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
