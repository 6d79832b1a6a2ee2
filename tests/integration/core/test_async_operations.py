from __future__ import annotations

"""
Integration tests for the asynchronous filesystem operations.

Coroutines are driven with asyncio.run so no event-loop plugin is needed.

Verifies:
1. Queue-ordered tree walks, pruning, and per-branch error recording.
2. Async listings, streaming copies, guarded moves and removals.
"""

import asyncio
import errno
import os
from pathlib import Path
from typing import List
from unittest.mock import AsyncMock, patch

import aiofiles.os
import pytest

from fskit.core.copy_move import copy, make_tree, move, remove, write_file
from fskit.core.walker import list_dir, traverse_tree

# -----------------------------------------------------------------------------
# TRAVERSAL TESTS
# -----------------------------------------------------------------------------

def test_traverse_tree_visits_everything(sample_tree: Path) -> None:
    """TC-01: Files and directories are visited and summarized."""
    root = str(sample_tree)
    files: List[str] = []
    dirs: List[str] = []

    def on_dir(p: str) -> bool:
        dirs.append(p)
        return True

    summary = asyncio.run(traverse_tree(root, files.append, on_dir))

    assert files == [os.path.join(root, "a"), os.path.join(root, "b", "c")]
    assert dirs == [os.path.join(root, "b")]
    assert summary.files == files
    assert summary.directories == dirs
    assert summary.ok


def test_traverse_tree_children_jump_the_queue(nested_tree: Path) -> None:
    """TC-02: A directory's children run before its siblings, last child first."""
    root = str(nested_tree)
    order: List[str] = []

    def visit(p: str) -> bool:
        order.append(os.path.relpath(p, root))
        return True

    asyncio.run(traverse_tree(root, visit))

    assert order == [
        "Alpha.txt",
        "node_modules",
        os.path.join("node_modules", "dep.js"),
        "README.md",
        "src",
        os.path.join("src", "main.py"),
        os.path.join("src", "lib"),
        os.path.join("src", "lib", "util.py"),
    ]


def test_traverse_tree_coroutine_visitors_and_pruning(nested_tree: Path) -> None:
    """TC-03: Awaitable visitors are awaited; falsy results prune."""
    root = str(nested_tree)
    files: List[str] = []

    async def on_file(p: str) -> None:
        await asyncio.sleep(0)
        files.append(os.path.basename(p))

    async def on_dir(p: str) -> bool:
        return os.path.basename(p) != "src"

    summary = asyncio.run(traverse_tree(root, on_file, on_dir))

    assert sorted(files) == ["Alpha.txt", "README.md", "dep.js"]
    assert [os.path.basename(d) for d in summary.directories] == ["node_modules", "src"]


def test_traverse_tree_unlistable_root_is_empty(tmp_path: Path) -> None:
    """TC-04: A root that cannot be listed completes with nothing visited."""
    visited: List[str] = []
    summary = asyncio.run(traverse_tree(str(tmp_path / "missing"), visited.append))

    assert visited == []
    assert summary.files == []
    assert summary.directories == []
    assert summary.ok


@pytest.mark.skipif(os.name == "nt", reason="symlinks require privileges on Windows")
def test_traverse_tree_records_branch_errors(tmp_path: Path) -> None:
    """TC-05: A failed status query aborts only that branch."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "good.txt").write_text("", encoding="utf-8")
    (root / "broken").symlink_to(tmp_path / "nowhere")

    visited: List[str] = []
    summary = asyncio.run(traverse_tree(str(root), visited.append))

    assert [os.path.basename(p) for p in visited] == ["good.txt"]
    assert not summary.ok
    assert len(summary.errors) == 1
    assert summary.errors[0].path == str(root / "broken")
    assert summary.errors[0].error

# -----------------------------------------------------------------------------
# LISTING TESTS
# -----------------------------------------------------------------------------

def test_list_dir_sorted_and_filtered(nested_tree: Path) -> None:
    """TC-06: Same contract as list_sync."""
    root = str(nested_tree)
    assert asyncio.run(list_dir(root, ["md", "txt"])) == [
        os.path.join(root, "Alpha.txt"),
        os.path.join(root, "README.md"),
    ]
    assert len(asyncio.run(list_dir(root))) == 4


def test_list_dir_missing_raises(tmp_path: Path) -> None:
    """TC-06: Unlike list_sync, the async listing reports failures."""
    with pytest.raises(FileNotFoundError):
        asyncio.run(list_dir(str(tmp_path / "missing")))

# -----------------------------------------------------------------------------
# COPY / MOVE / REMOVE TESTS
# -----------------------------------------------------------------------------

def test_copy_streams_and_creates_parent(tmp_path: Path) -> None:
    """TC-07: Streaming copy produces identical bytes under a new parent."""
    payload = os.urandom(100_000)
    src = tmp_path / "src.bin"
    src.write_bytes(payload)
    dst = tmp_path / "new" / "dst.bin"

    asyncio.run(copy(str(src), str(dst), buffer_size=4096))

    assert dst.read_bytes() == payload


def test_copy_missing_source_fails_once(tmp_path: Path) -> None:
    """TC-07: Read failures surface as one exception."""
    with pytest.raises(FileNotFoundError):
        asyncio.run(copy(str(tmp_path / "missing"), str(tmp_path / "out" / "dst")))


def test_move_refuses_existing_target(tmp_path: Path) -> None:
    """TC-08: EEXIST for a different existing target; sources untouched."""
    src = tmp_path / "a"
    src.write_text("a", encoding="utf-8")
    target = tmp_path / "b"
    target.write_text("b", encoding="utf-8")

    with pytest.raises(FileExistsError) as excinfo:
        asyncio.run(move(str(src), str(target)))

    assert excinfo.value.errno == errno.EEXIST
    assert src.exists()
    assert target.read_text(encoding="utf-8") == "b"


def test_move_creates_parent(tmp_path: Path) -> None:
    """TC-08: Missing parent directories of the target are created."""
    src = tmp_path / "dir"
    src.mkdir()
    (src / "f").write_text("x", encoding="utf-8")
    target = tmp_path / "p" / "q" / "dir"

    asyncio.run(move(str(src), str(target)))

    assert not src.exists()
    assert (target / "f").read_text(encoding="utf-8") == "x"


def test_move_case_only_rename_allowed(tmp_path: Path) -> None:
    """TC-08: Both spellings reporting one inode means the target is the source."""
    src = tmp_path / "Name.txt"
    src.write_text("x", encoding="utf-8")
    target = tmp_path / "name.txt"
    st = os.stat(src)

    # Simulate a case-folding filesystem: both spellings report one inode
    with patch.object(aiofiles.os, "stat", new=AsyncMock(return_value=st)), \
            patch.object(aiofiles.os, "rename", new=AsyncMock()) as rename:
        asyncio.run(move(str(src), str(target)))

    rename.assert_awaited_once_with(str(src), str(target))


def test_move_missing_source_raises(tmp_path: Path) -> None:
    """TC-08: The source status query fails first."""
    with pytest.raises(FileNotFoundError):
        asyncio.run(move(str(tmp_path / "missing"), str(tmp_path / "t")))


def test_remove_tree_and_missing(sample_tree: Path) -> None:
    """TC-09: Trees are deleted; a second removal is a no-op."""
    asyncio.run(remove(str(sample_tree)))
    assert not sample_tree.exists()
    asyncio.run(remove(str(sample_tree)))


def test_make_tree_and_write_file(tmp_path: Path) -> None:
    """TC-10: Directory creation is idempotent; writes create parents."""
    target = tmp_path / "x" / "y"

    async def scenario() -> bool:
        await make_tree(str(target))
        await make_tree(str(target))
        await write_file(str(target / "z" / "note.txt"), "hello")
        await write_file(str(target / "blob.bin"), b"\x01\x02")
        return await aiofiles.os.path.isdir(str(target))

    assert asyncio.run(scenario()) is True
    assert (target / "z" / "note.txt").read_text(encoding="utf-8") == "hello"
    assert (target / "blob.bin").read_bytes() == b"\x01\x02"
