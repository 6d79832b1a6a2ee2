from __future__ import annotations

"""
Directory Traversal Service.

Recursive tree walks (synchronous and asynchronous) with symlink-aware
classification and caller-controlled pruning, plus flat single-directory
listings with optional extension filtering.

Entries of a directory are always visited in case-insensitive name order,
so walks are reproducible across filesystems that return entries in hash
or creation order.
"""

import inspect
import locale
import logging
import os
import stat
from collections import deque
from typing import Any, Awaitable, Callable, Deque, Iterable, List, Optional, Sequence, Tuple, Union

import aiofiles.os

from fskit.core.probe import is_directory_sync, stat_no_exception
from fskit.domain.fs_models import TraversalError, TraversalSummary

logger = logging.getLogger(__name__)

Visitor = Callable[[str], Any]
AsyncVisitor = Callable[[str], Union[Any, Awaitable[Any]]]

# -----------------------------------------------------------------------------
# ORDERING AND FILTERING
# -----------------------------------------------------------------------------

def _name_sort_key(name: str) -> Tuple[str, str]:
    return locale.strxfrm(name.lower()), name


def sort_names(names: Iterable[str]) -> List[str]:
    """Sort entry names case-insensitively using the active locale collation."""
    return sorted(names, key=_name_sort_key)


def filter_extensions(names: Iterable[str], extensions: Sequence[str]) -> List[str]:
    """
    Keep only names whose extension is in the given list.

    Each extension is normalized to carry one leading dot; "" matches names
    without an extension. Matching is case-sensitive.

    Args:
        names: File names or paths.
        extensions: Allowed extensions, with or without the leading dot.

    Returns:
        List[str]: Matching names in their original order.
    """
    allowed = set()
    for ext in extensions:
        if ext == "":
            allowed.add(ext)
        else:
            allowed.add("." + (ext[1:] if ext.startswith(".") else ext))
    return [name for name in names if os.path.splitext(name)[1] in allowed]

# -----------------------------------------------------------------------------
# SYNCHRONOUS TRAVERSAL
# -----------------------------------------------------------------------------

def traverse_tree_sync(
        root_path: str,
        on_file: Visitor,
        on_directory: Optional[Visitor] = None,
) -> None:
    """
    Walk a directory tree depth-first, visiting each entry before its children.

    Symbolic links are classified by their target when it resolves and by
    the link itself otherwise. Entries that are neither regular files nor
    directories (sockets, devices, dangling links) are skipped.

    Args:
        root_path: Directory to walk. Nothing happens if it is not a directory.
        on_file: Called with the full path of every regular file.
        on_directory: Called with the full path of every directory; a falsy
            return prunes that directory. Defaults to on_file.

    Raises:
        OSError: If listing or lstat of a visited entry fails.
    """
    if on_directory is None:
        on_directory = on_file
    if not is_directory_sync(root_path):
        return
    _traverse_sync(root_path, on_file, on_directory)


def _traverse_sync(directory: str, on_file: Visitor, on_directory: Visitor) -> None:
    for name in sort_names(os.listdir(directory)):
        child_path = os.path.join(directory, name)
        st = os.lstat(child_path)
        if stat.S_ISLNK(st.st_mode):
            target = stat_no_exception(child_path)
            if target is not False:
                st = target

        if stat.S_ISDIR(st.st_mode):
            if on_directory(child_path):
                _traverse_sync(child_path, on_file, on_directory)
        elif stat.S_ISREG(st.st_mode):
            on_file(child_path)


def list_tree_sync(root_path: str) -> List[str]:
    """
    Return every file and directory under a root, in walk order.

    Returns:
        List[str]: Full paths; directories precede their descendants.
    """
    paths: List[str] = []

    def on_path(child_path: str) -> bool:
        paths.append(child_path)
        return True

    traverse_tree_sync(root_path, on_path, on_path)
    return paths

# -----------------------------------------------------------------------------
# ASYNCHRONOUS TRAVERSAL
# -----------------------------------------------------------------------------

async def _call_visitor(visitor: AsyncVisitor, path: str) -> Any:
    result = visitor(path)
    if inspect.isawaitable(result):
        result = await result
    return result


async def traverse_tree(
        root_path: str,
        on_file: AsyncVisitor,
        on_directory: Optional[AsyncVisitor] = None,
) -> TraversalSummary:
    """
    Walk a directory tree asynchronously, one entry at a time.

    Work items are drained strictly in queue order. Children of an accepted
    directory are pushed to the front of the queue one by one, so they are
    processed before the directory's remaining siblings, last child first.
    A failed status query or listing aborts only that entry's branch and is
    recorded in the summary; the walk always runs to completion.

    Visitors may be plain callables or coroutine functions.

    Args:
        root_path: Directory to walk.
        on_file: Called with the full path of every regular file.
        on_directory: Called with every directory; falsy prunes. Defaults to on_file.

    Returns:
        TraversalSummary: Visited files and directories plus aborted branches.
        Empty when the root cannot be listed.
    """
    if on_directory is None:
        on_directory = on_file

    summary = TraversalSummary()

    try:
        names = await aiofiles.os.listdir(root_path)
    except OSError as e:
        logger.debug(f"Cannot list root '{root_path}', nothing to traverse: {e}")
        return summary

    queue: Deque[str] = deque(os.path.join(root_path, name) for name in sort_names(names))

    while queue:
        child_path = queue.popleft()
        try:
            st = await aiofiles.os.stat(child_path)
        except OSError as e:
            _record_branch_error(summary, child_path, e)
            continue

        if stat.S_ISREG(st.st_mode):
            summary.files.append(child_path)
            await _call_visitor(on_file, child_path)
        elif stat.S_ISDIR(st.st_mode):
            summary.directories.append(child_path)
            if not await _call_visitor(on_directory, child_path):
                continue
            try:
                children = await aiofiles.os.listdir(child_path)
            except OSError as e:
                _record_branch_error(summary, child_path, e)
                continue
            queue.extendleft(os.path.join(child_path, name) for name in sort_names(children))

    logger.debug(
        f"Traversal of '{root_path}' done: {len(summary.files)} files, "
        f"{len(summary.directories)} directories, {len(summary.errors)} errors"
    )
    return summary


def _record_branch_error(summary: TraversalSummary, path: str, error: OSError) -> None:
    logger.warning(f"Skipping '{path}': {error}")
    summary.errors.append(TraversalError(path=path, error=str(error)))

# -----------------------------------------------------------------------------
# FLAT LISTINGS
# -----------------------------------------------------------------------------

def _finish_listing(root_path: str, names: List[str], extensions: Optional[Sequence[str]]) -> List[str]:
    if extensions is not None:
        names = filter_extensions(names, extensions)
    return [os.path.join(root_path, name) for name in sort_names(names)]


def list_sync(root_path: str, extensions: Optional[Sequence[str]] = None) -> List[str]:
    """
    List the entries of one directory (not recursive).

    Args:
        root_path: Directory to list.
        extensions: Optional extension filter (see filter_extensions).

    Returns:
        List[str]: Sorted full paths, or [] if root_path is not a directory.
    """
    if not is_directory_sync(root_path):
        return []
    return _finish_listing(root_path, os.listdir(root_path), extensions)


async def list_dir(root_path: str, extensions: Optional[Sequence[str]] = None) -> List[str]:
    """
    Asynchronously list the entries of one directory (not recursive).

    Raises:
        OSError: If the directory cannot be read.
    """
    names = await aiofiles.os.listdir(root_path)
    return _finish_listing(root_path, names, extensions)
