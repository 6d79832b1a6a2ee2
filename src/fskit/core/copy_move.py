from __future__ import annotations

"""
Copy, Move and Removal Services.

Moves guarded against accidental overwrite, recursive and buffered copies,
streaming asynchronous copies, idempotent directory creation and recursive
deletion. Missing parent directories of a destination are created on
demand; multi-step operations are ordered but not atomic.
"""

import asyncio
import errno
import hashlib
import logging
import os
import shutil
import stat
from typing import Optional, Union

import aiofiles
import aiofiles.os

from fskit.core.probe import is_directory, is_directory_sync, lstat_no_exception, stat_no_exception
from fskit.domain.context import FsContext, resolve_context

logger = logging.getLogger(__name__)

Content = Union[str, bytes]

# -----------------------------------------------------------------------------
# DIRECTORY CREATION
# -----------------------------------------------------------------------------

def make_tree_sync(directory_path: str) -> None:
    """Create a directory and any missing parents; no-op if it already exists."""
    if not is_directory_sync(directory_path):
        os.makedirs(directory_path, exist_ok=True)


async def make_tree(directory_path: str) -> None:
    """Asynchronously create a directory and any missing parents."""
    if await is_directory(directory_path):
        return
    await aiofiles.os.makedirs(directory_path, exist_ok=True)


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


async def _ensure_parent_dir_async(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        await aiofiles.os.makedirs(parent, exist_ok=True)

# -----------------------------------------------------------------------------
# MOVE API
# -----------------------------------------------------------------------------

def _already_exists(target: str) -> FileExistsError:
    return FileExistsError(errno.EEXIST, f"'{target}' already exists.", target)


def _is_case_only_rename(source: str, target: str, source_st: os.stat_result, target_st: os.stat_result) -> bool:
    """
    A present target is acceptable only when it is the source itself,
    reached through a name differing in letter case (case-folding filesystems).
    """
    return (
        source.lower() == target.lower()
        and source_st.st_dev == target_st.st_dev
        and source_st.st_ino == target_st.st_ino
    )


def _is_move_target_valid_sync(source: str, target: str) -> bool:
    source_st = stat_no_exception(source)
    target_st = stat_no_exception(target)
    if source_st is False or target_st is False:
        return True
    return _is_case_only_rename(source, target, source_st, target_st)


def move_sync(source: str, target: str) -> None:
    """
    Move a file or directory, creating the target's parent if needed.

    Args:
        source: Existing path.
        target: Destination path. Must not exist unless it is the source
            itself under a different letter case.

    Raises:
        FileExistsError: If target denotes a different existing file
            (errno EEXIST).
        OSError: If creating the parent or renaming fails.
    """
    if not _is_move_target_valid_sync(source, target):
        raise _already_exists(target)

    target_parent = os.path.dirname(target)
    if target_parent and not os.path.exists(target_parent):
        make_tree_sync(target_parent)
    os.rename(source, target)
    logger.debug(f"Moved '{source}' -> '{target}'")


async def move(source: str, target: str) -> None:
    """
    Asynchronously move a file or directory.

    Same target validation as move_sync, except that a source that cannot
    be queried fails immediately.

    Raises:
        FileExistsError: If target denotes a different existing file.
        OSError: If the source cannot be queried, or mkdir/rename fails.
    """
    source_st = await aiofiles.os.stat(source)
    try:
        target_st = await aiofiles.os.stat(target)
    except FileNotFoundError:
        target_st = None

    if target_st is not None and not _is_case_only_rename(source, target, source_st, target_st):
        raise _already_exists(target)

    target_parent = os.path.dirname(target)
    if target_parent and not await aiofiles.os.path.exists(target_parent):
        await make_tree(target_parent)
    await aiofiles.os.rename(source, target)
    logger.debug(f"Moved '{source}' -> '{target}'")

# -----------------------------------------------------------------------------
# COPY API
# -----------------------------------------------------------------------------

def copy_sync(source_path: str, destination_path: str, ctx: Optional[FsContext] = None) -> None:
    """
    Recursively copy a directory.

    The source listing is taken before the destination is created, so
    copying a directory into one of its own subdirectories terminates.

    Raises:
        OSError: On any read, mkdir or write failure.
    """
    sources = os.listdir(source_path)
    os.makedirs(destination_path, exist_ok=True)

    for name in sources:
        source_child = os.path.join(source_path, name)
        destination_child = os.path.join(destination_path, name)
        if is_directory_sync(source_child):
            copy_sync(source_child, destination_child, ctx)
        else:
            copy_file_sync(source_child, destination_child, ctx=ctx)


def copy_file_sync(
        source_file_path: str,
        destination_file_path: str,
        buffer_size: Optional[int] = None,
        ctx: Optional[FsContext] = None,
) -> None:
    """
    Copy one file through a fixed-size buffer to keep memory use flat.

    The destination's parent directories are created when missing. Both
    files are closed on every exit path.

    Args:
        source_file_path: File to read.
        destination_file_path: File to create or truncate.
        buffer_size: Bytes per read/write window. Defaults to the context's
            copy_buffer_size (16 KiB).
        ctx: Optional context.

    Raises:
        OSError: If either file cannot be opened, read or written.
    """
    if buffer_size is None:
        buffer_size = resolve_context(ctx).copy_buffer_size
    _ensure_parent_dir(destination_file_path)

    buffer = bytearray(buffer_size)
    window = memoryview(buffer)
    position = 0

    with open(source_file_path, "rb") as reader, open(destination_file_path, "wb") as writer:
        while True:
            bytes_read = reader.readinto(buffer)
            if not bytes_read:
                break
            writer.seek(position)
            writer.write(window[:bytes_read])
            position += bytes_read

    logger.debug(f"Copied {position} bytes '{source_file_path}' -> '{destination_file_path}'")


async def copy(
        source_path: str,
        destination_path: str,
        buffer_size: Optional[int] = None,
        ctx: Optional[FsContext] = None,
) -> None:
    """
    Asynchronously stream one file to a destination.

    The destination's parent directory is created first. The coroutine
    completes once: either after the destination is closed or with the
    first error raised by the reading or writing side.

    Raises:
        OSError: First failure of mkdir, read or write.
    """
    if buffer_size is None:
        buffer_size = resolve_context(ctx).copy_buffer_size
    await _ensure_parent_dir_async(destination_path)

    async with aiofiles.open(source_path, "rb") as reader, aiofiles.open(destination_path, "wb") as writer:
        while True:
            chunk = await reader.read(buffer_size)
            if not chunk:
                break
            await writer.write(chunk)

# -----------------------------------------------------------------------------
# REMOVAL API
# -----------------------------------------------------------------------------

def remove_sync(path_to_remove: str) -> None:
    """
    Delete a file, link or directory tree; a missing path is not an error.

    Symbolic links are removed without touching their targets.
    """
    st = lstat_no_exception(path_to_remove)
    if st is False:
        return
    try:
        if stat.S_ISDIR(st.st_mode):
            shutil.rmtree(path_to_remove)
        else:
            os.unlink(path_to_remove)
    except FileNotFoundError:
        logger.debug(f"'{path_to_remove}' vanished before removal")


async def remove(path_to_remove: str) -> None:
    """Asynchronously delete a file, link or directory tree."""
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, remove_sync, path_to_remove)

# -----------------------------------------------------------------------------
# WRITE AND DIGEST API
# -----------------------------------------------------------------------------

def write_file_sync(file_path: str, content: Content, encoding: str = "utf-8") -> None:
    """Write a whole file, creating missing parent directories first."""
    _ensure_parent_dir(file_path)
    if isinstance(content, bytes):
        with open(file_path, "wb") as f:
            f.write(content)
    else:
        with open(file_path, "w", encoding=encoding) as f:
            f.write(content)


async def write_file(file_path: str, content: Content, encoding: str = "utf-8") -> None:
    """Asynchronously write a whole file, creating missing parents first."""
    await _ensure_parent_dir_async(file_path)
    if isinstance(content, bytes):
        async with aiofiles.open(file_path, "wb") as f:
            await f.write(content)
    else:
        async with aiofiles.open(file_path, "w", encoding=encoding) as f:
            await f.write(content)


def md5_for_path(path_to_digest: str, ctx: Optional[FsContext] = None) -> str:
    """
    Hash the contents of a file.

    Returns:
        str: MD5 hexadecimal digest.
    """
    digest = hashlib.md5()
    chunk_size = resolve_context(ctx).copy_buffer_size
    with open(path_to_digest, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            digest.update(chunk)
    return digest.hexdigest()
