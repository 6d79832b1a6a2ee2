from __future__ import annotations

"""
Status Probing Service.

Non-raising wrappers around stat/lstat. Any failure, including a missing
path, collapses to the sentinel False (or an ABSENT/ERROR StatusResult),
so callers only distinguish "exists as kind X" from "not usable".
"""

import logging
import os
import stat
from typing import Any, Optional, Union

import aiofiles.os

from fskit.domain.context import FsContext, resolve_context
from fskit.domain.fs_models import StatusResult

logger = logging.getLogger(__name__)

StatOrFalse = Union[os.stat_result, bool]

# -----------------------------------------------------------------------------
# RAW STATUS QUERIES
# -----------------------------------------------------------------------------

def is_path_valid(path: Any) -> bool:
    """Return True for a non-empty string path."""
    return isinstance(path, str) and len(path) > 0


def stat_no_exception(path: Any) -> StatOrFalse:
    """
    Call os.stat, swallowing every failure.

    Returns:
        Union[os.stat_result, bool]: The stat structure, or False.
    """
    try:
        return os.stat(path)
    except (OSError, TypeError, ValueError):
        return False


def lstat_no_exception(path: Any) -> StatOrFalse:
    """Call os.lstat, swallowing every failure."""
    try:
        return os.lstat(path)
    except (OSError, TypeError, ValueError):
        return False


def probe_status(path: Any, follow_symlinks: bool = True) -> StatusResult:
    """
    Query a path and report the outcome as a discriminated result.

    Args:
        path: Path to query.
        follow_symlinks: Query the link target (stat) or the link (lstat).

    Returns:
        StatusResult: FOUND with metadata, ABSENT for missing entries,
        ERROR for invalid input or any other failure.
    """
    if not is_path_valid(path):
        return StatusResult.failed("invalid path")
    try:
        st = os.stat(path) if follow_symlinks else os.lstat(path)
    except (FileNotFoundError, NotADirectoryError):
        return StatusResult.absent()
    except (OSError, ValueError) as e:
        logger.debug(f"Status query failed for '{path}': {e}")
        return StatusResult.failed(str(e))
    return StatusResult.from_stat(st)

# -----------------------------------------------------------------------------
# PREDICATES
# -----------------------------------------------------------------------------

def exists_sync(path: Any) -> bool:
    """Return True if a file or directory exists at the path."""
    return is_path_valid(path) and stat_no_exception(path) is not False


def is_directory_sync(path: Any) -> bool:
    """Return True if the path exists and is a directory."""
    if not is_path_valid(path):
        return False
    st = stat_no_exception(path)
    if st is False:
        return False
    return stat.S_ISDIR(st.st_mode)


async def is_directory(path: Any) -> bool:
    """Asynchronously check that the path exists and is a directory."""
    if not is_path_valid(path):
        return False
    try:
        st = await aiofiles.os.stat(path)
    except (OSError, ValueError):
        return False
    return stat.S_ISDIR(st.st_mode)


def is_file_sync(path: Any) -> bool:
    """Return True if the path exists and is a regular file."""
    if not is_path_valid(path):
        return False
    st = stat_no_exception(path)
    if st is False:
        return False
    return stat.S_ISREG(st.st_mode)


def is_symbolic_link_sync(path: Any) -> bool:
    """Return True if the path itself is a symbolic link."""
    if not is_path_valid(path):
        return False
    st = lstat_no_exception(path)
    if st is False:
        return False
    return stat.S_ISLNK(st.st_mode)


async def is_symbolic_link(path: Any) -> bool:
    """Asynchronously check whether the path itself is a symbolic link."""
    if not is_path_valid(path):
        return False
    return await aiofiles.os.path.islink(path)


def is_executable_sync(path: Any) -> bool:
    """Return True if the "others" execute bit is set."""
    if not is_path_valid(path):
        return False
    st = stat_no_exception(path)
    if st is False:
        return False
    return (st.st_mode & 0o777 & 1) != 0


def get_size_sync(path: Any) -> int:
    """Return the size in bytes, or -1 when the path is unusable."""
    if not is_path_valid(path):
        return -1
    st = stat_no_exception(path)
    if st is False:
        return -1
    return st.st_size

# -----------------------------------------------------------------------------
# CASE SENSITIVITY
# -----------------------------------------------------------------------------

def _detect_case_insensitive(probe_path: str) -> bool:
    lower = stat_no_exception(probe_path.lower())
    upper = stat_no_exception(probe_path.upper())
    if lower is False or upper is False:
        return False
    return lower.st_dev == upper.st_dev and lower.st_ino == upper.st_ino


def is_case_insensitive(ctx: Optional[FsContext] = None) -> bool:
    """
    Report whether the filesystem folds letter case.

    The context's probe path is queried lower- and upper-cased; the
    filesystem is case-insensitive when both resolve to the same
    device+inode. Computed once per context.
    """
    return resolve_context(ctx).cached_case_insensitive(_detect_case_insensitive)


def is_case_sensitive(ctx: Optional[FsContext] = None) -> bool:
    return not is_case_insensitive(ctx)
