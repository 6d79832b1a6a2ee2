from __future__ import annotations

"""
Path Resolution Service.

Provides home-directory expansion and collapsing, syntactic normalization,
per-platform absoluteness checks and ordered lookups of a target across
load paths and candidate extensions. Platform facts (environment, platform
identifier) are read from an FsContext so behavior can be pinned in tests.
"""

import logging
import os
import sys
from typing import List, Optional, Sequence

from fskit.core.probe import exists_sync
from fskit.domain.context import FsContext, resolve_context
from fskit.domain.fs_models import ResolveRequest

logger = logging.getLogger(__name__)

HOME_MARKER = "~"


def _separator(ctx: FsContext) -> str:
    return "\\" if ctx.is_windows else "/"

# -----------------------------------------------------------------------------
# HOME DIRECTORY API
# -----------------------------------------------------------------------------

def get_home_directory(ctx: Optional[FsContext] = None) -> Optional[str]:
    """
    Resolve the current user's home directory from environment state.

    On Windows USERPROFILE is used when HOME is unset; HOME otherwise.

    Returns:
        Optional[str]: Home directory, or None if it cannot be determined.
    """
    ctx = resolve_context(ctx)
    env = ctx.environ
    if ctx.is_windows and not env.get("HOME"):
        return env.get("USERPROFILE")
    return env.get("HOME")


def resolve_home(path: str, ctx: Optional[FsContext] = None) -> str:
    """
    Expand a leading home marker.

    Only "~" on its own or "~" followed by the path separator is expanded;
    "~user" style prefixes are left untouched.

    Args:
        path: Raw path.
        ctx: Optional context supplying the environment.

    Returns:
        str: Expanded path, or the input when no expansion applies.
    """
    ctx = resolve_context(ctx)
    path = os.fspath(path)
    if path != HOME_MARKER and not path.startswith(HOME_MARKER + _separator(ctx)):
        return path

    home = get_home_directory(ctx)
    if home is None:
        logger.debug(f"Home directory unknown; leaving '{path}' unexpanded")
        return path

    if path == HOME_MARKER:
        return home
    return home + path[1:]


def tildify(path: str, ctx: Optional[FsContext] = None) -> str:
    """
    Collapse a path under the home directory to its "~" form for display.

    /home/user/dev becomes ~/dev. Windows paths, paths outside the home
    directory, and inputs seen while home is unknown are returned unchanged.
    """
    ctx = resolve_context(ctx)
    if ctx.is_windows:
        return path

    normalized = normalize(path, ctx)
    home = get_home_directory(ctx)
    if home is None or normalized is None:
        return path

    if normalized == home:
        return HOME_MARKER

    sep = _separator(ctx)
    prefix = home.rstrip(sep) + sep
    if not normalized.startswith(prefix):
        return path

    return HOME_MARKER + sep + normalized[len(prefix):]


def get_app_data_directory(ctx: Optional[FsContext] = None) -> Optional[str]:
    """
    Return the platform directory for application-specific data.

    macOS: ~/Library/Application Support
    Windows: %APPDATA%
    Linux: /var/lib

    Returns:
        Optional[str]: Directory path, or None on unsupported platforms.
    """
    ctx = resolve_context(ctx)
    if ctx.platform == "darwin":
        return absolute(os.path.join(HOME_MARKER, "Library", "Application Support"), ctx)
    if ctx.platform.startswith("linux"):
        return "/var/lib"
    if ctx.is_windows:
        return ctx.environ.get("APPDATA")
    return None

# -----------------------------------------------------------------------------
# NORMALIZATION API
# -----------------------------------------------------------------------------

def absolute(path: Optional[str], ctx: Optional[FsContext] = None) -> Optional[str]:
    """
    Make a path absolute by following its real location on disk.

    Symlinks are resolved. When resolution fails (missing path, loop,
    invalid characters) the home-expanded input is returned instead.

    Args:
        path: Relative, absolute or home-relative path.
        ctx: Optional context supplying the environment.

    Returns:
        Optional[str]: Real path, the unresolved expansion, or None for None.
    """
    if path is None:
        return None

    expanded = resolve_home(str(path), ctx)
    try:
        return os.path.realpath(expanded, strict=True)
    except (OSError, ValueError):
        return expanded


def normalize(path: Optional[str], ctx: Optional[FsContext] = None) -> Optional[str]:
    """
    Normalize a path syntactically and expand a leading home marker.

    Never touches the filesystem.
    """
    if path is None:
        return None
    return resolve_home(os.path.normpath(str(path)), ctx)


def is_absolute(path: Optional[str], ctx: Optional[FsContext] = None) -> bool:
    """
    Check whether a path is absolute using the context platform's rules.

    Windows accepts drive (C:) and UNC (\\\\server) forms; every other
    platform requires a leading slash. None and "" are relative.
    """
    if not path:
        return False
    ctx = resolve_context(ctx)
    path = os.fspath(path)
    if ctx.is_windows:
        if path[1:2] == ":":
            return True
        return path.startswith("\\\\")
    return path.startswith("/")

# -----------------------------------------------------------------------------
# LOOKUP API
# -----------------------------------------------------------------------------

def resolve(request: ResolveRequest, ctx: Optional[FsContext] = None) -> Optional[str]:
    """
    Locate a target among ordered load paths.

    An absolute target is tried first; then each load path joined with the
    target is tried in order. When extensions are given every extension is
    tried against one candidate before moving to the next load path.

    Args:
        request: Load paths, target and optional prioritized extensions.
        ctx: Optional context.

    Returns:
        Optional[str]: Absolute path of the first existing match, or None.
    """
    if request.target is None:
        return None
    target = str(request.target)
    if not target:
        return None

    extensions = request.extensions

    if is_absolute(target, ctx):
        if extensions is not None:
            resolved = resolve_extension(target, extensions, ctx)
            if resolved:
                return resolved
        if exists_sync(target):
            return target

    for load_path in request.load_paths:
        candidate = os.path.join(load_path, target)
        if extensions is not None:
            resolved = resolve_extension(candidate, extensions, ctx)
            if resolved:
                return resolved
        elif exists_sync(candidate):
            return absolute(candidate, ctx)

    logger.debug(f"Unable to resolve '{target}' across {len(request.load_paths)} load paths")
    return None


def resolve_extension(
        path_base: str,
        extensions: Sequence[str],
        ctx: Optional[FsContext] = None,
) -> Optional[str]:
    """
    Find the first existing file among a base path and candidate extensions.

    Extensions are tried in the given order. "" tests the bare path; any
    other value is appended after a single dot, so "js" and ".js" match the
    same file.

    Returns:
        Optional[str]: Absolute path of the first hit, or None.
    """
    for extension in extensions:
        if extension == "":
            candidate = path_base
        else:
            suffix = extension[1:] if extension.startswith(".") else extension
            candidate = f"{path_base}.{suffix}"
        if exists_sync(candidate):
            return absolute(candidate, ctx)
    return None


def default_load_paths() -> List[str]:
    """Return the interpreter's module search path; "" maps to the cwd."""
    return [entry or os.curdir for entry in sys.path]


def resolve_on_load_path(
        target: Optional[str],
        extensions: Optional[Sequence[str]] = None,
        ctx: Optional[FsContext] = None,
) -> Optional[str]:
    """Like resolve() but searches the module search path."""
    request = ResolveRequest(load_paths=default_load_paths(), target=target, extensions=extensions)
    return resolve(request, ctx)
