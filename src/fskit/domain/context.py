from __future__ import annotations

"""
Filesystem Context.

Holds the platform facts every helper consults (platform identifier,
environment mapping, probe path for case detection, copy window size) and
owns the lazily computed case-sensitivity flag. A process-wide default
instance is created on first use; tests may inject their own.
"""

import os
import sys
import threading
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from fskit.domain.constants import DEFAULT_COPY_BUFFER_SIZE

_DEFAULT_LOCK = threading.Lock()
_default_context: Optional[FsContext] = None


@dataclass
class FsContext:
    """
    Runtime facts shared by the path, probe and copy helpers.

    Attributes:
        platform: Platform identifier in sys.platform form (win32, darwin, linux).
        environ: Environment mapping used for home directory resolution.
        probe_path: Existing path whose case variants detect case folding.
        copy_buffer_size: Window size for buffered synchronous copies.
    """
    platform: str = field(default_factory=lambda: sys.platform)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    probe_path: str = field(default_factory=lambda: sys.executable)
    copy_buffer_size: int = DEFAULT_COPY_BUFFER_SIZE

    _case_insensitive: Optional[bool] = field(default=None, init=False, repr=False, compare=False)
    _case_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    @property
    def is_windows(self) -> bool:
        return self.platform == "win32"

    def cached_case_insensitive(self, detect: Callable[[str], bool]) -> bool:
        """
        Return the case-folding flag, running the detector at most once.

        Args:
            detect: Callable receiving the probe path and reporting whether
                the filesystem folds case.

        Returns:
            bool: True if the filesystem is case-insensitive.
        """
        if self._case_insensitive is None:
            with self._case_lock:
                if self._case_insensitive is None:
                    self._case_insensitive = bool(detect(self.probe_path))
        return self._case_insensitive


def get_default_context() -> FsContext:
    """Return the process-wide context, creating it on first use."""
    global _default_context
    if _default_context is None:
        with _DEFAULT_LOCK:
            if _default_context is None:
                _default_context = FsContext()
    return _default_context


def set_default_context(ctx: Optional[FsContext]) -> Optional[FsContext]:
    """
    Replace the process-wide context.

    Passing None drops the current instance so the next lookup rebuilds it.

    Returns:
        Optional[FsContext]: The previously installed context.
    """
    global _default_context
    with _DEFAULT_LOCK:
        previous = _default_context
        _default_context = ctx
    return previous


def resolve_context(ctx: Optional[FsContext]) -> FsContext:
    return ctx if ctx is not None else get_default_context()
