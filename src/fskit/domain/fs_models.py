from __future__ import annotations

"""
Filesystem Domain Data Models.

Defines the discriminated status result returned by the probing layer, the
parameter object consumed by the path resolver and the summary produced by
the asynchronous tree walk.
"""

import os
import stat
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

# -----------------------------------------------------------------------------
# STATUS MODELS
# -----------------------------------------------------------------------------

class StatusState(Enum):
    """Outcome of a single status query."""
    FOUND = "found"
    ABSENT = "absent"
    ERROR = "error"


class EntryKind(Enum):
    """Kind of filesystem entry reported by a status query."""
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


@dataclass(frozen=True)
class StatusResult:
    """
    Discriminated result of a status query.

    Only FOUND results carry metadata. The pair (dev, ino) identifies the
    underlying file and is used to detect case-only renames.

    Attributes:
        state: Query outcome.
        kind: Entry kind when found.
        dev: Device identifier.
        ino: Inode identifier.
        size: Size in bytes.
        mode: Raw st_mode bits.
        is_symlink: True when the queried entry itself is a link.
        error: Message of the suppressed error, if any.
    """
    state: StatusState
    kind: Optional[EntryKind] = None
    dev: int = 0
    ino: int = 0
    size: int = 0
    mode: int = 0
    is_symlink: bool = False
    error: str = ""

    def __bool__(self) -> bool:
        return self.state is StatusState.FOUND

    @classmethod
    def from_stat(cls, st: os.stat_result) -> StatusResult:
        """Build a FOUND result from a native stat structure."""
        mode = st.st_mode
        if stat.S_ISLNK(mode):
            kind = EntryKind.SYMLINK
        elif stat.S_ISDIR(mode):
            kind = EntryKind.DIRECTORY
        elif stat.S_ISREG(mode):
            kind = EntryKind.FILE
        else:
            kind = EntryKind.OTHER
        return cls(
            state=StatusState.FOUND,
            kind=kind,
            dev=st.st_dev,
            ino=st.st_ino,
            size=st.st_size,
            mode=mode,
            is_symlink=kind is EntryKind.SYMLINK,
        )

    @classmethod
    def absent(cls) -> StatusResult:
        return cls(state=StatusState.ABSENT)

    @classmethod
    def failed(cls, error: str) -> StatusResult:
        return cls(state=StatusState.ERROR, error=error)

    def same_file(self, other: StatusResult) -> bool:
        """Return True if both results denote the same device+inode."""
        return bool(self) and bool(other) and self.dev == other.dev and self.ino == other.ino

# -----------------------------------------------------------------------------
# RESOLUTION MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ResolveRequest:
    """
    Parameters of a load-path lookup.

    Attributes:
        load_paths: Directories searched in order after an absolute target.
        target: Path to locate, relative or absolute.
        extensions: Optional prioritized extensions; "" means no extension.
    """
    load_paths: Sequence[str]
    target: Optional[str]
    extensions: Optional[Sequence[str]] = None

# -----------------------------------------------------------------------------
# TRAVERSAL MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TraversalError:
    """
    A branch of an asynchronous walk aborted by a failed query.

    Attributes:
        path: Entry whose status or listing failed.
        error: Descriptive error message.
    """
    path: str
    error: str


@dataclass
class TraversalSummary:
    """
    Result of a completed asynchronous tree walk.

    Attributes:
        files: Files handed to the file visitor, in visitation order.
        directories: Directories handed to the directory visitor.
        errors: Branches aborted by status or listing failures.
    """
    files: List[str] = field(default_factory=list)
    directories: List[str] = field(default_factory=list)
    errors: List[TraversalError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
