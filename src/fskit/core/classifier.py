from __future__ import annotations

"""
Extension Classification Engine.

Maps file extensions to coarse categories (binary, compressed, image,
markdown, PDF) and recognizes README-like documents. Every predicate is
case-insensitive and total: None or unknown input yields False.
"""

import os
from typing import FrozenSet, Optional

from fskit.domain.constants import (
    BINARY_EXTENSIONS,
    COMPRESSED_EXTENSIONS,
    IMAGE_EXTENSIONS,
    MARKDOWN_EXTENSIONS,
    PDF_EXTENSION,
    README_BASENAME,
)

# -----------------------------------------------------------------------------
# EXTENSION PREDICATES
# -----------------------------------------------------------------------------

def _in_table(ext: Optional[str], table: FrozenSet[str]) -> bool:
    if not isinstance(ext, str):
        return False
    return ext.lower() in table


def is_binary_extension(ext: Optional[str]) -> bool:
    """Return True for extensions of compiled or binary artifacts (.exe, .so)."""
    return _in_table(ext, BINARY_EXTENSIONS)


def is_compressed_extension(ext: Optional[str]) -> bool:
    """Return True for archive and compressed formats (.zip, .tar, .whl)."""
    return _in_table(ext, COMPRESSED_EXTENSIONS)


def is_image_extension(ext: Optional[str]) -> bool:
    """Return True for raster image formats."""
    return _in_table(ext, IMAGE_EXTENSIONS)


def is_markdown_extension(ext: Optional[str]) -> bool:
    """Return True for Markdown variants."""
    return _in_table(ext, MARKDOWN_EXTENSIONS)


def is_pdf_extension(ext: Optional[str]) -> bool:
    if not isinstance(ext, str):
        return False
    return ext.lower() == PDF_EXTENSION

# -----------------------------------------------------------------------------
# FILENAME CLASSIFICATION
# -----------------------------------------------------------------------------

def is_readme_path(path: Optional[str]) -> bool:
    """
    Classify a path as a README document.

    The extension-stripped base name must equal "readme" in any case, and
    the extension must be empty or a Markdown extension.

    Args:
        path: File name or full path.

    Returns:
        bool: True for README, readme.md, Readme.markdown and friends.
    """
    if not isinstance(path, str):
        return False
    base, ext = os.path.splitext(os.path.basename(path))
    if base.lower() != README_BASENAME:
        return False
    return ext == "" or is_markdown_extension(ext)
