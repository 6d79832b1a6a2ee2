from __future__ import annotations

"""
Domain Constants and Static Lookup Tables.

Provides centralized access to the extension classification tables, the
default copy window and the configuration schema version. Tables are keyed
by lower-cased extensions including the leading dot and are never mutated
after import.
"""

from typing import FrozenSet

CURRENT_CONFIG_VERSION = "1.0.0"

# Size of each read/write window used by the buffered synchronous copy
DEFAULT_COPY_BUFFER_SIZE = 16 * 1024

# -----------------------------------------------------------------------------
# EXTENSION CLASSIFICATION TABLES
# -----------------------------------------------------------------------------

BINARY_EXTENSIONS: FrozenSet[str] = frozenset({
    ".ds_store", ".a", ".exe", ".o", ".pyc", ".pyo", ".so", ".woff",
})

COMPRESSED_EXTENSIONS: FrozenSet[str] = frozenset({
    ".bz2", ".egg", ".epub", ".gem", ".gz", ".jar", ".lz", ".lzma", ".lzo",
    ".rar", ".tar", ".tgz", ".war", ".whl", ".xpi", ".xz", ".z", ".zip",
})

IMAGE_EXTENSIONS: FrozenSet[str] = frozenset({
    ".gif", ".ico", ".jpeg", ".jpg", ".png", ".tif", ".tiff", ".webp",
})

MARKDOWN_EXTENSIONS: FrozenSet[str] = frozenset({
    ".markdown", ".md", ".mdown", ".mkd", ".mkdown", ".rmd", ".ron",
})

PDF_EXTENSION = ".pdf"

README_BASENAME = "readme"
