"""
File kind detection for dsv-matrix.

The delimiter of a load is chosen once, from the file's declared kind
(its extension), and never re-derived from content:

- ``csv`` -> comma
- ``tsv`` -> horizontal tab
- anything else (``txt``, no extension, ...) -> a single space

Two consecutive spaces in a ``txt`` file therefore delimit an empty
field; whitespace runs are not collapsed.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_DELIMITERS: dict[str, str] = {
    "csv": ",",
    "tsv": "\t",
}
_DEFAULT_DELIMITER = " "


def detect_kind(path: str | Path) -> str:
    """Return the lower-cased extension of *path* without the dot.

    Returns an empty string for files without an extension.
    """
    return Path(path).suffix.lower().lstrip(".")


def resolve_delimiter(kind: str) -> str:
    """Map a file kind (``csv``, ``tsv``, ``txt``, ...) to its delimiter."""
    return _DELIMITERS.get(kind.lower(), _DEFAULT_DELIMITER)


def detect_delimiter(path: str | Path) -> str:
    """Resolve the delimiter for *path* from its extension."""
    kind = detect_kind(path)
    delimiter = resolve_delimiter(kind)
    logger.debug("File kind %r for %s -> delimiter %r", kind, path, delimiter)
    return delimiter
