"""
Rewindable line source for dsv-matrix.

Every load scans its file twice (discovery, then population), so the
source must be able to go back to the start at fixed cost. ``LineCursor``
owns the open file handle and makes that explicit through ``rewind()``;
non-seekable sources are unsupported.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Iterator

from dsv_matrix.exceptions import FileDecodeError, FileOpenError

logger = logging.getLogger(__name__)


class LineCursor:
    """Sequential, rewindable reader over the lines of a text file.

    The file is opened on construction; a missing or unreadable file
    raises ``FileOpenError`` before any parsing begins. Iterating yields
    lines with their line terminator removed, starting from the current
    position. Call ``rewind()`` between passes.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8-sig") -> None:
        self.path = Path(path)
        self.encoding = encoding
        try:
            self._file: IO[str] | None = open(self.path, "r", encoding=encoding)
        except OSError as exc:
            raise FileOpenError(f"Cannot open file '{self.path}': {exc}") from exc

    def __iter__(self) -> Iterator[str]:
        handle = self._require_open()
        index = 0
        while True:
            try:
                line = next(handle)
            except StopIteration:
                return
            except UnicodeDecodeError as exc:
                raise FileDecodeError(self.path, self.encoding, index) from exc
            index += 1
            yield line.rstrip("\r\n")

    def rewind(self) -> None:
        """Reposition the cursor at the start of the file."""
        self._require_open().seek(0)

    @property
    def closed(self) -> bool:
        return self._file is None

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> LineCursor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _require_open(self) -> IO[str]:
        if self._file is None:
            raise ValueError(f"LineCursor for {self.path} is closed")
        return self._file
