"""
Two-pass loader for dsv-matrix.

``CSVLoader`` ties the pieces together for one file:

  1. Resolve the delimiter from the file kind (detect.py).
  2. Open a rewindable ``LineCursor`` (fails fast if the file is missing).
  3. Pick the parser for the requested orientation.
  4. Discovery pass -> matrix shape (+ mapper dimensionality, first pass).
  5. Allocate the matrix exactly once.
  6. Population pass -> fill the matrix through the mapper.

A load either completes or raises; on failure the partially written
matrix must be discarded.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import numpy as np
from numpy.typing import DTypeLike

from dsv_matrix.config import LoaderConfig
from dsv_matrix.convert import resolve_dtype
from dsv_matrix.cursor import LineCursor
from dsv_matrix.dataset import LoadResult
from dsv_matrix.detect import detect_kind, resolve_delimiter
from dsv_matrix.exceptions import AllocationError
from dsv_matrix.mapping import DatasetMapper
from dsv_matrix.parsers.base import BaseParser
from dsv_matrix.parsers.normal import NonTransposeParser
from dsv_matrix.parsers.transposed import TransposeParser

logger = logging.getLogger(__name__)

Allocator = Callable[[tuple[int, int], np.dtype], np.ndarray]


def _default_allocate(shape: tuple[int, int], dtype: np.dtype) -> np.ndarray:
    return np.zeros(shape, dtype=dtype)


class CSVLoader:
    """Load one delimiter-separated text file into a dense matrix.

    The file is opened on construction. Use as a context manager, or
    call ``close()`` when done; ``load()`` can be called more than once.

    Attributes:
        path: The input file.
        kind: Lower-cased file extension (``csv``, ``tsv``, ``txt``, ...).
        delimiter: Field separator resolved from ``kind``.
        config: Options used when ``load()`` arguments are omitted.
    """

    def __init__(self, path: str | Path, config: LoaderConfig | None = None) -> None:
        self.path = Path(path)
        self.config = config if config is not None else LoaderConfig()
        self.kind = detect_kind(self.path)
        self.delimiter = resolve_delimiter(self.kind)
        self._cursor = LineCursor(self.path, encoding=self.config.encoding)

    def __repr__(self) -> str:
        return f"CSVLoader(path={str(self.path)!r}, delimiter={self.delimiter!r})"

    def __enter__(self) -> CSVLoader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._cursor.close()

    def parser_for(self, transpose: bool, dtype: DTypeLike) -> BaseParser:
        """Select the parser for the requested orientation."""
        if transpose:
            return TransposeParser(self.delimiter, dtype)
        return NonTransposeParser(self.delimiter, dtype)

    def load(
        self,
        mapper: DatasetMapper | None = None,
        *,
        transpose: bool | None = None,
        dtype: DTypeLike | None = None,
        allocate: Allocator | None = None,
    ) -> LoadResult:
        """Run discovery and population and return the loaded matrix.

        Args:
            mapper: Mapping collaborator, mutated in place. A fresh one
                is built from the config if omitted.
            transpose: Orientation; defaults to ``config.transpose``.
            dtype: Element dtype; defaults to ``config.dtype``.
            allocate: ``allocate(shape, dtype)`` returning the matrix to
                fill. Called exactly once. Defaults to ``numpy.zeros``.

        Returns:
            A ``LoadResult`` holding the matrix and a snapshot of the
            mapper taken when the load finished.

        Raises:
            DimensionalityMismatchError: If *mapper* disagrees with the data.
            WrongFieldCountError: If a record has the wrong field count.
            UnterminatedQuoteError: If a quoted field is never closed.
            TokenConversionError: If the mapper rejects a token.
            FileDecodeError: If the file is not valid in the configured encoding.
            AllocationError: If *allocate* returns a matrix of the wrong shape.
        """
        if transpose is None:
            transpose = self.config.transpose
        dtype = resolve_dtype(dtype if dtype is not None else self.config.dtype)
        if mapper is None:
            mapper = self.config.build_mapper()
        allocate = allocate or _default_allocate

        parser = self.parser_for(transpose, dtype)
        logger.info(
            "Loading %s (%s orientation, dtype=%s, policy=%r)",
            self.path, parser.orientation, dtype, mapper.policy,
        )

        self._cursor.rewind()
        shape = parser.discover(self._cursor, mapper)
        logger.info("Discovered shape %d x %d", shape.rows, shape.cols)

        matrix = allocate(shape.as_tuple(), dtype)
        if matrix.shape != shape.as_tuple():
            raise AllocationError(
                f"allocate() returned shape {matrix.shape}, "
                f"expected {shape.as_tuple()}"
            )

        self._cursor.rewind()
        parser.populate(self._cursor, matrix, mapper)
        logger.info(
            "Loaded %s: %d x %d, %d categorical dimension(s)",
            self.path.name, shape.rows, shape.cols,
            len(mapper.categorical_dimensions()),
        )

        return LoadResult(
            path=self.path,
            matrix=matrix,
            mapper=mapper.copy(),
            delimiter=self.delimiter,
            transpose=transpose,
        )
