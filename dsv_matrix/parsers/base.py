"""
Base parser ABC for dsv-matrix.

A parser implements one orientation of the two-pass load:

1. ``discover()`` scans the whole file to compute the matrix shape,
   checks/sets the mapper's dimensionality and, if the mapper's policy
   asks for it, feeds every token to ``map_first_pass()``.
2. ``populate()`` scans the file again and writes every converted token
   into a matrix of exactly that shape, validating each record's field
   count.

The caller rewinds the cursor before each pass. A line that trims to
empty marks the end of the data in both passes.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import DTypeLike

from dsv_matrix.convert import resolve_dtype
from dsv_matrix.cursor import LineCursor
from dsv_matrix.exceptions import DimensionalityMismatchError
from dsv_matrix.mapping.mapper import DatasetMapper
from dsv_matrix.tokenizer import split_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatrixShape:
    """Shape discovered by the first pass."""
    rows: int
    cols: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.rows, self.cols)


def data_lines(cursor: LineCursor) -> Iterator[tuple[int, str]]:
    """Yield ``(index, trimmed_line)`` up to the end-of-data marker."""
    for index, line in enumerate(cursor):
        line = line.strip()
        if not line:
            return
        yield index, line


class BaseParser(ABC):
    """Abstract base class for the two orientations.

    Args:
        delimiter: Field separator resolved from the file kind.
        dtype: Element type of the target matrix.
    """

    orientation: str = ""

    def __init__(self, delimiter: str, dtype: DTypeLike = np.float64) -> None:
        self.delimiter = delimiter
        self.dtype = resolve_dtype(dtype)

    def fields(self, line: str, line_number: int) -> Iterator[str]:
        return split_fields(line, self.delimiter, line_number)

    @staticmethod
    def check_dimensionality(mapper: DatasetMapper, dimensionality: int) -> None:
        """Seed the mapper's dimensionality or verify it matches.

        Raises:
            DimensionalityMismatchError: If the mapper already has a
                different non-zero dimensionality.
        """
        if mapper.dimensionality == 0:
            mapper.dimensionality = dimensionality
        elif mapper.dimensionality != dimensionality:
            raise DimensionalityMismatchError(mapper.dimensionality, dimensionality)

    @abstractmethod
    def discover(self, cursor: LineCursor, mapper: DatasetMapper) -> MatrixShape:
        """Run the discovery pass and return the matrix shape."""

    @abstractmethod
    def populate(
        self,
        cursor: LineCursor,
        matrix: np.ndarray,
        mapper: DatasetMapper,
    ) -> None:
        """Run the population pass, writing into *matrix* in place.

        Raises:
            WrongFieldCountError: If a record has the wrong field count.
            UnterminatedQuoteError: If a quoted field is never closed.
            TokenConversionError: If the mapper rejects a token.
        """
