"""
Normal (non-transposed) orientation: each line of the file is a row.

The row count is the number of data lines and is also the mapper's
dimensionality; the column count is measured on the first line and every
later line is validated against it during population. Tokens are handed
to the mapper with their row index as the dimension.
"""

from __future__ import annotations

import logging

import numpy as np

from dsv_matrix.cursor import LineCursor
from dsv_matrix.exceptions import WrongFieldCountError
from dsv_matrix.mapping.mapper import DatasetMapper
from dsv_matrix.parsers.base import BaseParser, MatrixShape, data_lines

logger = logging.getLogger(__name__)


class NonTransposeParser(BaseParser):
    """Parser for files whose lines map to matrix rows."""

    orientation = "normal"

    def discover(self, cursor: LineCursor, mapper: DatasetMapper) -> MatrixShape:
        rows = sum(1 for _ in data_lines(cursor))
        self.check_dimensionality(mapper, rows)

        cursor.rewind()
        cols = 0
        for row, line in data_lines(cursor):
            if row == 0:
                cols = sum(1 for _ in self.fields(line, row))
                if not mapper.needs_first_pass:
                    break
            for token in self.fields(line, row):
                mapper.map_first_pass(token, row, self.dtype)

        logger.debug("Discovered %d rows x %d cols (normal orientation)", rows, cols)
        return MatrixShape(rows=rows, cols=cols)

    def populate(
        self,
        cursor: LineCursor,
        matrix: np.ndarray,
        mapper: DatasetMapper,
    ) -> None:
        cols = matrix.shape[1]
        for row, line in data_lines(cursor):
            col = 0
            for token in self.fields(line, row):
                if col < cols:
                    matrix[row, col] = mapper.map_string(token, row, self.dtype)
                col += 1
            if col != cols:
                raise WrongFieldCountError(row, col, cols, axis="line")
