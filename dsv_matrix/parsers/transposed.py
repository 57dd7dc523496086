"""
Transposed orientation: each line of the file is a column.

The row count is measured on the first line (it is the number of fields
per line, and the mapper's dimensionality); the column count is the
number of data lines. Tokens are handed to the mapper with their field
index within the line as the dimension.
"""

from __future__ import annotations

import logging

import numpy as np

from dsv_matrix.cursor import LineCursor
from dsv_matrix.exceptions import WrongFieldCountError
from dsv_matrix.mapping.mapper import DatasetMapper
from dsv_matrix.parsers.base import BaseParser, MatrixShape, data_lines

logger = logging.getLogger(__name__)


class TransposeParser(BaseParser):
    """Parser for files whose lines map to matrix columns."""

    orientation = "transposed"

    def discover(self, cursor: LineCursor, mapper: DatasetMapper) -> MatrixShape:
        rows = 0
        cols = 0
        for col, line in data_lines(cursor):
            cols += 1
            if col == 0:
                rows = sum(1 for _ in self.fields(line, col))
                self.check_dimensionality(mapper, rows)
            if mapper.needs_first_pass:
                for dim, token in enumerate(self.fields(line, col)):
                    mapper.map_first_pass(token, dim, self.dtype)

        if cols == 0:
            self.check_dimensionality(mapper, rows)

        logger.debug("Discovered %d rows x %d cols (transposed orientation)", rows, cols)
        return MatrixShape(rows=rows, cols=cols)

    def populate(
        self,
        cursor: LineCursor,
        matrix: np.ndarray,
        mapper: DatasetMapper,
    ) -> None:
        rows = matrix.shape[0]
        for col, line in data_lines(cursor):
            row = 0
            for token in self.fields(line, col):
                if row < rows:
                    matrix[row, col] = mapper.map_string(token, row, self.dtype)
                row += 1
            if row != rows:
                raise WrongFieldCountError(col, row, rows, axis="column")
