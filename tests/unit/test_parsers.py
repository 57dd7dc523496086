"""
Unit tests for the discovery and population passes (dsv_matrix.parsers).

Drives NonTransposeParser and TransposeParser directly over a
LineCursor, using a recording policy to observe the positions handed to
the mapper's hooks.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from dsv_matrix.cursor import LineCursor
from dsv_matrix.exceptions import (
    DimensionalityMismatchError,
    UnterminatedQuoteError,
    WrongFieldCountError,
)
from dsv_matrix.mapping import DatasetMapper, MapPolicy
from dsv_matrix.parsers.base import MatrixShape
from dsv_matrix.parsers.normal import NonTransposeParser
from dsv_matrix.parsers.transposed import TransposeParser


class RecordingPolicy(MapPolicy):
    """Policy that records every hook call and maps tokens by length."""

    NEEDS_FIRST_PASS = True

    def __init__(self) -> None:
        self.first_pass: list[tuple[str, int]] = []
        self.final: list[tuple[str, int]] = []

    def map_first_pass(self, token, dimension, dtype, types) -> None:
        self.first_pass.append((token, dimension))

    def map_string(self, token, dimension, dtype, types, maps) -> Any:
        self.final.append((token, dimension))
        return dtype.type(len(token))


def _run(parser, path, mapper):
    """Discover + allocate + populate, the way the loader does."""
    with LineCursor(path) as cursor:
        shape = parser.discover(cursor, mapper)
        matrix = np.full(shape.as_tuple(), -1.0)
        cursor.rewind()
        parser.populate(cursor, matrix, mapper)
    return shape, matrix


# ---------------------------------------------------------------------------
# Normal orientation
# ---------------------------------------------------------------------------

class TestNonTransposeParser:
    """Tests for NonTransposeParser."""

    def test_discover_shape(self, write_file):
        path = write_file("a.csv", "1,2,3\n4,5,6\n7,8,9\n10,11,12\n")
        mapper = DatasetMapper()
        with LineCursor(path) as cursor:
            shape = NonTransposeParser(",").discover(cursor, mapper)
        assert shape == MatrixShape(rows=4, cols=3)
        assert mapper.dimensionality == 4

    def test_populate_rows(self, write_file):
        path = write_file("a.csv", "1,2,3\n4,5,6\n")
        shape, matrix = _run(NonTransposeParser(","), path, DatasetMapper())
        np.testing.assert_array_equal(matrix, [[1, 2, 3], [4, 5, 6]])

    def test_first_pass_uses_line_index(self, write_file):
        path = write_file("a.csv", "a,bb\nccc,d\n")
        policy = RecordingPolicy()
        _run(NonTransposeParser(","), path, DatasetMapper(policy))
        assert policy.first_pass == [("a", 0), ("bb", 0), ("ccc", 1), ("d", 1)]
        assert policy.final == policy.first_pass

    def test_cols_taken_from_first_line_only(self, write_file):
        path = write_file("a.csv", "1,2,3\n4,5\n")
        mapper = DatasetMapper()
        with LineCursor(path) as cursor:
            shape = NonTransposeParser(",").discover(cursor, mapper)
        assert shape.as_tuple() == (2, 3)

    def test_short_line_fails_with_line_index(self, write_file):
        path = write_file("a.csv", "1,2,3\n4,5\n")
        with pytest.raises(WrongFieldCountError) as exc_info:
            _run(NonTransposeParser(","), path, DatasetMapper())
        err = exc_info.value
        assert (err.index, err.found, err.expected) == (1, 2, 3)
        assert "line 1" in str(err)

    def test_long_line_fails(self, write_file):
        path = write_file("a.csv", "1,2\n3,4,5\n")
        with pytest.raises(WrongFieldCountError) as exc_info:
            _run(NonTransposeParser(","), path, DatasetMapper())
        assert exc_info.value.found == 3

    def test_empty_line_ends_data(self, write_file):
        path = write_file("a.csv", "1,2\n\n3,4\n")
        policy = RecordingPolicy()
        shape, matrix = _run(NonTransposeParser(","), path, DatasetMapper(policy))
        assert shape.as_tuple() == (1, 2)
        assert [t for t, _ in policy.first_pass] == ["1", "2"]

    def test_trailing_blank_line_not_counted(self, write_file):
        path = write_file("a.csv", "1,2\n3,4\n\n")
        shape, matrix = _run(NonTransposeParser(","), path, DatasetMapper())
        assert shape.as_tuple() == (2, 2)
        assert (matrix != -1.0).all()

    def test_dimensionality_mismatch(self, write_file):
        path = write_file("a.csv", "1\n2\n3\n4\n")
        mapper = DatasetMapper(dimensionality=5)
        with LineCursor(path) as cursor:
            with pytest.raises(DimensionalityMismatchError) as exc_info:
                NonTransposeParser(",").discover(cursor, mapper)
        assert (exc_info.value.expected, exc_info.value.actual) == (5, 4)
        assert "5" in str(exc_info.value) and "4" in str(exc_info.value)

    def test_matching_dimensionality_kept(self, write_file):
        path = write_file("a.csv", "1\n2\n")
        mapper = DatasetMapper(dimensionality=2)
        _run(NonTransposeParser(","), path, mapper)
        assert mapper.dimensionality == 2

    def test_unterminated_quote_names_line(self, write_file):
        path = write_file("a.csv", '1,2\n"3,4\n')
        with pytest.raises(UnterminatedQuoteError, match="line 1"):
            _run(NonTransposeParser(","), path, DatasetMapper())


# ---------------------------------------------------------------------------
# Transposed orientation
# ---------------------------------------------------------------------------

class TestTransposeParser:
    """Tests for TransposeParser."""

    def test_discover_shape(self, write_file):
        path = write_file("a.csv", "1,2,3\n4,5,6\n7,8,9\n10,11,12\n")
        mapper = DatasetMapper()
        with LineCursor(path) as cursor:
            shape = TransposeParser(",").discover(cursor, mapper)
        assert shape == MatrixShape(rows=3, cols=4)
        assert mapper.dimensionality == 3

    def test_populate_columns(self, write_file):
        path = write_file("a.csv", "1,2,3\n4,5,6\n")
        shape, matrix = _run(TransposeParser(","), path, DatasetMapper())
        np.testing.assert_array_equal(matrix, [[1, 4], [2, 5], [3, 6]])

    def test_first_pass_uses_field_index(self, write_file):
        path = write_file("a.csv", "a,bb\nccc,d\n")
        policy = RecordingPolicy()
        _run(TransposeParser(","), path, DatasetMapper(policy))
        assert policy.first_pass == [("a", 0), ("bb", 1), ("ccc", 0), ("d", 1)]

    def test_short_line_fails_with_column_index(self, write_file):
        path = write_file("a.csv", "1,2,3\n4,5,6\n7,8\n")
        with pytest.raises(WrongFieldCountError) as exc_info:
            _run(TransposeParser(","), path, DatasetMapper())
        err = exc_info.value
        assert (err.index, err.found, err.expected) == (2, 2, 3)
        assert "column 2" in str(err)

    def test_dimensionality_mismatch(self, write_file):
        path = write_file("a.csv", "1,2,3\n")
        with LineCursor(path) as cursor:
            with pytest.raises(DimensionalityMismatchError):
                TransposeParser(",").discover(cursor, DatasetMapper(dimensionality=2))

    def test_empty_file(self, write_file):
        path = write_file("a.csv", "")
        mapper = DatasetMapper()
        shape, matrix = _run(TransposeParser(","), path, mapper)
        assert shape.as_tuple() == (0, 0)
        assert matrix.shape == (0, 0)
