"""
Load result handle for dsv-matrix.

``LoadResult`` is what a load hands back: the filled matrix together
with a snapshot of the mapper that produced it, so that categorical codes
can be turned back into their original tokens later. The snapshot does
not follow the caller's mapper into later loads.

Matrix layout: in both orientations the mapper's dimensions are the
matrix rows and the data points are its columns. ``to_frame()``
therefore transposes, giving the usual one-row-per-point table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import pandas as pd

from dsv_matrix.mapping import DatasetMapper, Datatype

logger = logging.getLogger(__name__)


@dataclass
class LoadInfo:
    """Summary of a load, returned by ``LoadResult.describe()``.

    Attributes:
        path: The source file.
        shape: ``(rows, cols)`` of the matrix.
        dtype: Element dtype name.
        delimiter: Delimiter used for the load.
        transpose: Orientation used for the load.
        policy: Name of the mapping policy class.
        categorical: Mapping of categorical dimension -> number of
            distinct tokens.
    """

    path: str
    shape: tuple[int, int]
    dtype: str
    delimiter: str
    transpose: bool
    policy: str
    categorical: dict[int, int] = field(default_factory=dict)


@dataclass
class LoadResult:
    """A loaded matrix and the mapper state it was decoded with."""

    path: Path
    matrix: np.ndarray
    mapper: DatasetMapper
    delimiter: str
    transpose: bool = True

    @property
    def shape(self) -> tuple[int, int]:
        return self.matrix.shape

    def describe(self) -> LoadInfo:
        return LoadInfo(
            path=str(self.path),
            shape=self.matrix.shape,
            dtype=str(self.matrix.dtype),
            delimiter=self.delimiter,
            transpose=self.transpose,
            policy=type(self.mapper.policy).__name__,
            categorical={
                dim: self.mapper.num_mappings(dim)
                for dim in self.mapper.categorical_dimensions()
            },
        )

    def to_frame(self, decode: bool = True) -> pd.DataFrame:
        """Return the data as a DataFrame, one row per point.

        Columns are named ``dim_0``, ``dim_1``, ... after the matrix rows.

        Args:
            decode: If True, categorical dimensions are decoded back to
                their original tokens (object dtype). Values with no
                token (e.g. NaN in a mixed dimension) are kept as-is.
        """
        df = pd.DataFrame(
            self.matrix.T,
            columns=[f"dim_{i}" for i in range(self.matrix.shape[0])],
        )
        if not decode:
            return df

        for dim in self.mapper.categorical_dimensions():
            if dim >= self.matrix.shape[0]:
                continue
            col = f"dim_{dim}"
            df[col] = [self._decode(value, dim) for value in df[col]]
        return df

    def save(self, path: str | Path, with_mappings: bool = False) -> list[str]:
        """Write the matrix (and optionally its mapping table) to disk.

        The format follows the extension of *path*; see
        ``export.save_matrix``. The mapping table is written next to the
        matrix as ``{stem}_mappings{suffix}``.

        Returns:
            List of file paths that were written.
        """
        from dsv_matrix.export import save_mapping_table, save_matrix

        path = Path(path)
        written = [save_matrix(self.matrix, path, transpose=self.transpose)]
        if with_mappings:
            mapping_path = path.with_name(f"{path.stem}_mappings{path.suffix}")
            written.append(save_mapping_table(self.mapper, mapping_path))
        return written

    def _decode(self, value: object, dim: int) -> object:
        if self.mapper.type(dim) is not Datatype.CATEGORICAL:
            return value
        try:
            return self.mapper.unmap_string(value, dim)
        except KeyError:
            return value
