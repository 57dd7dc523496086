"""
dsv-matrix: load delimiter-separated text files into dense numpy matrices.

Public API surface:

- ``load(path, mapper=None, ...)`` -- **recommended entry point**. Opens
  the file, runs the discovery and population passes and returns a
  ``LoadResult`` (matrix + mapper).

- ``CSVLoader`` -- the loader object behind ``load()``, for callers that
  want to load the same open file more than once.

- ``DatasetMapper`` with ``NumericPolicy`` / ``IncrementPolicy`` /
  ``MissingPolicy`` -- the mapping collaborator deciding how tokens
  become numbers (plain numbers, categorical codes, NaN for missing).

- ``LoaderConfig`` / ``load_config()`` / ``save_config()`` -- per-load
  options, storable as YAML.

The delimiter is chosen from the file extension: ``.csv`` -> comma,
``.tsv`` -> tab, anything else -> a single space.
"""

from __future__ import annotations

import logging
from pathlib import Path

from numpy.typing import DTypeLike

from dsv_matrix.config import LoaderConfig, load_config, save_config
from dsv_matrix.dataset import LoadInfo, LoadResult
from dsv_matrix.loader import Allocator, CSVLoader
from dsv_matrix.mapping import (
    DatasetMapper,
    Datatype,
    IncrementPolicy,
    MapPolicy,
    MissingPolicy,
    NumericPolicy,
)

__all__ = [
    "load",
    "CSVLoader",
    "DatasetMapper",
    "Datatype",
    "IncrementPolicy",
    "LoadInfo",
    "LoadResult",
    "LoaderConfig",
    "MapPolicy",
    "MissingPolicy",
    "NumericPolicy",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)


def load(
    path: str | Path,
    mapper: DatasetMapper | None = None,
    *,
    transpose: bool | None = None,
    dtype: DTypeLike | None = None,
    config: LoaderConfig | str | Path | None = None,
    allocate: Allocator | None = None,
) -> LoadResult:
    """Load a csv/tsv/txt file into a dense matrix.

    Args:
        path: Input file. Its extension selects the delimiter.
        mapper: Mapping collaborator, mutated in place. If omitted, one
            is built from *config* (numeric policy by default). Pass the
            same mapper to several loads to enforce a common
            dimensionality and shared categorical codes.
        transpose: If True (the default unless *config* says otherwise),
            each line becomes a matrix column; if False, a matrix row.
        dtype: Element dtype (default ``float64``).
        config: A ``LoaderConfig``, or the path to one stored as YAML.
        allocate: Optional ``allocate(shape, dtype)`` returning the
            matrix to fill; called exactly once.

    Returns:
        A ``LoadResult`` with ``matrix`` and a snapshot of ``mapper``.

    Raises:
        FileOpenError: If the file cannot be opened.
        DimensionalityMismatchError: If *mapper* disagrees with the data.
        WrongFieldCountError: If a record has the wrong number of fields.
        UnterminatedQuoteError: If a quoted field is never closed.
        TokenConversionError: If the mapping policy rejects a token.
        FileDecodeError: If the file is not valid in the configured encoding.
        AllocationError: If *allocate* returns a matrix of the wrong shape.

    Examples::

        result = dsv_matrix.load("data/iris.csv")
        result.matrix.shape        # (n_features, n_points)

        mapper = dsv_matrix.DatasetMapper(dsv_matrix.IncrementPolicy())
        result = dsv_matrix.load("data/mixed.csv", mapper)
        result.to_frame()          # categorical columns decoded
    """
    if isinstance(config, (str, Path)):
        config = load_config(config)

    with CSVLoader(path, config) as loader:
        return loader.load(mapper, transpose=transpose, dtype=dtype, allocate=allocate)
