"""
Exporter for dsv-matrix.

Writes a loaded matrix back to disk so that loading the written file
with the same orientation reproduces the matrix.

Format follows the file extension, with the same rule the loader uses:
  ``.csv`` -> comma, ``.tsv`` -> tab, anything else -> single space,
  except ``.parquet``, which is written through PyArrow with one string
  column per matrix row (``"0"``, ``"1"``, ...).

NaN is written as ``nan`` and infinities as ``inf`` / ``-inf`` so that
the text forms round-trip through the loader's sentinel handling.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from dsv_matrix.detect import detect_kind, resolve_delimiter
from dsv_matrix.exceptions import ExportError
from dsv_matrix.mapping import DatasetMapper
from dsv_matrix.meta import build_mapping_table

logger = logging.getLogger(__name__)


def _write_dataframe(df: pd.DataFrame, path: Path, header: bool) -> None:
    """Write *df* to *path* in the format implied by its extension.

    Raises:
        ExportError: If writing fails for any reason.
    """
    kind = detect_kind(path)
    try:
        if kind == "parquet":
            df.to_parquet(path, index=False, engine="pyarrow")
        else:
            df.to_csv(
                path,
                sep=resolve_delimiter(kind),
                header=header,
                index=False,
                na_rep="nan",
                lineterminator="\n",
            )
    except Exception as exc:
        raise ExportError(f"Failed to write {path.name}: {exc}") from exc


def save_matrix(
    matrix: np.ndarray,
    path: str | Path,
    transpose: bool = True,
) -> str:
    """Write *matrix* to *path*.

    Args:
        matrix: 2-D array to write.
        path: Output file; the parent directory is created if needed.
        transpose: If True, each matrix column is written as one line
            (the inverse of a transposed load).

    Returns:
        The written path as a string.

    Raises:
        ExportError: If *matrix* is not 2-D, or if the write fails.
    """
    if matrix.ndim != 2:
        raise ExportError(f"Expected a 2-D matrix, got {matrix.ndim} dimension(s)")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = matrix.T if transpose else matrix
    df = pd.DataFrame(lines)
    df.columns = [str(c) for c in df.columns]
    _write_dataframe(df, path, header=False)

    logger.info(
        "Exported matrix %d x %d -> %s (%s)",
        matrix.shape[0], matrix.shape[1], path.name,
        "transposed" if transpose else "normal",
    )
    return str(path)


def save_mapping_table(mapper: DatasetMapper, path: str | Path) -> str:
    """Write the mapper's categorical dictionaries to *path*.

    Text formats get a header row; see ``meta.build_mapping_table`` for
    the schema.

    Returns:
        The written path as a string.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = build_mapping_table(mapper)
    _write_dataframe(df, path, header=True)
    logger.info("Exported mapping table -> %s (%d rows)", path.name, len(df))
    return str(path)
