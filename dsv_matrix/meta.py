"""
Mapping table builder for dsv-matrix.

Flattens a mapper's dictionaries into one table so the categorical
encoding of a load can be stored next to the matrix and inspected
without Python objects.

Schema (one row per mapped token):
  dimension  int     index along the mapper's axis (matrix row)
  datatype   str     "categorical" (only categorical dimensions have rows)
  token      str     original token, quotes retained
  value      float   value written into the matrix (code or NaN)
"""

from __future__ import annotations

import logging

import pandas as pd

from dsv_matrix.mapping import DatasetMapper

logger = logging.getLogger(__name__)

MAPPING_COLUMNS = ["dimension", "datatype", "token", "value"]


def build_mapping_table(mapper: DatasetMapper) -> pd.DataFrame:
    """Build the flat mapping table of *mapper*.

    Rows are ordered by dimension, then by the order in which tokens
    were first mapped.
    """
    records = []
    for dim in mapper.categorical_dimensions():
        for token, value in mapper.mappings(dim).items():
            records.append({
                "dimension": dim,
                "datatype": mapper.type(dim).value,
                "token": token,
                "value": float(value),
            })

    df = pd.DataFrame.from_records(records, columns=MAPPING_COLUMNS)
    df = df.astype({"dimension": "int64", "value": "float64"})
    logger.debug(
        "Built mapping table: %d rows across %d dimension(s)",
        len(df), len(mapper.categorical_dimensions()),
    )
    return df
