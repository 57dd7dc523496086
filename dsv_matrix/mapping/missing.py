"""
Missing-value policy.

Tokens listed as missing (e.g. ``""``, ``"?"``, ``"NA"``), and tokens
that are not numbers at all, become NaN. Each such token is recorded in
the dimension's dictionary and the dimension is marked categorical so
that the original spelling can be recovered with ``unmap_string()``.
NaN only exists for float dtypes, so integer matrices are rejected.
"""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np

from dsv_matrix.convert import convert_token
from dsv_matrix.exceptions import TokenConversionError
from dsv_matrix.mapping.base import Datatype, MappingTable, MapPolicy, TypeTable


class MissingPolicy(MapPolicy):
    """Map missing or unparseable tokens to NaN."""

    NEEDS_FIRST_PASS = False

    def __init__(self, missing_values: Iterable[str] = ()) -> None:
        self.missing_values = frozenset(missing_values)

    def map_string(
        self,
        token: str,
        dimension: int,
        dtype: np.dtype,
        types: TypeTable,
        maps: MappingTable,
    ) -> Any:
        if token not in self.missing_values:
            value, ok = convert_token(token, dtype)
            if ok:
                return value

        if dtype.kind != "f":
            raise TokenConversionError(
                token, dimension, f"missing values need a float dtype, got {dtype}"
            )
        types[dimension] = Datatype.CATEGORICAL
        mapping = maps.setdefault(dimension, {})
        mapping.setdefault(token, dtype.type(np.nan))
        return mapping[token]

    def __repr__(self) -> str:
        return f"MissingPolicy(missing_values={sorted(self.missing_values)})"
