"""
Categorical encoding policy.

Dimensions that contain any non-numeric token are categorical: each
distinct token in such a dimension gets an integer code, assigned in
order of first appearance starting at 0. Because a single non-numeric
token changes how the whole dimension is encoded (including its
numeric-looking tokens), this policy needs a first pass over the data.

With ``force_all_mappings=True`` every dimension is categorical.
A dimension can hold at most as many categories as the matrix dtype can
represent as distinct integers; one more fails the load.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from dsv_matrix.convert import convert_token, is_numeric
from dsv_matrix.exceptions import TokenConversionError
from dsv_matrix.mapping.base import Datatype, MappingTable, MapPolicy, TypeTable

logger = logging.getLogger(__name__)


def max_code(dtype: np.dtype) -> int:
    """Largest category code *dtype* can hold exactly.

    Integer dtypes are bounded by their range, float dtypes by the width
    of their mantissa (2048 for float16).
    """
    if dtype.kind == "f":
        return 2 ** (np.finfo(dtype).nmant + 1)
    return int(np.iinfo(dtype).max)


class IncrementPolicy(MapPolicy):
    """Assign incrementing codes to tokens of categorical dimensions."""

    NEEDS_FIRST_PASS = True

    def __init__(self, force_all_mappings: bool = False) -> None:
        self.force_all_mappings = force_all_mappings

    def map_first_pass(
        self,
        token: str,
        dimension: int,
        dtype: np.dtype,
        types: TypeTable,
    ) -> None:
        if types.get(dimension) is Datatype.CATEGORICAL:
            return
        if self.force_all_mappings or not is_numeric(token, dtype):
            types[dimension] = Datatype.CATEGORICAL

    def map_string(
        self,
        token: str,
        dimension: int,
        dtype: np.dtype,
        types: TypeTable,
        maps: MappingTable,
    ) -> Any:
        if self.force_all_mappings:
            types[dimension] = Datatype.CATEGORICAL

        if types.get(dimension) is not Datatype.CATEGORICAL:
            value, ok = convert_token(token, dtype)
            if ok:
                return value
            logger.warning(
                "Token %r in numeric dimension %d is not numeric; "
                "treating the dimension as categorical",
                token, dimension,
            )
            types[dimension] = Datatype.CATEGORICAL

        mapping = maps.setdefault(dimension, {})
        if token not in mapping:
            code = len(mapping)
            if code > max_code(dtype):
                raise TokenConversionError(
                    token, dimension, f"too many categories for {dtype}"
                )
            mapping[token] = dtype.type(code)
        return mapping[token]

    def __repr__(self) -> str:
        return f"IncrementPolicy(force_all_mappings={self.force_all_mappings})"
