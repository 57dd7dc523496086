"""
Numeric-only mapping policy.

Every token must be a number or a sentinel (``inf``, ``nan``, ...).
Anything else fails the load; no dictionary is ever built.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from dsv_matrix.convert import convert_token
from dsv_matrix.exceptions import TokenConversionError
from dsv_matrix.mapping.base import MappingTable, MapPolicy, TypeTable


class NumericPolicy(MapPolicy):
    """Identity policy: convert or fail."""

    NEEDS_FIRST_PASS = False

    def map_string(
        self,
        token: str,
        dimension: int,
        dtype: np.dtype,
        types: TypeTable,
        maps: MappingTable,
    ) -> Any:
        value, ok = convert_token(token, dtype)
        if not ok:
            raise TokenConversionError(token, dimension, f"not a valid {dtype} value")
        return value
