"""
DatasetMapper: the mapping collaborator used by the loader.

Holds the dimensionality contract and the per-dimension state that a
policy builds up (datatypes and token dictionaries). The same mapper can
be reused across loads: with dimensionality 0 the loader sets it from the
data; otherwise the data must agree with it.

A "dimension" is one index along the mapper's axis: a line of the file
in the normal orientation, a field position in the transposed one. In
both orientations dimensions are the rows of the loaded matrix.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
from numpy.typing import DTypeLike

from dsv_matrix.convert import resolve_dtype
from dsv_matrix.mapping.base import Datatype, MappingTable, MapPolicy, TypeTable
from dsv_matrix.mapping.numeric import NumericPolicy

logger = logging.getLogger(__name__)


class DatasetMapper:
    """Per-dimension token mapping driven by a ``MapPolicy``.

    Attributes:
        policy: The mapping policy, fixed at construction.
    """

    def __init__(self, policy: MapPolicy | None = None, dimensionality: int = 0) -> None:
        self.policy = policy if policy is not None else NumericPolicy()
        self._dimensionality = dimensionality
        self._types: TypeTable = {}
        self._maps: MappingTable = {}

    def __repr__(self) -> str:
        return (
            f"DatasetMapper(policy={self.policy!r}, "
            f"dimensionality={self._dimensionality})"
        )

    # -- Dimensionality contract --------------------------------------------

    @property
    def dimensionality(self) -> int:
        return self._dimensionality

    @dimensionality.setter
    def dimensionality(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"dimensionality must be >= 0, got {value}")
        self._dimensionality = value
        self._types.clear()
        self._maps.clear()

    def copy(self) -> DatasetMapper:
        """Independent copy of the current state; the policy is shared."""
        clone = DatasetMapper(self.policy, self._dimensionality)
        clone._types = dict(self._types)
        clone._maps = {dim: dict(mapping) for dim, mapping in self._maps.items()}
        return clone

    @property
    def needs_first_pass(self) -> bool:
        return self.policy.NEEDS_FIRST_PASS

    # -- Hooks called by the loader -----------------------------------------

    def map_first_pass(self, token: str, position: int, dtype: DTypeLike = np.float64) -> None:
        """Preliminary-pass hook, called once per token during discovery."""
        self.policy.map_first_pass(token, position, resolve_dtype(dtype), self._types)

    def map_string(self, token: str, position: int, dtype: DTypeLike = np.float64) -> Any:
        """Final hook: return the value to store for *token*."""
        return self.policy.map_string(
            token, position, resolve_dtype(dtype), self._types, self._maps
        )

    # -- Inspection ---------------------------------------------------------

    def type(self, dimension: int) -> Datatype:
        return self._types.get(dimension, Datatype.NUMERIC)

    def categorical_dimensions(self) -> list[int]:
        return sorted(
            d for d, t in self._types.items() if t is Datatype.CATEGORICAL
        )

    def num_mappings(self, dimension: int) -> int:
        return len(self._maps.get(dimension, {}))

    def mappings(self, dimension: int) -> dict[str, Any]:
        """Copy of the ``token -> value`` dictionary of *dimension*."""
        return dict(self._maps.get(dimension, {}))

    def unmap_value(self, token: str, dimension: int) -> Any:
        """Return the value *token* was mapped to in *dimension*.

        Raises:
            KeyError: If the token has no mapping in that dimension.
        """
        try:
            return self._maps[dimension][token]
        except KeyError:
            raise KeyError(
                f"token {token!r} has no mapping in dimension {dimension}"
            ) from None

    def unmap_string(self, value: Any, dimension: int, index: int = 0) -> str:
        """Return the token that was mapped to *value* in *dimension*.

        Several tokens can share a value (every missing token maps to
        NaN); *index* selects among them in insertion order.

        Raises:
            KeyError: If no token maps to *value*.
        """
        matches = [
            token
            for token, mapped in self._maps.get(dimension, {}).items()
            if _same_value(mapped, value)
        ]
        if index >= len(matches):
            raise KeyError(f"value {value!r} has no mapping in dimension {dimension}")
        return matches[index]


def _same_value(a: Any, b: Any) -> bool:
    if isinstance(a, (float, np.floating)) and np.isnan(a):
        return isinstance(b, (float, np.floating)) and bool(np.isnan(b))
    return bool(a == b)
