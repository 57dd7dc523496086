"""
Mapping policy protocol / ABC for dsv-matrix.

A policy decides how raw tokens become numbers. ``DatasetMapper`` owns
the state (per-dimension types and token dictionaries) and delegates
every decision to its policy.

Contract:
1. ``NEEDS_FIRST_PASS`` is fixed per policy class. When True, the loader
   feeds every token to ``map_first_pass()`` during discovery, before
   the matrix is allocated.
2. ``map_string()`` is called once per token during population and
   returns the value written into the matrix.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import numpy as np

# dimension -> Datatype, and dimension -> {token: value}
TypeTable = dict[int, "Datatype"]
MappingTable = dict[int, dict[str, Any]]


class Datatype(str, enum.Enum):
    """Kind of values held by one dimension."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


class MapPolicy(ABC):
    """Abstract base class for token mapping policies."""

    NEEDS_FIRST_PASS: ClassVar[bool] = False

    def map_first_pass(
        self,
        token: str,
        dimension: int,
        dtype: np.dtype,
        types: TypeTable,
    ) -> None:
        """Inspect a token during discovery. Default: do nothing."""

    @abstractmethod
    def map_string(
        self,
        token: str,
        dimension: int,
        dtype: np.dtype,
        types: TypeTable,
        maps: MappingTable,
    ) -> Any:
        """Return the numeric value for *token* in *dimension*.

        Args:
            token: Trimmed field (quotes retained).
            dimension: Index along the mapper's dimensionality axis.
            dtype: Target dtype of the matrix.
            types: Per-dimension datatypes, updated in place.
            maps: Per-dimension token dictionaries, updated in place.

        Raises:
            TokenConversionError: If the policy rejects the token.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
