"""
Mapping sub-package for dsv-matrix.

Design: Strategy Pattern
- base.py defines the MapPolicy ABC and the Datatype enum.
- numeric.py implements NumericPolicy (convert or fail, no first pass).
- increment.py implements IncrementPolicy (categorical codes, first pass).
- missing.py implements MissingPolicy (missing tokens -> NaN).
- mapper.py implements DatasetMapper, which owns the state and the
  dimensionality contract and delegates decisions to its policy.

The policy is chosen when the mapper is constructed; the loader only
reads ``needs_first_pass`` and calls the two hooks.
"""

from dsv_matrix.mapping.base import Datatype, MapPolicy
from dsv_matrix.mapping.increment import IncrementPolicy
from dsv_matrix.mapping.mapper import DatasetMapper
from dsv_matrix.mapping.missing import MissingPolicy
from dsv_matrix.mapping.numeric import NumericPolicy

__all__ = [
    "DatasetMapper",
    "Datatype",
    "IncrementPolicy",
    "MapPolicy",
    "MissingPolicy",
    "NumericPolicy",
]
