"""
Token to number conversion for dsv-matrix.

Turns one trimmed field into a value of the target numpy dtype.

Recognised input:
1. Sentinels, case-insensitive: ``inf``, ``+inf``, ``-inf``, ``nan``,
   ``+nan``, ``-nan``.
2. Plain decimal or scientific literals (``12``, ``-0.5``, ``1e-3``).

Python-only spellings accepted by ``float()`` (``1_000``, ``infinity``,
surrounding whitespace inside the token) are rejected so that the set of
accepted tokens does not depend on the interpreter.

Conversion never raises on bad input: it reports failure and leaves the
accept/reject decision to the mapping policy.
"""

from __future__ import annotations

import re
from typing import Any

import numpy as np
from numpy.typing import DTypeLike

from dsv_matrix.exceptions import ConfigValidationError

_FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PATTERN = re.compile(r"[+-]?\d+")

_POSITIVE_INF = {"inf", "+inf"}
_NEGATIVE_INF = {"-inf"}
_NAN = {"nan", "+nan", "-nan"}


def resolve_dtype(dtype: DTypeLike) -> np.dtype:
    """Normalise *dtype* and check it is a float or integer dtype.

    Raises:
        ConfigValidationError: If the dtype is unknown or not numeric.
    """
    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise ConfigValidationError(f"Unknown dtype: {dtype!r}") from exc
    if resolved.kind not in "fiu":
        raise ConfigValidationError(
            f"Unsupported dtype '{resolved}': expected a float or integer dtype"
        )
    return resolved


def _convert_sentinel(key: str, dtype: np.dtype) -> Any | None:
    if dtype.kind == "f":
        if key in _POSITIVE_INF:
            return dtype.type(np.inf)
        if key in _NEGATIVE_INF:
            return dtype.type(-np.inf)
        if key in _NAN:
            return dtype.type(np.nan)
        return None

    # Integers have no infinities or NaN: saturate, and NaN becomes zero.
    info = np.iinfo(dtype)
    if key in _POSITIVE_INF:
        return dtype.type(info.max)
    if key in _NEGATIVE_INF:
        return dtype.type(info.min)
    if key in _NAN:
        return dtype.type(0)
    return None


def convert_token(token: str, dtype: DTypeLike = np.float64) -> tuple[Any, bool]:
    """Convert *token* to a scalar of *dtype*.

    Args:
        token: Raw field; leading/trailing whitespace is ignored.
        dtype: Target float or integer dtype.

    Returns:
        ``(value, True)`` on success, ``(0, False)`` if the token is
        neither a sentinel nor a well-formed literal for *dtype*.
    """
    dtype = resolve_dtype(dtype)
    token = token.strip()

    sentinel = _convert_sentinel(token.lower(), dtype)
    if sentinel is not None:
        return sentinel, True

    if dtype.kind == "f":
        if not _FLOAT_PATTERN.fullmatch(token):
            return dtype.type(0), False
        return dtype.type(float(token)), True

    if not _INT_PATTERN.fullmatch(token):
        return dtype.type(0), False
    value = int(token)
    info = np.iinfo(dtype)
    if value < info.min or value > info.max:
        return dtype.type(0), False
    return dtype.type(value), True


def is_numeric(token: str, dtype: DTypeLike = np.float64) -> bool:
    """True if *token* converts cleanly to *dtype*."""
    return convert_token(token, dtype)[1]
