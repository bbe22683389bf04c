"""
Input Checks

Normalize caller data into numpy arrays before any algebra runs.

PRINCIPLE: "Check before compute, not after failure"
"""

from typing import Optional, Sequence

import numpy as np

from .errors import InputError


def check_positive(values: Sequence[float], name: str, length: Optional[int] = None) -> np.ndarray:
    """
    Validate a vector of strictly positive finite reals.

    Args:
        values: Sizes or weights
        name: Label used in error messages
        length: Required length, if any

    Returns:
        float64 array
    """
    try:
        array = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError):
        raise InputError(f"{name} must be numeric, got {values!r}") from None

    if array.ndim != 1:
        raise InputError(f"{name} must be one-dimensional, got shape {array.shape}")
    if length is not None and array.shape[0] != length:
        raise InputError(f"{name} must have {length} entries, got {array.shape[0]}")
    if not np.all(np.isfinite(array)) or np.any(array <= 0):
        raise InputError(f"{name} must be strictly positive and finite, got {array.tolist()}")
    return array


def check_integer_vector(values: Sequence[int], name: str, length: Optional[int] = None) -> np.ndarray:
    """
    Validate a vector of integers (vals, monzos, prefixes).

    Integral floats are accepted and converted; anything else is rejected.

    Returns:
        int64 array
    """
    try:
        array = np.asarray(values)
    except (TypeError, ValueError):
        raise InputError(f"{name} must be a sequence of integers, got {values!r}") from None

    if array.ndim != 1:
        raise InputError(f"{name} must be one-dimensional, got shape {array.shape}")
    if length is not None and array.shape[0] != length:
        raise InputError(f"{name} must have {length} entries, got {array.shape[0]}")

    if np.issubdtype(array.dtype, np.integer):
        return array.astype(np.int64)
    if np.issubdtype(array.dtype, np.floating):
        rounded = np.rint(array)
        if np.all(rounded == array):
            return rounded.astype(np.int64)
    raise InputError(f"{name} must contain integers, got {array.tolist()}")
