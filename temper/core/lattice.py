"""
Temperament lattice: meet and join.

Supported vals of A ∨ B are everything A or B supports; A ∧ B supports only
what both do. Kernels run the other way, so

    kernel_join = val_meet
    kernel_meet = val_join

The subspace work is done in floating point, which returns unit blades.
rescale() turns those back into integer wedgies.
"""

import logging
from typing import Optional

import numpy as np

from temper.config import get_config
from temper.primitives import subspace
from temper.validation.errors import ConvergenceError, InputError

logger = logging.getLogger(__name__)


def rescale(x: np.ndarray, threshold: Optional[float] = None, persistence: Optional[int] = None) -> np.ndarray:
    """
    Smallest integer multiple of a float multivector.

    Tries multipliers k / s for k = 1..persistence, s being the smallest
    component above threshold, until every component is within threshold of
    an integer.

    Raises:
        ConvergenceError: no multiplier found within persistence tries
    """
    config = get_config().lattice
    threshold = config.threshold if threshold is None else threshold
    persistence = config.persistence if persistence is None else persistence

    x = np.asarray(x, dtype=np.float64)
    magnitudes = np.abs(x)
    significant = magnitudes[magnitudes > threshold]
    if significant.size == 0:
        raise ConvergenceError("Cannot rescale a zero multivector")
    smallest = significant.min()

    for k in range(1, persistence + 1):
        scaled = x * (k / smallest)
        rounded = np.rint(scaled)
        if np.all(np.abs(scaled - rounded) <= threshold):
            logger.debug("Rescaled with multiplier %d / %g", k, smallest)
            return rounded.astype(np.int64)
    raise ConvergenceError(
        f"No integer multiple found in {persistence} tries",
        parameter="persistence",
    )


def _check_compatible(a, b):
    if a.dimensions != b.dimensions or not a.basis.equals(b.basis):
        raise InputError(f"Temperaments live in different bases: {a.basis!r} vs {b.basis!r}")
    if a.is_nil() or b.is_nil():
        raise InputError("Nil temperaments have no subspace")


def val_join(a, b, tolerance: Optional[float] = None, threshold: Optional[float] = None,
             persistence: Optional[int] = None) -> np.ndarray:
    """Integer wedgie supporting every val of either temperament."""
    _check_compatible(a, b)
    tolerance = get_config().lattice.tolerance if tolerance is None else tolerance
    joined = subspace.join(a.algebra, a.value, b.value, tolerance)
    return rescale(joined, threshold, persistence)


def val_meet(a, b, tolerance: Optional[float] = None, threshold: Optional[float] = None,
             persistence: Optional[int] = None) -> np.ndarray:
    """Integer wedgie supporting only the vals both temperaments support."""
    _check_compatible(a, b)
    tolerance = get_config().lattice.tolerance if tolerance is None else tolerance
    met = subspace.meet(a.algebra, a.value, b.value, tolerance)
    return rescale(met, threshold, persistence)


def kernel_join(a, b, **kwargs) -> np.ndarray:
    """Integer wedgie tempering out every comma of either temperament."""
    return val_meet(a, b, **kwargs)


def kernel_meet(a, b, **kwargs) -> np.ndarray:
    """Integer wedgie tempering out only the commas both temper out."""
    return val_join(a, b, **kwargs)
