"""
Tuning Optimization
===================

Mappings (tempered log sizes of the basis elements) from a temperament's
wedgie.

    te_mapping     Tenney-Euclidean optimum: weighted least squares
    pote_mapping   TE rescaled so the equave is pure
    cte_mapping    TE subject to eigenmonzos tuned exactly

TE is a projection in geometric algebra. With W the blade weighted
componentwise by the metric w and j the weighted JIP,

    t = (j · W) W^-1

is the point of span(W) closest to j; un-weighting t gives the mapping.
A rank-0 or rank-n blade projects j onto itself, so both come out just.

CTE adds one homogeneous axis e_h. Each eigenmonzo c becomes the
hyperplane {x : x · u - (jip · c) = 0}, u being c / w projected into
span(W). The flat through t spanned by all u meets the intersection of the
hyperplanes in a single point, which is the constrained optimum.
"""

import logging
from typing import Optional, Sequence, Union

import numpy as np

from temper.primitives.clifford import get_algebra
from temper.validation.checks import check_positive
from temper.validation.errors import ConvergenceError, InputError

logger = logging.getLogger(__name__)


WeightsLike = Union[None, str, Sequence[float]]


def tenney_weights(basis) -> np.ndarray:
    """Reciprocal log sizes: big primes count for less."""
    return 1.0 / check_positive(basis.jip(), "jip")


def flat_weights(basis) -> np.ndarray:
    return np.ones(len(basis))


def resolve_weights(basis, weights: WeightsLike = None) -> np.ndarray:
    """
    Pick the metric.

    None uses the basis's own weights if it has any, else Tenney weights.
    Strings 'tenney' and 'flat' name the built-in metrics.
    """
    if weights is None:
        own = basis.weights()
        return tenney_weights(basis) if own is None else own
    if isinstance(weights, str):
        if weights == "tenney":
            return tenney_weights(basis)
        if weights == "flat":
            return flat_weights(basis)
        raise InputError(f"Unknown weighting '{weights}' (expected 'tenney' or 'flat')")
    return check_positive(weights, "weights", length=len(basis))


def _weighted(temperament, weights: WeightsLike):
    jip = check_positive(temperament.basis.jip(), "jip")
    w = resolve_weights(temperament.basis, weights)
    algebra = temperament.algebra
    if temperament.is_nil():
        raise InputError("A nil temperament has no tuning")
    blade = algebra.weight(temperament.value, w)
    return jip, w, blade


def _project(algebra, x: np.ndarray, blade: np.ndarray) -> np.ndarray:
    """Vector part of (x · B) B^-1."""
    return algebra.vector_part(algebra.gp(algebra.dot(x, blade), algebra.inverse(blade)))


def te_mapping(temperament, weights: WeightsLike = None) -> np.ndarray:
    """
    Tenney-Euclidean optimal mapping.

    Args:
        temperament: Temperament (any rank)
        weights: None, 'tenney', 'flat' or explicit positive weights

    Returns:
        Mapping in nats, one entry per basis element
    """
    jip, w, blade = _weighted(temperament, weights)
    algebra = temperament.algebra
    return _project(algebra, algebra.vector(jip * w), blade) / w


def pote_mapping(temperament, weights: WeightsLike = None) -> np.ndarray:
    """TE mapping scaled so the first basis element is just."""
    mapping = te_mapping(temperament, weights)
    jip = temperament.basis.jip()
    if abs(mapping[0]) < 1e-15:
        raise ConvergenceError("Equave is tempered out, cannot purify it")
    return mapping * (jip[0] / mapping[0])


def cte_mapping(temperament, eigenmonzos: Sequence, weights: WeightsLike = None, tol: float = 1e-12) -> np.ndarray:
    """
    Constrained TE mapping with every eigenmonzo tuned just.

    Args:
        temperament: Temperament
        eigenmonzos: Intervals to keep pure (monzos, or rationals for a
            Subgroup basis)
        weights: Metric, as for te_mapping
        tol: Relative cutoff for a vanishing homogeneous coordinate

    Raises:
        ConvergenceError: more eigenmonzos than the rank, or eigenmonzos
            that are dependent within the temperament
    """
    jip, w, blade = _weighted(temperament, weights)
    algebra = temperament.algebra
    n = algebra.n

    monzos = [temperament.basis.resolve_monzo(c) for c in eigenmonzos]
    rank = temperament.rank
    if len(monzos) > rank:
        raise ConvergenceError(
            f"{len(monzos)} eigenmonzos over-constrain a rank-{rank} temperament",
            parameter="eigenmonzos",
        )
    if not monzos:
        return te_mapping(temperament, weights)

    target = _project(algebra, algebra.vector(jip * w), blade)

    projective = get_algebra(n + 1)

    def lift(vector: np.ndarray, homogeneous: float) -> np.ndarray:
        return projective.vector(np.append(vector, homogeneous))

    flat = lift(target, 1.0)
    hyperplanes = projective.pseudoscalar(1.0)
    for monzo in monzos:
        direction = _project(algebra, algebra.vector(monzo / w), blade)
        size = float(np.dot(jip, monzo))
        flat = projective.wedge(flat, lift(direction, 0.0))
        hyperplanes = projective.vee(hyperplanes, projective.dual(lift(direction, -size)))

    point = projective.vector_part(projective.vee(flat, hyperplanes))
    scale = max(float(np.max(np.abs(point))), 1.0)
    if abs(point[n]) <= tol * scale:
        raise ConvergenceError(
            "Eigenmonzos are dependent within the temperament; no unique constrained tuning",
            parameter="eigenmonzos",
        )
    logger.debug("CTE point %s", point)
    return point[:n] / point[n] / w
