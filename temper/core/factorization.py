"""
Val factorization: find equal temperaments whose wedge is the target.

Search order is deterministic. Division counts go up from 2; inside one
count the patent val comes first, then wart perturbations ordered by total
offset and then lexicographically. Only coprime vals count (a val with a
common factor is a multiple of a smaller one).
"""

import logging
from itertools import combinations, product
from typing import Iterator, List, Optional

import numpy as np

from temper.config import get_config
from temper.primitives.numtheory import is_coprime
from temper.validation.errors import SearchExhaustedError

logger = logging.getLogger(__name__)


def candidate_vals(basis, divisions: int, wart_radius: int = 0) -> Iterator[np.ndarray]:
    """Patent val for `divisions` and its perturbations up to wart_radius steps."""
    patent = basis.patent_val(divisions)
    n = len(patent)
    steps = range(-wart_radius, wart_radius + 1)
    offsets = sorted(
        product(steps, repeat=n - 1),
        key=lambda offset: (sum(abs(o) for o in offset), offset),
    )
    for offset in offsets:
        val = patent.copy()
        val[1:] += np.array(offset, dtype=np.int64)
        if is_coprime(val):
            yield val


def factorize_vals(temperament, max_divisions: Optional[int] = None,
                   wart_radius: Optional[int] = None) -> List[np.ndarray]:
    """
    Smallest-first set of vals whose wedge reproduces the temperament.

    Args:
        temperament: Target temperament
        max_divisions: Largest equal division tried
        wart_radius: Largest per-element deviation from the patent val

    Returns:
        `rank` vals; empty for a rank-0 temperament

    Raises:
        SearchExhaustedError: nothing found within the bounds
    """
    config = get_config().factorization
    max_divisions = config.max_divisions if max_divisions is None else max_divisions
    wart_radius = config.wart_radius if wart_radius is None else wart_radius

    target = temperament.canonical()
    rank = target.rank
    if rank == 0:
        return []

    algebra = target.algebra
    wedgie = target.value
    found: List[np.ndarray] = []
    for divisions in range(2, max_divisions + 1):
        for val in candidate_vals(target.basis, divisions, wart_radius):
            vector = algebra.vector(val)
            if np.any(algebra.wedge(vector, wedgie)):
                continue
            logger.debug("Supported val %s", val.tolist())

            for subset in combinations(found, rank - 1):
                blade = algebra.scalar(1)
                for other in subset:
                    blade = algebra.wedge(blade, algebra.vector(other))
                blade = algebra.wedge(blade, vector)
                if np.array_equal(blade, wedgie) or np.array_equal(blade, -wedgie):
                    return [*subset, val]
            found.append(val)

    raise SearchExhaustedError(
        "No generating set of vals found",
        bounds={"max_divisions": max_divisions, "wart_radius": wart_radius},
    )
