"""
Structural Extraction
=====================

Periods, generators and compressed forms of a canonical wedgie.

Period / generator recovery contracts the integer blade P with one
generator g at a time:

    Q = g ⌋ P          one grade lower
    d = gcd(Q)         how many equal parts g is split into
    P = Q / d

The first generator is the equave axis. Later ones are the next basis axis
with a nonzero contraction, except that a grade-1 remainder (a val) is
finished off with its Bezout vector, which makes the last contraction
exactly its gcd. If the scalar left at the end is not ±1 the generators do
not separate and extraction fails.

Rank prefix: the rank-r block has C(n, r) components, but the ones
containing e0 (the first C(n-1, r-1)) already determine the rest once the
JIP is known.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from temper.primitives.clifford import get_algebra
from temper.primitives.numtheory import binomial, content, iterated_euclid
from temper.validation.checks import check_integer_vector
from temper.validation.errors import ConvergenceError, InputError

logger = logging.getLogger(__name__)


def _block_start(n: int, rank: int) -> int:
    return sum(binomial(n, i) for i in range(rank))


def rank_prefix(temperament, rank: Optional[int] = None) -> np.ndarray:
    """Leading C(n-1, r-1) components of the rank-r block."""
    n = temperament.dimensions
    rank = temperament.rank if rank is None else rank
    if rank < 0 or rank > n:
        raise InputError(f"Rank {rank} outside 0..{n}")
    start = _block_start(n, rank)
    return np.array(temperament.value[start:start + binomial(n - 1, rank - 1)])


def expand_prefix(rank: int, prefix: Sequence[int], jip: Sequence[float]) -> np.ndarray:
    """
    Rebuild a full integer wedgie from its rank prefix.

    The prefix goes at the end of the grade (r - 1) block and is wedged with
    jip / jip[0]; rounding recovers the dependent components.
    """
    jip = np.asarray(jip, dtype=np.float64)
    n = len(jip)
    if rank < 1 or rank > n:
        raise InputError(f"Rank {rank} outside 1..{n}")
    expected = binomial(n - 1, rank - 1)
    prefix = check_integer_vector(prefix, "prefix")
    if len(prefix) != expected:
        raise InputError(f"Rank-{rank} prefix in {n} dimensions needs {expected} entries, got {len(prefix)}")

    algebra = get_algebra(n)
    end = _block_start(n, rank)
    partial = algebra.zeros(np.float64)
    partial[end - expected:end] = prefix
    value = algebra.wedge(partial, algebra.vector(jip / jip[0]))
    return np.rint(value).astype(np.int64)


def period_generators(temperament) -> List[Tuple[int, np.ndarray]]:
    """
    Split a temperament into (divisions, generator) pairs.

    The first pair is the period: the equave divided into `divisions` equal
    parts. Generators are monzos over the temperament's basis.

    Raises:
        InputError: nil temperament
        ConvergenceError: generators could not be separated
    """
    canonical = temperament.canonical()
    algebra = canonical.algebra
    n = algebra.n
    rank = canonical.rank
    blade = canonical.value

    pairs: List[Tuple[int, np.ndarray]] = []
    axis = 0
    for grade in range(rank, 0, -1):
        if pairs and grade == 1:
            generator = np.array(iterated_euclid(algebra.vector_part(blade)), dtype=np.int64)
            contracted = algebra.lcontract(algebra.vector(generator), blade)
        else:
            while True:
                if axis >= n:
                    raise ConvergenceError("Ran out of basis axes while extracting generators")
                generator = np.zeros(n, dtype=np.int64)
                generator[axis] = 1
                axis += 1
                contracted = algebra.lcontract(algebra.vector(generator), blade)
                if np.any(contracted):
                    break

        divisions = content(contracted)
        if divisions == 0:
            raise ConvergenceError(f"Generator {generator.tolist()} is tempered out")
        blade = contracted // divisions
        pairs.append((divisions, generator))
        logger.debug("Generator %s divides into %d", generator.tolist(), divisions)

    if abs(int(blade[0])) != 1:
        raise ConvergenceError(f"Generators could not be separated (leftover {int(blade[0])})")
    return pairs


def divisions_generator(temperament) -> Tuple[int, np.ndarray]:
    """Periods per equave and a generator of a rank-2 temperament."""
    if temperament.rank != 2:
        raise InputError(f"divisions_generator needs rank 2, got rank {temperament.rank}")
    (divisions, _), (_, generator) = period_generators(temperament)
    return divisions, generator
