"""
Monzos: rationals as prime exponent vectors.

    81/80  ->  [-4, 4, -1]        (2^-4 * 3^4 * 5^-1)

Primes come from sympy so there is no fixed table limit. A monzo is a plain
int64 numpy array; the residual is whatever part of the rational does not fit
into the requested number of components.
"""

from fractions import Fraction
from functools import lru_cache
from math import log
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from sympy import factorint, prime, primepi, primerange

from temper.validation.errors import InputError


FractionLike = Union[Fraction, int, str, Tuple[int, int]]

CENTS_PER_OCTAVE = 1200.0


def to_fraction(value: FractionLike) -> Fraction:
    """
    Coerce a rational-looking value to Fraction.

    Accepts Fraction, int, strings such as "81/80" or "3", and (num, den)
    tuples. Floats are rejected: they have no exact ratio.
    """
    if isinstance(value, bool):
        raise InputError(f"Not a rational number: {value!r}")
    if isinstance(value, Fraction):
        result = value
    elif isinstance(value, (int, np.integer)):
        result = Fraction(int(value))
    elif isinstance(value, str):
        try:
            result = Fraction(value.strip())
        except (ValueError, ZeroDivisionError):
            raise InputError(f"Cannot parse rational {value!r}") from None
        if "." in value or "e" in value.lower():
            raise InputError(f"Decimal notation is not a ratio: {value!r}")
    elif isinstance(value, tuple) and len(value) == 2:
        numerator, denominator = value
        if not all(isinstance(v, (int, np.integer)) for v in value) or denominator == 0:
            raise InputError(f"Invalid (numerator, denominator) pair {value!r}")
        result = Fraction(int(numerator), int(denominator))
    else:
        raise InputError(f"Not a rational number: {value!r}")
    return result


@lru_cache(maxsize=None)
def nth_prime(index: int) -> int:
    """Zero-based prime lookup: 0 -> 2, 1 -> 3, 2 -> 5, ..."""
    return int(prime(index + 1))


def prime_index(p: int) -> int:
    return int(primepi(p)) - 1


def log_prime(index: int) -> float:
    return log(nth_prime(index))


def primes_up_to(limit: int) -> List[int]:
    return [int(p) for p in primerange(2, limit + 1)]


def fraction_to_monzo_and_residual(
    value: FractionLike,
    num_components: Optional[int] = None,
) -> Tuple[np.ndarray, Fraction]:
    """
    Split a rational into a prime monzo and an unrepresented residual.

    Args:
        value: Positive rational
        num_components: Number of leading primes to use. None means "as many
            as needed", in which case the residual is always 1.

    Returns:
        (monzo, residual)
    """
    fraction = to_fraction(value)
    if fraction <= 0:
        raise InputError(f"Only positive rationals have monzos, got {fraction}")

    exponents = {}
    for p, e in factorint(fraction.numerator).items():
        exponents[int(p)] = exponents.get(int(p), 0) + int(e)
    for p, e in factorint(fraction.denominator).items():
        exponents[int(p)] = exponents.get(int(p), 0) - int(e)

    if num_components is None:
        num_components = max((prime_index(p) + 1 for p in exponents), default=0)

    monzo = np.zeros(num_components, dtype=np.int64)
    residual = Fraction(1)
    for p, e in exponents.items():
        index = prime_index(p)
        if index < num_components:
            monzo[index] = e
        else:
            residual *= Fraction(p) ** e
    return monzo, residual


def fraction_to_monzo(value: FractionLike, num_components: Optional[int] = None) -> np.ndarray:
    monzo, residual = fraction_to_monzo_and_residual(value, num_components)
    if residual != 1:
        raise InputError(f"{to_fraction(value)} does not fit in {num_components} primes")
    return monzo


def monzo_to_fraction(monzo: Sequence[int]) -> Fraction:
    result = Fraction(1)
    for index, exponent in enumerate(monzo):
        if exponent:
            result *= Fraction(nth_prime(index)) ** int(exponent)
    return result


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Pair a mapping (or val) with a monzo."""
    return float(np.dot(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)))


def nats_to_cents(nats: float) -> float:
    return nats / log(2) * CENTS_PER_OCTAVE


def cents_to_nats(cents: float) -> float:
    return cents / CENTS_PER_OCTAVE * log(2)
