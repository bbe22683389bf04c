"""Integer helpers: gcds, Bezout coefficients, binomials."""

from math import comb
from typing import List, Sequence, Tuple

import numpy as np


def extended_euclid(a: int, b: int) -> Tuple[int, int, int]:
    """
    Return (g, x, y) with a*x + b*y = g = gcd(a, b) >= 0.
    """
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y
    if old_r < 0:
        return -old_r, -old_x, -old_y
    return old_r, old_x, old_y


def iterated_euclid(values: Sequence[int]) -> List[int]:
    """
    Bezout coefficients for a whole sequence.

    Returns integers c with sum(c_i * v_i) = gcd(values). Zero entries get
    zero coefficients.
    """
    coefficients: List[int] = []
    running = 0
    for value in values:
        value = int(value)
        running, x, y = extended_euclid(running, value)
        coefficients = [c * x for c in coefficients]
        coefficients.append(y)
    return coefficients


def content(values) -> int:
    """Non-negative gcd of all entries (0 for an all-zero array)."""
    values = np.asarray(values, dtype=np.int64).ravel()
    if values.size == 0:
        return 0
    return int(np.gcd.reduce(np.abs(values)))


def binomial(n: int, k: int) -> int:
    if k < 0 or k > n:
        return 0
    return comb(n, k)


def is_coprime(values) -> bool:
    return content(values) == 1


__all__ = ['extended_euclid', 'iterated_euclid', 'content', 'binomial', 'is_coprime']
