"""
Wart notation for vals.

A token is an equal-division count followed by optional letters:

    "12"    patent val of 12 equal divisions
    "12e"   second-best mapping for basis element e (the fifth one)
    "17cc"  third-best mapping for basis element c

Letters index basis elements in order ('a' is the equave). Repeating a letter
k times selects the (k+1)-th closest integer to the just size, ties going to
the smaller integer.
"""

import re
from string import ascii_lowercase
from typing import Sequence, Union

import numpy as np

from temper.validation.errors import InputError


_TOKEN = re.compile(r"^\s*(\d+)([a-z]*)\s*$")


def _targets(divisions: int, jip: Sequence[float]) -> np.ndarray:
    jip = np.asarray(jip, dtype=np.float64)
    return divisions * jip / jip[0]


def _ranked(target: float, depth: int) -> list:
    """Integers ordered by closeness to target, at least depth + 1 of them."""
    low = int(np.floor(target)) - depth - 1
    high = int(np.ceil(target)) + depth + 1
    return sorted(range(low, high + 1), key=lambda m: (abs(m - target), m))


def approximation(target: float, k: int = 0) -> int:
    """The k-th best integer approximation (k = 0 is the nearest)."""
    return _ranked(target, k)[k]


def approximation_rank(target: float, value: int) -> int:
    """Inverse of approximation(): how many integers beat `value`."""
    depth = int(abs(value - target)) + 1
    return _ranked(target, depth).index(value)


def patent_val(divisions: int, jip: Sequence[float]) -> np.ndarray:
    """Nearest-integer mapping of every basis element."""
    if divisions < 0:
        raise InputError(f"Division count must be non-negative, got {divisions}")
    return np.array([approximation(t) for t in _targets(divisions, jip)], dtype=np.int64)


def parse_warts(token: Union[int, str], jip: Sequence[float]) -> np.ndarray:
    """
    Resolve a wart token to a val.

    Raises:
        InputError: malformed token or a letter beyond the basis
    """
    if isinstance(token, (int, np.integer)) and not isinstance(token, bool):
        return patent_val(int(token), jip)
    if not isinstance(token, str):
        raise InputError(f"Wart token must be an int or a string, got {token!r}")

    match = _TOKEN.match(token.lower())
    if match is None:
        raise InputError(f"Malformed wart token {token!r}")
    divisions = int(match.group(1))
    letters = match.group(2)

    targets = _targets(divisions, jip)
    counts = [letters.count(letter) for letter in ascii_lowercase[:len(targets)]]
    if sum(counts) != len(letters):
        raise InputError(f"Wart token {token!r} names elements outside a basis of {len(targets)}")

    return np.array([approximation(t, k) for t, k in zip(targets, counts)], dtype=np.int64)


def format_warts(val: Sequence[int], jip: Sequence[float]) -> str:
    """Render a val as its shortest wart token."""
    val = np.asarray(val, dtype=np.int64)
    if val.shape != (len(jip),):
        raise InputError(f"Val {val.tolist()} does not match a basis of {len(jip)}")
    divisions = int(val[0])
    if divisions < 0:
        raise InputError(f"Val {val.tolist()} has a negative equave mapping")

    targets = _targets(divisions, jip)
    letters = []
    for index, (target, value) in enumerate(zip(targets, val)):
        k = approximation_rank(target, int(value))
        if k and index >= len(ascii_lowercase):
            raise InputError(f"No wart letter for basis element {index}")
        letters.append(ascii_lowercase[index] * k if k else "")
    return f"{divisions}{''.join(letters)}"
