"""
Bases: what the axes of a temperament stand for.

Every temperament is expressed over an ordered basis of n generators. The
algebra only needs each generator's natural-log size (the just-intonation
point, JIP) and optionally an importance weight; everything else is the
basis strategy's business:

    Subgroup    generators are positive rationals ("2.3.13/5", 7, [2, 3, 7])
    FreeBasis   generators known only through their log sizes

Both strategies supply patent vals and wart conversions from the JIP.
Subgroup additionally converts rationals to basis monzos and lifts subgroup
mappings back to prime mappings.
"""

from abc import ABC, abstractmethod
from fractions import Fraction
from math import log
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
from sympy import isprime

from temper.basis import warts
from temper.basis.monzo import (
    FractionLike,
    fraction_to_monzo_and_residual,
    monzo_to_fraction,
    log_prime,
    nth_prime,
    primes_up_to,
    to_fraction,
)
from temper.validation.checks import check_integer_vector, check_positive
from temper.validation.errors import InputError


class Basis(ABC):
    """
    Basis strategy shared by all temperaments.

    Subclasses provide jip() and equality; vals, warts and comma resolution
    are derived here.
    """

    def __init__(self, weights: Optional[Sequence[float]] = None):
        self._weights = None
        if weights is not None:
            self._weights = check_positive(weights, "weights", length=len(self))

    @abstractmethod
    def jip(self) -> np.ndarray:
        """Natural-log sizes of the generators."""

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def equals(self, other: "Basis") -> bool:
        pass

    def __eq__(self, other):
        if not isinstance(other, Basis):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def weights(self) -> Optional[np.ndarray]:
        """Importance weights attached to the basis, if any."""
        return None if self._weights is None else self._weights.copy()

    # === Vals ===

    def patent_val(self, divisions: int) -> np.ndarray:
        return warts.patent_val(divisions, self.jip())

    def from_warts(self, token: Union[int, str]) -> np.ndarray:
        return warts.parse_warts(token, self.jip())

    def to_warts(self, val: Sequence[int]) -> str:
        return warts.format_warts(val, self.jip())

    def resolve_val(self, val) -> np.ndarray:
        """Integer vector, or a wart token resolved against this basis."""
        if isinstance(val, (int, np.integer, str)):
            return self.from_warts(val)
        return check_integer_vector(val, "val", length=len(self))

    # === Commas ===

    def resolve_monzo(self, comma) -> np.ndarray:
        """Express an interval as an integer vector over this basis."""
        return check_integer_vector(comma, "comma", length=len(self))

    def to_prime_mapping(self, mapping: Sequence[float]) -> np.ndarray:
        raise InputError(f"{type(self).__name__} has no prime decomposition")


class Subgroup(Basis):
    """
    Just-intonation subgroup with rational generators.

    Args:
        value: Prime limit (int), dot-separated token ("2.3.13/5"), a
            sequence of rationals, or another Subgroup
        weights: Optional importance weights, one per generator

    Raises:
        InputError: non-positive, unison or dependent generators, or a prime
            subgroup out of increasing order
    """

    def __init__(self, value, weights: Optional[Sequence[float]] = None):
        if isinstance(value, Subgroup):
            self.basis: List[Fraction] = list(value.basis)
            if weights is None:
                weights = value._weights
        elif isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            if value < 2:
                raise InputError(f"Prime limit must be at least 2, got {value}")
            self.basis = [Fraction(p) for p in primes_up_to(int(value))]
        elif isinstance(value, str):
            tokens = [token for token in value.strip().split(".") if token]
            self.basis = [to_fraction(token) for token in tokens]
        elif isinstance(value, Iterable):
            self.basis = [to_fraction(v) for v in value]
        else:
            raise InputError(f"Cannot build a subgroup from {value!r}")

        self._validate()
        num_primes = max(
            (len(fraction_to_monzo_and_residual(b)[0]) for b in self.basis), default=0
        )
        # one row per generator, one column per prime
        self._monzos = np.array(
            [fraction_to_monzo_and_residual(b, num_primes)[0] for b in self.basis],
            dtype=np.int64,
        ).reshape(len(self.basis), num_primes)
        if np.linalg.matrix_rank(self._monzos.astype(np.float64)) < len(self.basis):
            raise InputError(f"Subgroup {self} has dependent generators")

        super().__init__(weights)

    def _validate(self):
        if not self.basis:
            raise InputError("Subgroup needs at least one generator")
        for b in self.basis:
            if b <= 0 or b == 1:
                raise InputError(f"Subgroup generators must be positive and not 1, got {b}")
        if self.is_prime():
            for a, b in zip(self.basis, self.basis[1:]):
                if a >= b:
                    raise InputError(f"Out of order subgroup {self}")

    def __len__(self) -> int:
        return len(self.basis)

    def __str__(self) -> str:
        return ".".join(str(b) for b in self.basis)

    def __repr__(self) -> str:
        return f"Subgroup('{self}')"

    def is_prime(self) -> bool:
        return all(b.denominator == 1 and isprime(b.numerator) for b in self.basis)

    def jip(self) -> np.ndarray:
        return np.array([log(b.numerator) - log(b.denominator) for b in self.basis])

    def equals(self, other: Basis) -> bool:
        return isinstance(other, Subgroup) and self.basis == other.basis

    # === Monzos ===

    def to_monzo_and_residual(self, value: FractionLike) -> Tuple[np.ndarray, Fraction]:
        """
        Best basis monzo for a rational and the exact leftover factor.

        The residual is 1 exactly when the rational lies in the subgroup.
        """
        fraction = to_fraction(value)
        prime_monzo, _ = fraction_to_monzo_and_residual(fraction)
        width = max(len(prime_monzo), self._monzos.shape[1])
        target = np.zeros(width)
        target[:len(prime_monzo)] = prime_monzo
        system = np.zeros((width, len(self)))
        system[:self._monzos.shape[1]] = self._monzos.T

        solution, *_ = np.linalg.lstsq(system, target, rcond=None)
        monzo = np.rint(solution).astype(np.int64)

        represented = Fraction(1)
        for generator, exponent in zip(self.basis, monzo):
            represented *= generator ** int(exponent)
        return monzo, fraction / represented

    def resolve_monzo(self, comma) -> np.ndarray:
        if isinstance(comma, (list, np.ndarray)):
            return super().resolve_monzo(comma)
        monzo, residual = self.to_monzo_and_residual(comma)
        if residual != 1:
            raise InputError(f"Comma {to_fraction(comma)} outside subgroup {self}")
        return monzo

    def strip(self, prime_monzo: Sequence[int]) -> np.ndarray:
        """Convert a prime monzo to a monzo over this subgroup."""
        prime_monzo = check_integer_vector(prime_monzo, "monzo")
        return self.resolve_monzo(monzo_to_fraction(prime_monzo))

    def to_prime_mapping(self, mapping: Sequence[float]) -> np.ndarray:
        """
        Extend a subgroup mapping to every prime up to the largest one used.

        Primes outside the subgroup's span stay just; the correction inside
        the span is the least-norm one.
        """
        mapping = np.asarray(mapping, dtype=np.float64)
        if mapping.shape != (len(self),):
            raise InputError(f"Mapping of length {mapping.shape} does not fit {self}")
        just = np.array([log_prime(i) for i in range(self._monzos.shape[1])])
        B = self._monzos.astype(np.float64)
        return just + np.linalg.pinv(B) @ (mapping - B @ just)

    @classmethod
    def infer_prime_subgroup(cls, commas) -> "Subgroup":
        """
        Smallest prime subgroup containing every comma.

        Lists and arrays are prime monzos; anything else is parsed as a
        rational.
        """
        used = set()
        for comma in commas:
            if isinstance(comma, (list, np.ndarray)):
                monzo = check_integer_vector(comma, "comma")
            else:
                monzo, _ = fraction_to_monzo_and_residual(comma)
            used.update(int(i) for i in np.flatnonzero(monzo))
        if not used:
            raise InputError("Cannot infer a subgroup from unison commas")
        return cls([nth_prime(i) for i in sorted(used)])


class FreeBasis(Basis):
    """
    Basis known only by its generators' log sizes.

    Equality compares the sizes with a tolerance.
    """

    def __init__(self, jip: Sequence[float], weights: Optional[Sequence[float]] = None, tol: float = 1e-12):
        self._jip = check_positive(jip, "jip")
        self.tol = tol
        super().__init__(weights)

    def __len__(self) -> int:
        return len(self._jip)

    def __repr__(self) -> str:
        return f"FreeBasis({self._jip.tolist()})"

    def jip(self) -> np.ndarray:
        return self._jip.copy()

    def equals(self, other: Basis) -> bool:
        return (
            isinstance(other, FreeBasis)
            and len(self) == len(other)
            and bool(np.allclose(self._jip, other._jip, rtol=0.0, atol=self.tol))
        )

    def resolve_monzo(self, comma) -> np.ndarray:
        if not isinstance(comma, (list, tuple, np.ndarray)):
            raise InputError(f"A free basis only takes integer vectors, got {comma!r}")
        return super().resolve_monzo(comma)


def as_basis(value) -> Basis:
    """
    Coerce basis-like input.

    Basis instances pass through; float arrays become a FreeBasis;
    limits, tokens and rational sequences become a Subgroup.
    """
    if isinstance(value, Basis):
        return value
    if isinstance(value, np.ndarray) and np.issubdtype(value.dtype, np.floating):
        return FreeBasis(value)
    if isinstance(value, (list, tuple)) and any(isinstance(v, float) for v in value):
        return FreeBasis(value)
    return Subgroup(value)
