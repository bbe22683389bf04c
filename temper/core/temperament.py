"""
Temperament
===========

A regular temperament as a single blade (its wedgie) in Cl(n, 0) over a
basis of n generators.

Construction:
    from_vals     wedge of the supported vals (grade r)
    from_commas   vee of the tempered-out commas, each promoted to the
                  hyperplane c * I (grade n - 1 each, grade n - k overall)
    from_prefix   rebuild from the components containing e0

Both descriptions land on the same blade up to scale, so canonize() (divide
by the gcd, make the first nonzero component positive) makes independently
built temperaments compare equal.

Usage:
    from temper import Temperament

    meantone = Temperament.from_commas(['81/80'])
    meantone.pote()                  # mapping in nats
    meantone.divisions_generator()   # (1, array([0, 1, 0]))
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from temper.basis.monzo import nth_prime
from temper.basis.subgroup import Basis, Subgroup, as_basis
from temper.core import factorization, lattice, structure, tuning
from temper.primitives.clifford import CliffordAlgebra, get_algebra
from temper.primitives.numtheory import content
from temper.validation.errors import InputError

logger = logging.getLogger(__name__)


class Temperament:
    """
    Regular temperament represented by its wedgie.

    Attributes:
        value: 2^n blade coefficients (grade-then-lexicographic order)
        basis: Basis the coefficients refer to
        algebra: Shared CliffordAlgebra of dimension n
    """

    def __init__(self, value: Sequence, basis, algebra: Optional[CliffordAlgebra] = None):
        self.basis: Basis = as_basis(basis)
        n = len(self.basis)
        self.algebra = algebra if algebra is not None else get_algebra(n)
        if self.algebra.n != n:
            raise InputError(f"Algebra of dimension {self.algebra.n} does not match a basis of {n}")

        value = np.asarray(value)
        if value.shape != (self.algebra.size,):
            raise InputError(f"Wedgie needs {self.algebra.size} components, got shape {value.shape}")
        try:
            self.algebra.grade_of(value, 1e-9 * max(float(np.max(np.abs(value))), 1.0))
        except ValueError:
            raise InputError("Wedgie must be a single-grade blade") from None
        self.value = value.copy()

    # === Properties ===

    @property
    def dimensions(self) -> int:
        return self.algebra.n

    @property
    def rank(self) -> int:
        """Grade of the wedgie (number of independent generators)."""
        scale = max(float(np.max(np.abs(self.value))), 1.0)
        grade = self.algebra.grade_of(self.value, 1e-9 * scale)
        if grade is None:
            raise InputError("Nil temperament has no rank")
        return grade

    def is_nil(self) -> bool:
        return not np.any(self.value)

    def copy(self) -> "Temperament":
        return Temperament(self.value, self.basis, self.algebra)

    def __repr__(self) -> str:
        return f"Temperament({self.value.tolist()}, {self.basis!r})"

    # === Canonical form ===

    def canonize(self) -> "Temperament":
        """
        Normalize in place: divide by gcd times the sign of the first nonzero
        component. The zero element is left alone.

        Raises:
            InputError: components are not integral
        """
        try:
            value = self.algebra.to_int(self.value)
        except ValueError:
            raise InputError("Only integral wedgies can be canonized") from None

        divisor = content(value)
        if divisor == 0:
            return self
        first = value[np.flatnonzero(value)[0]]
        self.value = value // (divisor * int(np.sign(first)))
        return self

    def canonical(self) -> "Temperament":
        """Canonized copy; the receiver is unchanged."""
        return self.copy().canonize()

    def equals(self, other: "Temperament") -> bool:
        """Exact comparison. Canonize both sides first."""
        return (
            self.basis.equals(other.basis)
            and self.value.shape == other.value.shape
            and bool(np.all(self.value == other.value))
        )

    def __eq__(self, other):
        if not isinstance(other, Temperament):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    # === Support ===

    def supports(self, val) -> bool:
        """True if the val is consistent with the temperament."""
        vector = self.algebra.vector(self.basis.resolve_val(val))
        return not np.any(self.algebra.wedge(vector, self.value))

    def tempers_out(self, comma) -> bool:
        """True if the comma maps to zero steps."""
        vector = self.algebra.vector(self.basis.resolve_monzo(comma))
        return not np.any(self.algebra.lcontract(vector, self.value))

    # === Tunings ===

    def _to_prime(self, mapping: np.ndarray, prime_mapping: bool) -> np.ndarray:
        return self.basis.to_prime_mapping(mapping) if prime_mapping else mapping

    def tenney_euclid(self, prime_mapping: bool = False, weights=None) -> np.ndarray:
        return self._to_prime(tuning.te_mapping(self, weights), prime_mapping)

    def pote(self, prime_mapping: bool = False, weights=None) -> np.ndarray:
        return self._to_prime(tuning.pote_mapping(self, weights), prime_mapping)

    def cte(self, eigenmonzos: Sequence, prime_mapping: bool = False, weights=None) -> np.ndarray:
        return self._to_prime(tuning.cte_mapping(self, eigenmonzos, weights), prime_mapping)

    # === Structure ===

    def rank_prefix(self, rank: Optional[int] = None) -> np.ndarray:
        return structure.rank_prefix(self, rank)

    def period_generators(self) -> List[Tuple[int, np.ndarray]]:
        return structure.period_generators(self)

    def divisions_generator(self) -> Tuple[int, np.ndarray]:
        return structure.divisions_generator(self)

    # === Lattice ===

    def _wrap(self, value: np.ndarray) -> "Temperament":
        return Temperament(value, self.basis, self.algebra).canonize()

    def val_join(self, other: "Temperament", **kwargs) -> "Temperament":
        return self._wrap(lattice.val_join(self, other, **kwargs))

    def val_meet(self, other: "Temperament", **kwargs) -> "Temperament":
        return self._wrap(lattice.val_meet(self, other, **kwargs))

    def kernel_join(self, other: "Temperament", **kwargs) -> "Temperament":
        return self._wrap(lattice.kernel_join(self, other, **kwargs))

    def kernel_meet(self, other: "Temperament", **kwargs) -> "Temperament":
        return self._wrap(lattice.kernel_meet(self, other, **kwargs))

    def factorize(self, max_divisions: Optional[int] = None, wart_radius: Optional[int] = None) -> List[np.ndarray]:
        return factorization.factorize_vals(self, max_divisions, wart_radius)

    # === Constructors ===

    @classmethod
    def from_vals(cls, vals: Sequence, basis=None) -> "Temperament":
        """
        Temperament supported by the given vals.

        Vals are integer vectors or wart tokens (12, "12e"). Vals dependent
        on the ones before them are skipped. Without a basis the vals are
        read as prime mappings of their own length.

        Raises:
            InputError: no vals and no basis
        """
        vals = list(vals)
        if basis is None:
            if not vals:
                raise InputError("No vals or basis given")
            if isinstance(vals[0], (int, np.integer, str)):
                raise InputError("Wart tokens need an explicit basis")
            basis = Subgroup([nth_prime(i) for i in range(len(vals[0]))])
        basis = as_basis(basis)
        algebra = get_algebra(len(basis))

        value = algebra.scalar(1)
        for val in vals:
            wedged = algebra.wedge(value, algebra.vector(basis.resolve_val(val)))
            if not np.any(wedged):
                logger.debug("Skipping dependent val %s", val)
                continue
            value = wedged
        return cls(value, basis, algebra)

    @classmethod
    def from_commas(cls, commas: Sequence, basis=None) -> "Temperament":
        """
        Temperament tempering out the given commas.

        Commas are monzos (lists or arrays) or rationals (Fraction, int,
        "81/80", (81, 80)). Without a basis the smallest prime subgroup
        containing every comma is used and prime monzos are stripped to it.
        Commas dependent on the ones before them are skipped.

        Every list or array is a monzo, whatever its length: [15625, 15309]
        is the monzo 2^15625 * 3^15309, not a ratio. Write ratios as tuples
        (15625, 15309), Fractions or strings.

        Raises:
            InputError: rational comma outside the basis
        """
        commas = list(commas)
        if basis is None:
            if not commas:
                raise InputError("No commas or basis given")
            subgroup = Subgroup.infer_prime_subgroup(commas)
            monzos = [
                subgroup.strip(c) if isinstance(c, (list, np.ndarray)) else subgroup.resolve_monzo(c)
                for c in commas
            ]
            basis = subgroup
        else:
            basis = as_basis(basis)
            monzos = [basis.resolve_monzo(c) for c in commas]

        algebra = get_algebra(len(basis))
        pseudoscalar = algebra.pseudoscalar()
        value = pseudoscalar
        for comma, monzo in zip(commas, monzos):
            hyperplane = algebra.gp(algebra.vector(monzo), pseudoscalar)
            combined = algebra.vee(value, hyperplane)
            if not np.any(combined):
                logger.debug("Skipping dependent comma %s", comma)
                continue
            value = combined
        return cls(value, basis, algebra)

    @classmethod
    def from_prefix(cls, rank: int, prefix: Sequence[int], basis) -> "Temperament":
        """
        Rebuild a temperament from its rank prefix.

        Exact when the temperament is consistent with the basis's JIP.
        """
        basis = as_basis(basis)
        return cls(structure.expand_prefix(rank, prefix, basis.jip()), basis)
