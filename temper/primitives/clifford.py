"""
Clifford Algebra Engine
=======================

Euclidean Clifford algebra Cl(n, 0) over numpy coefficient arrays.

A multivector is a plain 1D array of 2^n coefficients. Blades are laid out
grade by grade, lexicographically inside each grade:

    n = 3:  [1, e0, e1, e2, e01, e02, e12, e012]

Every product is driven by one precomputed Cayley table (result index and
sign for each pair of basis blades) plus a grade-selection mask:

    gp       geometric product                 (all pairs)
    wedge    exterior product                  grade(a) + grade(b)
    lcontract left contraction                 grade(b) - grade(a)
    dot      symmetric ("fat") inner product   |grade(a) - grade(b)|
    vee      regressive product                dual of wedge of duals

Integer inputs stay integer through wedge, vee, contraction and dual, so
temperaments built from vals and commas keep exact coefficients. inverse()
always works in floating point.
"""

from functools import lru_cache
from itertools import combinations
from math import comb
from typing import List, Optional, Sequence, Tuple

import numpy as np


def _reordering_sign(a: int, b: int) -> int:
    """Sign picked up when the basis vectors of blade `a` pass those of `b`."""
    a >>= 1
    swaps = 0
    while a:
        swaps += bin(a & b).count("1")
        a >>= 1
    return -1 if swaps & 1 else 1


class CliffordAlgebra:
    """
    Euclidean geometric algebra of dimension n.

    Attributes:
        n: Number of basis vectors
        size: Number of basis blades (2^n)
        blades: Index tuples of each basis blade, in storage order
        grades: Grade of each basis blade
    """

    def __init__(self, n: int):
        if n < 0:
            raise ValueError(f"Algebra dimension must be non-negative, got {n}")

        self.n = n
        self.size = 1 << n

        self.blades: List[Tuple[int, ...]] = [
            blade for grade in range(n + 1) for blade in combinations(range(n), grade)
        ]
        self.grades = np.array([len(blade) for blade in self.blades], dtype=np.int64)
        self._masks = [sum(1 << i for i in blade) for blade in self.blades]
        position = {mask: index for index, mask in enumerate(self._masks)}

        self._gp_index = np.empty((self.size, self.size), dtype=np.int64)
        self._gp_sign = np.empty((self.size, self.size), dtype=np.int8)
        for i, a in enumerate(self._masks):
            for j, b in enumerate(self._masks):
                self._gp_index[i, j] = position[a ^ b]
                self._gp_sign[i, j] = _reordering_sign(a, b)

        left = self.grades[:, None]
        right = self.grades[None, :]
        result = self.grades[self._gp_index]
        self._all_mask = np.ones((self.size, self.size), dtype=bool)
        self._wedge_mask = result == left + right
        self._lcontract_mask = result == right - left
        self._dot_mask = result == np.abs(right - left)

        self._pseudoscalar = self.pseudoscalar()
        # Euclidean: I * ~I = 1, so I^-1 = ~I
        self._pseudoscalar_inverse = self.reverse(self._pseudoscalar)

    def __repr__(self) -> str:
        return f"CliffordAlgebra(n={self.n})"

    # === Construction ===

    def zeros(self, dtype=np.int64) -> np.ndarray:
        return np.zeros(self.size, dtype=dtype)

    def scalar(self, value=1) -> np.ndarray:
        out = self.zeros(np.asarray(value).dtype)
        out[0] = value
        return out

    def pseudoscalar(self, value=1) -> np.ndarray:
        out = self.zeros(np.asarray(value).dtype)
        out[-1] = value
        return out

    def basis_vector(self, index: int, value=1) -> np.ndarray:
        out = self.zeros(np.asarray(value).dtype)
        out[1 + index] = value
        return out

    def vector(self, coefficients: Sequence) -> np.ndarray:
        """Promote n coefficients to a grade-1 element."""
        return self.blade(1, coefficients)

    def blade(self, grade: int, coefficients: Sequence) -> np.ndarray:
        """Place C(n, grade) coefficients into the grade-`grade` slots."""
        coefficients = np.asarray(coefficients)
        part = self.grade_slice(grade)
        expected = part.stop - part.start
        if coefficients.shape != (expected,):
            raise ValueError(
                f"Grade-{grade} element of Cl({self.n}) needs {expected} "
                f"coefficients, got shape {coefficients.shape}"
            )
        out = self.zeros(coefficients.dtype)
        out[part] = coefficients
        return out

    # === Grade structure ===

    def grade_slice(self, grade: int) -> slice:
        if grade < 0 or grade > self.n:
            raise ValueError(f"Grade {grade} outside Cl({self.n})")
        start = sum(comb(self.n, k) for k in range(grade))
        return slice(start, start + comb(self.n, grade))

    def grades_present(self, x: np.ndarray, tol: float = 0.0) -> List[int]:
        return sorted(set(int(g) for g in self.grades[np.abs(x) > tol]))

    def grade_of(self, x: np.ndarray, tol: float = 0.0) -> Optional[int]:
        """Grade of a homogeneous element, None for zero."""
        present = self.grades_present(x, tol)
        if not present:
            return None
        if len(present) > 1:
            raise ValueError(f"Mixed-grade multivector (grades {present})")
        return present[0]

    def vector_part(self, x: np.ndarray) -> np.ndarray:
        return np.array(x[1:self.n + 1])

    def labels(self) -> List[str]:
        return ["1" if not blade else "e" + "".join(str(i) for i in blade)
                for blade in self.blades]

    # === Products ===

    def _product(self, a: np.ndarray, b: np.ndarray, mask: np.ndarray) -> np.ndarray:
        a = np.asarray(a)
        b = np.asarray(b)
        out = np.zeros(self.size, dtype=np.result_type(a, b))
        nonzero_b = b != 0
        for i in np.flatnonzero(a):
            keep = mask[i] & nonzero_b
            # each row of the Cayley table is a permutation, no repeated targets
            out[self._gp_index[i, keep]] += a[i] * self._gp_sign[i, keep] * b[keep]
        return out

    def gp(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return self._product(a, b, self._all_mask)

    def wedge(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return self._product(a, b, self._wedge_mask)

    def lcontract(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return self._product(a, b, self._lcontract_mask)

    def dot(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return self._product(a, b, self._dot_mask)

    def dual(self, x: np.ndarray) -> np.ndarray:
        return self.gp(x, self._pseudoscalar_inverse)

    def undual(self, x: np.ndarray) -> np.ndarray:
        return self.gp(x, self._pseudoscalar)

    def vee(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return self.undual(self.wedge(self.dual(a), self.dual(b)))

    # === Unary operations ===

    def reverse(self, x: np.ndarray) -> np.ndarray:
        signs = np.where((self.grades * (self.grades - 1) // 2) % 2, -1, 1)
        return np.asarray(x) * signs

    def inverse(self, x: np.ndarray) -> np.ndarray:
        """
        Multiplicative inverse y with x * y = 1.

        Solves the left-multiplication matrix of x, so it covers any
        invertible multivector, not just blades.
        """
        x = np.asarray(x, dtype=np.float64)
        matrix = np.zeros((self.size, self.size))
        columns = np.arange(self.size)
        for i in np.flatnonzero(x):
            matrix[self._gp_index[i], columns] += x[i] * self._gp_sign[i]
        unit = self.scalar(1.0)
        try:
            return np.linalg.solve(matrix, unit)
        except np.linalg.LinAlgError:
            raise ValueError("Multivector is not invertible") from None

    def weight(self, x: np.ndarray, weights: Sequence[float]) -> np.ndarray:
        """Scale each blade by the product of the weights of its indices."""
        weights = np.asarray(weights, dtype=np.float64)
        if weights.shape != (self.n,):
            raise ValueError(f"Expected {self.n} weights, got shape {weights.shape}")
        factors = np.array([np.prod(weights[list(blade)]) for blade in self.blades])
        return np.asarray(x, dtype=np.float64) * factors

    # === Conversion ===

    def to_float(self, x: np.ndarray) -> np.ndarray:
        return np.asarray(x, dtype=np.float64)

    def to_int(self, x: np.ndarray, tol: float = 1e-9) -> np.ndarray:
        x = np.asarray(x)
        if np.issubdtype(x.dtype, np.integer):
            return x.astype(np.int64)
        rounded = np.rint(x)
        if np.any(np.abs(x - rounded) > tol):
            raise ValueError("Multivector has non-integral coefficients")
        return rounded.astype(np.int64)


@lru_cache(maxsize=None)
def get_algebra(n: int) -> CliffordAlgebra:
    """Shared algebra instance for dimension n (tables are read-only)."""
    return CliffordAlgebra(n)
