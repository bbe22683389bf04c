"""
Blade Subspaces: frames, meet and join.

A grade-r blade stands for an r-dimensional subspace of R^n. These helpers
move between the two pictures in floating point:

    blade_frame      blade -> orthonormal n x r frame
    frame_blade      frame -> unit blade (wedge of the columns)
    join             smallest subspace containing both blades
    meet             largest subspace contained in both blades

Numerical rank decisions use `tol` relative to the largest singular value
(scipy.linalg.orth / null_space rcond). The resulting blades have unit
magnitude and arbitrary sign; integer recovery is the caller's job.
"""

import numpy as np
from scipy import linalg

from temper.primitives.clifford import CliffordAlgebra


DEFAULT_TOL = 1e-9


def blade_frame(algebra: CliffordAlgebra, x: np.ndarray, tol: float = DEFAULT_TOL) -> np.ndarray:
    """
    Orthonormal frame (n x r) of the subspace represented by blade x.

    Each basis vector is projected onto the blade with (e_i ⌋ x) x^-1;
    the projections span the subspace.
    """
    x = algebra.to_float(x)
    scale = np.max(np.abs(x)) if x.size else 0.0
    rank = algebra.grade_of(x, tol * max(scale, 1.0))
    if rank is None:
        raise ValueError("Zero multivector has no subspace")
    if rank == 0:
        return np.zeros((algebra.n, 0))

    inverse = algebra.inverse(x)
    columns = []
    for i in range(algebra.n):
        projected = algebra.gp(algebra.lcontract(algebra.basis_vector(i, 1.0), x), inverse)
        columns.append(algebra.vector_part(projected))
    projection = np.column_stack(columns)

    U, _, _ = np.linalg.svd(projection)
    return U[:, :rank]


def frame_blade(algebra: CliffordAlgebra, frame: np.ndarray) -> np.ndarray:
    """Wedge the columns of a frame into a blade (scalar 1 for an empty frame)."""
    blade = algebra.scalar(1.0)
    for column in np.asarray(frame, dtype=np.float64).T:
        blade = algebra.wedge(blade, algebra.vector(column))
    return blade


def join(algebra: CliffordAlgebra, a: np.ndarray, b: np.ndarray, tol: float = DEFAULT_TOL) -> np.ndarray:
    """Unit blade of span(a) + span(b)."""
    stacked = np.hstack([blade_frame(algebra, a, tol), blade_frame(algebra, b, tol)])
    if stacked.shape[1] == 0:
        return algebra.scalar(1.0)
    return frame_blade(algebra, linalg.orth(stacked, rcond=tol))


def meet(algebra: CliffordAlgebra, a: np.ndarray, b: np.ndarray, tol: float = DEFAULT_TOL) -> np.ndarray:
    """Unit blade of span(a) ∩ span(b)."""
    frame_a = blade_frame(algebra, a, tol)
    frame_b = blade_frame(algebra, b, tol)
    if frame_a.shape[1] == 0 or frame_b.shape[1] == 0:
        return algebra.scalar(1.0)

    # x = A u = B w  <=>  [A, -B] [u; w] = 0
    kernel = linalg.null_space(np.hstack([frame_a, -frame_b]), rcond=tol)
    if kernel.shape[1] == 0:
        return algebra.scalar(1.0)
    shared = frame_a @ kernel[:frame_a.shape[1]]
    return frame_blade(algebra, linalg.orth(shared, rcond=tol))
