"""
Primitives Library

Numerical building blocks, numpy in, numpy out. No temperament semantics.

Clifford algebra (clifford.py):
- CliffordAlgebra: blade layout, Cayley table, gp / wedge / lcontract / dot / vee,
  dual, reverse, inverse, grade parts, weighting
- get_algebra: cached instance per dimension

Subspaces (subspace.py):
- blade_frame, frame_blade, meet, join

Number theory (numtheory.py):
- extended_euclid, iterated_euclid, content, binomial, is_coprime
"""

from .clifford import CliffordAlgebra, get_algebra
from .subspace import blade_frame, frame_blade, meet, join
from .numtheory import extended_euclid, iterated_euclid, content, binomial, is_coprime

__all__ = [
    # Clifford algebra
    'CliffordAlgebra',
    'get_algebra',
    # Subspaces
    'blade_frame',
    'frame_blade',
    'meet',
    'join',
    # Number theory
    'extended_euclid',
    'iterated_euclid',
    'content',
    'binomial',
    'is_coprime',
]
