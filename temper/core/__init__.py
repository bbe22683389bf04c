"""
Temper Core Module

The temperament engine.

Temperament (temperament.py):
- construction from vals, commas or a rank prefix
- canonical form and exact equality

Tunings (tuning.py):
- te_mapping, pote_mapping, cte_mapping
- tenney_weights, flat_weights, resolve_weights

Structure (structure.py):
- period_generators, divisions_generator, rank_prefix, expand_prefix

Lattice (lattice.py):
- val_join, val_meet, kernel_join, kernel_meet, rescale

Factorization (factorization.py):
- factorize_vals, candidate_vals
"""

from .tuning import (
    te_mapping,
    pote_mapping,
    cte_mapping,
    tenney_weights,
    flat_weights,
    resolve_weights,
)
from .structure import period_generators, divisions_generator, rank_prefix, expand_prefix
from .lattice import val_join, val_meet, kernel_join, kernel_meet, rescale
from .factorization import factorize_vals, candidate_vals
from .temperament import Temperament

__all__ = [
    'Temperament',
    # Tunings
    'te_mapping',
    'pote_mapping',
    'cte_mapping',
    'tenney_weights',
    'flat_weights',
    'resolve_weights',
    # Structure
    'period_generators',
    'divisions_generator',
    'rank_prefix',
    'expand_prefix',
    # Lattice
    'val_join',
    'val_meet',
    'kernel_join',
    'kernel_meet',
    'rescale',
    # Factorization
    'factorize_vals',
    'candidate_vals',
]
