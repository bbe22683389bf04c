"""
Temper Basis Module

What the axes of a temperament mean.

Monzos (monzo.py):
- to_fraction, fraction_to_monzo_and_residual, fraction_to_monzo,
  monzo_to_fraction, dot, nats_to_cents, cents_to_nats, nth_prime, log_prime

Bases (subgroup.py):
- Basis: strategy interface (JIP, weights, vals, comma resolution)
- Subgroup: rational generators ("2.3.13/5")
- FreeBasis: log sizes only
- as_basis: coerce limits / tokens / arrays

Warts (warts.py):
- patent_val, parse_warts, format_warts
"""

from .monzo import (
    to_fraction,
    fraction_to_monzo_and_residual,
    fraction_to_monzo,
    monzo_to_fraction,
    dot,
    nats_to_cents,
    cents_to_nats,
    nth_prime,
    log_prime,
)
from .subgroup import Basis, Subgroup, FreeBasis, as_basis
from .warts import patent_val, parse_warts, format_warts

__all__ = [
    # Monzos
    'to_fraction',
    'fraction_to_monzo_and_residual',
    'fraction_to_monzo',
    'monzo_to_fraction',
    'dot',
    'nats_to_cents',
    'cents_to_nats',
    'nth_prime',
    'log_prime',
    # Bases
    'Basis',
    'Subgroup',
    'FreeBasis',
    'as_basis',
    # Warts
    'patent_val',
    'parse_warts',
    'format_warts',
]
