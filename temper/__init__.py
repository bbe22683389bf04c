"""
Temper — regular temperaments in geometric algebra.

Public API:
    from temper import Temperament, Subgroup
    meantone = Temperament.from_commas(['81/80'])
    meantone.pote()

Layers (each depends only on the ones above it):
    temper.primitives   Clifford algebra Cl(n, 0), subspaces, number theory (numpy in, numpy out)
    temper.basis        Monzos, subgroups, free bases, wart notation
    temper.core         Temperament, tunings, generators, meet/join, factorization

Also:
    temper.validation   Error taxonomy and input checks
    temper.config       Search knobs (defaults.yaml)
    temper.io           Bra-ket text rendering
    temper.cli          python -m temper
"""

from temper.basis import FreeBasis, Subgroup, nats_to_cents, cents_to_nats
from temper.core import Temperament
from temper.validation import (
    TemperamentError,
    InputError,
    ConvergenceError,
    SearchExhaustedError,
)

__version__ = "0.1.0"

__all__ = [
    "Temperament",
    "Subgroup",
    "FreeBasis",
    "nats_to_cents",
    "cents_to_nats",
    "TemperamentError",
    "InputError",
    "ConvergenceError",
    "SearchExhaustedError",
]
