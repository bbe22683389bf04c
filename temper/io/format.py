"""
Text rendering in the usual bra-ket notation.

    val        ⟨12 19 28]
    monzo      [-4 4 -1⟩
    wedgie     ⟨⟨1 4 4]]
    mapping    ⟨1200.000 1896.239 2786.314]   (cents)
"""

from typing import List, Sequence, Tuple

import numpy as np

from temper.basis.monzo import nats_to_cents


def _join(values: Sequence) -> str:
    return " ".join(str(int(v)) for v in values)


def format_val(val: Sequence[int]) -> str:
    return f"⟨{_join(val)}]"


def format_monzo(monzo: Sequence[int]) -> str:
    return f"[{_join(monzo)}⟩"


def format_wedgie(temperament) -> str:
    """Rank-r components between r angle brackets and r square brackets."""
    canonical = temperament.canonical()
    rank = canonical.rank
    block = canonical.value[canonical.algebra.grade_slice(rank)]
    return "⟨" * rank + _join(block) + "]" * rank


def format_mapping(mapping: Sequence[float], precision: int = 3) -> str:
    """Mapping in nats rendered as cents."""
    return "⟨" + " ".join(f"{nats_to_cents(m):.{precision}f}" for m in mapping) + "]"


def format_generators(pairs: List[Tuple[int, np.ndarray]], mapping: Sequence[float], precision: int = 3) -> List[str]:
    """One line per (divisions, generator) pair: the generator, split into
    `divisions` equal parts, and the tuned size of one part."""
    lines = []
    for divisions, generator in pairs:
        cents = nats_to_cents(float(np.dot(mapping, generator)))
        lines.append(f"{format_monzo(generator)} / {divisions} = {cents / divisions:.{precision}f} cents")
    return lines
