"""
Temper I/O Module

Plain-text rendering for the command line.
"""

from .format import (
    format_val,
    format_monzo,
    format_wedgie,
    format_mapping,
    format_generators,
)

__all__ = [
    'format_val',
    'format_monzo',
    'format_wedgie',
    'format_mapping',
    'format_generators',
]
