"""
Temper Validation Module

Error taxonomy and input normalization shared by every layer.

Exports:
    - TemperamentError: Base class
    - InputError: Malformed or inconsistent arguments
    - ConvergenceError: Numerical procedure failed (carries the knob to adjust)
    - SearchExhaustedError: Bounded search found nothing (carries the bounds)
    - check_positive: Validate sizes / weights
    - check_integer_vector: Validate vals / monzos / prefixes
"""

from .errors import (
    TemperamentError,
    InputError,
    ConvergenceError,
    SearchExhaustedError,
)

from .checks import (
    check_positive,
    check_integer_vector,
)

__all__ = [
    # Errors
    'TemperamentError',
    'InputError',
    'ConvergenceError',
    'SearchExhaustedError',
    # Checks
    'check_positive',
    'check_integer_vector',
]
