"""
Temperament Error Taxonomy

Three families, all fatal and all propagated to the caller:

    InputError           Malformed or inconsistent arguments
    ConvergenceError     A numerical procedure could not produce an exact answer
    SearchExhaustedError A bounded search ran out of candidates

PRINCIPLE: "Report the knob, never guess"

Usage:
    from temper.validation import ConvergenceError

    try:
        temperament.val_join(other)
    except ConvergenceError as e:
        print(f"Adjust {e.parameter}: {e}")
"""

from typing import Any, Dict, Optional


# Knobs where a bigger value can turn failure into success
_TUNABLE = {"persistence", "max_divisions", "wart_radius"}


class TemperamentError(Exception):
    """Base class for all temperament computation errors."""


class InputError(TemperamentError, ValueError):
    """Raised when arguments are malformed or inconsistent with each other."""


class ConvergenceError(TemperamentError):
    """
    Raised when a numerical procedure fails to converge to an exact result.

    Attributes:
        parameter: Name of the caller-controlled knob worth adjusting
    """

    def __init__(self, message: str, parameter: Optional[str] = None):
        self.parameter = parameter
        if parameter in _TUNABLE:
            message = f"{message}; try increasing {parameter}"
        super().__init__(message)


class SearchExhaustedError(TemperamentError):
    """
    Raised when a bounded search finds no answer.

    Attributes:
        bounds: The search limits that were exhausted
    """

    def __init__(self, message: str, bounds: Optional[Dict[str, Any]] = None):
        self.bounds = dict(bounds or {})
        if self.bounds:
            message += " (" + ", ".join(f"{k}={v}" for k, v in self.bounds.items()) + ")"
        super().__init__(message)
