"""
Error Types

Every public function validates its own inputs and raises
PreconditionViolation before doing any geometry work.
"""

import math
from typing import Any


class PreconditionViolation(ValueError):
    """Raised when an argument is out of range or of the wrong shape."""

    def __init__(self, parameter: str, message: str, value: Any = None):
        """
        Initialize PreconditionViolation.

        Args:
            parameter: Name of the offending parameter
            message: What is wrong with it
            value: The rejected value, echoed in the message
        """
        self.parameter = parameter
        self.value = value
        super().__init__(f"{parameter}: {message} (got {value!r})")


def require_positive(parameter: str, value: Any) -> float:
    """Return value as a float, rejecting non-numbers and values <= 0."""
    number = _require_number(parameter, value)
    if number <= 0:
        raise PreconditionViolation(parameter, "must be greater than zero", value)
    return number


def require_non_negative(parameter: str, value: Any) -> float:
    """Return value as a float, rejecting non-numbers and values < 0."""
    number = _require_number(parameter, value)
    if number < 0:
        raise PreconditionViolation(parameter, "must not be negative", value)
    return number


def _require_number(parameter: str, value: Any) -> float:
    # bool is an int subclass but never a sensible size
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PreconditionViolation(parameter, "must be a number", value)
    number = float(value)
    if not math.isfinite(number):
        raise PreconditionViolation(parameter, "must be finite", value)
    return number
