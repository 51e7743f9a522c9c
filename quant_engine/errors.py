"""Input validation errors shared by the pricing, simulation and portfolio layers."""

import math

import numpy as np


class InvalidParameter(ValueError):
    """A calculator input is out of its domain. Raised before any computation."""

    def __init__(self, field: str, value, reason: str = "must be positive"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field} {reason}, got {value!r}")


def require_finite(field: str, value: float) -> float:
    try:
        ok = math.isfinite(value)
    except TypeError:
        ok = False
    if not ok:
        raise InvalidParameter(field, value, "must be a finite number")
    return float(value)


def require_positive(field: str, value: float) -> float:
    value = require_finite(field, value)
    if value <= 0:
        raise InvalidParameter(field, value)
    return value


def require_non_negative(field: str, value: float) -> float:
    value = require_finite(field, value)
    if value < 0:
        raise InvalidParameter(field, value, "must be non-negative")
    return value


def require_count(field: str, value: int) -> int:
    """Positive integer check. Booleans and floats are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameter(field, value, "must be an integer")
    if value <= 0:
        raise InvalidParameter(field, value)
    return int(value)
