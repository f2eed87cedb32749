"""Numeric coercion helpers."""

from __future__ import annotations

import math
from typing import Any


def coerce_number(value: Any) -> float:
    """Return ``value`` as a finite float, or 0.0 when missing / non-numeric / non-finite."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def is_finite_number(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def format_number(value: float) -> str:
    """Render a number the way the dashboard shows it: ``1500``, ``75.5``."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
