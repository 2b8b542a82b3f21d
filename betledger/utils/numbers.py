"""Numeric coercion for store documents."""

from typing import Any


def coerce_float(value: Any) -> float:
    """Numeric field from a document; missing or malformed values count as zero."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number:  # NaN
        return 0.0
    return number
