"""
Numeric helpers shared by the attendance and payroll services.

Every lenient "coerce or fall back to zero" conversion goes through
``to_number`` so the zero-default policy lives in one place.
"""
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

CENTS = Decimal("0.01")


def to_number(value: Any, default: float = 0.0) -> float:
    """Parse ``value`` as a finite float, returning ``default`` when it cannot be."""
    if value is None:
        return default
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    else:
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def non_negative(value: Any) -> float:
    """Coerce and clamp to zero; used at the input boundary."""
    return max(0.0, to_number(value))


def non_negative_or_none(value: Any) -> Optional[float]:
    """Like ``non_negative`` but keeps a missing or unreadable value as ``None``."""
    number = to_number(value, default=None)
    if number is None:
        return None
    return max(0.0, number)


def round_half_up(value: float, places: int = 2) -> float:
    """Scale, round half towards +inf, unscale (the ``Math.round(x * 100) / 100`` idiom)."""
    factor = 10 ** places
    scaled = value * factor
    whole = math.floor(scaled)
    if scaled - whole >= 0.5:
        whole += 1
    return whole / factor


def round_money(value: float) -> float:
    """Round an amount to cents, half away from zero on its exact binary value."""
    return float(Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP))
