"""
Decimal Utilities
assessment_platform/scoring/utils.py

Provides precision-safe decimal math for scoring calculations.

Inputs are converted exactly (exact_decimal); only outputs are quantized.
Quantizing uses a context wide enough for the value, so very large inputs
round instead of raising InvalidOperation.
"""

import math
from decimal import Context, Decimal, ROUND_HALF_UP, getcontext
from typing import Iterable, Optional

from assessment_platform.core.exceptions import InvalidWeightError, NegativeWeightError

ZERO = Decimal("0")
HUNDRED = Decimal("100")
ONE_PLACE = Decimal("0.1")


def exact_decimal(value: Optional[float]) -> Decimal:
    """Convert a float to Decimal without rounding. None becomes 0."""
    if value is None:
        return ZERO
    return Decimal(str(value))


def quantize(value: Decimal, exp: Decimal) -> Decimal:
    """Round half up to the exponent of ``exp``, whatever the magnitude of ``value``."""
    if not value.is_finite():
        return value
    digits = max(value.adjusted(), 0) - exp.as_tuple().exponent + 2
    context = Context(prec=max(getcontext().prec, digits), rounding=ROUND_HALF_UP)
    return value.quantize(exp, context=context)


def to_decimal(value: Optional[float], places: int = 4) -> Decimal:
    """Convert float to Decimal with explicit precision. None becomes 0."""
    return quantize(exact_decimal(value), Decimal(10) ** -places)


def round1(value: Decimal) -> Decimal:
    """Round to one decimal place, half up."""
    return quantize(value, ONE_PLACE)


def clamp(
    value: Decimal,
    min_val: Decimal = ZERO,
    max_val: Decimal = HUNDRED,
) -> Decimal:
    """Clamp value to range [min_val, max_val]. In-range values come back unchanged."""
    if value < min_val:
        return min_val
    if value > max_val:
        return max_val
    return value


def percentage(part: int, whole: int) -> Decimal:
    """
    Share of ``part`` in ``whole`` as a percentage with one decimal.

    Formula: round(part / whole × 100, 1), or 0 when whole is 0.
    """
    if whole <= 0:
        return round1(ZERO)
    return round1(clamp(Decimal(part) / Decimal(whole) * HUNDRED))


def mean(values: Iterable[Decimal]) -> Decimal:
    """Arithmetic mean rounded to one decimal. Returns 0 for no values."""
    items = list(values)
    if not items:
        return round1(ZERO)
    return round1(sum(items, ZERO) / Decimal(len(items)))


def check_weight(subject: str, weight: Optional[float]) -> None:
    """
    Raise InconsistentInputError for a weight the engine cannot use.

    Raises:
        InvalidWeightError: NaN or infinite weight.
        NegativeWeightError: weight below zero.
    """
    if weight is None:
        return
    if not math.isfinite(weight):
        raise InvalidWeightError(subject, weight)
    if weight < 0:
        raise NegativeWeightError(subject, weight)
