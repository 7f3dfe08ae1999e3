"""Numeric coercion helpers shared by every normalization stage."""

import math
import re
from decimal import ROUND_HALF_UP, Decimal

CALORIE_PRECISION = 0
MACRO_PRECISION = 1
KJ_PER_KCAL = 4.184
KJ_CONVERSION_PRECISION = 2

_NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")


def parse_number(value: object) -> float | None:
    """Extract a finite number from a number, a string with units, or anything else.

    Strings are scanned for the first signed decimal, so ``"3 g"`` and
    ``"120 kcal"`` both parse. Returns ``None`` instead of raising.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return _finite(float(value))
    if isinstance(value, str):
        match = _NUMBER_PATTERN.search(value)
        if match is None:
            return None
        return _finite(float(match.group(0)))
    try:
        return _finite(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None


def round_half_up(value: float, digits: int) -> float:
    """Round half away from zero to a fixed number of decimals."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _finite(value: float) -> float | None:
    if math.isfinite(value):
        return value
    return None
