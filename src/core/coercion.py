"""Safe primitive coercion for untyped analytics values.

Every helper here accepts any input and never raises. Ingestion uses
them to build records, and row decoding uses them again to validate
cells read back from the sheet.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
import math

from core.constants import AFFIRMATIVE_FLAG_VALUES, NULL_LITERALS


def coerce_number(value: object) -> float:
    """Coerce an arbitrary value into a finite float.

    Args:
        value: Raw value from a payload or sheet cell.

    Returns:
        Parsed number, or ``0.0`` when absent, unparseable, or non-finite.
    """
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def coerce_count(value: object) -> int:
    """Coerce a value into a non-negative whole number."""
    return int(round_half_up(max(coerce_number(value), 0.0), 0))


def coerce_measure(value: object, precision: int) -> float:
    """Coerce a value into a non-negative number rounded to ``precision``."""
    return round_half_up(max(coerce_number(value), 0.0), precision)


def coerce_string(value: object, default: str = "", null_literals_absent: bool = False) -> str:
    """Coerce a value into a string with an explicit default.

    Args:
        value: Raw value.
        default: Returned when the value is absent or empty.
        null_literals_absent: Treat ``"undefined"`` and ``"null"`` as absent.

    Returns:
        String value.
    """
    if value is None or value == "":
        return default
    text = str(value)
    if null_literals_absent and text in NULL_LITERALS:
        return default
    return text


def coerce_flag(value: object) -> bool:
    """Decode an affirmative flag: ``True``, ``"true"`` or ``"1"``."""
    if value is True:
        return True
    if isinstance(value, str):
        return value.strip().lower() in AFFIRMATIVE_FLAG_VALUES
    return False


def round_half_up(value: float, digits: int) -> float:
    """Round to nearest with halves away from zero.

    Python's ``round`` uses banker's rounding, which would turn 2.5
    into 2 rather than 3.
    """
    if not math.isfinite(value):
        return 0.0
    exact = Decimal(repr(value))
    with localcontext() as context:
        # quantize needs every integer digit plus the kept fraction digits
        context.prec = max(context.prec, exact.adjusted() + digits + 2)
        rounded = exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    return float(rounded)
