"""Display formatting for scaled quantities."""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from recipe_utils.ingredients.models import MeasurementReading
from recipe_utils.ingredients.units import DEFAULT_VOCABULARY, UnitVocabulary

logger = logging.getLogger(__name__)

# Common cooking fractions, checked in order
COMMON_FRACTIONS = [
    (1 / 8, "1/8"),
    (1 / 4, "1/4"),
    (1 / 3, "1/3"),
    (3 / 8, "3/8"),
    (1 / 2, "1/2"),
    (5 / 8, "5/8"),
    (2 / 3, "2/3"),
    (3 / 4, "3/4"),
    (7 / 8, "7/8"),
]

FRACTION_TOLERANCE = 0.08
WHOLE_NUMBER_TOLERANCE = 0.1
METRIC_ROUNDING_THRESHOLD = 10


def _round_half_up(value: float, places: str) -> Decimal:
    try:
        return Decimal(repr(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Beyond Decimal precision, nothing left to round
        return Decimal(repr(value))


def _one_decimal(value: float) -> str:
    text = str(_round_half_up(value, "0.1"))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _whole(value: float) -> str:
    return str(_round_half_up(value, "1"))


def format_quantity(
    value: float, unit: str, vocabulary: UnitVocabulary = DEFAULT_VOCABULARY
) -> str:
    """Format a numeric quantity for display alongside ``unit``.

    Metric units use decimal notation: whole numbers from 10 upwards and one
    decimal place below that. Every other unit, including unitless counts,
    prefers the nearest common cooking fraction.

    Args:
        value: The (possibly scaled) quantity. Expected to be non-negative.
        unit: The unit text the quantity is shown with.
        vocabulary: Unit vocabulary deciding which units are metric.

    Returns:
        The number only, without the unit.

    Examples:
        >>> format_quantity(0.75, "cup")
        '3/4'
        >>> format_quantity(0.75, "g")
        '0.8'
        >>> format_quantity(1.5, "tbsp")
        '1 1/2'
        >>> format_quantity(12.4, "ml")
        '12'
    """
    if not math.isfinite(value):
        return str(value)

    if vocabulary.is_metric(unit):
        if value >= METRIC_ROUNDING_THRESHOLD:
            return _whole(value)
        return _one_decimal(value)

    whole = math.floor(value)
    remainder = value - whole

    # Close enough to a whole number
    if remainder < WHOLE_NUMBER_TOLERANCE or remainder > 1 - WHOLE_NUMBER_TOLERANCE:
        return _whole(value)

    for fraction_value, fraction in COMMON_FRACTIONS:
        if abs(remainder - fraction_value) < FRACTION_TOLERANCE:
            return f"{whole} {fraction}" if whole > 0 else fraction

    return _one_decimal(value)


def usable_multiplier(multiplier: float) -> bool:
    """Whether a servings multiplier can be applied to quantities.

    Negative, NaN and infinite multipliers are rejected with a warning; the
    caller then leaves quantities unscaled.
    """
    try:
        ok = math.isfinite(multiplier) and multiplier >= 0
    except TypeError:
        ok = False
    if not ok:
        logger.warning("Ignoring unusable servings multiplier %r", multiplier)
    return ok


def format_reading(
    reading: MeasurementReading,
    multiplier: float = 1,
    vocabulary: UnitVocabulary = DEFAULT_VOCABULARY,
) -> str:
    """Render a reading as ``"<number> <unit>"``, scaled by ``multiplier``.

    Unitless readings render as the number alone.
    """
    if not usable_multiplier(multiplier):
        multiplier = 1
    formatted = format_quantity(reading.value * multiplier, reading.unit, vocabulary)
    unit = reading.unit.strip()
    return f"{formatted} {unit}" if unit else formatted
