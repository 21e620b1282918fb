"""Scale ingredient quantities by a servings multiplier."""

import functools
import logging
import re
from typing import Optional

from recipe_utils.ingredients.formatting import format_quantity, usable_multiplier
from recipe_utils.ingredients.models import MeasurementReading
from recipe_utils.ingredients.parsing import QUANTITY_PATTERN, parse_quantity
from recipe_utils.ingredients.reconciliation import reconcile_text
from recipe_utils.ingredients.units import DEFAULT_VOCABULARY, UnitVocabulary

logger = logging.getLogger(__name__)

MIN_SERVINGS = 1
MAX_SERVINGS = 20
DEFAULT_ORIGINAL_SERVINGS = 4


@functools.lru_cache(maxsize=None)
def _quantity_unit_regex(vocabulary: UnitVocabulary) -> re.Pattern:
    # The quantity may not start in the middle of another number
    return re.compile(
        rf"(?<![\d./])(?P<qty>{QUANTITY_PATTERN})\s*(?P<unit>{vocabulary.pattern})",
        re.IGNORECASE,
    )


def scale_text(
    text: str, multiplier: float, vocabulary: UnitVocabulary = DEFAULT_VOCABULARY
) -> str:
    """Scale every quantity+unit occurrence in ingredient text.

    Embedded dual-system text is reconciled first. Each quantity that is
    immediately followed by a recognized unit token is parsed, multiplied
    and reformatted in place as ``"<quantity> <unit>"``. Numbers with no
    adjacent unit (temperatures, times, step counts) are never touched, and
    all other text is kept verbatim.

    Args:
        text: Free ingredient or step text.
        multiplier: Servings ratio. ``1`` skips scaling entirely so the
            common unscaled path introduces no rounding noise.
        vocabulary: Recognized unit tokens.

    Returns:
        The reconciled, scaled text.

    Examples:
        >>> scale_text("1 1/2 cups flour", 2)
        '3 cups flour'
        >>> scale_text("bake at 350 for 20 minutes", 2)
        'bake at 350 for 20 minutes'
    """
    reconciled = reconcile_text(text, vocabulary)

    if multiplier == 1:
        return reconciled
    if not usable_multiplier(multiplier):
        return reconciled

    def _replace(match: re.Match) -> str:
        unit = match.group("unit")
        scaled = parse_quantity(match.group("qty")) * multiplier
        return f"{format_quantity(scaled, unit, vocabulary)} {unit}"

    return _quantity_unit_regex(vocabulary).sub(_replace, reconciled)


def scale_reading(reading: MeasurementReading, multiplier: float) -> MeasurementReading:
    """Return ``reading`` with its value multiplied by ``multiplier``."""
    if multiplier == 1 or not usable_multiplier(multiplier):
        return reading
    return MeasurementReading(reading.value * multiplier, reading.unit)


def servings_multiplier(servings: float, original_servings: Optional[float]) -> float:
    """Ratio of the servings being cooked to the servings the recipe yields.

    Recipes that do not state a yield are assumed to serve
    ``DEFAULT_ORIGINAL_SERVINGS``.
    """
    if not original_servings or original_servings <= 0:
        original_servings = DEFAULT_ORIGINAL_SERVINGS
    return servings / original_servings


def adjust_servings(current: int, requested: int) -> int:
    """Accept ``requested`` servings only within the supported range."""
    if MIN_SERVINGS <= requested <= MAX_SERVINGS:
        return requested
    logger.debug(
        "Servings %s outside %s-%s, keeping %s",
        requested,
        MIN_SERVINGS,
        MAX_SERVINGS,
        current,
    )
    return current
