"""Reconcile metric and imperial readings of one ingredient into a display line.

Two input shapes are supported. Legacy text from the extraction backend
embeds both readings as ``"<metric> / <imperial> <description>"``;
structured ingredients carry them as separate fields.
"""

import functools
import logging
import math
import re

from recipe_utils.ingredients.formatting import format_reading
from recipe_utils.ingredients.models import MeasurementSystem, StructuredIngredient
from recipe_utils.ingredients.parsing import (
    QUANTITY_PATTERN,
    normalize_fractions,
    split_quantity,
)
from recipe_utils.ingredients.units import DEFAULT_VOCABULARY, UnitVocabulary

logger = logging.getLogger(__name__)

# Spaces are required so "3/4" is never taken for the separator
SEPARATOR = " / "

_STARTS_WITH_QUANTITY_RE = re.compile(rf"^\s*(?:{QUANTITY_PATTERN})")


@functools.lru_cache(maxsize=None)
def _imperial_regex(vocabulary: UnitVocabulary) -> re.Pattern:
    return re.compile(
        rf"^(?P<imperial>(?:{QUANTITY_PATTERN})(?:\s*{vocabulary.pattern}\.?)?)"
        rf"\s+(?P<description>.+)$",
        re.IGNORECASE | re.DOTALL,
    )


def _is_redundant(metric: str, imperial: str, vocabulary: UnitVocabulary) -> bool:
    """Whether the metric segment adds nothing to the imperial one."""
    if metric == imperial:
        return True
    if not _STARTS_WITH_QUANTITY_RE.match(normalize_fractions(metric)):
        return False

    metric_value, metric_unit = split_quantity(metric)
    imperial_value, imperial_unit = split_quantity(imperial)
    if not math.isclose(metric_value, imperial_value, abs_tol=1e-9):
        return False
    # A bare count on the metric side repeats the imperial count
    if not metric_unit:
        return True
    return vocabulary.normalize(metric_unit) == vocabulary.normalize(imperial_unit)


def reconcile_text(text: str, vocabulary: UnitVocabulary = DEFAULT_VOCABULARY) -> str:
    """Reformat embedded dual-system ingredient text for display.

    The imperial reading always comes first with the metric reading in
    parentheses. When both readings say the same thing (textually, or the
    same value in the same unit) only the imperial reading is kept.

    Args:
        text: Ingredient text, e.g. ``"450g / 1 lb sweet Italian sausage"``.
        vocabulary: Units allowed between the imperial quantity and the
            description.

    Returns:
        The reformatted line, or ``text`` unchanged when it has no separator
        or the imperial quantity cannot be isolated from the description.

    Examples:
        >>> reconcile_text("450g / 1 lb sweet Italian sausage")
        '1 lb sweet Italian sausage (450g)'
        >>> reconcile_text("1 / 1 egg")
        '1 egg'
        >>> reconcile_text("200g / 3/4 cup granulated sugar")
        '3/4 cup granulated sugar (200g)'
    """
    separator_index = text.find(SEPARATOR)
    if separator_index == -1:
        return text

    metric = text[:separator_index].strip()
    rest = text[separator_index + len(SEPARATOR) :].strip()

    match = _imperial_regex(vocabulary).match(rest)
    if not match:
        logger.debug("No imperial quantity found in %r", text)
        return text

    imperial = match.group("imperial").strip()
    description = match.group("description").strip()

    if _is_redundant(metric, imperial, vocabulary):
        return f"{imperial} {description}"
    return f"{imperial} {description} ({metric})"


def _with_description(reading_text: str, description: str) -> str:
    return f"{reading_text} {description}" if description else reading_text


def format_structured_ingredient(
    ingredient: StructuredIngredient,
    multiplier: float = 1,
    vocabulary: UnitVocabulary = DEFAULT_VOCABULARY,
) -> str:
    """Format a structured ingredient as one display line.

    The primary system is ``ingredient.original_system`` when set and
    imperial otherwise. The secondary reading follows in parentheses and is
    never dropped, even when it repeats the primary one; structured data is
    assumed to be de-duplicated upstream. Each reading is scaled by
    ``multiplier`` and formatted under its own unit's rules, so 450 g and
    1 lb of sausage read ``"1 lb sausage (450 g)"``.
    """
    description = ingredient.description.strip()
    metric, imperial = ingredient.metric, ingredient.imperial

    if metric is None and imperial is None:
        return description
    if metric is None or imperial is None:
        only = metric if metric is not None else imperial
        only_text = format_reading(only, multiplier, vocabulary)
        return _with_description(only_text, description)

    if ingredient.original_system == MeasurementSystem.METRIC:
        primary, secondary = metric, imperial
    else:
        primary, secondary = imperial, metric

    primary_text = format_reading(primary, multiplier, vocabulary)
    secondary_text = format_reading(secondary, multiplier, vocabulary)
    return f"{_with_description(primary_text, description)} ({secondary_text})"
