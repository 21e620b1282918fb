"""Quantity parsing for free-text ingredient lines."""

import logging
import re
from typing import Tuple

from recipe_utils.ingredients.number_utils import (
    ParsedQuantity,
    Unparsed,
    classify_token,
)

logger = logging.getLogger(__name__)

# --- Constants ---

# Unicode fraction mappings
UNICODE_FRAC = {
    "½": "1/2",
    "¼": "1/4",
    "¾": "3/4",
    "⅓": "1/3",
    "⅔": "2/3",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}

# Mixed number, fraction, or decimal, in that order of preference
QUANTITY_PATTERN = r"\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?"

_LEADING_QUANTITY_RE = re.compile(rf"^\s*({QUANTITY_PATTERN})\s*(.*)$", re.DOTALL)

# --- Functions ---


def normalize_fractions(text: str) -> str:
    """Replace Unicode vulgar fractions with ASCII ones.

    A fraction glued to a whole number becomes a mixed number.

    Examples:
        >>> normalize_fractions("1½ cups")
        '1 1/2 cups'
        >>> normalize_fractions("¾ tsp")
        '3/4 tsp'
    """
    for char, ascii_fraction in UNICODE_FRAC.items():
        if char in text:
            text = re.sub(rf"(\d)\s*{char}", rf"\1 {ascii_fraction}", text)
            text = text.replace(char, ascii_fraction)
    return text


def parse_token(token: str) -> ParsedQuantity:
    """Classify a quantity token after Unicode fraction normalization."""
    return classify_token(normalize_fractions(token))


def parse_quantity(token: str) -> float:
    """Parse a numeric quantity token into a float.

    Recognizes, in priority order, mixed numbers (``"1 1/2"``), fractions
    (``"3/4"``) and plain decimals or integers (``"2.5"``, ``"3"``). This is
    best-effort extraction over free text: anything unparseable, including
    a zero denominator, yields ``0.0`` instead of raising.

    Args:
        token: The quantity text, e.g. ``"1 1/2"`` or ``"½"``.

    Returns:
        The numeric value, or 0.0 when the token is not a quantity.

    Examples:
        >>> parse_quantity("1 1/2")
        1.5
        >>> parse_quantity("a pinch")
        0.0
    """
    parsed = parse_token(token)
    if isinstance(parsed, Unparsed) and parsed.text:
        logger.debug("Could not parse quantity token %r", token)
    return parsed.value


def split_quantity(segment: str) -> Tuple[float, str]:
    """Split a measurement segment into its value and trailing unit text.

    Examples:
        >>> split_quantity("450g")
        (450.0, 'g')
        >>> split_quantity("1 1/2 cups")
        (1.5, 'cups')
        >>> split_quantity("some")
        (0.0, 'some')
    """
    segment = normalize_fractions(segment.strip())
    match = _LEADING_QUANTITY_RE.match(segment)
    if not match:
        return 0.0, segment
    quantity, rest = match.groups()
    return parse_quantity(quantity), rest.strip()
