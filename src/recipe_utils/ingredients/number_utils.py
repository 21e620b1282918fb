"""Small grammar for numeric quantity tokens.

A token is classified as one of the tagged results below, tried in priority
order: mixed number, fraction, plain decimal. Anything else is ``Unparsed``.
"""

import dataclasses
import re
from decimal import Decimal
from typing import Union

_MIXED_RE = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$")
_FRACTION_RE = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_DECIMAL_RE = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)$")


@dataclasses.dataclass(frozen=True)
class ParsedMixed:
    whole: int
    numerator: int
    denominator: int

    @property
    def value(self) -> float:
        return float(self.whole + _fraction(self.numerator, self.denominator))


@dataclasses.dataclass(frozen=True)
class ParsedFraction:
    numerator: int
    denominator: int

    @property
    def value(self) -> float:
        return float(_fraction(self.numerator, self.denominator))


@dataclasses.dataclass(frozen=True)
class ParsedDecimal:
    text: str

    @property
    def value(self) -> float:
        return float(Decimal(self.text))


@dataclasses.dataclass(frozen=True)
class Unparsed:
    text: str

    @property
    def value(self) -> float:
        return 0.0


ParsedQuantity = Union[ParsedMixed, ParsedFraction, ParsedDecimal, Unparsed]


def _fraction(numerator: int, denominator: int) -> Decimal:
    """Exact value of a fraction. The grammar never admits a zero denominator."""
    return Decimal(numerator) / Decimal(denominator)


def classify_token(token: str) -> ParsedQuantity:
    """Classify a quantity token without evaluating it.

    Zero denominators are rejected here so that every non-``Unparsed``
    result has a well-defined value.

    Examples:
        >>> classify_token("1 1/2")
        ParsedMixed(whole=1, numerator=1, denominator=2)
        >>> classify_token("3/0")
        Unparsed(text='3/0')
    """
    text = token.strip()

    match = _MIXED_RE.match(text)
    if match:
        whole, numerator, denominator = (int(g) for g in match.groups())
        if denominator == 0:
            return Unparsed(text)
        return ParsedMixed(whole, numerator, denominator)

    match = _FRACTION_RE.match(text)
    if match:
        numerator, denominator = (int(g) for g in match.groups())
        if denominator == 0:
            return Unparsed(text)
        return ParsedFraction(numerator, denominator)

    if _DECIMAL_RE.match(text):
        return ParsedDecimal(text)

    return Unparsed(text)
