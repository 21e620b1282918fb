"""Recognized measurement units for ingredient scaling and reconciliation."""

import dataclasses
import re
from typing import Dict, FrozenSet, Tuple

# Unit normalization mapping (canonical unit -> spellings found in recipes)
UNIT_MAP = {
    # Weight
    "g": ["g"],
    "kg": ["kg"],
    "oz": ["oz"],
    "lb": ["lb"],
    # Volume
    "ml": ["ml"],
    "l": ["l"],
    "cup": ["cup", "cups"],
    "tablespoon": ["tablespoon", "tbsp"],
    "teaspoon": ["teaspoon", "tsp"],
    # Count
    "clove": ["clove", "cloves"],
}

METRIC_UNITS = frozenset({"g", "kg", "ml", "l"})


@dataclasses.dataclass(frozen=True)
class UnitVocabulary:
    """Immutable set of unit tokens the scaler and reconciler recognize.

    Attributes:
        aliases: Mapping of canonical unit name to its accepted spellings.
        metric_units: Canonical units formatted with decimal/rounded notation.
    """

    aliases: Tuple[Tuple[str, Tuple[str, ...]], ...]
    metric_units: FrozenSet[str] = METRIC_UNITS

    @classmethod
    def from_mapping(
        cls, unit_map: Dict[str, list], metric_units=METRIC_UNITS
    ) -> "UnitVocabulary":
        aliases = tuple(
            (canonical, tuple(spellings)) for canonical, spellings in unit_map.items()
        )
        return cls(aliases=aliases, metric_units=frozenset(metric_units))

    @property
    def lookup(self) -> Dict[str, str]:
        return {
            spelling: canonical
            for canonical, spellings in self.aliases
            for spelling in spellings
        }

    @property
    def pattern(self) -> str:
        """Regex fragment matching one unit token.

        Longer spellings are tried first. A trailing plural ``s`` is allowed
        and the token must not run on into another letter, so ``2 large``
        never reads as ``2 l``.
        """
        spellings = sorted(self.lookup, key=len, reverse=True)
        alternation = "|".join(re.escape(s) for s in spellings)
        return rf"(?:{alternation})s?(?![a-z])"

    def normalize(self, unit: str) -> str:
        """Normalize a unit spelling to its canonical form.

        Examples:
            >>> DEFAULT_VOCABULARY.normalize("Cups")
            'cup'
            >>> DEFAULT_VOCABULARY.normalize("tbsp.")
            'tablespoon'
        """
        unit = unit.lower().strip().strip(".")
        lookup = self.lookup
        if unit in lookup:
            return lookup[unit]
        if unit.endswith("s") and unit[:-1] in lookup:
            return lookup[unit[:-1]]
        return unit  # Return original if not found

    def is_metric(self, unit: str) -> bool:
        return self.normalize(unit) in self.metric_units


DEFAULT_VOCABULARY = UnitVocabulary.from_mapping(UNIT_MAP)


def normalize_unit(unit: str) -> str:
    """Normalize unit names to their standard form using the default vocabulary."""
    return DEFAULT_VOCABULARY.normalize(unit)


def is_metric_unit(unit: str) -> bool:
    """Whether ``unit`` is one of ``g, kg, ml, l`` (case-insensitive)."""
    return DEFAULT_VOCABULARY.is_metric(unit)
