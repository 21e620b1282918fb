"""Recipe payloads as delivered by the extraction backend."""

import dataclasses
import logging
from typing import Any, Dict, List, Optional

from recipe_utils.ingredients.categorization import categorize
from recipe_utils.ingredients.models import (
    Category,
    MeasurementReading,
    MeasurementSystem,
    StructuredIngredient,
)
from recipe_utils.ingredients.parsing import parse_quantity

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Step:
    """A single instruction with the short names of ingredients it uses."""

    description: str
    related_ingredient_texts: List[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class Recipe:
    """Dataclass for holding extracted recipe data."""

    title: str
    servings: Optional[float]
    ingredients: List[str]
    steps: List[Step]
    ingredients_structured: Optional[List[StructuredIngredient]] = None
    tips: List[str] = dataclasses.field(default_factory=list)
    source_url: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Recipe":
        """Build a recipe from the backend's JSON payload.

        Accepts camelCase keys (``ingredientsStructured``, ``sourceUrl``,
        ``originalSystem``, ...) as well as their snake_case spellings.
        Ingredients may be plain strings or ``{"text": ...}`` objects.

        Args:
            payload: Decoded JSON object for one recipe.

        Returns:
            The parsed Recipe.

        Raises:
            ValueError: If the payload is not an object, or its ingredient,
                step or structured-ingredient collections are not lists.
        """
        if not isinstance(payload, dict):
            raise ValueError(
                f"Recipe payload must be an object, got {type(payload).__name__}"
            )

        ingredients = _get(payload, "ingredients", [])
        steps = _get(payload, "steps", [])
        structured = _get(payload, "ingredients_structured")
        for name, value in (("ingredients", ingredients), ("steps", steps)):
            if not isinstance(value, list):
                raise ValueError(f"Recipe {name} must be a list")
        if structured is not None and not isinstance(structured, list):
            raise ValueError("Recipe structured ingredients must be a list")

        return cls(
            title=str(_get(payload, "title") or "Untitled Recipe"),
            servings=_servings(_get(payload, "servings")),
            ingredients=[_ingredient_line(item) for item in ingredients],
            steps=[_step(item) for item in steps],
            ingredients_structured=(
                [structured_ingredient_from_dict(item) for item in structured]
                if structured is not None
                else None
            ),
            tips=[str(tip) for tip in _get(payload, "tips") or []],
            source_url=_get(payload, "source_url"),
        )


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def _get(payload: Dict[str, Any], key: str, default: Any = None) -> Any:
    """Look up a snake_case key, falling back to its camelCase spelling."""
    if key in payload:
        return payload[key]
    return payload.get(_camel(key), default)


def _servings(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if value > 0 else None
    parsed = parse_quantity(str(value))
    return parsed or None


def _ingredient_line(item: Any) -> str:
    if isinstance(item, dict):
        return str(item.get("text", ""))
    return str(item)


def _step(item: Any) -> Step:
    if isinstance(item, str):
        return Step(description=item)
    if not isinstance(item, dict):
        raise ValueError(f"Recipe step must be a string or object, got {item!r}")
    related = (
        _get(item, "related_ingredient_texts") or item.get("ingredients") or []
    )
    return Step(
        description=str(item.get("description") or item.get("text") or ""),
        related_ingredient_texts=[str(text) for text in related],
    )


def _reading(value: Any) -> Optional[MeasurementReading]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"Measurement must be an object, got {value!r}")
    amount = value.get("value", value.get("amount"))
    if isinstance(amount, (int, float)) and not isinstance(amount, bool):
        quantity = float(amount)
    else:
        quantity = parse_quantity(str(amount or ""))
    return MeasurementReading(quantity, str(value.get("unit") or "").strip())


def structured_ingredient_from_dict(item: Dict[str, Any]) -> StructuredIngredient:
    """Parse one structured ingredient from the backend payload.

    A missing or unrecognized category is derived from the description with
    the default keyword table. An unrecognized original system is dropped,
    which makes imperial the primary reading.
    """
    if not isinstance(item, dict):
        raise ValueError(f"Structured ingredient must be an object, got {item!r}")

    description = str(item.get("description") or item.get("text") or "")

    system = _get(item, "original_system")
    try:
        original_system = MeasurementSystem(system) if system else None
    except ValueError:
        logger.warning("Unknown measurement system %r for %r", system, description)
        original_system = None

    try:
        category = Category(item["category"])
    except (KeyError, ValueError):
        category = categorize(description)

    return StructuredIngredient(
        description=description,
        metric=_reading(item.get("metric")),
        imperial=_reading(item.get("imperial")),
        original_system=original_system,
        category=category,
        section=item.get("section") or None,
    )
