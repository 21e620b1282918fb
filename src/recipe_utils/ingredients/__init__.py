"""Ingredient quantity parsing, scaling, reconciliation and categorization."""

from .categorization import (
    CategoryTable,
    GroupedIngredient,
    IngredientGroup,
    IngredientSection,
    categorize,
    categorize_all,
    group_by_category,
    group_by_section,
)
from .formatting import format_quantity, format_reading
from .models import (
    Category,
    MeasurementReading,
    MeasurementSystem,
    StructuredIngredient,
)
from .parsing import parse_quantity, parse_token, split_quantity
from .reconciliation import format_structured_ingredient, reconcile_text
from .scaling import adjust_servings, scale_reading, scale_text, servings_multiplier
from .units import UnitVocabulary, is_metric_unit, normalize_unit

__all__ = [
    "parse_quantity",
    "parse_token",
    "split_quantity",
    "format_quantity",
    "format_reading",
    "scale_text",
    "scale_reading",
    "servings_multiplier",
    "adjust_servings",
    "reconcile_text",
    "format_structured_ingredient",
    "categorize",
    "categorize_all",
    "group_by_category",
    "group_by_section",
    "CategoryTable",
    "GroupedIngredient",
    "IngredientGroup",
    "IngredientSection",
    "Category",
    "MeasurementReading",
    "MeasurementSystem",
    "StructuredIngredient",
    "UnitVocabulary",
    "is_metric_unit",
    "normalize_unit",
]
