"""Recipe payload loading and display composition."""

from .models import Recipe, Step, structured_ingredient_from_dict
from .presentation import (
    ingredient_lines,
    prep_list,
    prep_list_dataframe,
    resolve_step_ingredient,
    step_ingredient_lines,
)

__all__ = [
    "Recipe",
    "Step",
    "structured_ingredient_from_dict",
    "ingredient_lines",
    "prep_list",
    "prep_list_dataframe",
    "resolve_step_ingredient",
    "step_ingredient_lines",
]
