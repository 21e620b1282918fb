"""Compose display lines and prep lists for a recipe."""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from recipe_utils.ingredients.categorization import (
    DEFAULT_TABLE,
    CategoryTable,
    categorize,
    group_by_category,
)
from recipe_utils.ingredients.models import Category
from recipe_utils.ingredients.reconciliation import format_structured_ingredient
from recipe_utils.ingredients.scaling import scale_text, servings_multiplier
from recipe_utils.recipes.models import Recipe, Step

logger = logging.getLogger(__name__)

PREP_LIST_COLUMNS = ["recipe", "category", "label", "position", "text"]


def ingredient_lines(recipe: Recipe, multiplier: float = 1) -> List[str]:
    """Display line for every ingredient, scaled by ``multiplier``.

    Structured ingredients are used when the recipe has them; otherwise the
    legacy text lines are reconciled and scaled.
    """
    if recipe.ingredients_structured:
        return [
            format_structured_ingredient(ingredient, multiplier)
            for ingredient in recipe.ingredients_structured
        ]
    return [scale_text(text, multiplier) for text in recipe.ingredients]


def prep_list(
    recipe: Recipe, multiplier: float = 1, table: CategoryTable = DEFAULT_TABLE
) -> List[Tuple[Category, str, List[str]]]:
    """Scaled ingredient lines grouped by category, in display order.

    Returns:
        ``(category, label, lines)`` tuples for each non-empty category.
    """
    lines = ingredient_lines(recipe, multiplier)

    if recipe.ingredients_structured:
        # Structured ingredients carry their own category
        grouped = {}
        for ingredient, line in zip(recipe.ingredients_structured, lines):
            grouped.setdefault(ingredient.category, []).append(line)
        return [
            (category, category.label, grouped[category])
            for category in Category
            if category in grouped
        ]

    return [
        (
            group.category,
            group.label,
            [lines[entry.original_index] for entry in group.items],
        )
        for group in group_by_category(recipe.ingredients, table)
    ]


def resolve_step_ingredient(name: str, ingredients: Sequence[str]) -> str:
    """Map a step's short ingredient name to the full recipe ingredient line.

    Steps often name an ingredient without its amount ("garlic"). The first
    ingredient line that contains the name, or is contained in it, ignoring
    case, is returned; otherwise the name itself.

    Examples:
        >>> resolve_step_ingredient("garlic", ["1 lb pasta", "2 cloves garlic"])
        '2 cloves garlic'
    """
    wanted = name.lower().strip()
    if not wanted:
        return name
    for line in ingredients:
        line_lower = line.lower()
        if wanted in line_lower or line_lower in wanted:
            return line
    return name


def step_ingredient_lines(
    step: Step, recipe: Recipe, multiplier: float = 1
) -> List[str]:
    """Scaled display lines for the ingredients a step uses."""
    return [
        scale_text(resolve_step_ingredient(name, recipe.ingredients), multiplier)
        for name in step.related_ingredient_texts
    ]


def prep_list_dataframe(
    recipes: Iterable[Recipe],
    servings: Optional[float] = None,
    table: CategoryTable = DEFAULT_TABLE,
) -> pd.DataFrame:
    """Tabulate prep lists for several recipes.

    Args:
        recipes: Recipes to render.
        servings: Servings to scale every recipe to. None keeps each
            recipe's own yield.
        table: Keyword table used for legacy ingredient lines.

    Returns:
        One row per ingredient with columns ``recipe``, ``category``,
        ``label``, ``position`` (the ingredient's index in the recipe) and
        ``text`` (the scaled display line), ordered by recipe then category.
    """
    rows = []
    for recipe_index, recipe in enumerate(recipes):
        multiplier = (
            1 if servings is None else servings_multiplier(servings, recipe.servings)
        )
        lines = ingredient_lines(recipe, multiplier)
        if recipe.ingredients_structured:
            categories = [i.category for i in recipe.ingredients_structured]
        else:
            categories = [categorize(text, table) for text in recipe.ingredients]

        for position, (category, line) in enumerate(zip(categories, lines)):
            rows.append(
                {
                    "recipe": recipe.title,
                    "category": category.value,
                    "label": category.label,
                    "position": position,
                    "text": line,
                    "_order": recipe_index,
                    "_rank": category.display_rank,
                }
            )

    df = pd.DataFrame(rows, columns=PREP_LIST_COLUMNS + ["_order", "_rank"])
    df = df.sort_values(["_order", "_rank", "position"], kind="stable")
    logger.debug("Prepared %d prep-list rows", len(df))
    return df[PREP_LIST_COLUMNS].reset_index(drop=True)
