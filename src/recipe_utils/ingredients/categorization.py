"""Keyword classification of ingredients for grouped display."""

import dataclasses
import json
import logging
import os
from typing import Any, Dict, List, Optional, Sequence, Tuple

from recipe_utils.ingredients.models import Category, StructuredIngredient

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS_FILE = os.path.join(
    os.path.dirname(__file__), "data", "category_keywords.json"
)

# Classification order. Display order is the declaration order of Category.
MATCH_ORDER = (
    Category.PROTEINS,
    Category.VEGETABLES,
    Category.SPICES,
    Category.DAIRY,
    Category.PANTRY,
    Category.LIQUIDS,
)


@dataclasses.dataclass(frozen=True)
class CategoryTable:
    """Immutable category -> keywords table, in classification order."""

    entries: Tuple[Tuple[Category, Tuple[str, ...]], ...]

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Sequence[str]]) -> "CategoryTable":
        """Build a table from ``{category name: [keywords]}``.

        Categories are always checked in ``MATCH_ORDER`` regardless of the
        mapping's own ordering. Unknown category names are skipped with a
        warning; ``other`` never carries keywords.
        """
        keywords: Dict[Category, Tuple[str, ...]] = {}
        for name, words in mapping.items():
            try:
                category = Category(name.lower())
            except ValueError:
                logger.warning("Skipping unknown ingredient category %r", name)
                continue
            if category is Category.OTHER:
                continue
            keywords[category] = tuple(word.lower() for word in words)

        entries = tuple(
            (category, keywords[category])
            for category in MATCH_ORDER
            if category in keywords
        )
        return cls(entries=entries)

    @classmethod
    def from_json(cls, path: str = DEFAULT_KEYWORDS_FILE) -> "CategoryTable":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_mapping(json.load(f))

    def keywords_for(self, category: Category) -> Tuple[str, ...]:
        return dict(self.entries).get(category, ())


DEFAULT_TABLE = CategoryTable.from_json()


@dataclasses.dataclass
class GroupedIngredient:
    item: Any
    original_index: int


@dataclasses.dataclass
class IngredientGroup:
    category: Category
    label: str
    items: List[GroupedIngredient]


@dataclasses.dataclass
class IngredientSection:
    section: Optional[str]  # None = no header
    ingredients: List[StructuredIngredient]


def ingredient_text(item: Any) -> str:
    """Text used to classify an ingredient line, structured ingredient or dict."""
    if isinstance(item, str):
        return item
    if isinstance(item, StructuredIngredient):
        return item.description
    if isinstance(item, dict):
        return str(item.get("text") or item.get("description") or "")
    return str(item)


def categorize(text: str, table: CategoryTable = DEFAULT_TABLE) -> Category:
    """Categorize a single ingredient based on its text.

    The first category, in classification order, with a keyword contained
    in the lower-cased text wins, so ``"chicken broth"`` is a protein and
    not a pantry item. Text matching nothing is ``Category.OTHER``.

    Examples:
        >>> categorize("2 cloves garlic, crushed")
        <Category.VEGETABLES: 'vegetables'>
        >>> categorize("a handful of something")
        <Category.OTHER: 'other'>
    """
    lower_text = text.lower()
    for category, keywords in table.entries:
        if any(keyword in lower_text for keyword in keywords):
            return category
    return Category.OTHER


def categorize_all(
    items: Sequence[Any], table: CategoryTable = DEFAULT_TABLE
) -> List[Category]:
    """Category of each item, indexed like ``items``."""
    return [categorize(ingredient_text(item), table) for item in items]


def group_by_category(
    items: Sequence[Any], table: CategoryTable = DEFAULT_TABLE
) -> List[IngredientGroup]:
    """Group ingredients by category in display order.

    Every item lands in exactly one group and keeps its original index.
    Empty categories are dropped. Groups follow the display order
    proteins, vegetables, dairy, pantry, spices, liquids, other.

    Args:
        items: Ingredient lines, structured ingredients, or ``{"text": ...}``
            dicts.
        table: Keyword table to classify with.

    Returns:
        Non-empty groups in display order.
    """
    groups: Dict[Category, List[GroupedIngredient]] = {}
    for index, (item, category) in enumerate(zip(items, categorize_all(items, table))):
        groups.setdefault(category, []).append(GroupedIngredient(item, index))

    return [
        IngredientGroup(category=category, label=category.label, items=groups[category])
        for category in Category
        if groups.get(category)
    ]


def group_by_section(
    ingredients: Sequence[StructuredIngredient],
) -> List[IngredientSection]:
    """Group structured ingredients by their visible section header.

    The header-less section comes first, then named sections in order of
    first appearance. Within a section ingredients are sorted by category
    display order; ties keep their original order.
    """
    sections: Dict[Optional[str], List[StructuredIngredient]] = {}
    for ingredient in ingredients:
        sections.setdefault(ingredient.section, []).append(ingredient)

    ordered = []
    if None in sections:
        ordered.append(None)
    ordered.extend(name for name in sections if name is not None)

    return [
        IngredientSection(
            section=name,
            ingredients=sorted(sections[name], key=lambda i: i.category.display_rank),
        )
        for name in ordered
    ]
