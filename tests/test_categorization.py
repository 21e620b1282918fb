import json

import pytest

from recipe_utils.ingredients.categorization import (
    DEFAULT_TABLE,
    MATCH_ORDER,
    CategoryTable,
    categorize,
    categorize_all,
    group_by_category,
    group_by_section,
)
from recipe_utils.ingredients.models import Category, StructuredIngredient


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2 cloves garlic, crushed", Category.VEGETABLES),
        ("chicken broth", Category.PROTEINS),
        ("1 lb ground beef", Category.PROTEINS),
        ("black pepper", Category.VEGETABLES),
        ("1 tsp kosher salt", Category.SPICES),
        ("1 cup whole milk", Category.DAIRY),
        ("Parmesan Cheese", Category.DAIRY),
        ("coconut milk", Category.DAIRY),
        ("2 tbsp olive oil", Category.PANTRY),
        ("2 cups all-purpose flour", Category.PANTRY),
        ("1 cup water", Category.LIQUIDS),
        ("a pinch of love", Category.OTHER),
        ("", Category.OTHER),
    ],
)
def test_categorize(text, expected):
    """Test first-match classification in priority order."""
    assert categorize(text) == expected


def test_categorize_is_deterministic():
    assert {categorize("chicken broth") for _ in range(5)} == {Category.PROTEINS}


def test_category_labels():
    assert Category.SPICES.label == "spices & herbs"
    assert Category.PROTEINS.label == "proteins"


def test_default_table_follows_match_order():
    assert [category for category, _ in DEFAULT_TABLE.entries] == list(MATCH_ORDER)
    assert "garlic" in DEFAULT_TABLE.keywords_for(Category.VEGETABLES)
    assert DEFAULT_TABLE.keywords_for(Category.OTHER) == ()


def test_categorize_all_accepts_mixed_items():
    items = ["salt", StructuredIngredient("chicken thighs"), {"text": "water"}]
    assert categorize_all(items) == [
        Category.SPICES,
        Category.PROTEINS,
        Category.LIQUIDS,
    ]


def test_group_by_category_uses_display_order():
    """Groups follow display order and items keep their original index."""
    items = [
        "1 cup water",
        "1 lb sausage",
        "1 tsp salt",
        "2 tbsp butter",
        "2 cloves garlic",
    ]
    groups = group_by_category(items)

    assert [group.category for group in groups] == [
        Category.PROTEINS,
        Category.VEGETABLES,
        Category.DAIRY,
        Category.SPICES,
        Category.LIQUIDS,
    ]
    assert [group.label for group in groups][3] == "spices & herbs"
    assert [
        [entry.original_index for entry in group.items] for group in groups
    ] == [[1], [4], [3], [2], [0]]


def test_group_by_category_places_every_item_once():
    items = ["chicken", "beef", "onion", "mystery", "flour", "chicken"]
    groups = group_by_category(items)

    indices = sorted(entry.original_index for g in groups for entry in g.items)
    assert indices == list(range(len(items)))
    assert groups[0].category == Category.PROTEINS
    assert [entry.original_index for entry in groups[0].items] == [0, 1, 5]
    assert groups[-1].category == Category.OTHER


def test_group_by_category_empty():
    assert group_by_category([]) == []


def test_custom_table():
    """An alternate keyword table replaces the default one entirely."""
    table = CategoryTable.from_mapping({"dairy": ["tofu"], "snacks": ["chips"]})
    assert categorize("silken tofu", table) == Category.DAIRY
    assert categorize("chicken", table) == Category.OTHER
    assert categorize("chips", table) == Category.OTHER


def test_custom_table_keeps_match_order():
    """Mapping order does not change classification priority."""
    table = CategoryTable.from_mapping({"liquids": ["stock"], "proteins": ["stock"]})
    assert categorize("beef stock", table) == Category.PROTEINS


def test_table_from_json(tmp_path):
    path = tmp_path / "keywords.json"
    path.write_text(json.dumps({"Spices": ["Za'atar"]}), encoding="utf-8")

    table = CategoryTable.from_json(str(path))
    assert categorize("1 tbsp za'atar", table) == Category.SPICES


def test_group_by_section():
    """Header-less section first, then named sections sorted by category."""
    ingredients = [
        StructuredIngredient("beef", category=Category.PROTEINS, section="Marinade"),
        StructuredIngredient("water", category=Category.LIQUIDS),
        StructuredIngredient("onion", category=Category.VEGETABLES),
        StructuredIngredient("soy sauce", category=Category.PANTRY, section="Marinade"),
        StructuredIngredient("chicken", category=Category.PROTEINS),
        StructuredIngredient("rice", category=Category.PANTRY, section="To serve"),
    ]
    sections = group_by_section(ingredients)

    assert [s.section for s in sections] == [None, "Marinade", "To serve"]
    assert [i.description for i in sections[0].ingredients] == [
        "chicken",
        "onion",
        "water",
    ]
    assert [i.description for i in sections[1].ingredients] == ["beef", "soy sauce"]


def test_group_by_section_keeps_ties_in_order():
    ingredients = [
        StructuredIngredient("flour", category=Category.PANTRY, section="Dough"),
        StructuredIngredient("yeast", category=Category.PANTRY, section="Dough"),
        StructuredIngredient("sugar", category=Category.PANTRY, section="Dough"),
    ]
    [section] = group_by_section(ingredients)
    assert [i.description for i in section.ingredients] == ["flour", "yeast", "sugar"]
