import pytest

from recipe_utils.ingredients.models import (
    Category,
    MeasurementReading,
    MeasurementSystem,
)
from recipe_utils.recipes import (
    Recipe,
    Step,
    ingredient_lines,
    prep_list,
    prep_list_dataframe,
    resolve_step_ingredient,
    step_ingredient_lines,
    structured_ingredient_from_dict,
)
from recipe_utils.recipes.presentation import PREP_LIST_COLUMNS


@pytest.fixture
def pasta(pasta_payload):
    return Recipe.from_dict(pasta_payload)


@pytest.fixture
def pancakes(pancake_payload):
    return Recipe.from_dict(pancake_payload)


def test_from_dict(pasta):
    assert pasta.title == "Sausage Pasta"
    assert pasta.servings == 4
    assert pasta.source_url == "https://example.com/sausage-pasta"
    assert pasta.ingredients[2] == "2 cloves / 2 cloves garlic, crushed"
    assert pasta.steps == [
        Step("Brown the sausage.", ["sausage"]),
        Step("Boil the water.", []),
    ]
    assert pasta.tips == ["Use hot sausage for more heat."]
    assert pasta.ingredients_structured is None


def test_from_dict_structured(pancakes):
    flour, milk, eggs = pancakes.ingredients_structured

    assert flour.metric == MeasurementReading(250, "g")
    assert flour.imperial == MeasurementReading(2, "cups")
    assert flour.original_system is MeasurementSystem.METRIC
    assert flour.category is Category.PANTRY
    assert milk.original_system is None
    assert milk.category is Category.DAIRY
    assert eggs.metric is None
    assert eggs.section == "Batter"


def test_from_dict_defaults():
    recipe = Recipe.from_dict({})
    assert recipe.title == "Untitled Recipe"
    assert recipe.servings is None
    assert recipe.ingredients == []
    assert recipe.steps == []


@pytest.mark.parametrize(
    "servings, expected",
    [(4, 4), ("6", 6.0), (0, None), (-2, None), ("several", None), (None, None)],
)
def test_from_dict_servings(servings, expected):
    assert Recipe.from_dict({"servings": servings}).servings == expected


@pytest.mark.parametrize(
    "payload",
    [
        ["not", "a", "recipe"],
        {"ingredients": "1 cup flour"},
        {"steps": {"text": "stir"}},
        {"steps": [5]},
        {"ingredientsStructured": "flour"},
    ],
)
def test_from_dict_rejects_malformed_payloads(payload):
    with pytest.raises(ValueError):
        Recipe.from_dict(payload)


def test_structured_ingredient_unknown_values():
    """Unknown systems are dropped and unknown categories are derived."""
    ingredient = structured_ingredient_from_dict(
        {
            "description": "chicken thighs",
            "imperial": {"amount": "1 1/2", "unit": "lb"},
            "originalSystem": "martian",
            "category": "snacks",
        }
    )
    assert ingredient.original_system is None
    assert ingredient.category is Category.PROTEINS
    assert ingredient.imperial == MeasurementReading(1.5, "lb")


def test_ingredient_lines(pasta):
    assert ingredient_lines(pasta) == [
        "1 lb sweet Italian sausage (450g)",
        "1 egg",
        "2 cloves garlic, crushed",
        "1 cup water",
    ]


def test_ingredient_lines_scaled(pasta):
    """Counts without a unit are left alone when scaling legacy text."""
    assert ingredient_lines(pasta, 2) == [
        "2 lb sweet Italian sausage (900 g)",
        "1 egg",
        "4 cloves garlic, crushed",
        "2 cup water",
    ]


def test_ingredient_lines_prefers_structured(pancakes):
    assert ingredient_lines(pancakes) == [
        "250 g all-purpose flour (2 cups)",
        "2 cups milk (480 ml)",
        "2 eggs",
    ]
    assert ingredient_lines(pancakes, 1.5) == [
        "375 g all-purpose flour (3 cups)",
        "3 cups milk (720 ml)",
        "3 eggs",
    ]


def test_prep_list(pasta):
    assert prep_list(pasta) == [
        (
            Category.PROTEINS,
            "proteins",
            ["1 lb sweet Italian sausage (450g)", "1 egg"],
        ),
        (Category.VEGETABLES, "vegetables", ["2 cloves garlic, crushed"]),
        (Category.LIQUIDS, "liquids", ["1 cup water"]),
    ]


def test_prep_list_structured(pancakes):
    assert prep_list(pancakes) == [
        (Category.PROTEINS, "proteins", ["2 eggs"]),
        (Category.DAIRY, "dairy", ["2 cups milk (480 ml)"]),
        (Category.PANTRY, "pantry", ["250 g all-purpose flour (2 cups)"]),
    ]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Garlic", "2 cloves / 2 cloves garlic, crushed"),
        ("sausage", "450g / 1 lb sweet Italian sausage"),
        ("fresh water from the tap, 1 cup water", "1 cup water"),
        ("basil", "basil"),
        ("", ""),
    ],
)
def test_resolve_step_ingredient(pasta, name, expected):
    """Names resolve by containment in either direction, ignoring case."""
    assert resolve_step_ingredient(name, pasta.ingredients) == expected


def test_step_ingredient_lines(pasta):
    step = pasta.steps[0]
    assert step_ingredient_lines(step, pasta) == [
        "1 lb sweet Italian sausage (450g)"
    ]
    assert step_ingredient_lines(step, pasta, 2) == [
        "2 lb sweet Italian sausage (900 g)"
    ]
    assert step_ingredient_lines(pasta.steps[1], pasta) == []


def test_prep_list_dataframe(pasta, pancakes):
    df = prep_list_dataframe([pasta, pancakes])

    assert list(df.columns) == PREP_LIST_COLUMNS
    assert len(df) == 7
    assert df["recipe"].tolist() == ["Sausage Pasta"] * 4 + ["Pancakes"] * 3
    assert df["category"].tolist() == [
        "proteins",
        "proteins",
        "vegetables",
        "liquids",
        "proteins",
        "dairy",
        "pantry",
    ]
    assert df["position"].tolist() == [0, 1, 2, 3, 2, 1, 0]
    assert df.loc[6, "text"] == "250 g all-purpose flour (2 cups)"


def test_prep_list_dataframe_scales_to_servings(pasta, pancakes):
    df = prep_list_dataframe([pasta, pancakes], servings=8)

    assert df.loc[0, "text"] == "2 lb sweet Italian sausage (900 g)"
    assert df.loc[6, "text"] == "1000 g all-purpose flour (8 cups)"


def test_prep_list_dataframe_empty():
    df = prep_list_dataframe([])
    assert df.empty
    assert list(df.columns) == PREP_LIST_COLUMNS
