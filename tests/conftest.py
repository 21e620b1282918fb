import pytest


@pytest.fixture
def pasta_payload():
    """Legacy recipe payload with embedded dual-system ingredient text."""
    return {
        "title": "Sausage Pasta",
        "servings": 4,
        "sourceUrl": "https://example.com/sausage-pasta",
        "ingredients": [
            "450g / 1 lb sweet Italian sausage",
            "1 / 1 egg",
            {"text": "2 cloves / 2 cloves garlic, crushed"},
            "1 cup water",
        ],
        "steps": [
            {"text": "Brown the sausage.", "ingredients": ["sausage"]},
            "Boil the water.",
        ],
        "tips": ["Use hot sausage for more heat."],
    }


@pytest.fixture
def pancake_payload():
    """Recipe payload carrying structured ingredients."""
    return {
        "title": "Pancakes",
        "servings": 2,
        "ingredients": ["250g flour", "480ml milk", "2 eggs"],
        "steps": [{"description": "Whisk everything together."}],
        "ingredientsStructured": [
            {
                "description": "all-purpose flour",
                "metric": {"value": 250, "unit": "g"},
                "imperial": {"value": 2, "unit": "cups"},
                "originalSystem": "metric",
                "category": "pantry",
            },
            {
                "description": "milk",
                "metric": {"value": 480, "unit": "ml"},
                "imperial": {"value": 2, "unit": "cups"},
            },
            {
                "description": "eggs",
                "imperial": {"value": 2, "unit": ""},
                "category": "proteins",
                "section": "Batter",
            },
        ],
    }
