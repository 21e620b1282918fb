"""Recipe Utils - Measurement normalization and cooking progress for recipes."""

__version__ = "0.1.0"

from . import cooking, ingredients, recipes

__all__ = ["cooking", "ingredients", "recipes"]
