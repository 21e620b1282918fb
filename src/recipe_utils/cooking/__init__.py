"""Cooking-progress tracking."""

from .progress import CookingProgress, ItemKind, Phase, Progress, UndoEntry

__all__ = ["CookingProgress", "ItemKind", "Phase", "Progress", "UndoEntry"]
