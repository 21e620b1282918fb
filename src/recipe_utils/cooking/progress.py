"""Cooking-progress state machine.

Tracks a user's way through one recipe: the current phase (``prep`` while
gathering ingredients, ``cook`` while working through steps), which
ingredients and steps are done, and a short undo history. Only indices are
tracked, never ingredient or step text.
"""

import collections
import dataclasses
import enum
import logging
from typing import Any, Deque, Dict, FrozenSet, List, Optional, Tuple

logger = logging.getLogger(__name__)

UNDO_HISTORY_SIZE = 10


class Phase(str, enum.Enum):
    PREP = "prep"
    COOK = "cook"


class ItemKind(str, enum.Enum):
    INGREDIENT = "ingredient"
    STEP = "step"


@dataclasses.dataclass(frozen=True)
class UndoEntry:
    kind: ItemKind
    index: int


@dataclasses.dataclass(frozen=True)
class Progress:
    completed: int
    total: int


class CookingProgress:
    """Progress through one recipe's ingredient and step checklists.

    Completion is stored as one flag per ingredient and per step, sized to
    the recipe when the machine is created. The undo history is a ring
    buffer holding the most recent ``history_size`` completions.

    Out-of-range indices are ignored entirely: nothing is marked and no
    undo entry is recorded. Bounds validation beyond that is the caller's.

    Attributes:
        phase: Current phase. Starts at ``Phase.PREP`` and switches to
            ``Phase.COOK`` by itself once every ingredient is complete.
    """

    def __init__(
        self,
        ingredient_count: int,
        step_count: int,
        history_size: int = UNDO_HISTORY_SIZE,
    ):
        self._ingredient_count = max(0, ingredient_count)
        self._step_count = max(0, step_count)
        self._history_size = history_size
        self.reset()
        self._maybe_start_cooking()

    def reset(self) -> None:
        """Return to the initial state: prep phase, nothing done, no history."""
        self.phase = Phase.PREP
        self._ingredients: List[bool] = [False] * self._ingredient_count
        self._steps: List[bool] = [False] * self._step_count
        self._history: Deque[UndoEntry] = collections.deque(maxlen=self._history_size)

    # --- Mutations ---

    def complete_ingredient(self, index: int) -> None:
        """Mark an ingredient as gathered.

        Completing an ingredient that is already complete still records an
        undo entry. Completing the last outstanding ingredient during prep
        moves the machine to the cook phase; that transition is not part of
        the undo history.
        """
        if self._complete(self._ingredients, ItemKind.INGREDIENT, index):
            self._maybe_start_cooking()

    def complete_step(self, index: int) -> None:
        """Mark a step as done. Re-completing records another undo entry."""
        self._complete(self._steps, ItemKind.STEP, index)

    def uncomplete_ingredient(self, index: int) -> None:
        """Clear one ingredient directly, outside the undo history."""
        self._uncomplete(self._ingredients, ItemKind.INGREDIENT, index)

    def uncomplete_step(self, index: int) -> None:
        """Clear one step directly, outside the undo history."""
        self._uncomplete(self._steps, ItemKind.STEP, index)

    def undo(self) -> Optional[UndoEntry]:
        """Revert the most recent completion.

        Returns:
            The entry that was undone, or None when there is nothing to undo.
            The phase is never changed by undo.
        """
        if not self._history:
            return None
        entry = self._history.pop()
        flags = self._ingredients if entry.kind is ItemKind.INGREDIENT else self._steps
        flags[entry.index] = False
        return entry

    def set_phase(self, phase: Phase) -> None:
        """Switch phase explicitly, e.g. from a prep/cook toggle.

        Switching back to prep does not stick while every ingredient is
        complete.
        """
        self.phase = Phase(phase)
        self._maybe_start_cooking()

    def _maybe_start_cooking(self) -> None:
        if self.phase is Phase.PREP and self.all_ingredients_complete:
            logger.debug(
                "All %d ingredients complete, moving to cook phase",
                self._ingredient_count,
            )
            self.phase = Phase.COOK

    @staticmethod
    def _in_range(flags: List[bool], kind: ItemKind, index: int) -> bool:
        if 0 <= index < len(flags):
            return True
        logger.debug(
            "Ignoring %s index %d outside 0-%d", kind.value, index, len(flags) - 1
        )
        return False

    def _complete(self, flags: List[bool], kind: ItemKind, index: int) -> bool:
        if not self._in_range(flags, kind, index):
            return False
        flags[index] = True
        self._history.append(UndoEntry(kind, index))
        return True

    def _uncomplete(self, flags: List[bool], kind: ItemKind, index: int) -> None:
        if self._in_range(flags, kind, index):
            flags[index] = False

    # --- Queries ---

    def is_ingredient_complete(self, index: int) -> bool:
        return 0 <= index < len(self._ingredients) and self._ingredients[index]

    def is_step_complete(self, index: int) -> bool:
        return 0 <= index < len(self._steps) and self._steps[index]

    @property
    def completed_ingredients(self) -> FrozenSet[int]:
        return frozenset(i for i, done in enumerate(self._ingredients) if done)

    @property
    def completed_steps(self) -> FrozenSet[int]:
        return frozenset(i for i, done in enumerate(self._steps) if done)

    @property
    def undo_history(self) -> Tuple[UndoEntry, ...]:
        """Undo entries, oldest first."""
        return tuple(self._history)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def ingredient_progress(self) -> Progress:
        return Progress(sum(self._ingredients), self._ingredient_count)

    @property
    def step_progress(self) -> Progress:
        return Progress(sum(self._steps), self._step_count)

    @property
    def all_ingredients_complete(self) -> bool:
        return all(self._ingredients)

    @property
    def all_steps_complete(self) -> bool:
        return all(self._steps)

    @property
    def is_complete(self) -> bool:
        """Whether every ingredient and every step is done."""
        return self.all_ingredients_complete and self.all_steps_complete

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of the current state for a presentation layer."""
        return {
            "phase": self.phase.value,
            "completed_ingredients": sorted(self.completed_ingredients),
            "completed_steps": sorted(self.completed_steps),
            "undo_history": [
                {"kind": entry.kind.value, "index": entry.index}
                for entry in self._history
            ],
            "is_complete": self.is_complete,
        }

    def __repr__(self) -> str:
        return (
            f"CookingProgress(phase={self.phase.value!r}, "
            f"ingredients={self.ingredient_progress}, steps={self.step_progress})"
        )
