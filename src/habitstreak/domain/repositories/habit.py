"""Habit store protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.habit import Habit


class HabitStore(Protocol):
    """Durable persistence of Habit records keyed by id.

    Implementations raise ``StorageError`` for any backend failure and
    return detached copies that callers may keep after the call.
    """

    def list_all(self) -> list[Habit]:
        """List all habits in insertion order."""
        ...

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def insert(self, habit: Habit) -> Habit:
        """Persist a new habit and return it with its assigned id."""
        ...

    def update(self, habit: Habit) -> Optional[Habit]:
        """Overwrite an existing habit; return None when the id is gone."""
        ...

    def delete_by_id(self, habit_id: int) -> None:
        """Delete a habit by ID; unknown ids are ignored."""
        ...

    def close(self) -> None:
        """Release connections or file handles."""
        ...
