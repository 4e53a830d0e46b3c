"""Habit service: orchestrates the store and the streak engine."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import date
from typing import Any, Callable, Iterator

from ..domain.repositories.habit import HabitStore
from ..errors import NotFoundError
from ..forms import HabitForm
from ..logging_config import get_logger
from ..models.habit import Habit
from .streaks import apply_toggle, settle_day, utc_today

logger = get_logger("services.habits")


class KeyedLocks:
    """Registry of one lock per key; distinct keys never contend."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Any, threading.Lock] = {}
        self._users: dict[Any, int] = {}

    @contextmanager
    def hold(self, key: Any) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._users[key] = self._users.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._users[key] -= 1
                if not self._users[key]:
                    del self._users[key]
                    del self._locks[key]


class HabitService:
    """API operations over an injected habit store."""

    def __init__(self, store: HabitStore, today: Callable[[], date] = utc_today) -> None:
        self.store = store
        self.today = today
        self._locks = KeyedLocks()

    def list(self) -> list[Habit]:
        """Return all habits in store order, settled for today."""

        today = self.today()
        habits = [settle_day(habit, today) for habit in self.store.list_all()]
        logger.debug("Listed habits", extra={"count": len(habits)})
        return habits

    def create(self, name: Any) -> Habit:
        """Validate ``name`` and persist a fresh habit."""

        form = HabitForm.clean({"name": name})
        habit = self.store.insert(Habit(name=form.name))
        logger.info("Habit created", extra={"habit_id": habit.id})
        return habit

    def toggle(self, habit_id: int) -> Habit:
        """Flip today's completion for ``habit_id`` and return the stored result."""

        with self._locks.hold(habit_id):
            current = self.store.get_by_id(habit_id)
            if current is None:
                raise NotFoundError(habit_id)
            today = self.today()
            updated = self.store.update(apply_toggle(current, today))
            if updated is None:
                raise NotFoundError(habit_id)
        logger.info(
            "Habit toggled",
            extra={
                "habit_id": habit_id,
                "completed_today": updated.completed_today,
                "streak": updated.streak,
            },
        )
        return updated

    def remove(self, habit_id: int) -> None:
        """Delete ``habit_id``; unknown ids are not an error."""

        with self._locks.hold(habit_id):
            self.store.delete_by_id(habit_id)
        logger.info("Habit removed", extra={"habit_id": habit_id})


__all__ = ["HabitService", "KeyedLocks"]
