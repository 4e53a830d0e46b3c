"""Client-side habit list with optimistic toggles.

The board applies the streak engine locally so the UI reacts before the
server answers, then either adopts the server's record or restores the
snapshot taken before the optimistic change. Failures are logged and never
raised to the caller.

UI event handlers may call into the board from several threads at once.
Every read-modify-write of ``habits`` and ``states`` happens under one lock;
network calls and listener callbacks run outside it.
"""

from __future__ import annotations

import threading
from datetime import date
from enum import Enum
from typing import Callable, Optional, Protocol

from ..logging_config import get_logger
from ..models.habit import Habit
from ..services.streaks import apply_toggle, utc_today
from .exceptions import HabitApiError

logger = get_logger("client.board")


class HabitApi(Protocol):
    """Subset of ``HabitApiClient`` the board depends on."""

    def list_habits(self) -> list[Habit]: ...

    def create_habit(self, name: str) -> Habit: ...

    def toggle_habit(self, habit_id: int) -> Habit: ...

    def delete_habit(self, habit_id: int) -> None: ...


class RowState(str, Enum):
    """Reconciliation state of a single habit row."""

    IDLE = "idle"
    OPTIMISTIC = "optimistic"
    RECONCILED = "reconciled"
    ROLLED_BACK = "rolled_back"


class HabitBoard:
    """Local list of habits kept consistent with the server."""

    def __init__(self, api: HabitApi, today: Callable[[], date] = utc_today) -> None:
        self.api = api
        self.today = today
        self.habits: list[Habit] = []
        self.states: dict[int, RowState] = {}
        self.loading = True
        self._listeners: list[Callable[["HabitBoard"], None]] = []
        self._lock = threading.RLock()

    def subscribe(self, listener: Callable[["HabitBoard"], None]) -> None:
        """Call ``listener`` after every visible change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _index_of(self, habit_id: int) -> Optional[int]:
        for index, habit in enumerate(self.habits):
            if habit.id == habit_id:
                return index
        return None

    def get(self, habit_id: int) -> Optional[Habit]:
        with self._lock:
            index = self._index_of(habit_id)
            return None if index is None else self.habits[index]

    def state_of(self, habit_id: int) -> RowState:
        return self.states.get(habit_id, RowState.IDLE)

    def refresh(self) -> bool:
        """Replace local rows with the server's list.

        Rows with a toggle in flight keep their optimistic value and state;
        the pending request settles them.
        """

        try:
            habits = self.api.list_habits()
        except HabitApiError as exc:
            logger.warning("Failed to fetch habits", extra={"error": str(exc)})
            with self._lock:
                self.loading = False
            self._notify()
            return False
        with self._lock:
            pending = {
                habit.id: habit
                for habit in self.habits
                if self.states.get(habit.id) is RowState.OPTIMISTIC
            }
            self.habits = [pending.get(habit.id, habit) for habit in habits]
            self.states = {
                habit.id: RowState.OPTIMISTIC if habit.id in pending else RowState.IDLE
                for habit in self.habits
            }
            self.loading = False
        self._notify()
        return True

    def add(self, name: str) -> Optional[Habit]:
        """Create a habit; the row appears once the server assigned its id."""

        if not name or not name.strip():
            return None
        try:
            habit = self.api.create_habit(name)
        except HabitApiError as exc:
            logger.warning("Failed to add habit", extra={"error": str(exc)})
            return None
        with self._lock:
            self.habits = [*self.habits, habit]
            self.states[habit.id] = RowState.IDLE
        self._notify()
        return habit

    def toggle(self, habit_id: int) -> Optional[Habit]:
        """Toggle optimistically, then reconcile with the server or roll back.

        At most one request per row is in flight; a toggle on a row that is
        still ``OPTIMISTIC`` is ignored.
        """

        with self._lock:
            index = self._index_of(habit_id)
            if index is None:
                return None
            if self.state_of(habit_id) is RowState.OPTIMISTIC:
                logger.debug("Toggle ignored while another is in flight", extra={"habit_id": habit_id})
                return None
            snapshot = self.habits[index]
            self._replace(habit_id, apply_toggle(snapshot, self.today()), RowState.OPTIMISTIC)
        self._notify()

        try:
            confirmed = self.api.toggle_habit(habit_id)
        except HabitApiError as exc:
            logger.warning(
                "Toggle failed; rolling back",
                extra={"habit_id": habit_id, "error": str(exc)},
            )
            self._settle(habit_id, snapshot, RowState.ROLLED_BACK)
            return snapshot

        self._settle(habit_id, confirmed, RowState.RECONCILED)
        return confirmed

    def delete(self, habit_id: int) -> bool:
        """Remove the row at once; refetch the whole list if the server fails."""

        with self._lock:
            self.habits = [habit for habit in self.habits if habit.id != habit_id]
            self.states.pop(habit_id, None)
        self._notify()
        try:
            self.api.delete_habit(habit_id)
        except HabitApiError as exc:
            logger.warning(
                "Delete failed; refetching habits",
                extra={"habit_id": habit_id, "error": str(exc)},
            )
            self.refresh()
            return False
        return True

    def _settle(self, habit_id: int, habit: Habit, state: RowState) -> None:
        with self._lock:
            replaced = self._replace(habit_id, habit, state)
        if replaced:
            self._notify()

    def _replace(self, habit_id: int, habit: Habit, state: RowState) -> bool:
        # Caller holds the lock. The row may have been deleted while the
        # request was in flight.
        index = self._index_of(habit_id)
        if index is None:
            return False
        habits = list(self.habits)
        habits[index] = habit
        self.habits = habits
        self.states[habit_id] = state
        return True


__all__ = ["HabitApi", "HabitBoard", "RowState"]
