"""Error taxonomy shared by the service, stores and HTTP layer."""

from __future__ import annotations

from typing import Any


class HabitStreakError(Exception):
    """Base exception for habit operations."""

    status_code = 500
    code = "internal_error"


class ValidationError(HabitStreakError):
    """Raised when user input is rejected (e.g. an empty or oversized name)."""

    status_code = 400
    code = "validation_error"

    def __init__(self, message: str, details: list[dict[str, Any]] | None = None) -> None:
        self.details = details or []
        super().__init__(message)


class NotFoundError(HabitStreakError):
    """Raised when a habit id does not exist."""

    status_code = 404
    code = "not_found"

    def __init__(self, habit_id: Any) -> None:
        self.habit_id = habit_id
        super().__init__(f"Habit {habit_id} not found")


class StorageError(HabitStreakError):
    """Raised when the persistence layer fails.

    The message is meant for server logs only; HTTP clients receive an
    opaque body.
    """


__all__ = ["HabitStreakError", "NotFoundError", "StorageError", "ValidationError"]
