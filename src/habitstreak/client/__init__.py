"""Client-side access to the HabitStreak API."""

from .api import HabitApiClient
from .board import HabitBoard, RowState
from .exceptions import (
    HabitApiError,
    HabitApiNetworkError,
    HabitApiNotFoundError,
    HabitApiRateLimitError,
    HabitApiServerError,
    HabitApiValidationError,
)

__all__ = [
    "HabitApiClient",
    "HabitApiError",
    "HabitApiNetworkError",
    "HabitApiNotFoundError",
    "HabitApiRateLimitError",
    "HabitApiServerError",
    "HabitApiValidationError",
    "HabitBoard",
    "RowState",
]
