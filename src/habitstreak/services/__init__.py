"""Service layer exports."""

from .habits import HabitService
from .streaks import apply_toggle, settle_day, transition, utc_today, yesterday

__all__ = [
    "HabitService",
    "apply_toggle",
    "settle_day",
    "transition",
    "utc_today",
    "yesterday",
]
