"""Repository protocols."""

from .habit import HabitStore

__all__ = ["HabitStore"]
