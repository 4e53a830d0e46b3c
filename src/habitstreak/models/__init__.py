"""SQLModel table exports."""

from .habit import Habit

__all__ = ["Habit"]
