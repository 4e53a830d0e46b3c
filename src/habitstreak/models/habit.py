"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date
from typing import Any, ClassVar, Optional

from sqlmodel import Field, SQLModel

PUBLIC_FIELDS = ("id", "name", "streak", "completed_today", "last_completed_date")


class Habit(SQLModel, table=True):
    """A habit with its completion flag and consecutive-day streak."""

    __tablename__: ClassVar[str] = "habit"
    # Ids must never be reused after a delete.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=50)
    streak: int = Field(default=0, nullable=False)
    completed_today: bool = Field(default=False, nullable=False)
    last_completed_date: Optional[date] = Field(default=None)

    # One-level undo memory: the state just before the latest "mark done".
    previous_streak: Optional[int] = Field(default=None)
    previous_completed_date: Optional[date] = Field(default=None)

    def fields(self) -> dict[str, Any]:
        """Return every stored column, including the undo memory."""

        return {
            "id": self.id,
            "name": self.name,
            "streak": self.streak,
            "completed_today": self.completed_today,
            "last_completed_date": self.last_completed_date,
            "previous_streak": self.previous_streak,
            "previous_completed_date": self.previous_completed_date,
        }

    def copy_with(self, **changes: Any) -> "Habit":
        """Return a detached copy with ``changes`` applied."""

        values = self.fields()
        values.update(changes)
        return Habit(**values)

    def to_dict(self) -> dict[str, Any]:
        """Public JSON shape; the undo memory is never exposed."""

        return {
            "id": self.id,
            "name": self.name,
            "streak": self.streak,
            "completed_today": bool(self.completed_today),
            "last_completed_date": (
                self.last_completed_date.isoformat() if self.last_completed_date else None
            ),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Habit":
        """Build a Habit from its JSON form (public or full)."""

        return cls(
            id=payload.get("id"),
            name=payload["name"],
            streak=int(payload.get("streak") or 0),
            completed_today=bool(payload.get("completed_today")),
            last_completed_date=_parse_date(payload.get("last_completed_date")),
            previous_streak=payload.get("previous_streak"),
            previous_completed_date=_parse_date(payload.get("previous_completed_date")),
        )


def _parse_date(value: Any) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


__all__ = ["Habit", "PUBLIC_FIELDS"]
