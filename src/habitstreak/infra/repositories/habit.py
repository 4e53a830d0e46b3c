"""SQLModel implementation of the habit store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ...errors import StorageError
from ...logging_config import get_logger
from ...models.habit import Habit

logger = get_logger("infra.sql_store")


class SQLModelHabitStore:
    """SQLModel-based habit store backed by a relational table."""

    def __init__(self, session_factory: Callable[[], Session], engine: Engine | None = None):
        """Initialize with a session factory; ``engine`` is disposed on close."""
        self.session_factory = session_factory
        self._engine = engine

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error("SQL store %s failed", operation, exc_info=True)
            raise StorageError(f"habit store {operation} failed") from exc

    def list_all(self) -> list[Habit]:
        """List all habits in insertion order."""
        with self._guard("list"), self.session_factory() as session:
            rows = list(session.exec(select(Habit).order_by(Habit.id)).all())  # type: ignore[arg-type]
            session.expunge_all()
            return rows

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self._guard("get"), self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def insert(self, habit: Habit) -> Habit:
        """Persist a new habit; the database assigns the id."""
        with self._guard("insert"), self.session_factory() as session:
            record = habit.copy_with(id=None)
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
            return record

    def update(self, habit: Habit) -> Optional[Habit]:
        """Overwrite the stored columns of an existing habit."""
        with self._guard("update"), self.session_factory() as session:
            existing = session.get(Habit, habit.id)
            if existing is None:
                return None
            for key, value in habit.fields().items():
                if key != "id":
                    setattr(existing, key, value)
            session.add(existing)
            session.commit()
            session.refresh(existing)
            session.expunge(existing)
            return existing

    def delete_by_id(self, habit_id: int) -> None:
        """Delete a habit by ID."""
        with self._guard("delete"), self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit:
                session.delete(habit)
                session.commit()

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
