"""Flat-file JSON implementation of the habit store.

The whole document is held in memory and rewritten atomically on every
change. ``next_id`` is persisted alongside the records so ids are never
reused, even after the newest habit is deleted.
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any, Optional

from ...errors import StorageError
from ...logging_config import get_logger
from ...models.habit import Habit

logger = get_logger("infra.json_store")


def _record(habit: Habit) -> dict[str, Any]:
    data = habit.fields()
    for key in ("last_completed_date", "previous_completed_date"):
        if data[key] is not None:
            data[key] = data[key].isoformat()
    return data


class JsonFileHabitStore:
    """Habit store persisted as a single JSON document."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.RLock()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self._write({"next_id": 1, "habits": []})
            self.data = self._read()
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.error("Could not open JSON store", extra={"path": str(self.path)}, exc_info=True)
            raise StorageError(f"cannot open habit store at {self.path}") from exc

    def _read(self) -> dict[str, Any]:
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict) or not isinstance(data.get("habits"), list):
            raise ValueError("habit document must contain a 'habits' list")
        for row in data["habits"]:
            if not isinstance(row, dict):
                raise ValueError("habit records must be objects")
            Habit.from_dict(row)
        data.setdefault(
            "next_id", max((int(h["id"]) for h in data["habits"]), default=0) + 1
        )
        return data

    def _write(self, obj: dict[str, Any]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(obj, f, indent=2)
        os.replace(tmp, self.path)

    def _commit(self, operation: str, next_id: int, habits: list[dict[str, Any]]) -> None:
        """Write the new document first; memory only changes once it is on disk."""
        document = {"next_id": next_id, "habits": habits}
        try:
            self._write(document)
        except OSError as exc:
            logger.error("JSON store %s failed", operation, exc_info=True)
            raise StorageError(f"habit store {operation} failed") from exc
        self.data = document

    def _index_of(self, habit_id: int) -> Optional[int]:
        for index, row in enumerate(self.data["habits"]):
            if row["id"] == habit_id:
                return index
        return None

    def list_all(self) -> list[Habit]:
        with self._lock:
            return [Habit.from_dict(row) for row in self.data["habits"]]

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        with self._lock:
            index = self._index_of(habit_id)
            if index is None:
                return None
            return Habit.from_dict(self.data["habits"][index])

    def insert(self, habit: Habit) -> Habit:
        with self._lock:
            next_id = int(self.data["next_id"])
            record = habit.copy_with(id=next_id)
            self._commit("insert", next_id + 1, [*self.data["habits"], _record(record)])
            return record

    def update(self, habit: Habit) -> Optional[Habit]:
        with self._lock:
            index = self._index_of(habit.id)
            if index is None:
                return None
            habits = list(self.data["habits"])
            habits[index] = _record(habit)
            self._commit("update", self.data["next_id"], habits)
            return Habit.from_dict(habits[index])

    def delete_by_id(self, habit_id: int) -> None:
        with self._lock:
            index = self._index_of(habit_id)
            if index is None:
                return
            habits = [row for row in self.data["habits"] if row["id"] != habit_id]
            self._commit("delete", self.data["next_id"], habits)

    def close(self) -> None:
        """Nothing is held open between writes."""
