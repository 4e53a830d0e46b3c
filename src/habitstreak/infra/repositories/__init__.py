"""Habit store implementations and the backend selector."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from ...config import STORE_BACKENDS, BaseConfig
from ...errors import StorageError
from ..database import create_db_engine, create_session_factory, init_database
from .habit import SQLModelHabitStore
from .json_file import JsonFileHabitStore


def open_store(config: BaseConfig) -> SQLModelHabitStore | JsonFileHabitStore:
    """Open the store selected by ``config.STORE_BACKEND``."""

    backend = config.STORE_BACKEND
    if backend not in STORE_BACKENDS:
        raise ValueError(f"Unknown habit store backend {backend!r}; expected one of {STORE_BACKENDS}")
    if backend == "json":
        return JsonFileHabitStore(config.JSON_PATH)

    engine = create_db_engine(config)
    try:
        init_database(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise StorageError("cannot initialize habit database") from exc
    return SQLModelHabitStore(create_session_factory(engine), engine=engine)


__all__ = ["JsonFileHabitStore", "SQLModelHabitStore", "open_store"]
