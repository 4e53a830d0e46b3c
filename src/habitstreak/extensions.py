"""Habit store and service wiring for the Flask app."""

from __future__ import annotations

import atexit

from flask import Flask, current_app

from .config import BaseConfig
from .domain.repositories.habit import HabitStore
from .infra.repositories import open_store
from .logging_config import get_logger
from .services.habits import HabitService

logger = get_logger("extensions")

EXTENSION_KEY = "habitstreak"


def init_store(app: Flask, config: BaseConfig, store: HabitStore | None = None) -> HabitService:
    """Open (or adopt) the habit store and attach a service to ``app``.

    The store lives for the lifetime of the process; it is closed by
    ``close_store`` which is registered at exit outside of testing.
    """

    if store is None:
        store = open_store(config)
        logger.info("Habit store opened", extra={"backend": config.STORE_BACKEND})
    service = HabitService(store)
    app.extensions[EXTENSION_KEY] = service

    if not config.TESTING:
        atexit.register(close_store, app)
    return service


def get_service() -> HabitService:
    """Return the service attached to the current app."""

    try:
        return current_app.extensions[EXTENSION_KEY]
    except KeyError:  # pragma: no cover - misconfigured app
        raise RuntimeError("Habit store not initialized") from None


def close_store(app: Flask) -> None:
    """Close the store attached to ``app``; safe to call more than once."""

    service = app.extensions.pop(EXTENSION_KEY, None)
    if service is not None:
        service.store.close()
        logger.info("Habit store closed")
