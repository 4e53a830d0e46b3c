"""Pytest configuration and shared fixtures for HabitStreak tests.

This module provides store fixtures for both backends, a controllable clock,
and a Flask app wired to an injected store so tests never touch the real
data directory.
"""

from __future__ import annotations

import tempfile
from datetime import date, timedelta
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from habitstreak import create_app
from habitstreak.config import TestConfig
from habitstreak.infra.database import create_session_factory
from habitstreak.infra.repositories import JsonFileHabitStore, SQLModelHabitStore
from habitstreak.models import Habit
from habitstreak.services.habits import HabitService


class FixedClock:
    """Callable date source that tests can move forward."""

    def __init__(self, day: date) -> None:
        self.day = day

    def __call__(self) -> date:
        return self.day

    def advance(self, days: int = 1) -> date:
        self.day += timedelta(days=days)
        return self.day


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point the data directory at a temp folder and clear overrides."""

    for name in (
        "HABITSTREAK_STORE",
        "HABITSTREAK_DATABASE_URL",
        "HABITSTREAK_JSON_PATH",
        "HABITSTREAK_RATE_LIMIT",
        "HABITSTREAK_RATE_WINDOW_SECONDS",
        "HABITSTREAK_RATE_LIMIT_ENABLED",
        "HABITSTREAK_MAX_BODY_BYTES",
        "HABITSTREAK_CORS_ORIGIN",
        "HABITSTREAK_DEV_MODE",
        "HABITSTREAK_API_URL",
        "HABITSTREAK_HTTP_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HABITSTREAK_DATA_DIR", str(tmp_path / "data"))


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what ``open_store`` hands to the SQL store."""

    return create_session_factory(db_engine)


@pytest.fixture
def sql_store(session_factory):
    return SQLModelHabitStore(session_factory)


@pytest.fixture
def json_store(tmp_path):
    return JsonFileHabitStore(tmp_path / "store" / "habits.json")


@pytest.fixture(params=["sql", "json"])
def store(request):
    """Run the test once against each store backend."""

    return request.getfixturevalue(f"{request.param}_store")


# =============================================================================
# Service / App Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(date(2024, 1, 10))


@pytest.fixture
def service(sql_store, clock) -> HabitService:
    return HabitService(sql_store, today=clock)


@pytest.fixture
def config() -> TestConfig:
    return TestConfig()


@pytest.fixture
def app(config, sql_store, clock):
    """Flask app with the SQL store injected and the clock pinned."""

    flask_app = create_app(config, store=sql_store)
    flask_app.extensions["habitstreak"].today = clock
    yield flask_app


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(sql_store):
    """Insert habits with arbitrary state directly into the SQL store."""

    def _create_habit(
        name: str = "Read",
        streak: int = 0,
        completed_today: bool = False,
        last_completed_date: date | None = None,
    ) -> Habit:
        return sql_store.insert(
            Habit(
                name=name,
                streak=streak,
                completed_today=completed_today,
                last_completed_date=last_completed_date,
            )
        )

    return _create_habit
