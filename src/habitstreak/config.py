"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

STORE_BACKENDS = ("sql", "json")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitStreak"
    DB_FILENAME = "habits.db"
    JSON_FILENAME = "habits.json"
    TESTING = False

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITSTREAK_DEV_MODE", default=True)
        self.STORE_BACKEND = os.getenv("HABITSTREAK_STORE", "sql").strip().lower()
        self.DATABASE_URL = os.getenv("HABITSTREAK_DATABASE_URL", self._build_sqlite_url())
        self.JSON_PATH = Path(
            os.getenv("HABITSTREAK_JSON_PATH", str(self.DATA_DIR / self.JSON_FILENAME))
        ).expanduser()

        # HTTP plumbing
        self.CORS_ORIGIN = os.getenv("HABITSTREAK_CORS_ORIGIN", "http://localhost:5173")
        self.RATE_LIMIT_ENABLED = _env_bool("HABITSTREAK_RATE_LIMIT_ENABLED", default=True)
        self.RATE_LIMIT = _env_int("HABITSTREAK_RATE_LIMIT", 100)
        self.RATE_WINDOW_SECONDS = _env_int("HABITSTREAK_RATE_WINDOW_SECONDS", 15 * 60)
        self.MAX_CONTENT_LENGTH = _env_int("HABITSTREAK_MAX_BODY_BYTES", 10 * 1024)

        # Client side
        self.API_URL = os.getenv("HABITSTREAK_API_URL", "http://localhost:3000")
        self.HTTP_TIMEOUT = _env_float("HABITSTREAK_HTTP_TIMEOUT", 5.0)

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the store files and logs live."""

        data_root = os.getenv("HABITSTREAK_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; rate limiting is off by default."""

    TESTING = True
    __test__ = False  # not a pytest test class

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
        self.RATE_LIMIT_ENABLED = _env_bool("HABITSTREAK_RATE_LIMIT_ENABLED", default=False)


__all__ = ["BaseConfig", "DevConfig", "STORE_BACKENDS", "TestConfig"]
