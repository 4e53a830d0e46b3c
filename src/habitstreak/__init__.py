"""HabitStreak application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .domain.repositories.habit import HabitStore

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(config: BaseConfig | str | None) -> BaseConfig:
    """Return a config instance for an instance, environment name or None."""

    if isinstance(config, BaseConfig):
        return config
    if not config:
        return BaseConfig()
    return _CONFIG_MAP.get(config.lower(), BaseConfig)()


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths registered on the app."""

    yield "habitstreak.blueprints.habits"


def create_app(config: BaseConfig | str | None = None, store: HabitStore | None = None) -> Flask:
    """Create and configure the Flask application instance.

    ``store`` lets callers inject an already opened habit store; otherwise
    one is opened from the configuration.
    """

    from .extensions import init_store
    from .logging_config import setup_logging
    from .security import init_security

    config_obj = _resolve_config(config)
    app = Flask(__name__, instance_path=str(config_obj.DATA_DIR))
    app.config.from_object(config_obj)
    app.config["HABITSTREAK_CONFIG"] = config_obj

    logger = setup_logging(config_obj)
    init_security(app, config_obj)
    _register_blueprints(app)
    init_store(app, config_obj, store=store)
    _cli.init_app(app)

    logger.info("HabitStreak app created", extra={"store_backend": config_obj.STORE_BACKEND})
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
