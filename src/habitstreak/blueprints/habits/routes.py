"""Habit routes."""

from __future__ import annotations

from flask import jsonify, request
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from ...errors import HabitStreakError, StorageError, ValidationError
from ...extensions import get_service
from ...logging_config import get_logger
from ...rate_limiter import RateLimitExceededError
from . import bp

logger = get_logger("blueprints.habits")


@bp.get("")
def list_habits():
    """Return every habit."""

    return jsonify([habit.to_dict() for habit in get_service().list()])


@bp.post("")
def create_habit():
    """Create a habit from ``{"name": ...}``."""

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError(
            "Request body must be a JSON object",
            details=[{"field": "__root__", "message": "Expected a JSON object"}],
        )
    habit = get_service().create(payload.get("name"))
    return jsonify(habit.to_dict()), 201


@bp.patch("/<int:habit_id>/toggle")
def toggle_habit(habit_id: int):
    """Toggle habit completion state for today."""

    return jsonify(get_service().toggle(habit_id).to_dict())


@bp.delete("/<int:habit_id>")
def delete_habit(habit_id: int):
    """Remove a habit; unknown ids still succeed."""

    get_service().remove(habit_id)
    return "", 204


def _error(code: str, message: str, status: int, **extra):
    body = {"error": code, "message": message}
    body.update(extra)
    return jsonify(body), status


@bp.app_errorhandler(ValidationError)
def _validation_error(exc: ValidationError):
    return _error(exc.code, str(exc), exc.status_code, details=exc.details)


@bp.app_errorhandler(StorageError)
def _storage_error(exc: StorageError):
    logger.error(
        "Storage failure while handling request",
        extra={"path": request.path, "method": request.method},
        exc_info=exc,
    )
    return _error("internal_error", "Internal Server Error", 500)


@bp.app_errorhandler(HabitStreakError)
def _habit_error(exc: HabitStreakError):
    return _error(exc.code, str(exc), exc.status_code)


@bp.app_errorhandler(RateLimitExceededError)
def _rate_limited(exc: RateLimitExceededError):
    response, status = _error("rate_limited", exc.message, 429)
    response.headers["Retry-After"] = str(exc.retry_after)
    return response, status


@bp.app_errorhandler(RequestEntityTooLarge)
def _too_large(exc: RequestEntityTooLarge):
    return _error("payload_too_large", "Request body too large", 413)


@bp.app_errorhandler(Exception)
def _unhandled(exc: Exception):
    if isinstance(exc, HTTPException):
        return _error(exc.name.lower().replace(" ", "_"), exc.description or exc.name, exc.code or 500)
    logger.error(
        "Unhandled error while handling request",
        extra={"path": request.path, "method": request.method},
        exc_info=exc,
    )
    return _error("internal_error", "Internal Server Error", 500)
