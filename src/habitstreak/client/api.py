"""HTTP client for the HabitStreak REST API."""

from __future__ import annotations

import types
from typing import Any, NoReturn

import httpx

from ..logging_config import get_logger
from ..models.habit import Habit
from .exceptions import (
    HabitApiError,
    HabitApiNetworkError,
    HabitApiNotFoundError,
    HabitApiRateLimitError,
    HabitApiServerError,
    HabitApiValidationError,
)

# HTTP status code constants
_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404
_HTTP_TOO_MANY_REQUESTS = 429
_HTTP_INTERNAL_SERVER_ERROR = 500

HABITS_PATH = "/api/habits"

logger = get_logger("client.api")


class HabitApiClient:
    """Thin synchronous wrapper over the habits endpoints.

    Every method either returns parsed ``Habit`` records or raises a
    ``HabitApiError`` subclass; raw httpx exceptions never escape.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http_client = httpx.Client(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def __repr__(self) -> str:
        return f"HabitApiClient(base_url='{self._base_url}')"

    def __enter__(self) -> "HabitApiClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._http_client.close()

    def list_habits(self) -> list[Habit]:
        payload = self._request("GET", HABITS_PATH)
        if not isinstance(payload, list):
            raise HabitApiError.create_parse_error(HABITS_PATH, expected="list")
        return [self._parse_habit(item, HABITS_PATH) for item in payload]

    def create_habit(self, name: str) -> Habit:
        payload = self._request("POST", HABITS_PATH, json={"name": name})
        return self._parse_habit(payload, HABITS_PATH)

    def toggle_habit(self, habit_id: int) -> Habit:
        endpoint = f"{HABITS_PATH}/{habit_id}/toggle"
        return self._parse_habit(self._request("PATCH", endpoint), endpoint)

    def delete_habit(self, habit_id: int) -> None:
        self._request("DELETE", f"{HABITS_PATH}/{habit_id}")

    @staticmethod
    def _parse_habit(payload: Any, endpoint: str) -> Habit:
        try:
            return Habit.from_dict(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise HabitApiError.create_parse_error(endpoint, expected="habit") from exc

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        try:
            response = self._http_client.request(method, endpoint, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as error:
            self._handle_http_error(error)
        except httpx.TransportError as error:
            logger.warning("Request %s %s failed: %s", method, endpoint, error.__class__.__name__)
            raise HabitApiNetworkError(f"{method} {endpoint} failed") from error

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise HabitApiError.create_parse_error(endpoint, status=response.status_code) from exc

    @staticmethod
    def _handle_http_error(error: httpx.HTTPStatusError) -> NoReturn:
        """Map HTTP status errors to client exceptions."""
        response = error.response
        status_code = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("message") if isinstance(body, dict) else None

        if status_code == _HTTP_BAD_REQUEST:
            details = body.get("details") if isinstance(body, dict) else None
            raise HabitApiValidationError(message or "Validation failed", details) from error
        if status_code == _HTTP_NOT_FOUND:
            raise HabitApiNotFoundError(message or "Habit not found") from error
        if status_code == _HTTP_TOO_MANY_REQUESTS:
            retry_after = response.headers.get("Retry-After")
            raise HabitApiRateLimitError(
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
            ) from error
        if status_code >= _HTTP_INTERNAL_SERVER_ERROR:
            raise HabitApiServerError(status_code=status_code) from error
        raise HabitApiError(message or f"Unexpected status {status_code}", status_code) from error
