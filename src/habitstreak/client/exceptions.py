"""Exceptions raised by the HabitStreak HTTP client."""

from __future__ import annotations

from typing import Any


class HabitApiError(Exception):
    """Base exception for all HabitStreak API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
        """
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def create_parse_error(cls, endpoint: str, **context: str | int) -> "HabitApiError":
        """Create an error for response parsing failures with safe context."""
        context_parts = [f"endpoint={endpoint}"]
        context_parts.extend(f"{key}={value}" for key, value in context.items())
        return cls(f"Failed to parse response ({', '.join(context_parts)})")


class HabitApiValidationError(HabitApiError):
    """Raised when the server rejects the request body (400)."""

    def __init__(self, message: str = "Validation failed", details: list[Any] | None = None) -> None:
        super().__init__(message, status_code=400)
        self.details = details or []


class HabitApiNotFoundError(HabitApiError):
    """Raised when the habit does not exist (404)."""

    def __init__(self, message: str = "Habit not found") -> None:
        super().__init__(message, status_code=404)


class HabitApiRateLimitError(HabitApiError):
    """Raised when the server rate limit is exceeded (429)."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: int | None = None) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class HabitApiServerError(HabitApiError):
    """Raised on 5xx responses."""

    def __init__(self, message: str = "Server error", status_code: int = 500) -> None:
        super().__init__(message, status_code=status_code)


class HabitApiNetworkError(HabitApiError):
    """Raised when the server could not be reached or timed out."""

    def __init__(self, message: str = "Network error") -> None:
        super().__init__(message)
