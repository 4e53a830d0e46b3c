"""HTTP plumbing: CORS, security headers and per-client rate limiting."""

from __future__ import annotations

from flask import Flask, Response, current_app, g, request

from .config import BaseConfig
from .rate_limiter import ClientRateLimiter, RateLimitExceededError

ALLOWED_METHODS = "GET, POST, PATCH, DELETE"
ALLOWED_HEADERS = "Content-Type"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def _apply_cors(response: Response, origin: str) -> None:
    response.headers["Access-Control-Allow-Origin"] = origin
    response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
    response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
    response.headers["Vary"] = "Origin"


def init_security(app: Flask, config: BaseConfig) -> None:
    """Register request hooks for CORS, headers and rate limiting."""

    limiter = ClientRateLimiter(config.RATE_LIMIT, config.RATE_WINDOW_SECONDS)
    app.extensions["habitstreak.rate_limiter"] = limiter

    @app.before_request
    def _answer_preflight():
        """Short-circuit CORS preflight before any other hook runs."""

        if request.method == "OPTIONS":
            response = current_app.make_response(("", 204))
            _apply_cors(response, config.CORS_ORIGIN)
            return response
        return None

    @app.before_request
    def _enforce_rate_limit() -> None:
        if not config.RATE_LIMIT_ENABLED:
            return
        allowed, bucket = limiter.check(request.remote_addr or "unknown")
        g.rate_bucket = bucket
        if not allowed:
            raise RateLimitExceededError(retry_after=bucket.retry_after())

    @app.after_request
    def _decorate_response(response: Response) -> Response:
        _apply_cors(response, config.CORS_ORIGIN)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        bucket = g.pop("rate_bucket", None)
        if bucket is not None:
            response.headers["RateLimit-Limit"] = str(bucket.limit)
            response.headers["RateLimit-Remaining"] = str(bucket.remaining)
            response.headers["RateLimit-Reset"] = str(bucket.reset_after())
        return response


__all__ = ["SECURITY_HEADERS", "init_security"]
