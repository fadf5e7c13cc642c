"""Exceptions surfaced to API callers.

Each exception carries the HTTP status the API responds with. The API
turns any `FarmAlertsError` into `{"error": <message>, "alerts": []}`.
"""

from __future__ import annotations


class FarmAlertsError(Exception):
    """Base exception for farm alerts errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class RequestValidationFailed(FarmAlertsError):
    """Raised when a required request field is missing or malformed."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class WeatherUnavailableError(FarmAlertsError):
    """Raised when the weather snapshot cannot be fetched."""

    status_code = 502


class ConfigurationError(FarmAlertsError):
    """Raised when a required setting (e.g. an API key) is missing."""

    status_code = 503
