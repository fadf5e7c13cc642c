"""Base weather provider abstraction.

This module defines the interface for weather data providers. Every
provider translates its API response into a `WeatherSnapshot`
(`farm_alerts.models.weather`), so the alert engine never sees
provider-specific payloads.

### Canonical Units
- Temperature: Celsius (°C)
- Precipitation: millimeters (mm)
- Humidity: percentage (0-100)

### Translation Requirements
Each provider must implement `_translate_response()` to convert its API
response into the canonical `WeatherSnapshot` model.

### Failure Semantics
A snapshot is all-or-nothing. Network failures, non-success statuses and
malformed payloads all raise `ProviderError`; callers never receive a
partial snapshot.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from farm_alerts.models.location import Coordinates
from farm_alerts.models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)


def parse_retry_after(value: str | None) -> int | None:
    """Seconds from a Retry-After header, None if absent or an HTTP date."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class ProviderError(Exception):
    """Base exception for weather provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class RateLimitError(ProviderError):
    """Raised when provider rate limit is exceeded."""

    def __init__(
        self,
        provider: str,
        retry_after: int | None = None,
        status_code: int | None = None,
    ):
        super().__init__(
            f"Rate limit exceeded for {provider}",
            provider=provider,
            status_code=status_code,
        )
        self.retry_after = retry_after


class AuthenticationError(ProviderError):
    """Raised when authentication fails."""

    pass


class WeatherProvider(ABC):
    """Abstract base class for weather data providers.

    Attributes:
        name: Provider name
        base_url: Base URL for the API
        requires_api_key: Whether this provider requires an API key

    Example:
        ```python
        class MyProvider(WeatherProvider):
            name = "my_provider"
            base_url = "https://api.example.com"

            async def get_snapshot(self, coordinates, days=7):
                response = await self._fetch(...)
                return self._translate_response(response.json())
        ```
    """

    name: str
    base_url: str
    requires_api_key: bool = False

    def __init__(
        self,
        api_key: str | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the provider.

        Args:
            api_key: API key if required by the provider
            user_agent: User-Agent string for requests
            timeout: Request timeout in seconds
            client: Pre-built HTTP client (tests inject a mock transport)
        """
        self.api_key = api_key
        self.user_agent = user_agent or "farm-alerts/0.1.0"
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> WeatherProvider:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
        reraise=True,
    )
    async def _fetch(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Fetch data from the API with retry logic.

        Timeouts and network errors are retried; HTTP error statuses are not.

        Args:
            url: Full URL to fetch
            params: Query parameters
            headers: Additional headers

        Returns:
            HTTP response

        Raises:
            ProviderError: If the API returns an error status
            RateLimitError: If rate limit is exceeded
            AuthenticationError: If the API rejects the credentials
        """
        client = self._get_client()
        request_headers = self._get_default_headers()
        if headers:
            request_headers.update(headers)

        response = await client.get(url, params=params, headers=request_headers)

        # Handle rate limiting
        if response.status_code == 429:
            raise RateLimitError(
                self.name,
                retry_after=parse_retry_after(response.headers.get("Retry-After")),
                status_code=429,
            )

        if response.status_code in (401, 403):
            raise AuthenticationError(
                "Invalid API key",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        # Handle other errors
        if response.status_code >= 400:
            logger.error(
                f"{self.name} request failed: {response.status_code} {response.text[:200]}"
            )
            raise ProviderError(
                f"API request failed: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        return response

    @abstractmethod
    async def get_snapshot(
        self,
        coordinates: Coordinates,
        days: int = 7,
    ) -> WeatherSnapshot:
        """Get current conditions, daily forecast and advisories.

        Args:
            coordinates: Location coordinates
            days: Number of forecast days

        Returns:
            WeatherSnapshot in canonical format

        Raises:
            ProviderError: If the snapshot cannot be retrieved
        """
        pass

    @abstractmethod
    def _translate_response(self, response_data: dict[str, Any]) -> WeatherSnapshot:
        """Translate provider-specific response to canonical format.

        Args:
            response_data: Raw JSON response from provider

        Returns:
            WeatherSnapshot in canonical format
        """
        pass

    def get_max_forecast_days(self) -> int:
        """Get maximum forecast days supported."""
        return 7
