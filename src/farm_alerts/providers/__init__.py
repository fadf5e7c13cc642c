"""Weather data providers."""

from farm_alerts.providers.base import (
    AuthenticationError,
    ProviderError,
    RateLimitError,
    WeatherProvider,
)
from farm_alerts.providers.weatherapi import WeatherApiProvider

__all__ = [
    "WeatherProvider",
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    "WeatherApiProvider",
]
