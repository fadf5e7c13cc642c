"""WeatherAPI.com provider.

## API Documentation Summary
Source: https://www.weatherapi.com/docs/

## Endpoint
- Base URL: https://api.weatherapi.com/v1/forecast.json
- Full URL example:
  https://api.weatherapi.com/v1/forecast.json?key=KEY&q=-1.29,36.82&days=7&aqi=no&alerts=yes

## Authentication
- API key as the `key` query parameter
- Invalid keys return 401/403 with `{"error": {"code": 2006, "message": ...}}`

## Request Parameters
| Parameter | Description |
|-----------|-------------|
| key | API key |
| q | "lat,lon" |
| days | Forecast days (1-14, plan dependent) |
| aqi | "no" - air quality not needed |
| alerts | "yes" - include government severe-weather alerts |

## Response Format
```json
{
  "location": {"name": "Nairobi", "localtime": "2024-04-10 09:00"},
  "current": {
    "temp_c": 21.0,
    "humidity": 64,
    "precip_mm": 0.0,
    "condition": {"text": "Partly cloudy"}
  },
  "forecast": {
    "forecastday": [
      {
        "date": "2024-04-10",
        "day": {
          "maxtemp_c": 26.1,
          "mintemp_c": 14.2,
          "avgtemp_c": 19.8,
          "totalprecip_mm": 4.3,
          "avghumidity": 71,
          "condition": {"text": "Patchy rain possible"}
        }
      }
    ]
  },
  "alerts": {"alert": [{"headline": "...", "event": "...", "desc": "..."}]}
}
```

## Variable Translation (WeatherAPI -> Canonical)

| WeatherAPI Field | Canonical Field |
|------------------|-----------------|
| current.temp_c | current.temperature_c |
| current.humidity | current.humidity_percent |
| current.precip_mm | current.precipitation_mm |
| current.condition.text | current.condition |
| forecastday[].date | forecast[].date |
| day.maxtemp_c | forecast[].max_temp_c |
| day.mintemp_c | forecast[].min_temp_c |
| day.avgtemp_c | forecast[].avg_temp_c |
| day.totalprecip_mm | forecast[].total_precipitation_mm |
| day.avghumidity | forecast[].avg_humidity_percent |
| day.condition.text | forecast[].condition |
| alerts.alert[].event | advisories[].event |
| alerts.alert[].headline | advisories[].headline |
| alerts.alert[].desc | advisories[].description |
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import ValidationError

from farm_alerts.models.location import Coordinates
from farm_alerts.models.weather import (
    CurrentConditions,
    DailyForecast,
    WeatherAdvisory,
    WeatherSnapshot,
)
from farm_alerts.providers.base import AuthenticationError, ProviderError, WeatherProvider

logger = logging.getLogger(__name__)


def _condition_text(block: dict[str, Any]) -> str:
    """Extract condition text from a current/day block."""
    condition = block.get("condition") or {}
    return condition.get("text") or "Unknown"


class WeatherApiProvider(WeatherProvider):
    """WeatherAPI.com forecast provider.

    Example:
        ```python
        async with WeatherApiProvider(api_key="your-api-key") as provider:
            snapshot = await provider.get_snapshot(
                Coordinates(latitude=-1.2921, longitude=36.8219)
            )
        ```
    """

    name = "weatherapi"
    base_url = "https://api.weatherapi.com/v1"
    requires_api_key = True

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize WeatherAPI provider.

        Args:
            api_key: API key from weatherapi.com
            base_url: Override the API base URL
            user_agent: Optional User-Agent string
            timeout: Request timeout in seconds
            client: Pre-built HTTP client
        """
        super().__init__(
            api_key=api_key, user_agent=user_agent, timeout=timeout, client=client
        )
        if base_url:
            self.base_url = base_url.rstrip("/")

    async def get_snapshot(
        self,
        coordinates: Coordinates,
        days: int = 7,
    ) -> WeatherSnapshot:
        """Get weather snapshot from WeatherAPI.

        Args:
            coordinates: Location (lat/lon)
            days: Forecast days to request

        Returns:
            WeatherSnapshot in canonical format

        Raises:
            ProviderError: If the request fails or the payload is malformed
            AuthenticationError: If API key is missing or invalid
        """
        if not self.api_key:
            raise AuthenticationError(
                "API key required for WeatherAPI",
                provider=self.name,
            )

        url = f"{self.base_url}/forecast.json"
        params: dict[str, Any] = {
            "key": self.api_key,
            "q": str(coordinates),
            "days": min(days, self.get_max_forecast_days()),
            "aqi": "no",
            "alerts": "yes",
        }

        try:
            response = await self._fetch(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"{self.name} request error: {e!r}")
            raise ProviderError(
                f"Failed to fetch weather data: {e}",
                provider=self.name,
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"Failed to parse response: {e}",
                provider=self.name,
                response_body=response.text,
            ) from e

        return self._translate_response(data)

    def _translate_response(self, response_data: dict[str, Any]) -> WeatherSnapshot:
        """Translate WeatherAPI response to canonical format.

        See module docstring for detailed field mapping.
        """
        try:
            current_data = response_data["current"]
            current = CurrentConditions(
                temperature_c=current_data["temp_c"],
                humidity_percent=current_data["humidity"],
                precipitation_mm=current_data.get("precip_mm") or 0.0,
                condition=_condition_text(current_data),
            )

            forecast: list[DailyForecast] = []
            for entry in response_data["forecast"]["forecastday"]:
                day = entry["day"]
                forecast.append(
                    DailyForecast(
                        date=entry["date"],
                        max_temp_c=day["maxtemp_c"],
                        min_temp_c=day["mintemp_c"],
                        avg_temp_c=day["avgtemp_c"],
                        total_precipitation_mm=day.get("totalprecip_mm") or 0.0,
                        avg_humidity_percent=day["avghumidity"],
                        condition=_condition_text(day),
                    )
                )

            alerts_block = response_data.get("alerts") or {}
            advisories = [
                WeatherAdvisory(
                    event=alert.get("event") or "Weather Alert",
                    headline=alert.get("headline") or "",
                    description=alert.get("desc") or None,
                )
                for alert in alerts_block.get("alert") or []
            ]
        except (KeyError, TypeError, ValidationError) as e:
            raise ProviderError(
                f"Unexpected response format: {e}",
                provider=self.name,
            ) from e

        return WeatherSnapshot(
            current=current,
            forecast=tuple(forecast),
            advisories=tuple(advisories),
            provider=self.name,
            fetched_at=datetime.now(timezone.utc),
        )

    def get_max_forecast_days(self) -> int:
        """WeatherAPI allows up to 14 days (plan dependent)."""
        return 14
