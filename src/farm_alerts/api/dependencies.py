"""FastAPI dependencies for the alerts API.

Tests replace these through `app.dependency_overrides` to inject a fake
provider or a fixed date.

## Usage

```python
app.dependency_overrides[get_weather_provider] = lambda: FakeProvider(snapshot)
app.dependency_overrides[get_today] = lambda: date(2024, 4, 10)
```
"""

from __future__ import annotations

from datetime import date, datetime
from typing import AsyncGenerator
from zoneinfo import ZoneInfo

from fastapi import Depends

from farm_alerts.config import Settings, get_settings
from farm_alerts.providers.base import WeatherProvider
from farm_alerts.providers.weatherapi import WeatherApiProvider
from farm_alerts.rules.engine import AlertEngine
from farm_alerts.rules.messages import AlertFormatter
from farm_alerts.rules.thresholds import AgronomicConfig


async def get_weather_provider(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[WeatherProvider | None, None]:
    """Yield the configured weather provider, or None without an API key.

    The route decides how to report a missing key so that request
    validation still runs first.
    """
    if not settings.weather_provider_configured:
        yield None
        return

    provider = WeatherApiProvider(
        api_key=settings.weatherapi_key,
        base_url=settings.weatherapi_base_url,
        user_agent=f"farm-alerts/{settings.app_version}",
        timeout=settings.weather_request_timeout_seconds,
    )
    try:
        yield provider
    finally:
        await provider.aclose()


def get_alert_engine(settings: Settings = Depends(get_settings)) -> AlertEngine:
    """Build an alert engine from settings."""
    return AlertEngine(
        config=AgronomicConfig.from_settings(settings),
        formatter=AlertFormatter(use_emoji=settings.alert_use_emoji),
    )


def get_today(settings: Settings = Depends(get_settings)) -> date:
    """Current date in the season calendar's timezone."""
    return datetime.now(ZoneInfo(settings.season_timezone)).date()
