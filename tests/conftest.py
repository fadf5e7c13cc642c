"""Pytest fixtures for farming alert tests.

This module provides test fixtures that ensure:
1. No external API calls are made (the weather provider is faked or
   backed by an httpx mock transport)
2. Settings come from a controlled environment, not the developer's shell
3. Forecast windows are built from a few readable parameters
"""

import os
from datetime import date, timedelta

import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("DEBUG", "true")

from farm_alerts.models.location import FarmLocation
from farm_alerts.models.weather import (
    CurrentConditions,
    DailyForecast,
    WeatherAdvisory,
    WeatherSnapshot,
)
from farm_alerts.providers.base import WeatherProvider
from farm_alerts.rules.engine import AlertEngine
from farm_alerts.rules.messages import AlertFormatter


FORECAST_START = date(2024, 4, 10)

# Settings read from the environment that tests must control
_SETTINGS_ENV = (
    "WEATHERAPI_KEY",
    "WEATHER_FORECAST_DAYS",
    "DROUGHT_RAINFALL_MM",
    "HEAVY_RAIN_MM",
    "HEAT_STRESS_C",
    "COLD_STRESS_C",
    "PEST_HUMIDITY_PERCENT",
    "PEST_TEMP_MIN_C",
    "PEST_TEMP_MAX_C",
    "MAX_ALERTS",
    "SEASON_TIMEZONE",
    "ALERT_USE_EMOJI",
    "LOG_LEVEL",
)


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch):
    """Reset settings cache and clear alert settings before each test."""
    from farm_alerts.config import get_settings

    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeWeatherProvider(WeatherProvider):
    """Provider returning a fixed snapshot (or raising) without any HTTP."""

    name = "fake"
    base_url = "http://weather.invalid"

    def __init__(
        self,
        snapshot: WeatherSnapshot | None = None,
        error: Exception | None = None,
    ):
        super().__init__()
        self.snapshot = snapshot
        self.error = error
        self.calls: list[tuple] = []

    async def get_snapshot(self, coordinates, days=7):
        self.calls.append((coordinates, days))
        if self.error is not None:
            raise self.error
        return self.snapshot

    def _translate_response(self, response_data):
        raise NotImplementedError


@pytest.fixture
def fake_provider_cls() -> type[FakeWeatherProvider]:
    """The fake provider class, for tests that need several instances."""
    return FakeWeatherProvider


# =============================================================================
# Weather Builders
# =============================================================================


@pytest.fixture
def make_day():
    """Factory for a single forecast day with mild defaults."""

    def _make(
        offset: int = 0,
        rain_mm: float = 3.0,
        max_temp_c: float = 26.0,
        min_temp_c: float = 15.0,
        avg_temp_c: float = 20.0,
        humidity: float = 55.0,
        start: date = FORECAST_START,
    ) -> DailyForecast:
        return DailyForecast(
            date=start + timedelta(days=offset),
            max_temp_c=max_temp_c,
            min_temp_c=min_temp_c,
            avg_temp_c=avg_temp_c,
            total_precipitation_mm=rain_mm,
            avg_humidity_percent=humidity,
            condition="Partly cloudy",
        )

    return _make


@pytest.fixture
def make_snapshot(make_day):
    """Factory for a snapshot.

    Pass `days` for full control, otherwise `count` identical days are built
    from the keyword arguments accepted by `make_day`.
    """

    def _make(
        days: list[DailyForecast] | None = None,
        advisories: tuple[WeatherAdvisory, ...] = (),
        count: int = 7,
        **day_kwargs,
    ) -> WeatherSnapshot:
        if days is None:
            days = [make_day(offset=i, **day_kwargs) for i in range(count)]
        return WeatherSnapshot(
            current=CurrentConditions(
                temperature_c=22.0,
                humidity_percent=60.0,
                precipitation_mm=0.0,
                condition="Sunny",
            ),
            forecast=tuple(days),
            advisories=tuple(advisories),
            provider="fake",
        )

    return _make


@pytest.fixture
def calm_snapshot(make_snapshot) -> WeatherSnapshot:
    """Seven mild days (21mm total) that trigger no weather alerts."""
    return make_snapshot()


@pytest.fixture
def dry_hot_snapshot(make_day, make_snapshot) -> WeatherSnapshot:
    """Seven days, 7mm total rain, one day peaking at 36°C."""
    days = [make_day(offset=i, rain_mm=1.0) for i in range(7)]
    days[3] = make_day(offset=3, rain_mm=1.0, max_temp_c=36.0)
    return make_snapshot(days=days)


@pytest.fixture
def nakuru() -> FarmLocation:
    """Sample farm location in Nakuru county."""
    return FarmLocation.from_coordinates("Nakuru", -0.3031, 36.0800)


@pytest.fixture
def plain_formatter() -> AlertFormatter:
    """Formatter without emoji icons, for exact title assertions."""
    return AlertFormatter(use_emoji=False)


@pytest.fixture
def engine(plain_formatter: AlertFormatter) -> AlertEngine:
    """Alert engine with Kenya defaults and plain titles."""
    return AlertEngine(formatter=plain_formatter)
