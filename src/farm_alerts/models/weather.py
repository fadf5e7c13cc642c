"""Weather snapshot models.

A `WeatherSnapshot` is everything the alert engine knows about the weather
for one request: current conditions, the daily forecast window and any
severe-weather advisories issued by the provider. Providers translate their
responses into these models; the engine only reads them.

### Canonical Units
- Temperature: Celsius (°C)
- Precipitation: millimeters (mm)
- Humidity: percentage (0-100)
"""

from __future__ import annotations

import datetime as dt
from statistics import fmean

from pydantic import BaseModel, ConfigDict, Field


class CurrentConditions(BaseModel):
    """Observed conditions at fetch time."""

    model_config = ConfigDict(frozen=True)

    temperature_c: float = Field(..., description="Temperature in Celsius")
    humidity_percent: float = Field(
        ..., ge=0, le=100, description="Relative humidity percentage"
    )
    precipitation_mm: float = Field(
        default=0.0, ge=0, description="Precipitation in mm"
    )
    condition: str = Field(default="Unknown", description="Condition text from provider")


class DailyForecast(BaseModel):
    """Forecast summary for a single day."""

    model_config = ConfigDict(frozen=True)

    date: dt.date = Field(..., description="Forecast date (location local)")
    max_temp_c: float = Field(..., description="Daily maximum temperature in Celsius")
    min_temp_c: float = Field(..., description="Daily minimum temperature in Celsius")
    avg_temp_c: float = Field(..., description="Daily average temperature in Celsius")
    total_precipitation_mm: float = Field(
        default=0.0, ge=0, description="Total precipitation for the day in mm"
    )
    avg_humidity_percent: float = Field(
        ..., ge=0, le=100, description="Average relative humidity percentage"
    )
    condition: str = Field(default="Unknown", description="Condition text from provider")


class WeatherAdvisory(BaseModel):
    """A severe-weather warning issued by the provider."""

    model_config = ConfigDict(frozen=True)

    event: str = Field(..., description="Event name, e.g. 'Flood Warning'")
    headline: str = Field(default="", description="Short headline")
    description: str | None = Field(default=None, description="Full advisory text")

    @property
    def summary(self) -> str:
        """Description if present, otherwise the headline."""
        return self.description or self.headline


class WeatherSnapshot(BaseModel):
    """Immutable weather input for one alert evaluation."""

    model_config = ConfigDict(frozen=True)

    current: CurrentConditions
    forecast: tuple[DailyForecast, ...] = Field(
        default=(), description="Daily forecast entries, ordered by date"
    )
    advisories: tuple[WeatherAdvisory, ...] = Field(
        default=(), description="Provider-issued severe-weather advisories"
    )

    # Metadata
    provider: str | None = Field(default=None, description="Weather data provider name")
    fetched_at: dt.datetime | None = Field(
        default=None, description="When the snapshot was fetched"
    )

    @property
    def total_precipitation_mm(self) -> float:
        """Sum of daily precipitation across the forecast window."""
        return sum(day.total_precipitation_mm for day in self.forecast)

    @property
    def highest_max_temp_c(self) -> float | None:
        """Highest daily maximum in the window, None if the window is empty."""
        if not self.forecast:
            return None
        return max(day.max_temp_c for day in self.forecast)

    @property
    def lowest_min_temp_c(self) -> float | None:
        """Lowest daily minimum in the window, None if the window is empty."""
        if not self.forecast:
            return None
        return min(day.min_temp_c for day in self.forecast)

    @property
    def mean_humidity_percent(self) -> float | None:
        """Mean of daily average humidity, None if the window is empty."""
        if not self.forecast:
            return None
        return fmean(day.avg_humidity_percent for day in self.forecast)

    @property
    def mean_avg_temp_c(self) -> float | None:
        """Mean of daily average temperature, None if the window is empty."""
        if not self.forecast:
            return None
        return fmean(day.avg_temp_c for day in self.forecast)
