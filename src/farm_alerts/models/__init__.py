"""Domain models for farming alerts."""

from farm_alerts.models.location import Coordinates, FarmLocation
from farm_alerts.models.weather import (
    CurrentConditions,
    DailyForecast,
    WeatherAdvisory,
    WeatherSnapshot,
)
from farm_alerts.models.alert import (
    Alert,
    AlertKind,
    AlertPriority,
    AlertReport,
)

__all__ = [
    # Location
    "Coordinates",
    "FarmLocation",
    # Weather
    "CurrentConditions",
    "DailyForecast",
    "WeatherAdvisory",
    "WeatherSnapshot",
    # Alert
    "Alert",
    "AlertKind",
    "AlertPriority",
    "AlertReport",
]
