"""Signal evaluators.

Each evaluator inspects one slice of the weather snapshot (or the season
tags) and emits zero or more alerts. Evaluators are independent of each
other: none reads another's output, so they can be added, removed or tested
in isolation. They never raise for a well-formed snapshot; an empty
forecast window simply produces no weather alerts.

## Evaluators

| Evaluator                  | Trigger                                     | Priority |
|----------------------------|---------------------------------------------|----------|
| SeasonalEvaluator          | Planting or harvest window                  | high     |
| DroughtEvaluator           | Window rainfall < drought threshold         | high     |
| HeavyRainEvaluator         | Any day rainfall > heavy rain threshold     | high     |
| HeatStressEvaluator        | Highest max temp > heat threshold           | medium   |
| ColdStressEvaluator        | Lowest min temp < cold threshold            | medium   |
| PestRiskEvaluator          | Humid and warm (mean over window)           | medium   |
| ProviderAdvisoryEvaluator  | Each provider severe-weather advisory       | high     |
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from farm_alerts.models.alert import Alert, AlertKind, AlertPriority
from farm_alerts.models.location import FarmLocation
from farm_alerts.models.weather import WeatherSnapshot
from farm_alerts.rules.messages import AlertFormatter
from farm_alerts.rules.thresholds import DEFAULT_CONFIG, AgronomicConfig
from farm_alerts.seasons.calendar import SeasonTags


# Timing windows
TIMING_LONG_RAINS_PLANTING = "Next 2-4 weeks"
TIMING_SHORT_RAINS_PLANTING = "Next 2-3 weeks"
TIMING_LONG_RAINS_HARVEST = "Next 2-4 weeks"
TIMING_SHORT_RAINS_HARVEST = "Now"
TIMING_IMMEDIATE = "Immediate action required"
TIMING_PROVIDER_ADVISORY = "Check forecast"


def days_until(index: int) -> str:
    """Timing label for a forecast day offset (0 = today)."""
    if index == 0:
        return "Today"
    if index == 1:
        return "In 1 day"
    return f"In {index} days"


class Evaluator(ABC):
    """Base class for a single alert rule.

    Subclasses implement `evaluate()` and use `_build()` to create alerts
    with text from the shared formatter.

    Example:
        ```python
        class FrostEvaluator(Evaluator):
            name = "frost"

            def evaluate(self, snapshot, season, location):
                if snapshot.lowest_min_temp_c is not None and snapshot.lowest_min_temp_c < 0:
                    return [self._build(...)]
                return []
        ```
    """

    name: str

    def __init__(
        self,
        config: AgronomicConfig | None = None,
        formatter: AlertFormatter | None = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.formatter = formatter or AlertFormatter()

    @abstractmethod
    def evaluate(
        self,
        snapshot: WeatherSnapshot,
        season: SeasonTags,
        location: FarmLocation,
    ) -> list[Alert]:
        """Evaluate this rule.

        Args:
            snapshot: Weather input for the request
            season: Season tags for the evaluation date
            location: Farm location (used in message text only)

        Returns:
            Zero or more alerts
        """

    @property
    def window_timing(self) -> str:
        """Timing label covering the whole forecast window."""
        return f"Next {self.config.forecast_window_days} days"

    def _build(
        self,
        template: str,
        kind: AlertKind,
        priority: AlertPriority,
        timing: str,
        location: FarmLocation,
        **context: Any,
    ) -> Alert:
        """Create an alert with rendered text."""
        text = self.formatter.render(template, location=location.display_name(), **context)
        return Alert(
            kind=kind,
            title=text.title,
            message=text.message,
            priority=priority,
            timing=timing,
            action=text.action,
            source=self.name,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SeasonalEvaluator(Evaluator):
    """Planting and harvest window reminders from the calendar."""

    name = "seasonal"

    def evaluate(
        self,
        snapshot: WeatherSnapshot,
        season: SeasonTags,
        location: FarmLocation,
    ) -> list[Alert]:
        alerts: list[Alert] = []

        if season.is_long_rains_planting:
            alerts.append(
                self._build(
                    "long_rains_planting",
                    AlertKind.PLANTING,
                    AlertPriority.HIGH,
                    TIMING_LONG_RAINS_PLANTING,
                    location,
                )
            )
        elif season.is_short_rains_planting:
            alerts.append(
                self._build(
                    "short_rains_planting",
                    AlertKind.PLANTING,
                    AlertPriority.HIGH,
                    TIMING_SHORT_RAINS_PLANTING,
                    location,
                )
            )

        if season.is_long_rains_harvest:
            alerts.append(
                self._build(
                    "long_rains_harvest",
                    AlertKind.HARVEST,
                    AlertPriority.HIGH,
                    TIMING_LONG_RAINS_HARVEST,
                    location,
                )
            )
        elif season.is_short_rains_harvest:
            alerts.append(
                self._build(
                    "short_rains_harvest",
                    AlertKind.HARVEST,
                    AlertPriority.HIGH,
                    TIMING_SHORT_RAINS_HARVEST,
                    location,
                )
            )

        return alerts


class DroughtEvaluator(Evaluator):
    """Low total rainfall over the forecast window."""

    name = "drought"

    def evaluate(
        self,
        snapshot: WeatherSnapshot,
        season: SeasonTags,
        location: FarmLocation,
    ) -> list[Alert]:
        if not snapshot.forecast:
            return []

        total_mm = snapshot.total_precipitation_mm
        if not self.config.drought.check(total_mm):
            return []

        return [
            self._build(
                "drought",
                AlertKind.WEATHER,
                AlertPriority.HIGH,
                TIMING_IMMEDIATE,
                location,
                total_mm=total_mm,
                days=len(snapshot.forecast),
            )
        ]


class HeavyRainEvaluator(Evaluator):
    """One warning per forecast day with heavy rainfall."""

    name = "heavy_rain"

    def evaluate(
        self,
        snapshot: WeatherSnapshot,
        season: SeasonTags,
        location: FarmLocation,
    ) -> list[Alert]:
        threshold = self.config.heavy_rain
        return [
            self._build(
                "heavy_rain",
                AlertKind.WEATHER,
                AlertPriority.HIGH,
                days_until(index),
                location,
                date=day.date.isoformat(),
                amount_mm=day.total_precipitation_mm,
            )
            for index, day in enumerate(snapshot.forecast)
            if threshold.check(day.total_precipitation_mm)
        ]


class HeatStressEvaluator(Evaluator):
    """Very high maximum temperature anywhere in the window."""

    name = "heat_stress"

    def evaluate(
        self,
        snapshot: WeatherSnapshot,
        season: SeasonTags,
        location: FarmLocation,
    ) -> list[Alert]:
        high = snapshot.highest_max_temp_c
        if not self.config.heat_stress.check(high):
            return []

        return [
            self._build(
                "heat_stress",
                AlertKind.WEATHER,
                AlertPriority.MEDIUM,
                self.window_timing,
                location,
                temp_c=high,
            )
        ]


class ColdStressEvaluator(Evaluator):
    """Low minimum temperature anywhere in the window."""

    name = "cold_stress"

    def evaluate(
        self,
        snapshot: WeatherSnapshot,
        season: SeasonTags,
        location: FarmLocation,
    ) -> list[Alert]:
        low = snapshot.lowest_min_temp_c
        if not self.config.cold_stress.check(low):
            return []

        return [
            self._build(
                "cold_stress",
                AlertKind.WEATHER,
                AlertPriority.MEDIUM,
                self.window_timing,
                location,
                temp_c=low,
            )
        ]


class PestRiskEvaluator(Evaluator):
    """Humid, warm conditions that favour pests and fungal disease.

    Both predicates use the mean over the forecast window: mean humidity
    must exceed the humidity threshold and the mean daily average
    temperature must lie strictly inside the pest temperature band.
    """

    name = "pest_risk"

    def evaluate(
        self,
        snapshot: WeatherSnapshot,
        season: SeasonTags,
        location: FarmLocation,
    ) -> list[Alert]:
        humidity = snapshot.mean_humidity_percent
        temperature = snapshot.mean_avg_temp_c

        if not (
            self.config.pest_humidity.check(humidity)
            and self.config.pest_temperature.check(temperature)
        ):
            return []

        return [
            self._build(
                "pest_risk",
                AlertKind.WEATHER,
                AlertPriority.MEDIUM,
                self.window_timing,
                location,
                humidity=humidity,
                temp_c=temperature,
            )
        ]


class ProviderAdvisoryEvaluator(Evaluator):
    """Pass provider severe-weather advisories through as alerts."""

    name = "provider_advisory"

    def evaluate(
        self,
        snapshot: WeatherSnapshot,
        season: SeasonTags,
        location: FarmLocation,
    ) -> list[Alert]:
        return [
            self._build(
                "provider_advisory",
                AlertKind.WEATHER,
                AlertPriority.HIGH,
                TIMING_PROVIDER_ADVISORY,
                location,
                event=advisory.event,
                summary=advisory.summary,
            )
            for advisory in snapshot.advisories
        ]
