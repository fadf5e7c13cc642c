"""Alert engine.

The engine runs an ordered collection of evaluators against a weather
snapshot and merges their output into one prioritized alert list.

## Ordering

Candidate lists are concatenated in evaluator order, then stable-sorted by
priority (high, medium, low). Alerts of equal priority keep their
evaluator order, so the result is deterministic and matches the order the
client renders them in. No alerts are merged or dropped, except by the
optional `max_alerts` cap which truncates after sorting.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Sequence

from farm_alerts.models.alert import Alert, AlertReport
from farm_alerts.models.location import FarmLocation
from farm_alerts.models.weather import WeatherSnapshot
from farm_alerts.rules.evaluators import (
    ColdStressEvaluator,
    DroughtEvaluator,
    Evaluator,
    HeatStressEvaluator,
    HeavyRainEvaluator,
    PestRiskEvaluator,
    ProviderAdvisoryEvaluator,
    SeasonalEvaluator,
)
from farm_alerts.rules.market import MarketTimingAdvisor
from farm_alerts.rules.messages import AlertFormatter
from farm_alerts.rules.thresholds import DEFAULT_CONFIG, AgronomicConfig
from farm_alerts.seasons.calendar import SeasonCalendar, SeasonTags

logger = logging.getLogger(__name__)


def aggregate(
    candidate_lists: Iterable[Sequence[Alert]],
    max_alerts: int | None = None,
) -> list[Alert]:
    """Merge candidate alerts into one list ordered by priority.

    Args:
        candidate_lists: Alert lists in evaluator order
        max_alerts: Optional cap applied after sorting

    Returns:
        Alerts, most urgent first, ties in input order
    """
    merged = [alert for alerts in candidate_lists for alert in alerts]

    # sorted() is stable, which keeps evaluator order within a priority
    ordered = sorted(merged, key=lambda a: a.priority.rank, reverse=True)

    if max_alerts is not None:
        ordered = ordered[:max_alerts]
    return ordered


def default_evaluators(
    config: AgronomicConfig,
    formatter: AlertFormatter,
) -> list[Evaluator]:
    """Build the standard evaluator collection in canonical order."""
    evaluator_types: list[type[Evaluator]] = [
        SeasonalEvaluator,
        DroughtEvaluator,
        HeavyRainEvaluator,
        HeatStressEvaluator,
        ColdStressEvaluator,
        PestRiskEvaluator,
        MarketTimingAdvisor,
        ProviderAdvisoryEvaluator,
    ]
    return [cls(config=config, formatter=formatter) for cls in evaluator_types]


class AlertEngine:
    """Evaluate weather snapshots into prioritized farming alerts.

    Example:
        ```python
        engine = AlertEngine()

        report = engine.evaluate(snapshot, location, on_date=date(2024, 4, 10))
        for alert in report.alerts:
            print(alert.priority.value, alert.title)

        # Add a custom rule
        engine = AlertEngine(evaluators=[*engine.evaluators, FrostEvaluator()])
        ```
    """

    def __init__(
        self,
        config: AgronomicConfig | None = None,
        evaluators: Sequence[Evaluator] | None = None,
        formatter: AlertFormatter | None = None,
    ):
        """Initialize the alert engine.

        Args:
            config: Thresholds and season ranges (Kenya defaults if omitted)
            evaluators: Evaluator collection, in merge order
            formatter: Text formatter for the default evaluators
        """
        self.config = config or DEFAULT_CONFIG
        self.formatter = formatter or AlertFormatter()
        self.calendar = SeasonCalendar(self.config.seasons)
        if evaluators is None:
            evaluators = default_evaluators(self.config, self.formatter)
        self.evaluators: tuple[Evaluator, ...] = tuple(evaluators)

    def collect(
        self,
        snapshot: WeatherSnapshot,
        location: FarmLocation,
        season: SeasonTags,
    ) -> list[list[Alert]]:
        """Run every evaluator and return their candidate lists in order.

        Args:
            snapshot: Weather input
            location: Farm location
            season: Season tags for the evaluation date

        Returns:
            One list per evaluator, in evaluator order
        """
        candidates: list[list[Alert]] = []
        for evaluator in self.evaluators:
            alerts = list(evaluator.evaluate(snapshot, season, location))
            logger.debug(f"Evaluator {evaluator.name} produced {len(alerts)} alert(s)")
            candidates.append(alerts)
        return candidates

    def evaluate(
        self,
        snapshot: WeatherSnapshot,
        location: FarmLocation,
        on_date: date,
    ) -> AlertReport:
        """Generate the prioritized alert report for a location.

        Args:
            snapshot: Weather input
            location: Farm location
            on_date: Evaluation date (drives the season)

        Returns:
            AlertReport with alerts ordered by priority
        """
        logger.info(f"Generating farming alerts for: {location.display_name()}")

        season = self.calendar.tags_for_date(on_date)
        logger.debug(f"Season for {on_date.isoformat()}: {season.labels() or 'none'}")

        candidates = self.collect(snapshot, location, season)
        alerts = aggregate(candidates, max_alerts=self.config.max_alerts)

        logger.info(
            f"Generated {len(alerts)} alert(s) for {location.display_name()}"
        )
        return AlertReport(
            location=location,
            evaluated_on=on_date,
            season=season,
            alerts=tuple(alerts),
        )
