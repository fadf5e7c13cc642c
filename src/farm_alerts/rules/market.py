"""Market timing advice.

During a harvest window many farms sell at once and prices tend to fall.
The advisor reuses the harvest flags from the season calendar rather than
looking at the weather.
"""

from __future__ import annotations

from farm_alerts.models.alert import Alert, AlertKind, AlertPriority
from farm_alerts.models.location import FarmLocation
from farm_alerts.models.weather import WeatherSnapshot
from farm_alerts.rules.evaluators import Evaluator
from farm_alerts.seasons.calendar import SeasonTags

TIMING_MARKET = "Consider for this season"


class MarketTimingAdvisor(Evaluator):
    """Warn of supply-glut pricing during harvest windows."""

    name = "market_timing"

    def advise(self, season: SeasonTags, location: FarmLocation) -> list[Alert]:
        """Return the market advisory for the season, if any.

        Args:
            season: Season tags for the evaluation date
            location: Farm location (used in message text only)

        Returns:
            One market alert in a harvest window, otherwise an empty list
        """
        if not season.is_harvest_season:
            return []

        return [
            self._build(
                "market_timing",
                AlertKind.MARKET,
                AlertPriority.MEDIUM,
                TIMING_MARKET,
                location,
            )
        ]

    def evaluate(
        self,
        snapshot: WeatherSnapshot,
        season: SeasonTags,
        location: FarmLocation,
    ) -> list[Alert]:
        return self.advise(season, location)
