"""Farming alert service.

Ties the weather provider to the alert engine for one request.

## Process

1. Fetch the weather snapshot for the farm coordinates
2. Compute season tags from the evaluation date
3. Run every evaluator and merge the alerts by priority

The snapshot is all-or-nothing: if the provider fails, no alerts are
generated from partial data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from farm_alerts.exceptions import ConfigurationError, WeatherUnavailableError
from farm_alerts.models.alert import AlertReport
from farm_alerts.models.location import FarmLocation
from farm_alerts.models.weather import WeatherSnapshot
from farm_alerts.providers.base import AuthenticationError, ProviderError, WeatherProvider
from farm_alerts.rules.engine import AlertEngine

logger = logging.getLogger(__name__)


@dataclass
class AlertResult:
    """Alerts plus the weather they were derived from."""

    report: AlertReport
    snapshot: WeatherSnapshot
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class FarmAlertService:
    """Service for generating farming alerts.

    Example:
        ```python
        async with WeatherApiProvider(api_key=key) as provider:
            service = FarmAlertService(provider, AlertEngine())
            result = await service.generate(location, on_date=date.today())
        ```
    """

    def __init__(
        self,
        provider: WeatherProvider,
        engine: AlertEngine,
        forecast_days: int = 7,
    ):
        """Initialize the alert service.

        Args:
            provider: Weather provider used for the snapshot
            engine: Alert engine
            forecast_days: Forecast window to request
        """
        self.provider = provider
        self.engine = engine
        self.forecast_days = forecast_days

    async def fetch_snapshot(self, location: FarmLocation) -> WeatherSnapshot:
        """Fetch the weather snapshot for a location.

        Raises:
            ConfigurationError: If the provider rejects our credentials
            WeatherUnavailableError: If the snapshot cannot be fetched
        """
        if location.coordinates is None:
            raise WeatherUnavailableError(
                f"No coordinates for {location.display_name()}"
            )

        try:
            return await self.provider.get_snapshot(
                location.coordinates, days=self.forecast_days
            )
        except AuthenticationError as e:
            logger.error(f"Weather provider rejected credentials: {e}")
            raise ConfigurationError("Weather API key is invalid") from e
        except ProviderError as e:
            logger.error(f"Failed to fetch weather data for {location.display_name()}: {e}")
            raise WeatherUnavailableError("Failed to fetch weather data") from e

    async def generate(self, location: FarmLocation, on_date: date) -> AlertResult:
        """Fetch weather and generate alerts for a location.

        Args:
            location: Farm location with coordinates
            on_date: Evaluation date

        Returns:
            AlertResult with the report and the snapshot used
        """
        snapshot = await self.fetch_snapshot(location)
        report = self.engine.evaluate(snapshot, location, on_date)
        return AlertResult(report=report, snapshot=snapshot)
