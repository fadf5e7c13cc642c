"""Farming alert routes.

`POST /farming-alerts` takes a location and coordinates, fetches the
weather and returns prioritized farming alerts with a weather summary.
`OPTIONS /farming-alerts` answers browser preflight requests with an empty
body.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from farm_alerts.api.dependencies import get_alert_engine, get_today, get_weather_provider
from farm_alerts.config import Settings, get_settings
from farm_alerts.exceptions import ConfigurationError
from farm_alerts.models.alert import Alert, AlertKind, AlertPriority
from farm_alerts.models.location import FarmLocation
from farm_alerts.models.weather import WeatherSnapshot
from farm_alerts.providers.base import WeatherProvider
from farm_alerts.rules.engine import AlertEngine
from farm_alerts.service import AlertResult, FarmAlertService

logger = logging.getLogger(__name__)

router = APIRouter()


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AlertRequest(BaseModel):
    """Generate alerts request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    location: str = Field(..., min_length=1, description="Place name")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def to_location(self) -> FarmLocation:
        return FarmLocation.from_coordinates(self.location, self.latitude, self.longitude)


class AlertOut(CamelModel):
    """A single alert as rendered by the client."""

    type: AlertKind
    title: str
    message: str
    priority: AlertPriority
    timing: str
    action: str | None = None

    @classmethod
    def from_alert(cls, alert: Alert) -> AlertOut:
        return cls(
            type=alert.kind,
            title=alert.title,
            message=alert.message,
            priority=alert.priority,
            timing=alert.timing,
            action=alert.action,
        )


class CurrentSummary(CamelModel):
    """Current conditions summary."""

    temp: float
    condition: str
    humidity: float
    rainfall: float


class ForecastDaySummary(CamelModel):
    """One forecast day summary."""

    date: str
    max_temp: float
    min_temp: float
    rainfall: float
    condition: str


class WeatherSummary(CamelModel):
    """Weather the alerts were derived from."""

    current: CurrentSummary
    forecast: list[ForecastDaySummary]

    @classmethod
    def from_snapshot(cls, snapshot: WeatherSnapshot) -> WeatherSummary:
        return cls(
            current=CurrentSummary(
                temp=snapshot.current.temperature_c,
                condition=snapshot.current.condition,
                humidity=snapshot.current.humidity_percent,
                rainfall=snapshot.current.precipitation_mm,
            ),
            forecast=[
                ForecastDaySummary(
                    date=day.date.isoformat(),
                    max_temp=day.max_temp_c,
                    min_temp=day.min_temp_c,
                    rainfall=day.total_precipitation_mm,
                    condition=day.condition,
                )
                for day in snapshot.forecast
            ],
        )


class AlertResponse(CamelModel):
    """Generate alerts response."""

    location: str
    alerts: list[AlertOut]
    weather_summary: WeatherSummary
    generated_at: datetime

    @classmethod
    def from_result(cls, result: AlertResult) -> AlertResponse:
        return cls(
            location=result.report.location.display_name(),
            alerts=[AlertOut.from_alert(a) for a in result.report.alerts],
            weather_summary=WeatherSummary.from_snapshot(result.snapshot),
            generated_at=result.generated_at,
        )


class ErrorResponse(BaseModel):
    """Error payload; alerts is always empty."""

    error: str
    alerts: list[AlertOut] = Field(default_factory=list)


@router.options("/farming-alerts", include_in_schema=False)
async def farming_alerts_preflight() -> Response:
    """Answer preflight requests with an empty body."""
    return Response(status_code=status.HTTP_200_OK)


@router.post(
    "/farming-alerts",
    response_model=AlertResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def generate_farming_alerts(
    request: AlertRequest,
    provider: WeatherProvider | None = Depends(get_weather_provider),
    engine: AlertEngine = Depends(get_alert_engine),
    today: date = Depends(get_today),
    settings: Settings = Depends(get_settings),
) -> AlertResponse:
    """Generate prioritized farming alerts for a location."""
    location = request.to_location()
    logger.info(
        f"Farming alerts requested for: {location.display_name()} "
        f"({request.latitude}, {request.longitude})"
    )

    if provider is None:
        raise ConfigurationError("Weather API key not configured")

    service = FarmAlertService(
        provider, engine, forecast_days=settings.weather_forecast_days
    )
    result = await service.generate(location, on_date=today)
    return AlertResponse.from_result(result)
