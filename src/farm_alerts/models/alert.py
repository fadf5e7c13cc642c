"""Alert models produced by the alert engine."""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from farm_alerts.models.location import FarmLocation
from farm_alerts.seasons.calendar import SeasonTags


class AlertKind(str, Enum):
    """Semantic category of a farming alert."""

    PLANTING = "planting"
    HARVEST = "harvest"
    IRRIGATION = "irrigation"
    WEATHER = "weather"
    MARKET = "market"


class AlertPriority(str, Enum):
    """Urgency classification controlling alert ordering."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Ordinal value, higher is more urgent."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK: dict[AlertPriority, int] = {
    AlertPriority.LOW: 0,
    AlertPriority.MEDIUM: 1,
    AlertPriority.HIGH: 2,
}


class Alert(BaseModel):
    """A single actionable farming alert."""

    model_config = ConfigDict(frozen=True)

    kind: AlertKind = Field(..., description="Alert category")
    title: str = Field(..., description="Short human-readable title")
    message: str = Field(..., description="Alert body, mentions the location")
    priority: AlertPriority = Field(..., description="Urgency")
    timing: str = Field(..., description="Urgency window, e.g. 'Now' or 'In 3 days'")
    action: str | None = Field(default=None, description="Recommended next step")
    source: str | None = Field(
        default=None, description="Name of the evaluator that emitted this alert"
    )

    def is_high_priority(self) -> bool:
        """Check if this alert is high priority."""
        return self.priority == AlertPriority.HIGH


class AlertReport(BaseModel):
    """Ordered alerts produced by one engine run."""

    model_config = ConfigDict(frozen=True)

    location: FarmLocation
    evaluated_on: date = Field(..., description="Date the season was computed from")
    season: SeasonTags = Field(..., description="Season windows active on evaluated_on")
    alerts: tuple[Alert, ...] = Field(default=(), description="Alerts, most urgent first")

    def by_kind(self, kind: AlertKind) -> list[Alert]:
        """Get alerts of one kind, preserving order."""
        return [a for a in self.alerts if a.kind == kind]

    @property
    def high_priority(self) -> list[Alert]:
        """Get high priority alerts."""
        return [a for a in self.alerts if a.is_high_priority()]
