"""Planting and harvest season calendar."""

from farm_alerts.seasons.calendar import (
    DEFAULT_SEASON_RANGES,
    SeasonCalendar,
    SeasonRanges,
    SeasonTags,
    season_tags,
)

__all__ = [
    "DEFAULT_SEASON_RANGES",
    "SeasonCalendar",
    "SeasonRanges",
    "SeasonTags",
    "season_tags",
]
