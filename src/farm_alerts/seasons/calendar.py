"""Agricultural season calendar.

Maps a calendar month onto the planting and harvest windows of a bimodal
rainfall regime. The defaults describe Kenya:

| Window                 | Months       |
|------------------------|--------------|
| Long rains planting    | Mar, Apr, May |
| Long rains harvest     | Jul, Aug, Sep |
| Short rains planting   | Oct, Nov, Dec |
| Short rains harvest    | Jan, Feb     |

June belongs to no window. The calendar only looks at the month; the
coordinates of the farm play no part in it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from itertools import combinations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SeasonRanges(BaseModel):
    """Month sets (1-12) for each planting and harvest window."""

    model_config = ConfigDict(frozen=True)

    long_rains_planting: frozenset[int] = Field(default=frozenset({3, 4, 5}))
    short_rains_planting: frozenset[int] = Field(default=frozenset({10, 11, 12}))
    long_rains_harvest: frozenset[int] = Field(default=frozenset({7, 8, 9}))
    short_rains_harvest: frozenset[int] = Field(default=frozenset({1, 2}))

    @model_validator(mode="after")
    def validate_months(self) -> SeasonRanges:
        """Months must be 1-12 and the windows must not overlap."""
        windows = {
            "long_rains_planting": self.long_rains_planting,
            "short_rains_planting": self.short_rains_planting,
            "long_rains_harvest": self.long_rains_harvest,
            "short_rains_harvest": self.short_rains_harvest,
        }
        for name, months in windows.items():
            invalid = sorted(m for m in months if not 1 <= m <= 12)
            if invalid:
                raise ValueError(f"{name} contains invalid months: {invalid}")

        for (name_a, a), (name_b, b) in combinations(windows.items(), 2):
            overlap = a & b
            if overlap:
                raise ValueError(
                    f"{name_a} and {name_b} overlap on months {sorted(overlap)}"
                )
        return self


@dataclass(frozen=True)
class SeasonTags:
    """Which agricultural windows a month falls in."""

    is_long_rains_planting: bool = False
    is_short_rains_planting: bool = False
    is_long_rains_harvest: bool = False
    is_short_rains_harvest: bool = False

    @property
    def is_planting_season(self) -> bool:
        """True in either planting window."""
        return self.is_long_rains_planting or self.is_short_rains_planting

    @property
    def is_harvest_season(self) -> bool:
        """True in either harvest window."""
        return self.is_long_rains_harvest or self.is_short_rains_harvest

    def labels(self) -> list[str]:
        """Names of the active windows, for logging."""
        names = {
            "long_rains_planting": self.is_long_rains_planting,
            "short_rains_planting": self.is_short_rains_planting,
            "long_rains_harvest": self.is_long_rains_harvest,
            "short_rains_harvest": self.is_short_rains_harvest,
        }
        return [name for name, active in names.items() if active]


DEFAULT_SEASON_RANGES = SeasonRanges()


def season_tags(month: int, ranges: SeasonRanges = DEFAULT_SEASON_RANGES) -> SeasonTags:
    """Compute season tags for a month.

    Args:
        month: Calendar month, 1-12
        ranges: Month sets for each window

    Returns:
        SeasonTags with at most one flag set

    Raises:
        ValueError: If month is outside 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")

    return SeasonTags(
        is_long_rains_planting=month in ranges.long_rains_planting,
        is_short_rains_planting=month in ranges.short_rains_planting,
        is_long_rains_harvest=month in ranges.long_rains_harvest,
        is_short_rains_harvest=month in ranges.short_rains_harvest,
    )


class SeasonCalendar:
    """Season lookup bound to one set of month ranges.

    Example:
        ```python
        calendar = SeasonCalendar()
        tags = calendar.tags_for_date(date(2024, 4, 10))
        assert tags.is_long_rains_planting
        ```
    """

    def __init__(self, ranges: SeasonRanges | None = None):
        self.ranges = ranges or DEFAULT_SEASON_RANGES

    def tags_for(self, month: int) -> SeasonTags:
        """Get season tags for a month (1-12)."""
        return season_tags(month, self.ranges)

    def tags_for_date(self, on_date: date) -> SeasonTags:
        """Get season tags for the month of a date."""
        return season_tags(on_date.month, self.ranges)
