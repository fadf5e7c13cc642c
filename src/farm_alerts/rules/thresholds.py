"""Agronomic thresholds for the alert engine.

`AgronomicConfig` is the single immutable object holding every tunable
number the evaluators use, together with the season month ranges. It is
handed to the season calendar and to each evaluator at construction time,
so a different climate zone only needs a different config.

Each numeric rule is exposed as a `Threshold`, a comparison that knows its
own operator. All comparisons are strict.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from farm_alerts.seasons.calendar import SeasonRanges

if TYPE_CHECKING:
    from farm_alerts.config import Settings


class ComparisonOperator(str, Enum):
    """Operators for comparing values."""

    LESS_THAN = "lt"
    GREATER_THAN = "gt"
    BETWEEN_EXCLUSIVE = "between"  # low < value < high


class Threshold(BaseModel):
    """A single strict comparison against a configured value.

    Example:
        ```python
        drought = Threshold(
            operator=ComparisonOperator.LESS_THAN,
            value=10.0,
            description="Weekly rainfall below 10mm",
        )
        drought.check(9.999)  # True
        drought.check(10.0)  # False
        ```
    """

    model_config = ConfigDict(frozen=True)

    operator: ComparisonOperator
    value: float | tuple[float, float]
    description: str | None = None

    def check(self, actual: float | None) -> bool:
        """Compare an actual value against this threshold.

        None never passes, so an empty forecast window cannot trigger a rule.
        """
        if actual is None:
            return False

        comparisons = {
            ComparisonOperator.LESS_THAN: lambda a, e: a < e,
            ComparisonOperator.GREATER_THAN: lambda a, e: a > e,
            ComparisonOperator.BETWEEN_EXCLUSIVE: lambda a, e: e[0] < a < e[1],
        }

        comparator = comparisons.get(self.operator)
        if comparator:
            try:
                return comparator(actual, self.value)
            except (TypeError, IndexError):
                return False
        return False


class AgronomicConfig(BaseModel):
    """Immutable thresholds and season ranges for one climate zone.

    Defaults describe Kenya's bimodal rainfall regime.
    """

    model_config = ConfigDict(frozen=True)

    seasons: SeasonRanges = Field(default_factory=SeasonRanges)

    forecast_window_days: int = Field(
        default=7, ge=1, le=14, description="Forecast horizon named in alert timings"
    )

    # Rainfall
    drought_rainfall_mm: float = Field(
        default=10.0, ge=0, description="Window rainfall below this triggers a drought alert"
    )
    heavy_rain_mm: float = Field(
        default=30.0, ge=0, description="Daily rainfall above this triggers a heavy rain alert"
    )

    # Temperature stress
    heat_stress_c: float = Field(
        default=35.0, description="Daily max above this triggers a heat alert"
    )
    cold_stress_c: float = Field(
        default=10.0, description="Daily min below this triggers a cold alert"
    )

    # Pest and disease
    pest_humidity_percent: float = Field(
        default=70.0, ge=0, le=100, description="Mean humidity above this favours pests"
    )
    pest_temp_min_c: float = Field(default=20.0, description="Lower bound of pest temperature band")
    pest_temp_max_c: float = Field(default=30.0, description="Upper bound of pest temperature band")

    # Output
    max_alerts: int | None = Field(
        default=None, ge=1, description="Cap on alerts returned (None = no cap)"
    )

    @model_validator(mode="after")
    def validate_pest_band(self) -> Self:
        """Ensure the pest temperature band is not empty."""
        if self.pest_temp_min_c >= self.pest_temp_max_c:
            raise ValueError(
                f"pest_temp_min_c ({self.pest_temp_min_c}) must be below "
                f"pest_temp_max_c ({self.pest_temp_max_c})"
            )
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        """Build the engine config from application settings."""
        overrides: dict[str, Any] = {
            "forecast_window_days": settings.weather_forecast_days,
            "drought_rainfall_mm": settings.drought_rainfall_mm,
            "heavy_rain_mm": settings.heavy_rain_mm,
            "heat_stress_c": settings.heat_stress_c,
            "cold_stress_c": settings.cold_stress_c,
            "pest_humidity_percent": settings.pest_humidity_percent,
            "pest_temp_min_c": settings.pest_temp_min_c,
            "pest_temp_max_c": settings.pest_temp_max_c,
            "max_alerts": settings.max_alerts,
        }
        return cls(**overrides)

    @property
    def drought(self) -> Threshold:
        return Threshold(
            operator=ComparisonOperator.LESS_THAN,
            value=self.drought_rainfall_mm,
            description=f"Window rainfall below {self.drought_rainfall_mm}mm",
        )

    @property
    def heavy_rain(self) -> Threshold:
        return Threshold(
            operator=ComparisonOperator.GREATER_THAN,
            value=self.heavy_rain_mm,
            description=f"Daily rainfall above {self.heavy_rain_mm}mm",
        )

    @property
    def heat_stress(self) -> Threshold:
        return Threshold(
            operator=ComparisonOperator.GREATER_THAN,
            value=self.heat_stress_c,
            description=f"Maximum temperature above {self.heat_stress_c}°C",
        )

    @property
    def cold_stress(self) -> Threshold:
        return Threshold(
            operator=ComparisonOperator.LESS_THAN,
            value=self.cold_stress_c,
            description=f"Minimum temperature below {self.cold_stress_c}°C",
        )

    @property
    def pest_humidity(self) -> Threshold:
        return Threshold(
            operator=ComparisonOperator.GREATER_THAN,
            value=self.pest_humidity_percent,
            description=f"Mean humidity above {self.pest_humidity_percent}%",
        )

    @property
    def pest_temperature(self) -> Threshold:
        return Threshold(
            operator=ComparisonOperator.BETWEEN_EXCLUSIVE,
            value=(self.pest_temp_min_c, self.pest_temp_max_c),
            description=(
                f"Mean temperature between {self.pest_temp_min_c}°C "
                f"and {self.pest_temp_max_c}°C"
            ),
        )


DEFAULT_CONFIG = AgronomicConfig()
