"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
All sensitive values (API keys) should be provided via environment
variables, not config files.

## Required Environment Variables

- WEATHERAPI_KEY: weatherapi.com API key (the alerts endpoint returns 503
  without it)

## Optional Environment Variables

- DEBUG: Enable debug mode and API docs (default: false)
- LOG_LEVEL: Root log level (default: INFO)
- ALLOWED_ORIGINS: JSON list of CORS origins (default: ["*"])
- WEATHER_FORECAST_DAYS: Forecast window length (default: 7)
- DROUGHT_RAINFALL_MM, HEAVY_RAIN_MM, HEAT_STRESS_C, COLD_STRESS_C,
  PEST_HUMIDITY_PERCENT, PEST_TEMP_MIN_C, PEST_TEMP_MAX_C: alert thresholds
- MAX_ALERTS: Cap on alerts per response (default: no cap)
- SEASON_TIMEZONE: Timezone for the evaluation date (default: Africa/Nairobi)
- ALERT_USE_EMOJI: Prefix alert titles with an icon (default: true)

## Example .env file

```
WEATHERAPI_KEY=your-weatherapi-key
LOG_LEVEL=DEBUG
DROUGHT_RAINFALL_MM=15
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Farm Alerts"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default=["*"],
        description="CORS allowed origins",
    )

    # Weather provider
    weatherapi_key: str | None = None
    weatherapi_base_url: str = "https://api.weatherapi.com/v1"
    weather_forecast_days: int = Field(default=7, ge=1, le=14)
    weather_request_timeout_seconds: float = Field(default=10.0, gt=0, le=120)

    # Alert thresholds
    drought_rainfall_mm: float = Field(default=10.0, ge=0)
    heavy_rain_mm: float = Field(default=30.0, ge=0)
    heat_stress_c: float = 35.0
    cold_stress_c: float = 10.0
    pest_humidity_percent: float = Field(default=70.0, ge=0, le=100)
    pest_temp_min_c: float = 20.0
    pest_temp_max_c: float = 30.0
    max_alerts: int | None = Field(default=None, ge=1)

    # Season calendar
    season_timezone: str = Field(
        default="Africa/Nairobi",
        description="IANA timezone used to decide today's date (and so the month)",
    )

    # Display
    alert_use_emoji: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("season_timezone")
    @classmethod
    def validate_season_timezone(cls, v: str) -> str:
        """Ensure the timezone name is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def weather_provider_configured(self) -> bool:
        """Check if the weather provider API key is set."""
        return bool(self.weatherapi_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()
