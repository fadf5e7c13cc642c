"""Location models for farming alerts."""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Regex for parsing lat/long coordinates: "latitude,longitude"
# Supports optional +/- prefix for both values
COORDINATE_PATTERN = re.compile(
    r"^(?P<lat>[-+]?\d*\.?\d+)\s*,\s*(?P<lon>[-+]?\d*\.?\d+)$"
)


class Coordinates(BaseModel):
    """Geographic coordinates (latitude/longitude).

    Latitude:
        - Negative (-) = south of equator
        - Positive (+) = north of equator
        - Range: -90 to +90

    Longitude:
        - Negative (-) = west of prime meridian
        - Positive (+) = east of prime meridian
        - Range: -180 to +180
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse coordinates from string format 'latitude,longitude'.

        Examples:
            '-1.2921,36.8219' -> Nairobi
            '-0.0917,34.7680' -> Kisumu
            '+0.5143,35.2698' -> Eldoret
        """
        match = COORDINATE_PATTERN.match(value.strip())
        if not match:
            raise ValueError(
                f"Invalid coordinate format: '{value}'. "
                "Expected format: 'latitude,longitude' (e.g., '-1.2921,36.8219')"
            )
        return cls(
            latitude=float(match.group("lat")),
            longitude=float(match.group("lon")),
        )

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def to_tuple(self) -> tuple[float, float]:
        """Return coordinates as (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


class FarmLocation(BaseModel):
    """The place a set of alerts is generated for.

    The name is opaque: it is only interpolated into alert messages.
    Coordinates are used for the weather lookup, never for season
    computation.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Place name shown in alert messages")
    coordinates: Coordinates | None = Field(
        default=None, description="Geographic coordinates"
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Trim surrounding whitespace so blank names fail validation."""
        if isinstance(v, str):
            return v.strip()
        return v

    @classmethod
    def from_coordinates(cls, name: str, latitude: float, longitude: float) -> Self:
        """Create a FarmLocation from a name and latitude/longitude values."""
        return cls(
            name=name,
            coordinates=Coordinates(latitude=latitude, longitude=longitude),
        )

    def display_name(self) -> str:
        """Get a display name for this location."""
        return self.name

    def __str__(self) -> str:
        return self.name
