"""Tests for location, weather and alert models."""

from datetime import date

import pytest
from pydantic import ValidationError

from farm_alerts.models.alert import Alert, AlertKind, AlertPriority
from farm_alerts.models.location import Coordinates, FarmLocation
from farm_alerts.models.weather import WeatherAdvisory


class TestCoordinates:
    """Tests for Coordinates model."""

    def test_valid_coordinates(self):
        coords = Coordinates(latitude=-1.2921, longitude=36.8219)
        assert coords.to_tuple() == (-1.2921, 36.8219)

    def test_invalid_latitude(self):
        with pytest.raises(ValidationError):
            Coordinates(latitude=91, longitude=0)

    def test_invalid_longitude(self):
        with pytest.raises(ValidationError):
            Coordinates(latitude=0, longitude=-181)

    def test_from_string(self):
        coords = Coordinates.from_string(" -0.3031, 36.08 ")
        assert coords.latitude == -0.3031
        assert coords.longitude == 36.08

    def test_from_string_invalid(self):
        with pytest.raises(ValueError, match="Invalid coordinate format"):
            Coordinates.from_string("Nakuru")

    def test_str_is_query_format(self):
        assert str(Coordinates(latitude=-1.2921, longitude=36.8219)) == "-1.2921,36.8219"


class TestFarmLocation:
    """Tests for FarmLocation model."""

    def test_from_coordinates(self):
        location = FarmLocation.from_coordinates("Kisumu", -0.0917, 34.768)
        assert location.display_name() == "Kisumu"
        assert location.coordinates.latitude == -0.0917

    def test_name_trimmed(self):
        assert FarmLocation(name="  Eldoret ").name == "Eldoret"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name: str):
        with pytest.raises(ValidationError):
            FarmLocation(name=name)

    def test_immutable(self, nakuru):
        with pytest.raises(ValidationError):
            nakuru.name = "Naivasha"


class TestWeatherSnapshot:
    """Tests for forecast window aggregates."""

    def test_aggregates(self, make_day, make_snapshot):
        snapshot = make_snapshot(
            days=[
                make_day(offset=0, rain_mm=2.0, max_temp_c=30.0, min_temp_c=12.0, humidity=60.0),
                make_day(offset=1, rain_mm=5.5, max_temp_c=33.0, min_temp_c=14.0, humidity=80.0),
            ]
        )
        assert snapshot.total_precipitation_mm == pytest.approx(7.5)
        assert snapshot.highest_max_temp_c == 33.0
        assert snapshot.lowest_min_temp_c == 12.0
        assert snapshot.mean_humidity_percent == pytest.approx(70.0)
        assert snapshot.mean_avg_temp_c == pytest.approx(20.0)

    def test_empty_window(self, make_snapshot):
        snapshot = make_snapshot(days=[])
        assert snapshot.total_precipitation_mm == 0
        assert snapshot.highest_max_temp_c is None
        assert snapshot.lowest_min_temp_c is None
        assert snapshot.mean_humidity_percent is None
        assert snapshot.mean_avg_temp_c is None

    def test_negative_rain_rejected(self, make_day):
        with pytest.raises(ValidationError):
            make_day(rain_mm=-1.0)

    def test_advisory_summary(self):
        assert WeatherAdvisory(event="x", headline="h", description="d").summary == "d"
        assert WeatherAdvisory(event="x", headline="h").summary == "h"

    def test_day_date_parsed(self, make_day):
        assert make_day(offset=1).date == date(2024, 4, 11)


class TestAlert:
    """Tests for the Alert model."""

    def test_priority_rank(self):
        assert AlertPriority.HIGH.rank > AlertPriority.MEDIUM.rank > AlertPriority.LOW.rank

    def test_immutable(self):
        alert = Alert(
            kind=AlertKind.MARKET,
            title="Market",
            message="Prices",
            priority=AlertPriority.MEDIUM,
            timing="Now",
        )
        assert alert.action is None
        assert alert.is_high_priority() is False
        with pytest.raises(ValidationError):
            alert.priority = AlertPriority.HIGH

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            Alert(kind="hail", title="t", message="m", priority="high", timing="Now")
