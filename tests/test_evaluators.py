"""Tests for the individual alert evaluators."""

import pytest

from farm_alerts.models.alert import AlertKind, AlertPriority
from farm_alerts.models.weather import WeatherAdvisory
from farm_alerts.rules.evaluators import (
    ColdStressEvaluator,
    DroughtEvaluator,
    HeatStressEvaluator,
    HeavyRainEvaluator,
    PestRiskEvaluator,
    ProviderAdvisoryEvaluator,
    SeasonalEvaluator,
    days_until,
)
from farm_alerts.rules.market import MarketTimingAdvisor
from farm_alerts.rules.thresholds import AgronomicConfig
from farm_alerts.seasons.calendar import SeasonTags, season_tags


NO_SEASON = SeasonTags()


class TestDaysUntil:
    """Tests for forecast day timing labels."""

    @pytest.mark.parametrize(
        "index,expected",
        [(0, "Today"), (1, "In 1 day"), (2, "In 2 days"), (6, "In 6 days")],
    )
    def test_labels(self, index: int, expected: str):
        assert days_until(index) == expected


class TestSeasonalEvaluator:
    """Tests for planting and harvest reminders."""

    def test_long_rains_planting(self, calm_snapshot, nakuru, plain_formatter):
        alerts = SeasonalEvaluator(formatter=plain_formatter).evaluate(
            calm_snapshot, season_tags(4), nakuru
        )
        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.kind == AlertKind.PLANTING
        assert alert.priority == AlertPriority.HIGH
        assert alert.timing == "Next 2-4 weeks"
        assert alert.title == "Long Rains Planting Season"
        assert "Nakuru" in alert.message
        assert alert.source == "seasonal"

    def test_short_rains_planting(self, calm_snapshot, nakuru):
        alerts = SeasonalEvaluator().evaluate(calm_snapshot, season_tags(11), nakuru)
        assert [a.timing for a in alerts] == ["Next 2-3 weeks"]

    def test_long_rains_harvest(self, calm_snapshot, nakuru):
        alerts = SeasonalEvaluator().evaluate(calm_snapshot, season_tags(8), nakuru)
        assert alerts[0].kind == AlertKind.HARVEST
        assert alerts[0].timing == "Next 2-4 weeks"

    def test_short_rains_harvest_is_now(self, calm_snapshot, nakuru):
        alerts = SeasonalEvaluator().evaluate(calm_snapshot, season_tags(1), nakuru)
        assert alerts[0].kind == AlertKind.HARVEST
        assert alerts[0].timing == "Now"

    def test_no_window(self, calm_snapshot, nakuru):
        assert SeasonalEvaluator().evaluate(calm_snapshot, NO_SEASON, nakuru) == []


class TestDroughtEvaluator:
    """Tests for the low-rainfall rule."""

    def test_just_below_threshold_fires(self, make_day, make_snapshot, nakuru):
        days = [make_day(offset=i, rain_mm=0.0) for i in range(7)]
        days[0] = make_day(offset=0, rain_mm=9.999)
        alerts = DroughtEvaluator().evaluate(make_snapshot(days=days), NO_SEASON, nakuru)

        assert len(alerts) == 1
        assert alerts[0].kind == AlertKind.WEATHER
        assert alerts[0].priority == AlertPriority.HIGH
        assert alerts[0].timing == "Immediate action required"

    def test_at_threshold_does_not_fire(self, make_day, make_snapshot, nakuru):
        days = [make_day(offset=i, rain_mm=0.0) for i in range(7)]
        days[0] = make_day(offset=0, rain_mm=10.0)
        assert DroughtEvaluator().evaluate(make_snapshot(days=days), NO_SEASON, nakuru) == []

    def test_message_mentions_total(self, make_snapshot, nakuru, plain_formatter):
        snapshot = make_snapshot(rain_mm=1.0)
        alert = DroughtEvaluator(formatter=plain_formatter).evaluate(
            snapshot, NO_SEASON, nakuru
        )[0]
        assert alert.title == "Drought Alert - Irrigation Needed"
        assert "7.0mm" in alert.message
        assert "Nakuru" in alert.message

    def test_empty_forecast_does_not_fire(self, make_snapshot, nakuru):
        snapshot = make_snapshot(days=[])
        assert DroughtEvaluator().evaluate(snapshot, NO_SEASON, nakuru) == []

    def test_custom_threshold(self, make_snapshot, nakuru):
        snapshot = make_snapshot(rain_mm=1.0)  # 7mm total
        config = AgronomicConfig(drought_rainfall_mm=5.0)
        assert DroughtEvaluator(config=config).evaluate(snapshot, NO_SEASON, nakuru) == []


class TestHeavyRainEvaluator:
    """Tests for per-day heavy rain warnings."""

    def test_day_two(self, make_day, make_snapshot, nakuru):
        days = [make_day(offset=i) for i in range(7)]
        days[2] = make_day(offset=2, rain_mm=35.0)
        alerts = HeavyRainEvaluator().evaluate(make_snapshot(days=days), NO_SEASON, nakuru)

        assert len(alerts) == 1
        assert alerts[0].timing == "In 2 days"
        assert alerts[0].priority == AlertPriority.HIGH
        assert "2024-04-12" in alerts[0].message
        assert "35.0mm" in alerts[0].message

    def test_one_alert_per_day(self, make_day, make_snapshot, nakuru):
        days = [make_day(offset=i) for i in range(7)]
        days[0] = make_day(offset=0, rain_mm=31.0)
        days[1] = make_day(offset=1, rain_mm=45.0)
        alerts = HeavyRainEvaluator().evaluate(make_snapshot(days=days), NO_SEASON, nakuru)
        assert [a.timing for a in alerts] == ["Today", "In 1 day"]

    def test_at_threshold_does_not_fire(self, make_snapshot, nakuru):
        snapshot = make_snapshot(rain_mm=30.0)
        assert HeavyRainEvaluator().evaluate(snapshot, NO_SEASON, nakuru) == []


class TestTemperatureStress:
    """Tests for heat and cold stress."""

    def test_heat_stress(self, dry_hot_snapshot, nakuru, plain_formatter):
        alerts = HeatStressEvaluator(formatter=plain_formatter).evaluate(
            dry_hot_snapshot, NO_SEASON, nakuru
        )
        assert len(alerts) == 1
        assert alerts[0].title == "High Temperature Alert"
        assert alerts[0].priority == AlertPriority.MEDIUM
        assert alerts[0].timing == "Next 7 days"
        assert "36.0°C" in alerts[0].message

    def test_heat_at_threshold_does_not_fire(self, make_snapshot, nakuru):
        snapshot = make_snapshot(max_temp_c=35.0)
        assert HeatStressEvaluator().evaluate(snapshot, NO_SEASON, nakuru) == []

    def test_cold_stress(self, make_day, make_snapshot, nakuru):
        days = [make_day(offset=i) for i in range(7)]
        days[5] = make_day(offset=5, min_temp_c=8.5)
        alerts = ColdStressEvaluator().evaluate(make_snapshot(days=days), NO_SEASON, nakuru)
        assert len(alerts) == 1
        assert alerts[0].priority == AlertPriority.MEDIUM
        assert "8.5°C" in alerts[0].message

    def test_cold_at_threshold_does_not_fire(self, make_snapshot, nakuru):
        snapshot = make_snapshot(min_temp_c=10.0)
        assert ColdStressEvaluator().evaluate(snapshot, NO_SEASON, nakuru) == []

    def test_window_timing_follows_config(self, dry_hot_snapshot, nakuru):
        config = AgronomicConfig(forecast_window_days=3)
        alerts = HeatStressEvaluator(config=config).evaluate(
            dry_hot_snapshot, NO_SEASON, nakuru
        )
        assert alerts[0].timing == "Next 3 days"

    def test_empty_forecast(self, make_snapshot, nakuru):
        snapshot = make_snapshot(days=[])
        assert HeatStressEvaluator().evaluate(snapshot, NO_SEASON, nakuru) == []
        assert ColdStressEvaluator().evaluate(snapshot, NO_SEASON, nakuru) == []


class TestPestRiskEvaluator:
    """Tests for humid, warm pest conditions."""

    def test_humid_and_warm_fires(self, make_snapshot, nakuru):
        snapshot = make_snapshot(humidity=75.0, avg_temp_c=25.0)
        alerts = PestRiskEvaluator().evaluate(snapshot, NO_SEASON, nakuru)
        assert len(alerts) == 1
        assert alerts[0].priority == AlertPriority.MEDIUM
        assert "75%" in alerts[0].message

    def test_dry_air_does_not_fire(self, make_snapshot, nakuru):
        snapshot = make_snapshot(humidity=65.0, avg_temp_c=25.0)
        assert PestRiskEvaluator().evaluate(snapshot, NO_SEASON, nakuru) == []

    @pytest.mark.parametrize("avg_temp_c", [20.0, 30.0, 18.0, 31.0])
    def test_temperature_band_is_exclusive(self, make_snapshot, nakuru, avg_temp_c: float):
        snapshot = make_snapshot(humidity=80.0, avg_temp_c=avg_temp_c)
        assert PestRiskEvaluator().evaluate(snapshot, NO_SEASON, nakuru) == []

    def test_humidity_at_threshold_does_not_fire(self, make_snapshot, nakuru):
        snapshot = make_snapshot(humidity=70.0, avg_temp_c=25.0)
        assert PestRiskEvaluator().evaluate(snapshot, NO_SEASON, nakuru) == []

    def test_uses_window_mean(self, make_day, make_snapshot, nakuru):
        """One humid day is not enough if the window mean stays low."""
        days = [make_day(offset=i, humidity=60.0, avg_temp_c=25.0) for i in range(7)]
        days[0] = make_day(offset=0, humidity=95.0, avg_temp_c=25.0)
        assert PestRiskEvaluator().evaluate(make_snapshot(days=days), NO_SEASON, nakuru) == []


class TestMarketTimingAdvisor:
    """Tests for harvest-season market advice."""

    @pytest.mark.parametrize("month", [1, 2, 7, 8, 9])
    def test_fires_in_harvest_season(self, nakuru, month: int):
        alerts = MarketTimingAdvisor().advise(season_tags(month), nakuru)
        assert len(alerts) == 1
        assert alerts[0].kind == AlertKind.MARKET
        assert alerts[0].priority == AlertPriority.MEDIUM
        assert alerts[0].timing == "Consider for this season"

    @pytest.mark.parametrize("month", [3, 4, 5, 6, 10, 11, 12])
    def test_silent_otherwise(self, calm_snapshot, nakuru, month: int):
        assert MarketTimingAdvisor().evaluate(calm_snapshot, season_tags(month), nakuru) == []


class TestProviderAdvisoryEvaluator:
    """Tests for provider severe-weather advisories."""

    def test_description_used(self, make_snapshot, nakuru, plain_formatter):
        snapshot = make_snapshot(
            advisories=(
                WeatherAdvisory(
                    event="Flood Warning",
                    headline="Flood warning for Rift Valley",
                    description="River levels rising quickly.",
                ),
            )
        )
        alerts = ProviderAdvisoryEvaluator(formatter=plain_formatter).evaluate(
            snapshot, NO_SEASON, nakuru
        )
        assert len(alerts) == 1
        assert alerts[0].title == "Flood Warning"
        assert alerts[0].message == "River levels rising quickly."
        assert alerts[0].timing == "Check forecast"
        assert alerts[0].priority == AlertPriority.HIGH

    def test_falls_back_to_headline(self, make_snapshot, nakuru):
        snapshot = make_snapshot(
            advisories=(WeatherAdvisory(event="Wind Advisory", headline="Strong winds"),)
        )
        alerts = ProviderAdvisoryEvaluator().evaluate(snapshot, NO_SEASON, nakuru)
        assert alerts[0].message == "Strong winds"

    def test_one_alert_per_advisory(self, make_snapshot, nakuru):
        snapshot = make_snapshot(
            advisories=(
                WeatherAdvisory(event="Flood Warning", headline="a"),
                WeatherAdvisory(event="Wind Advisory", headline="b"),
            )
        )
        assert len(ProviderAdvisoryEvaluator().evaluate(snapshot, NO_SEASON, nakuru)) == 2
