"""Pytest configuration and shared fixtures."""

from datetime import UTC, date, datetime, timedelta

import pytest

from models.snow import SnowType, TemperatureRange
from models.wax import WaxKind, WaxProduct
from models.weather import (
    DailySummary,
    HourlyEntry,
    PrecipitationKind,
    SnowpackThresholds,
    WeatherSummary,
)

TODAY = date(2026, 2, 15)
NOW = datetime(2026, 2, 15, 8, 0, tzinfo=UTC)


def make_day(days_ago: int, **kwargs) -> DailySummary:
    """Build a past day relative to TODAY with dry, cold defaults."""
    values = {
        "day": TODAY - timedelta(days=days_ago),
        "min_temp_celsius": -10.0,
        "max_temp_celsius": -6.0,
        "precipitation_mm": 0.0,
        "snowfall_cm": 0.0,
        "precipitation_kind": PrecipitationKind.NONE,
        "humidity": 0.6,
    }
    values.update(kwargs)
    return DailySummary(**values)


def make_hours(temperatures: list[float], **kwargs) -> list[HourlyEntry]:
    """Build consecutive hourly entries starting at NOW."""
    return [
        HourlyEntry(
            timestamp=NOW + timedelta(hours=i),
            temperature_celsius=temperature,
            **kwargs,
        )
        for i, temperature in enumerate(temperatures)
    ]


def make_wax(code: str, ranges: dict[SnowType, list[tuple[int, int]]]) -> WaxProduct:
    """Build a candidate wax from (min, max) tuples."""
    return WaxProduct(
        code=code,
        name=f"Test {code}",
        series="T",
        kind=WaxKind.HARDWAX,
        ranges={
            snow_type: [TemperatureRange.of(lo, hi) for lo, hi in bounds]
            for snow_type, bounds in ranges.items()
        },
    )


@pytest.fixture
def thresholds():
    """Default classification thresholds."""
    return SnowpackThresholds()


@pytest.fixture
def cold_hours():
    """A full day of cold, dry forecast hours."""
    return make_hours([-8.0] * 24, humidity=0.6)


@pytest.fixture
def fresh_snow_weather():
    """Weather with a big dump yesterday after a cold dry week."""
    return WeatherSummary(
        past_daily=[
            make_day(1, snowfall_cm=12.0, precipitation_kind=PrecipitationKind.SNOW),
            make_day(2),
            make_day(3),
            make_day(4),
            make_day(5),
        ],
        next_hours=make_hours([-6.0] * 24, humidity=0.7),
    )


@pytest.fixture
def melt_freeze_weather():
    """Weather with a warm day followed by hard frost."""
    return WeatherSummary(
        past_daily=[
            make_day(1, min_temp_celsius=-9.0, max_temp_celsius=-4.0),
            make_day(2, min_temp_celsius=-1.0, max_temp_celsius=5.0),
            make_day(3, min_temp_celsius=-8.0, max_temp_celsius=-3.0),
        ],
        next_hours=make_hours([-7.0] * 24, humidity=0.6),
    )


@pytest.fixture
def sample_waxes():
    """A small candidate set with overlapping ranges."""
    return [
        make_wax("BLUE", {SnowType.FINE_GRAINED: [(-10, -3)]}),
        make_wax("GREEN", {SnowType.FINE_GRAINED: [(-18, -8)]}),
        make_wax("VIOLET", {SnowType.FINE_GRAINED: [(-4, 0)]}),
        make_wax("KLISTER", {SnowType.WET_CORN: [(0, 5)]}),
    ]


@pytest.fixture
def day_factory():
    """Factory for past days: day_factory(days_ago, **overrides)."""
    return make_day


@pytest.fixture
def hours_factory():
    """Factory for forecast hours: hours_factory([temps], **fields)."""
    return make_hours


@pytest.fixture
def wax_factory():
    """Factory for candidate waxes: wax_factory(code, {type: [(lo, hi)]})."""
    return make_wax


@pytest.fixture
def now():
    """Fixed reference time used by the hourly factory."""
    return NOW
