"""Data models for the grip wax advisor."""

from .snow import (
    SWIX_GROUPS,
    Confidence,
    Reason,
    ReasonCode,
    SnowType,
    TemperatureRange,
)
from .wax import WaxKind, WaxProduct
from .weather import (
    DailySummary,
    HourlyEntry,
    PrecipitationKind,
    SnowpackThresholds,
    SnowSurfaceAssessment,
    WeatherAndSnowpackSummary,
    WeatherSummary,
)

__all__ = [
    "SnowType",
    "SWIX_GROUPS",
    "Confidence",
    "Reason",
    "ReasonCode",
    "TemperatureRange",
    "WaxKind",
    "WaxProduct",
    "DailySummary",
    "HourlyEntry",
    "PrecipitationKind",
    "SnowpackThresholds",
    "SnowSurfaceAssessment",
    "WeatherSummary",
    "WeatherAndSnowpackSummary",
]
