"""Weather observation and snow surface assessment models."""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .snow import Confidence, Reason, ReasonCode, SnowType


class PrecipitationKind(str, Enum):
    """Predominant precipitation kind reported by a weather provider."""

    NONE = "none"
    RAIN = "rain"
    SNOW = "snow"
    SLEET = "sleet"
    HAIL = "hail"
    MIXED = "mixed"

    @property
    def is_snowy(self) -> bool:
        """Whether this kind can leave snow on the ground."""
        return self in (PrecipitationKind.SNOW, PrecipitationKind.MIXED)


class DailySummary(BaseModel):
    """Summary of one past day of weather."""

    day: date = Field(..., description="Calendar day of the summary")
    min_temp_celsius: float | None = Field(None, description="Daily minimum")
    max_temp_celsius: float | None = Field(None, description="Daily maximum")
    precipitation_mm: float | None = Field(
        None, ge=0, description="Total precipitation (mm)"
    )
    snowfall_cm: float | None = Field(
        None, ge=0, description="Measured snowfall depth (cm)"
    )
    precipitation_kind: PrecipitationKind | None = Field(
        None, description="Predominant precipitation kind"
    )
    humidity: float | None = Field(
        None, ge=0, le=1, description="Average relative humidity (0-1)"
    )

    model_config = ConfigDict(frozen=True)


class HourlyEntry(BaseModel):
    """One forecast hour."""

    timestamp: datetime = Field(..., description="Start of the forecast hour")
    temperature_celsius: float = Field(..., description="Air temperature")
    precipitation_probability: float = Field(
        default=0.0, ge=0, le=1, description="Chance of precipitation (0-1)"
    )
    precipitation_kind: PrecipitationKind | None = Field(
        None, description="Expected precipitation kind"
    )
    humidity: float | None = Field(
        None, ge=0, le=1, description="Relative humidity (0-1)"
    )

    model_config = ConfigDict(frozen=True)


class SnowSurfaceAssessment(BaseModel):
    """Classified snow surface for one day or for "now"."""

    timestamp: datetime = Field(..., description="Time the assessment applies to")
    snow_type: SnowType = Field(..., description="Classified snow surface")
    confidence: Confidence = Field(..., description="Confidence in the class")
    reasons: list[Reason] = Field(
        default_factory=list, description="Ordered decision explanation"
    )

    # Supporting metrics (for debugging/inspection)
    recent_snow_cm: float | None = Field(None, description="Snow counted as recent")
    min_temp_celsius: float | None = Field(None, description="Minimum temperature")
    max_temp_celsius: float | None = Field(None, description="Maximum temperature")
    hours_above_zero: int | None = Field(
        None, description="Near-term hours above freezing"
    )
    hours_below_cold: int | None = Field(
        None, description="Near-term hours below the cold threshold"
    )
    refreeze_detected: bool | None = Field(
        None, description="Surface judged refrozen after a melt"
    )
    days_since_last_melt: int | None = Field(None, description="Days since melt")
    days_since_significant_snow: int | None = Field(
        None, description="Days since significant snowfall"
    )
    humidity: float | None = Field(None, description="Relative humidity (0-1)")

    model_config = ConfigDict(frozen=True)

    @property
    def swix_group(self) -> int:
        """Get the Swix group of the classified snow type."""
        return self.snow_type.swix_group

    @property
    def reason_codes(self) -> list[ReasonCode]:
        return [reason.code for reason in self.reasons]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        data = self.model_dump(mode="json")
        data["swix_group"] = self.swix_group
        return data


class WeatherSummary(BaseModel):
    """Raw weather payload handed to the classifiers."""

    past_daily: list[DailySummary] = Field(
        default_factory=list, description="Past days, newest first"
    )
    next_hours: list[HourlyEntry] = Field(
        default_factory=list, description="Upcoming hours, chronological"
    )

    model_config = ConfigDict(frozen=True)


class WeatherAndSnowpackSummary(BaseModel):
    """Weather payload together with its snow surface assessments."""

    weather: WeatherSummary
    past_daily_assessments: list[SnowSurfaceAssessment] = Field(
        default_factory=list, description="Aligned with weather.past_daily"
    )
    current_assessment: SnowSurfaceAssessment | None = Field(
        None, description="Assessment for the current hour"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def current_temperature_celsius(self) -> float | None:
        """Get the temperature of the first forecast hour."""
        if not self.weather.next_hours:
            return None
        return self.weather.next_hours[0].temperature_celsius


class SnowpackThresholds(BaseModel):
    """Configuration for snow surface classification."""

    # Snow amounts (cm)
    significant_snow_cm: float = Field(
        default=2.0, description="Snowfall that resets surface age"
    )
    light_snow_cm: float = Field(
        default=0.5, description="Snowfall that refreshes the surface"
    )

    # Temperatures (°C)
    freezing_point_celsius: float = Field(default=0.0)
    moist_snow_boundary_celsius: float = Field(
        default=-1.0, description="Max temp above this allows moist snow"
    )
    cold_snow_boundary_celsius: float = Field(
        default=-7.0, description="Average at or below this is cold and dry"
    )
    very_cold_boundary_celsius: float = Field(
        default=-12.0, description="Average at or below this is very cold"
    )
    wet_snow_temp_celsius: float = Field(
        default=0.5, description="Max temp at or above this means free water"
    )
    slush_temp_celsius: float = Field(
        default=2.0, description="Max temp at or above this means slush"
    )
    cold_hour_celsius: float = Field(
        default=-5.0, description="Hourly temp below this counts as a cold hour"
    )

    # Time windows (days)
    new_snow_window_days: int = Field(
        default=1, description="Snow stays new-fallen for this many days"
    )
    fine_grained_max_days: int = Field(
        default=4, description="After this many days snow is old-grained"
    )
    old_snow_confident_days: int = Field(
        default=7, description="Old-grained is high confidence from here on"
    )
    melt_relevance_days: int = Field(
        default=3, description="A melt influences the surface this long"
    )
    default_days_since_snow: int = Field(
        default=3, description="Assumed age when no snow day is in history"
    )
    recent_snow_days: int = Field(
        default=3, description="Observed snow this recent keeps fine grains"
    )

    # Forecast window (hours)
    near_term_hours: int = Field(default=6, description="Forecast look-ahead")
    wet_hours: int = Field(
        default=3, description="Near-term hours above freezing that mean wet"
    )
    sustained_warm_hours: int = Field(
        default=4, description="Near-term warm hours that mean very wet"
    )
    snow_imminent_probability: float = Field(default=0.4)
    heavy_snow_probability: float = Field(default=0.7)

    # Humidity (0-1)
    high_humidity: float = Field(default=0.80)

    # Defaults for missing observations
    default_min_temp_celsius: float = Field(default=-5.0)
    default_max_temp_celsius: float = Field(default=0.0)
    default_humidity: float = Field(default=0.65)

    # Snow-to-liquid ratios for estimating snowfall from precipitation
    warm_snow_ratio: float = Field(default=5.0, description="Ratio at or above 0°C")
    cold_snow_ratio: float = Field(
        default=15.0, description="Ratio at or below -10°C"
    )
    cold_snow_ratio_celsius: float = Field(default=-10.0)

    model_config = ConfigDict(frozen=True)
