"""Snow surface taxonomy and temperature range models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SnowType(str, Enum):
    """Snow surface categories used to pick a grip wax."""

    NEW_FALLEN = "new_fallen"  # Dry, sharp crystals
    MOIST_NEW_FALLEN = "moist_new_fallen"
    FINE_GRAINED = "fine_grained"
    MOIST_FINE_GRAINED = "moist_fine_grained"
    OLD_GRAINED = "old_grained"  # Rounded, partly transformed, generally dry
    TRANSFORMED_MOIST_FINE = "transformed_moist_fine"  # Around 0°C, humid
    FROZEN_CORN = "frozen_corn"  # Refrozen coarse / crust
    WET_CORN = "wet_corn"  # Free water present
    VERY_WET_CORN = "very_wet_corn"  # Slush

    @property
    def swix_group(self) -> int:
        """Get the 1-5 Swix group for this snow type."""
        return SWIX_GROUPS[self]

    @property
    def is_wet(self) -> bool:
        """Whether the surface holds free water."""
        return self in (SnowType.WET_CORN, SnowType.VERY_WET_CORN)


# 1: new snow, 2: fine-grained, 3: old-grained, 4: wet/transformed, 5: refrozen
SWIX_GROUPS: dict[SnowType, int] = {
    SnowType.NEW_FALLEN: 1,
    SnowType.MOIST_NEW_FALLEN: 1,
    SnowType.FINE_GRAINED: 2,
    SnowType.MOIST_FINE_GRAINED: 2,
    SnowType.OLD_GRAINED: 3,
    SnowType.TRANSFORMED_MOIST_FINE: 4,
    SnowType.WET_CORN: 4,
    SnowType.VERY_WET_CORN: 4,
    SnowType.FROZEN_CORN: 5,
}


class Confidence(str, Enum):
    """Confidence in a snow surface assessment."""

    HIGH = "high"  # Driven by concrete recent observations
    MEDIUM = "medium"  # Inferred or aged state
    LOW = "low"


class ReasonCode(str, Enum):
    """Stable identifiers explaining a classification.

    Presentation layers localize these; parameters are carried alongside.
    """

    WET_SLUSH = "wet.slush"
    WET_ABOVE_FREEZING = "wet.above_freezing"
    WET_FORECAST = "wet.forecast"
    NEW_SNOW_MOIST = "new_snow.moist"
    NEW_SNOW_DRY = "new_snow.dry"
    NEW_SNOW_IMMINENT = "new_snow.imminent"
    NEW_SNOW_HEAVY = "new_snow.heavy"
    NEW_SNOW_YESTERDAY = "new_snow.yesterday"
    NEW_SNOW_RECENT = "new_snow.recent"
    REFROZEN_AFTER_MELT = "refrozen.after_melt"
    MOIST_NEAR_ZERO = "moist.near_zero_humid"
    LIGHT_SNOW = "fine_grained.light_snow"
    FINE_GRAINED_RECENT = "fine_grained.recent_snow"
    FINE_GRAINED_AGING = "fine_grained.aging"
    FINE_GRAINED_COLD = "fine_grained.cold"
    FINE_GRAINED_MOIST = "fine_grained.moist"
    OLD_GRAINED = "old_grained.many_days"
    OLD_GRAINED_MOIST = "old_grained.moist_transformed"


class Reason(BaseModel):
    """A reason code with its interpolation parameters."""

    code: ReasonCode = Field(..., description="Stable reason identifier")
    params: dict[str, str] = Field(
        default_factory=dict, description="Parameters for localized rendering"
    )

    model_config = ConfigDict(frozen=True)


class TemperatureRange(BaseModel):
    """Inclusive whole-degree Celsius range."""

    min: int = Field(..., description="Lower bound (inclusive), °C")
    max: int = Field(..., description="Upper bound (inclusive), °C")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_bounds(self) -> "TemperatureRange":
        if self.min > self.max:
            raise ValueError(
                f"Range minimum {self.min} is above maximum {self.max}"
            )
        return self

    @classmethod
    def of(cls, min_c: int, max_c: int) -> "TemperatureRange":
        """Positional shorthand used by the wax catalog."""
        return cls(min=min_c, max=max_c)

    @property
    def width(self) -> int:
        return self.max - self.min

    @property
    def center(self) -> float:
        return (self.min + self.max) / 2.0

    @property
    def half_width(self) -> float:
        return (self.max - self.min) / 2.0

    def contains(self, temperature: float) -> bool:
        """Check inclusive containment."""
        return self.min <= temperature <= self.max

    def clamp(self, temperature: int) -> int:
        """Get the point of this range closest to the temperature."""
        return max(self.min, min(temperature, self.max))
