"""Wax product models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .snow import SnowType, TemperatureRange


class WaxKind(str, Enum):
    """Kinds of grip wax."""

    HARDWAX = "hardwax"
    KLISTER = "klister"
    BASE = "base"


class WaxProduct(BaseModel):
    """A wax that can be recommended for a snow type and temperature."""

    code: str = Field(..., description="Unique product code, e.g. V30")
    name: str = Field(..., description="Display name")
    series: str = Field(..., description="Product series (V, VP, K, KX, KN)")
    kind: WaxKind = Field(..., description="Hardwax, klister or base")
    ranges: dict[SnowType, list[TemperatureRange]] = Field(
        default_factory=dict, description="Operating ranges per snow type"
    )
    notes: str | None = Field(None, description="Usage notes")
    primary_color: str = Field(default="#333", description="Can colour")
    secondary_color: str | None = Field(None, description="Accent colour")

    model_config = ConfigDict(frozen=True)

    def ranges_for(self, snow_type: SnowType) -> list[TemperatureRange]:
        """Get the operating ranges for a snow type."""
        return self.ranges.get(snow_type, [])

    @property
    def min_temp_celsius(self) -> int | None:
        """Get the coldest temperature across all ranges."""
        mins = [r.min for ranges in self.ranges.values() for r in ranges]
        return min(mins) if mins else None

    @property
    def max_temp_celsius(self) -> int | None:
        """Get the warmest temperature across all ranges."""
        maxs = [r.max for ranges in self.ranges.values() for r in ranges]
        return max(maxs) if maxs else None
