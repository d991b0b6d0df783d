"""Snowpack state tracking across consecutive days.

A single day's numbers cannot tell old dry snow apart from snow that was wet
a couple of days ago and has since refrozen. The tracker carries the memory
needed for that: days since the last significant snowfall, days since the
last melt, and how much snow has fallen on top of the melted surface.

The state is folded oldest day first and is advanced only after the day has
been classified.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from models.weather import DailySummary, PrecipitationKind, SnowpackThresholds

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLDS = SnowpackThresholds()


def average_temperature(
    day: DailySummary, thresholds: SnowpackThresholds = DEFAULT_THRESHOLDS
) -> float:
    """Get the day's mean temperature, substituting defaults for gaps."""
    min_temp = day.min_temp_celsius
    max_temp = day.max_temp_celsius
    if min_temp is None:
        min_temp = thresholds.default_min_temp_celsius
    if max_temp is None:
        max_temp = thresholds.default_max_temp_celsius
    return (min_temp + max_temp) / 2.0


def snow_to_liquid_ratio(
    temperature_celsius: float, thresholds: SnowpackThresholds = DEFAULT_THRESHOLDS
) -> float:
    """Get the snow-to-liquid ratio for a temperature.

    Cold snow is less dense, so one millimetre of water makes more snow:
    the ratio is linear between the warm ratio at 0°C and the cold ratio at
    the cold reference temperature, and flat beyond either end.
    """
    warm_ratio = thresholds.warm_snow_ratio
    cold_ratio = thresholds.cold_snow_ratio
    if temperature_celsius >= thresholds.freezing_point_celsius:
        return warm_ratio
    if temperature_celsius <= thresholds.cold_snow_ratio_celsius:
        return cold_ratio
    span = thresholds.freezing_point_celsius - thresholds.cold_snow_ratio_celsius
    fraction = (thresholds.freezing_point_celsius - temperature_celsius) / span
    return warm_ratio + fraction * (cold_ratio - warm_ratio)


def estimate_snowfall_cm(
    precipitation_mm: float | None,
    kind: PrecipitationKind | None,
    temperature_celsius: float,
    thresholds: SnowpackThresholds = DEFAULT_THRESHOLDS,
) -> float | None:
    """Estimate snow depth from liquid precipitation.

    Returns None when the estimate is unknown (no amount, or a kind that is
    not snow or mixed) so callers can tell it apart from a known zero.
    """
    if precipitation_mm is None or kind is None:
        return None
    if kind == PrecipitationKind.SNOW:
        share = 1.0
    elif kind == PrecipitationKind.MIXED:
        share = 0.5
    else:
        return None
    ratio = snow_to_liquid_ratio(temperature_celsius, thresholds)
    return precipitation_mm * ratio / 10.0 * share


def effective_snowfall_cm(
    day: DailySummary, thresholds: SnowpackThresholds = DEFAULT_THRESHOLDS
) -> float | None:
    """Get measured snowfall, or an estimate when no measurement exists."""
    if day.snowfall_cm is not None:
        return day.snowfall_cm
    return estimate_snowfall_cm(
        day.precipitation_mm,
        day.precipitation_kind,
        average_temperature(day, thresholds),
        thresholds,
    )


@dataclass
class SnowpackState:
    """Cross-day memory of the snowpack surface."""

    days_since_significant_snow: int = 0
    # None means no melt event is being tracked
    days_since_last_melt: int | None = None
    snow_depth_since_last_melt: float = 0.0
    was_wet_recently: bool = False

    def is_refrozen_surface(
        self,
        temperature_celsius: float,
        thresholds: SnowpackThresholds = DEFAULT_THRESHOLDS,
    ) -> bool:
        """Check for a melted surface that froze again without new cover."""
        if self.days_since_last_melt is None:
            return False
        if self.days_since_last_melt > thresholds.melt_relevance_days:
            return False
        if self.snow_depth_since_last_melt >= thresholds.significant_snow_cm:
            return False
        return temperature_celsius < thresholds.freezing_point_celsius

    def advance(
        self,
        day: DailySummary,
        thresholds: SnowpackThresholds = DEFAULT_THRESHOLDS,
    ) -> None:
        """Fold one classified day into the state."""
        snowfall = effective_snowfall_cm(day, thresholds) or 0.0

        if snowfall >= thresholds.significant_snow_cm:
            self.days_since_significant_snow = 0
        else:
            self.days_since_significant_snow += 1
        if snowfall > 0:
            self.snow_depth_since_last_melt += snowfall

        max_temp = day.max_temp_celsius
        if max_temp is None:
            max_temp = thresholds.default_max_temp_celsius

        if max_temp >= thresholds.wet_snow_temp_celsius:
            # Snow falling after this melt counts as cover from here on
            self.days_since_last_melt = 0
            self.snow_depth_since_last_melt = 0.0
            self.was_wet_recently = True
        elif self.days_since_last_melt is not None:
            self.days_since_last_melt += 1
            if self.days_since_last_melt > thresholds.melt_relevance_days:
                self.days_since_last_melt = None
                self.was_wet_recently = False

    def advanced(
        self,
        day: DailySummary,
        thresholds: SnowpackThresholds = DEFAULT_THRESHOLDS,
    ) -> "SnowpackState":
        """Return a copy advanced by one day, leaving this state untouched."""
        next_state = replace(self)
        next_state.advance(day, thresholds)
        return next_state


def snowpack_states(
    days: Iterable[DailySummary],
    thresholds: SnowpackThresholds = DEFAULT_THRESHOLDS,
    initial: SnowpackState | None = None,
) -> list[SnowpackState]:
    """Compute the state in effect before each day.

    Days must be chronological (oldest first). With the boundary states in
    hand every day can be classified independently of the others.
    """
    state = replace(initial) if initial is not None else SnowpackState()
    states = []
    for day in days:
        states.append(replace(state))
        state.advance(day, thresholds)
    logger.debug(f"Computed {len(states)} snowpack boundary states")
    return states
