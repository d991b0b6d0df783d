"""Snow surface classification for the current hour.

Works from the near-term hourly forecast plus the raw daily history. Day
counts are recomputed from the history's calendar dates rather than taken
from the historical fold, so every "now" assessment can be audited against
the raw data alone.
"""

import logging
from collections.abc import Sequence
from datetime import date

from models.snow import Confidence, ReasonCode, SnowType
from models.weather import (
    DailySummary,
    HourlyEntry,
    SnowpackThresholds,
    SnowSurfaceAssessment,
)
from services.snowpack_tracker import effective_snowfall_cm
from services.surface_rules import (
    RuleResult,
    dry_aging,
    fine_grained_type,
    new_snow_type,
    reason,
)

logger = logging.getLogger(__name__)


class CurrentConditionsClassifier:
    """Classify the snow surface right now."""

    def __init__(self, thresholds: SnowpackThresholds | None = None):
        """Initialize the classifier with threshold configuration."""
        self.thresholds = thresholds or SnowpackThresholds()

    def classify(
        self,
        next_hours: Sequence[HourlyEntry],
        past_daily: Sequence[DailySummary],
        yesterday: SnowSurfaceAssessment | None = None,
    ) -> SnowSurfaceAssessment | None:
        """Produce the assessment for the first forecast hour.

        Args:
            next_hours: Upcoming hourly entries, chronological
            past_daily: Past daily summaries (any order, sorted newest first here)
            yesterday: Historical assessment of the most recent past day

        Returns:
            The current assessment, or None when there is no hourly data
        """
        if not next_hours:
            return None

        t = self.thresholds
        first = next_hours[0]
        temp = first.temperature_celsius
        humidity = first.humidity if first.humidity is not None else t.default_humidity
        reference_day = first.timestamp.date()

        near_term = next_hours[: t.near_term_hours]
        hours_above_zero = sum(
            1 for h in near_term if h.temperature_celsius > t.freezing_point_celsius
        )
        hours_below_cold = sum(
            1 for h in near_term if h.temperature_celsius < t.cold_hour_celsius
        )
        snow_probability = max(
            (
                h.precipitation_probability
                for h in near_term
                if h.precipitation_kind is not None
                and h.precipitation_kind.is_snowy
                and h.precipitation_probability >= t.snow_imminent_probability
            ),
            default=None,
        )
        wet_forecast = (
            temp >= t.wet_snow_temp_celsius or hours_above_zero >= t.wet_hours
        )

        history = sorted(past_daily, key=lambda d: d.day, reverse=True)
        yesterday_snow = None
        if history and (reference_day - history[0].day).days == 1:
            yesterday_snow = effective_snowfall_cm(history[0], t)
        observed_days_since_snow = self._days_since_significant_snow(
            history, reference_day
        )
        days_since_snow = (
            observed_days_since_snow
            if observed_days_since_snow is not None
            else t.default_days_since_snow
        )
        days_since_melt, snow_since_melt = self._melt_history(history, reference_day)

        yesterday_was_wet = yesterday is not None and yesterday.snow_type.is_wet
        recently_wet = yesterday_was_wet or (
            days_since_melt is not None and days_since_melt <= t.melt_relevance_days
        )
        refrozen = (
            recently_wet
            and snow_since_melt < t.significant_snow_cm
            and temp < t.freezing_point_celsius
        )
        is_moist = temp >= t.moist_snow_boundary_celsius
        snow_cm = yesterday_snow or 0.0

        if snow_probability is not None:
            rule = "snow_imminent"
            heavy = snow_probability >= t.heavy_snow_probability
            code = ReasonCode.NEW_SNOW_HEAVY if heavy else ReasonCode.NEW_SNOW_IMMINENT
            result = (
                new_snow_type(is_moist),
                Confidence.HIGH if heavy else Confidence.MEDIUM,
                [reason(code, probability=int(round(snow_probability * 100)))],
            )
        elif wet_forecast:
            rule = "wet"
            result = self._wet(temp, hours_above_zero)
        elif snow_cm >= t.significant_snow_cm:
            rule = "snow_yesterday"
            result = (
                new_snow_type(is_moist),
                Confidence.HIGH,
                [reason(ReasonCode.NEW_SNOW_YESTERDAY, snow_cm=snow_cm)],
            )
        elif snow_cm > t.light_snow_cm:
            rule = "light_snow_yesterday"
            result = (
                fine_grained_type(is_moist),
                Confidence.MEDIUM,
                [reason(ReasonCode.LIGHT_SNOW, snow_cm=snow_cm)],
            )
        elif (
            observed_days_since_snow is not None
            and observed_days_since_snow <= t.recent_snow_days
        ):
            rule = "recent_snow"
            result = (
                fine_grained_type(is_moist),
                Confidence.MEDIUM,
                [
                    reason(
                        ReasonCode.FINE_GRAINED_RECENT, days=observed_days_since_snow
                    )
                ],
            )
        elif refrozen:
            rule = "refrozen"
            result = (
                SnowType.FROZEN_CORN,
                Confidence.HIGH,
                [
                    reason(
                        ReasonCode.REFROZEN_AFTER_MELT,
                        days=days_since_melt if days_since_melt is not None else 0,
                    )
                ],
            )
        elif is_moist and humidity >= t.high_humidity:
            rule = "moist_near_zero"
            result = (
                SnowType.MOIST_FINE_GRAINED,
                Confidence.MEDIUM,
                [
                    reason(
                        ReasonCode.MOIST_NEAR_ZERO,
                        temperature=temp,
                        humidity=int(round(humidity * 100)),
                    )
                ],
            )
        else:
            rule = "dry_aging"
            result = dry_aging(days_since_snow, is_moist, temp, t)

        snow_type, confidence, reasons = result
        logger.debug(f"Current conditions: rule {rule} -> {snow_type.value}")

        temps = [h.temperature_celsius for h in next_hours]
        return SnowSurfaceAssessment(
            timestamp=first.timestamp,
            snow_type=snow_type,
            confidence=confidence,
            reasons=reasons,
            recent_snow_cm=yesterday_snow,
            min_temp_celsius=min(temps),
            max_temp_celsius=max(temps),
            hours_above_zero=hours_above_zero,
            hours_below_cold=hours_below_cold,
            refreeze_detected=snow_type == SnowType.FROZEN_CORN,
            days_since_last_melt=days_since_melt,
            days_since_significant_snow=days_since_snow,
            humidity=first.humidity,
        )

    def _days_since_significant_snow(
        self, history: Sequence[DailySummary], reference_day: date
    ) -> int | None:
        """Get calendar days since the newest significant snow day, if any."""
        for day in history:
            snowfall = effective_snowfall_cm(day, self.thresholds) or 0.0
            if snowfall >= self.thresholds.significant_snow_cm:
                return max(1, (reference_day - day.day).days)
        return None

    def _melt_history(
        self, history: Sequence[DailySummary], reference_day: date
    ) -> tuple[int | None, float]:
        """Find the newest melt day and the snow that has fallen since.

        The melt age is counted the way the snowpack tracker counts it: a
        melt yesterday is 0 days old.

        Returns:
            tuple: (days_since_melt or None, snow_cm_since_melt)
        """
        snow_since = 0.0
        for day in history:
            max_temp = day.max_temp_celsius
            if max_temp is None:
                max_temp = self.thresholds.default_max_temp_celsius
            if max_temp >= self.thresholds.wet_snow_temp_celsius:
                return max(0, (reference_day - day.day).days - 1), snow_since
            snow_since += effective_snowfall_cm(day, self.thresholds) or 0.0
        return None, snow_since

    def _wet(self, temp: float, hours_above_zero: int) -> RuleResult:
        t = self.thresholds
        forecast = reason(ReasonCode.WET_FORECAST, hours=hours_above_zero)
        if hours_above_zero >= t.sustained_warm_hours or temp >= t.slush_temp_celsius:
            return (
                SnowType.VERY_WET_CORN,
                Confidence.HIGH,
                [reason(ReasonCode.WET_SLUSH, temperature=temp), forecast],
            )
        return (
            SnowType.WET_CORN,
            Confidence.HIGH,
            [reason(ReasonCode.WET_ABOVE_FREEZING, temperature=temp), forecast],
        )
