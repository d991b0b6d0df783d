"""Historical snow surface classification, one past day at a time."""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime, time

from models.snow import Confidence, ReasonCode, SnowType
from models.weather import DailySummary, SnowpackThresholds, SnowSurfaceAssessment
from services.snowpack_tracker import SnowpackState, effective_snowfall_cm
from services.surface_rules import (
    RuleResult,
    dry_aging,
    fine_grained_type,
    new_snow_type,
    reason,
)

logger = logging.getLogger(__name__)


class HistoricalClassifier:
    """Classify past days against the snowpack state carried between them."""

    def __init__(self, thresholds: SnowpackThresholds | None = None):
        """Initialize the classifier with threshold configuration."""
        self.thresholds = thresholds or SnowpackThresholds()

    def classify_day(
        self, day: DailySummary, state: SnowpackState
    ) -> SnowSurfaceAssessment:
        """Classify one day given the state in effect before it.

        Rules are tried in priority order and the first match wins: wet,
        new snow, refrozen, moist near zero, then dry aging. The state is
        only read; advancing it is the caller's job (see classify()).
        """
        t = self.thresholds
        snowfall = effective_snowfall_cm(day, t)
        snow_cm = snowfall or 0.0

        min_temp = day.min_temp_celsius
        if min_temp is None:
            min_temp = t.default_min_temp_celsius
        max_temp = day.max_temp_celsius
        if max_temp is None:
            max_temp = t.default_max_temp_celsius
        avg_temp = (min_temp + max_temp) / 2.0
        humidity = day.humidity if day.humidity is not None else t.default_humidity

        is_moist = max_temp >= t.moist_snow_boundary_celsius
        refrozen = state.is_refrozen_surface(avg_temp, t)

        if max_temp >= t.wet_snow_temp_celsius:
            rule = "wet"
            result = self._wet(max_temp)
        elif snow_cm >= t.significant_snow_cm:
            rule = "new_snow"
            code = ReasonCode.NEW_SNOW_MOIST if is_moist else ReasonCode.NEW_SNOW_DRY
            result = (
                new_snow_type(is_moist),
                Confidence.HIGH,
                [reason(code, snow_cm=snow_cm)],
            )
        elif refrozen:
            rule = "refrozen"
            result = (
                SnowType.FROZEN_CORN,
                Confidence.HIGH,
                [
                    reason(
                        ReasonCode.REFROZEN_AFTER_MELT,
                        days=state.days_since_last_melt,
                    )
                ],
            )
        elif (
            t.moist_snow_boundary_celsius <= max_temp < t.freezing_point_celsius
            and humidity >= t.high_humidity
            and avg_temp > t.very_cold_boundary_celsius
        ):
            rule = "moist_near_zero"
            result = (
                SnowType.TRANSFORMED_MOIST_FINE,
                Confidence.MEDIUM,
                [
                    reason(
                        ReasonCode.MOIST_NEAR_ZERO,
                        temperature=max_temp,
                        humidity=int(round(humidity * 100)),
                    )
                ],
            )
        elif t.light_snow_cm < snow_cm < t.significant_snow_cm:
            rule = "light_snow"
            result = (
                fine_grained_type(is_moist),
                Confidence.MEDIUM,
                [reason(ReasonCode.LIGHT_SNOW, snow_cm=snow_cm)],
            )
        else:
            rule = "dry_aging"
            result = dry_aging(state.days_since_significant_snow, is_moist, avg_temp, t)

        snow_type, confidence, reasons = result
        logger.debug(f"{day.day.isoformat()}: rule {rule} -> {snow_type.value}")

        return SnowSurfaceAssessment(
            timestamp=datetime.combine(day.day, time.min, tzinfo=UTC),
            snow_type=snow_type,
            confidence=confidence,
            reasons=reasons,
            recent_snow_cm=snowfall,
            min_temp_celsius=day.min_temp_celsius,
            max_temp_celsius=day.max_temp_celsius,
            refreeze_detected=snow_type == SnowType.FROZEN_CORN,
            days_since_last_melt=state.days_since_last_melt,
            days_since_significant_snow=state.days_since_significant_snow,
            humidity=day.humidity,
        )

    def classify(
        self, day: DailySummary, state: SnowpackState
    ) -> tuple[SnowSurfaceAssessment, SnowpackState]:
        """Classify one day and return the state to use for the next day."""
        assessment = self.classify_day(day, state)
        return assessment, state.advanced(day, self.thresholds)

    def classify_history(
        self, days: Sequence[DailySummary]
    ) -> list[SnowSurfaceAssessment]:
        """Classify a run of past days.

        Days may arrive in any order; they are folded oldest first and the
        result is aligned with the input positions. A fresh state is used
        for every call.
        """
        order = sorted(range(len(days)), key=lambda i: days[i].day)
        results: list[SnowSurfaceAssessment | None] = [None] * len(days)

        state = SnowpackState()
        for index in order:
            day = days[index]
            results[index] = self.classify_day(day, state)
            state.advance(day, self.thresholds)

        logger.info(f"Classified {len(days)} past days")
        return results

    def _wet(self, max_temp: float) -> RuleResult:
        if max_temp >= self.thresholds.slush_temp_celsius:
            return (
                SnowType.VERY_WET_CORN,
                Confidence.HIGH,
                [reason(ReasonCode.WET_SLUSH, temperature=max_temp)],
            )
        return (
            SnowType.WET_CORN,
            Confidence.HIGH,
            [reason(ReasonCode.WET_ABOVE_FREEZING, temperature=max_temp)],
        )
