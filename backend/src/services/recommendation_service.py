"""Recommendation service for matching grip waxes to snow conditions."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any

from models.snow import SnowType, TemperatureRange
from models.wax import WaxProduct
from models.weather import WeatherAndSnowpackSummary
from utils.wax_catalog import SWIX_WAXES

logger = logging.getLogger(__name__)


@dataclass
class WaxRecommendation:
    """A wax recommendation with scoring details."""

    wax: WaxProduct
    match_score: float
    range: TemperatureRange

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "wax": self.wax.model_dump(mode="json"),
            "match_score": round(self.match_score, 3),
            "range": {"min": self.range.min, "max": self.range.max},
        }


def match_score(temperature: float, temperature_range: TemperatureRange) -> float:
    """Score how centrally a temperature sits inside a range.

    1.0 at the centre, falling linearly to 0.0 at either bound. A zero-width
    range scores 1.0 since it only ever matches its single temperature.
    """
    half_width = temperature_range.half_width
    if half_width == 0:
        return 1.0
    score = 1.0 - abs(temperature - temperature_range.center) / half_width
    return max(0.0, score)


class WaxRecommendationService:
    """Service for ranking waxes against a temperature and snow type."""

    # Scores closer than this are ranked by range width instead
    TIE_TOLERANCE = 0.01

    def __init__(self, candidates: Sequence[WaxProduct] | None = None):
        """Initialize the service with a candidate catalog.

        Args:
            candidates: Waxes to choose from (defaults to the Swix catalog)
        """
        self.candidates = list(SWIX_WAXES if candidates is None else candidates)

    def recommend(
        self,
        temperature: float,
        snow_type: SnowType,
        candidates: Sequence[WaxProduct] | None = None,
        limit: int | None = None,
    ) -> list[WaxRecommendation]:
        """Get waxes whose range for the snow type contains the temperature.

        Args:
            temperature: Target temperature in °C
            snow_type: Classified snow surface
            candidates: Optional candidate override for this call
            limit: Maximum number of recommendations to return

        Returns:
            Recommendations, best first
        """
        pool = self.candidates if candidates is None else candidates
        matches: list[WaxRecommendation] = []

        for wax in pool:
            best: WaxRecommendation | None = None
            for temperature_range in wax.ranges_for(snow_type):
                if not temperature_range.contains(temperature):
                    continue
                candidate = WaxRecommendation(
                    wax=wax,
                    match_score=match_score(temperature, temperature_range),
                    range=temperature_range,
                )
                if best is None or self._compare(candidate, best) < 0:
                    best = candidate
            if best is not None:
                matches.append(best)

        matches.sort(key=cmp_to_key(self._compare))
        if limit is not None:
            matches = matches[:limit]

        logger.debug(
            f"{len(matches)} waxes match {snow_type.value} at {temperature}°C"
        )
        return matches

    def nearest_recommended_temperature(
        self,
        temperature: int,
        snow_type: SnowType,
        candidates: Sequence[WaxProduct] | None = None,
    ) -> int | None:
        """Find the closest temperature at which any wax covers the snow type.

        Returns:
            The clamped temperature nearest to the input, or None when no
            candidate defines a range for the snow type
        """
        pool = self.candidates if candidates is None else candidates
        nearest: int | None = None
        for wax in pool:
            for temperature_range in wax.ranges_for(snow_type):
                clamped = temperature_range.clamp(temperature)
                if nearest is None or abs(clamped - temperature) < abs(
                    nearest - temperature
                ):
                    nearest = clamped
        return nearest

    def recommend_with_fallback(
        self,
        temperature: int,
        snow_type: SnowType,
        candidates: Sequence[WaxProduct] | None = None,
        limit: int | None = None,
    ) -> tuple[list[WaxRecommendation], int]:
        """Recommend waxes, snapping to the nearest covered temperature if needed.

        Returns:
            tuple: (recommendations, temperature actually used)
        """
        recommendations = self.recommend(temperature, snow_type, candidates, limit)
        if recommendations:
            return recommendations, temperature

        nearest = self.nearest_recommended_temperature(
            temperature, snow_type, candidates
        )
        if nearest is None:
            logger.info(f"No wax covers {snow_type.value} at any temperature")
            return [], temperature

        logger.info(
            f"No wax for {snow_type.value} at {temperature}°C, using {nearest}°C"
        )
        return self.recommend(nearest, snow_type, candidates, limit), nearest

    def recommend_for_summary(
        self,
        summary: WeatherAndSnowpackSummary,
        snow_type_override: SnowType | None = None,
        temperature_override: int | None = None,
        limit: int | None = None,
    ) -> list[WaxRecommendation]:
        """Recommend waxes for the current conditions of an assessed summary.

        User overrides take precedence over the forecast temperature and the
        classified snow type.
        """
        temperature = temperature_override
        if temperature is None:
            current = summary.current_temperature_celsius
            if current is None:
                return []
            temperature = int(round(current))

        snow_type = snow_type_override
        if snow_type is None:
            if summary.current_assessment is None:
                return []
            snow_type = summary.current_assessment.snow_type

        return self.recommend(temperature, snow_type, limit=limit)

    def _compare(self, a: WaxRecommendation, b: WaxRecommendation) -> int:
        """Order by descending score, then by narrower range on near-ties."""
        if abs(a.match_score - b.match_score) > self.TIE_TOLERANCE:
            return -1 if a.match_score > b.match_score else 1
        return a.range.width - b.range.width
