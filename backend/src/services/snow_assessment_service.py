"""Assess a weather payload into per-day and current snow surfaces."""

import logging

from models.weather import (
    SnowpackThresholds,
    WeatherAndSnowpackSummary,
    WeatherSummary,
)
from services.current_conditions_classifier import CurrentConditionsClassifier
from services.historical_classifier import HistoricalClassifier

logger = logging.getLogger(__name__)


class SnowAssessmentService:
    """Run both classifiers over a weather summary."""

    def __init__(self, thresholds: SnowpackThresholds | None = None):
        """Initialize the service with threshold configuration."""
        self.thresholds = thresholds or SnowpackThresholds()
        self.historical = HistoricalClassifier(self.thresholds)
        self.current = CurrentConditionsClassifier(self.thresholds)

    def assess(self, weather: WeatherSummary) -> WeatherAndSnowpackSummary:
        """Classify the past days and the current hour.

        The newest past day's assessment is handed to the current-conditions
        classifier as "yesterday".
        """
        past_assessments = self.historical.classify_history(weather.past_daily)

        yesterday = None
        if weather.past_daily:
            newest = max(
                range(len(weather.past_daily)),
                key=lambda i: weather.past_daily[i].day,
            )
            yesterday = past_assessments[newest]

        current = self.current.classify(
            weather.next_hours, weather.past_daily, yesterday
        )

        if current is None:
            logger.info(
                f"Assessed {len(past_assessments)} past days, no hourly data for now"
            )
        else:
            logger.info(
                f"Assessed {len(past_assessments)} past days, "
                f"now {current.snow_type.value} ({current.confidence.value})"
            )

        return WeatherAndSnowpackSummary(
            weather=weather,
            past_daily_assessments=past_assessments,
            current_assessment=current,
        )
