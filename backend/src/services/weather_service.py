"""Weather data service for fetching and assessing snow conditions."""

import logging
from typing import Protocol

from models.weather import WeatherAndSnowpackSummary, WeatherSummary
from services.snow_assessment_service import SnowAssessmentService

logger = logging.getLogger(__name__)


class WeatherProviderError(Exception):
    """Raised when a provider cannot deliver a usable weather summary."""


class WeatherHistoryProvider(Protocol):
    """Source of past daily summaries and upcoming hourly entries."""

    def get_weather_summary(
        self, latitude: float, longitude: float
    ) -> WeatherSummary: ...


class WeatherService:
    """Service for fetching weather and classifying the snow surface."""

    def __init__(
        self,
        provider: WeatherHistoryProvider,
        assessment_service: SnowAssessmentService | None = None,
    ):
        """Initialize the weather service with a provider."""
        self.provider = provider
        self.assessment_service = assessment_service or SnowAssessmentService()

    def fetch_and_assess(
        self, latitude: float, longitude: float
    ) -> WeatherAndSnowpackSummary:
        """Fetch the weather for a location and assess its snow surface.

        Raises:
            WeatherProviderError: If the provider cannot deliver a summary
        """
        logger.info(f"Fetching weather for ({latitude:.4f}, {longitude:.4f})")
        weather = self.provider.get_weather_summary(latitude, longitude)
        return self.assessment_service.assess(weather)
