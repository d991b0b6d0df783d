"""Services for the grip wax advisor backend."""

from .current_conditions_classifier import CurrentConditionsClassifier
from .historical_classifier import HistoricalClassifier
from .openmeteo_service import OpenMeteoService
from .recommendation_service import WaxRecommendation, WaxRecommendationService
from .snow_assessment_service import SnowAssessmentService
from .snowpack_tracker import SnowpackState, snowpack_states
from .weather_service import (
    WeatherHistoryProvider,
    WeatherProviderError,
    WeatherService,
)

__all__ = [
    "CurrentConditionsClassifier",
    "HistoricalClassifier",
    "OpenMeteoService",
    "SnowAssessmentService",
    "SnowpackState",
    "WaxRecommendation",
    "WaxRecommendationService",
    "WeatherHistoryProvider",
    "WeatherProviderError",
    "WeatherService",
    "snowpack_states",
]
