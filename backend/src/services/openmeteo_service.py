"""Open-Meteo weather data service producing classifier-ready summaries."""

import logging
import os
import time
from datetime import UTC, date, datetime
from typing import Any

import requests
from pydantic import ValidationError

from models.weather import DailySummary, HourlyEntry, PrecipitationKind, WeatherSummary
from services.weather_service import WeatherProviderError

logger = logging.getLogger(__name__)


OPENMETEO_BASE_URL = os.environ.get(
    "OPENMETEO_BASE_URL", "https://api.open-meteo.com/v1/forecast"
)
WEATHER_PAST_DAYS = int(os.environ.get("WEATHER_PAST_DAYS", "10"))
WEATHER_FORECAST_HOURS = int(os.environ.get("WEATHER_FORECAST_HOURS", "24"))
WEATHER_REQUEST_TIMEOUT = float(os.environ.get("WEATHER_REQUEST_TIMEOUT", "10"))

# Retry configuration for API calls
MAX_RETRIES = 3
RETRY_DELAYS = [1, 2, 4]  # Exponential backoff: 1s, 2s, 4s
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

DAILY_VARIABLES = [
    "temperature_2m_min",
    "temperature_2m_max",
    "precipitation_sum",
    "rain_sum",
    "snowfall_sum",
    "weather_code",
    "relative_humidity_2m_mean",
]
HOURLY_VARIABLES = [
    "temperature_2m",
    "precipitation_probability",
    "weather_code",
    "relative_humidity_2m",
]

# WMO weather interpretation codes
WMO_SNOW_CODES = {71, 73, 75, 77, 85, 86}
WMO_RAIN_CODES = {51, 53, 55, 61, 63, 65, 80, 81, 82, 95}
WMO_SLEET_CODES = {56, 57, 66, 67}
WMO_HAIL_CODES = {96, 99}


def _is_retryable_error(exception: Exception) -> bool:
    """Check whether a failed Open-Meteo request is worth repeating."""
    if isinstance(
        exception,
        (requests.exceptions.Timeout, requests.exceptions.ConnectionError),
    ):
        return True
    if (
        isinstance(exception, requests.exceptions.HTTPError)
        and exception.response is not None
    ):
        return exception.response.status_code in RETRYABLE_STATUS_CODES
    return False


def _request_with_retry(method: str, url: str, **kwargs) -> requests.Response:
    """Make an HTTP request, retrying transient failures with backoff.

    Raises:
        requests.exceptions.RequestException: If the error is not retryable
            or the last attempt fails
    """
    attempt = 1
    while True:
        try:
            response = requests.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except requests.exceptions.RequestException as e:
            if attempt >= MAX_RETRIES or not _is_retryable_error(e):
                raise
            delay = RETRY_DELAYS[attempt - 1]
            logger.warning(
                f"Open-Meteo request failed ({attempt}/{MAX_RETRIES}), "
                f"retrying in {delay}s: {e}"
            )
            time.sleep(delay)
            attempt += 1


def precipitation_kind_from_wmo(code: int | None) -> PrecipitationKind | None:
    """Map a WMO weather code onto a precipitation kind."""
    if code is None:
        return None
    code = int(code)
    if code in WMO_SNOW_CODES:
        return PrecipitationKind.SNOW
    if code in WMO_RAIN_CODES:
        return PrecipitationKind.RAIN
    if code in WMO_SLEET_CODES:
        return PrecipitationKind.SLEET
    if code in WMO_HAIL_CODES:
        return PrecipitationKind.HAIL
    return PrecipitationKind.NONE


def _fraction(percent: float | None) -> float | None:
    if percent is None:
        return None
    return min(1.0, max(0.0, percent / 100.0))


def _value(series: list[Any] | None, index: int) -> Any:
    if series is None or index >= len(series):
        return None
    return series[index]


class OpenMeteoService:
    """Weather provider backed by the Open-Meteo forecast API.

    Open-Meteo is free and keyless. A single forecast request with
    ``past_days`` set returns both the recent daily history and the hourly
    forecast the classifiers need.
    """

    def __init__(
        self,
        base_url: str | None = None,
        past_days: int | None = None,
        forecast_hours: int | None = None,
        timeout: float | None = None,
    ):
        """Initialize the Open-Meteo service, defaulting to environment config."""
        self.base_url = base_url or OPENMETEO_BASE_URL
        self.past_days = past_days if past_days is not None else WEATHER_PAST_DAYS
        self.forecast_hours = (
            forecast_hours if forecast_hours is not None else WEATHER_FORECAST_HOURS
        )
        self.timeout = timeout if timeout is not None else WEATHER_REQUEST_TIMEOUT

    def get_weather_summary(
        self, latitude: float, longitude: float, now: datetime | None = None
    ) -> WeatherSummary:
        """Fetch past daily summaries and the next hours for a location.

        Args:
            latitude: Location latitude
            longitude: Location longitude
            now: Reference time (UTC); defaults to the current time

        Returns:
            WeatherSummary with past days newest first and hours chronological

        Raises:
            WeatherProviderError: If the request fails or the payload is malformed
        """
        now = now or datetime.now(UTC)
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "daily": ",".join(DAILY_VARIABLES),
            "hourly": ",".join(HOURLY_VARIABLES),
            "past_days": self.past_days,
            "forecast_days": 2,
            "timezone": "GMT",  # Use GMT so timestamps match datetime.now(UTC)
        }

        try:
            response = _request_with_retry(
                "GET", self.base_url, params=params, timeout=self.timeout
            )
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Open-Meteo request failed: {e}")
            raise WeatherProviderError(f"Failed to fetch weather data: {e}") from e
        except ValueError as e:
            logger.error(f"Open-Meteo returned invalid JSON: {e}")
            raise WeatherProviderError(f"Invalid weather API response: {e}") from e

        try:
            past_daily = self._parse_daily(data["daily"], now.date())
            next_hours = self._parse_hourly(data["hourly"], now)
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.error(f"Unexpected Open-Meteo response format: {e}")
            raise WeatherProviderError(
                f"Unexpected weather API response format: {e}"
            ) from e

        logger.info(
            f"Fetched {len(past_daily)} past days and {len(next_hours)} hours "
            f"for ({latitude:.4f}, {longitude:.4f})"
        )
        return WeatherSummary(past_daily=past_daily, next_hours=next_hours)

    def _parse_daily(self, daily: dict[str, Any], today: date) -> list[DailySummary]:
        """Build daily summaries for days strictly before today, newest first."""
        days: list[DailySummary] = []
        for i, day_str in enumerate(daily["time"]):
            day = date.fromisoformat(day_str)
            if day >= today:
                continue

            rain_mm = _value(daily.get("rain_sum"), i)
            snowfall_cm = _value(daily.get("snowfall_sum"), i)
            kind = precipitation_kind_from_wmo(_value(daily.get("weather_code"), i))
            if rain_mm and snowfall_cm:
                kind = PrecipitationKind.MIXED
            elif kind in (None, PrecipitationKind.NONE) and snowfall_cm:
                kind = PrecipitationKind.SNOW

            days.append(
                DailySummary(
                    day=day,
                    min_temp_celsius=_value(daily.get("temperature_2m_min"), i),
                    max_temp_celsius=_value(daily.get("temperature_2m_max"), i),
                    precipitation_mm=_value(daily.get("precipitation_sum"), i),
                    snowfall_cm=snowfall_cm,
                    precipitation_kind=kind,
                    humidity=_fraction(
                        _value(daily.get("relative_humidity_2m_mean"), i)
                    ),
                )
            )

        days.sort(key=lambda d: d.day, reverse=True)
        return days[: self.past_days]

    def _parse_hourly(self, hourly: dict[str, Any], now: datetime) -> list[HourlyEntry]:
        """Build hourly entries from the current hour on."""
        current_hour = now.astimezone(UTC).replace(minute=0, second=0, microsecond=0)
        temperatures = hourly["temperature_2m"]
        entries: list[HourlyEntry] = []

        for i, time_str in enumerate(hourly["time"]):
            timestamp = datetime.fromisoformat(time_str).replace(tzinfo=UTC)
            if timestamp < current_hour:
                continue
            temperature = _value(temperatures, i)
            if temperature is None:
                continue

            entries.append(
                HourlyEntry(
                    timestamp=timestamp,
                    temperature_celsius=temperature,
                    precipitation_probability=_fraction(
                        _value(hourly.get("precipitation_probability"), i)
                    )
                    or 0.0,
                    precipitation_kind=precipitation_kind_from_wmo(
                        _value(hourly.get("weather_code"), i)
                    ),
                    humidity=_fraction(_value(hourly.get("relative_humidity_2m"), i)),
                )
            )
            if len(entries) >= self.forecast_hours:
                break

        return entries
