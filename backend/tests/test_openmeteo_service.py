"""Tests for the Open-Meteo weather provider."""

import unittest
from datetime import UTC, date, datetime, timedelta
from unittest.mock import Mock, patch

import requests

from models.weather import PrecipitationKind
from services.openmeteo_service import (
    DAILY_VARIABLES,
    HOURLY_VARIABLES,
    MAX_RETRIES,
    RETRYABLE_STATUS_CODES,
    OpenMeteoService,
    _is_retryable_error,
    _request_with_retry,
    precipitation_kind_from_wmo,
)
from services.weather_service import WeatherProviderError

FIXED_NOW = datetime(2026, 2, 15, 8, 30, tzinfo=UTC)


def _build_payload(past_days=10, forecast_days=2, now=FIXED_NOW):
    """Return an Open-Meteo style payload with dry, cold defaults.

    Daily arrays cover ``past_days`` before today through the forecast days;
    hourly arrays cover the same span hour by hour.
    """
    first_day = now.date() - timedelta(days=past_days)
    n_days = past_days + forecast_days
    days = [first_day + timedelta(days=i) for i in range(n_days)]
    daily = {
        "time": [d.isoformat() for d in days],
        "temperature_2m_min": [-10.0] * n_days,
        "temperature_2m_max": [-4.0] * n_days,
        "precipitation_sum": [0.0] * n_days,
        "rain_sum": [0.0] * n_days,
        "snowfall_sum": [0.0] * n_days,
        "weather_code": [3] * n_days,
        "relative_humidity_2m_mean": [70] * n_days,
    }

    start = datetime.combine(first_day, datetime.min.time())
    n_hours = n_days * 24
    hourly = {
        "time": [
            (start + timedelta(hours=h)).strftime("%Y-%m-%dT%H:00")
            for h in range(n_hours)
        ],
        "temperature_2m": [-6.0] * n_hours,
        "precipitation_probability": [10] * n_hours,
        "weather_code": [3] * n_hours,
        "relative_humidity_2m": [80] * n_hours,
    }
    return {"daily": daily, "hourly": hourly}


def _daily_index(payload, day):
    return payload["daily"]["time"].index(day.isoformat())


def _mock_response(payload):
    resp = Mock()
    resp.raise_for_status = Mock()
    resp.json.return_value = payload
    return resp


# ============================================================================
# 1. Retry helpers
# ============================================================================


class TestIsRetryableError(unittest.TestCase):
    def test_network_errors_are_retryable(self):
        self.assertTrue(_is_retryable_error(requests.exceptions.Timeout("slow")))
        self.assertTrue(
            _is_retryable_error(requests.exceptions.ConnectionError("refused"))
        )

    def test_retryable_status_codes(self):
        for code in RETRYABLE_STATUS_CODES:
            resp = Mock()
            resp.status_code = code
            self.assertTrue(
                _is_retryable_error(requests.exceptions.HTTPError(response=resp)),
                f"Status {code} should be retryable",
            )

    def test_client_errors_are_not_retryable(self):
        resp = Mock()
        resp.status_code = 400
        self.assertFalse(
            _is_retryable_error(requests.exceptions.HTTPError(response=resp))
        )
        self.assertFalse(_is_retryable_error(ValueError("bad")))

    def test_http_error_without_response_is_not_retryable(self):
        self.assertFalse(_is_retryable_error(requests.exceptions.HTTPError("boom")))


class TestRequestWithRetry(unittest.TestCase):
    @patch("services.openmeteo_service.time.sleep")
    @patch("services.openmeteo_service.requests.request")
    def test_recovers_after_transient_failure(self, mock_request, mock_sleep):
        good = _mock_response({})
        mock_request.side_effect = [requests.exceptions.ConnectionError("x"), good]

        self.assertIs(_request_with_retry("GET", "https://example.com"), good)
        mock_sleep.assert_called_once_with(1)

    @patch("services.openmeteo_service.time.sleep")
    @patch("services.openmeteo_service.requests.request")
    def test_gives_up_after_max_retries(self, mock_request, mock_sleep):
        mock_request.side_effect = requests.exceptions.Timeout("timeout")

        with self.assertRaises(requests.exceptions.Timeout):
            _request_with_retry("GET", "https://example.com")

        self.assertEqual(mock_request.call_count, MAX_RETRIES)
        self.assertEqual([c.args[0] for c in mock_sleep.call_args_list], [1, 2])

    @patch("services.openmeteo_service.time.sleep")
    @patch("services.openmeteo_service.requests.request")
    def test_client_error_not_retried(self, mock_request, mock_sleep):
        resp = Mock()
        resp.status_code = 404
        mock_request.side_effect = requests.exceptions.HTTPError(response=resp)

        with self.assertRaises(requests.exceptions.HTTPError):
            _request_with_retry("GET", "https://example.com")

        self.assertEqual(mock_request.call_count, 1)
        mock_sleep.assert_not_called()


# ============================================================================
# 2. WMO code mapping
# ============================================================================


class TestPrecipitationKindFromWmo(unittest.TestCase):
    def test_mapping(self):
        self.assertIsNone(precipitation_kind_from_wmo(None))
        self.assertEqual(precipitation_kind_from_wmo(0), PrecipitationKind.NONE)
        self.assertEqual(precipitation_kind_from_wmo(45), PrecipitationKind.NONE)
        self.assertEqual(precipitation_kind_from_wmo(61), PrecipitationKind.RAIN)
        self.assertEqual(precipitation_kind_from_wmo(81), PrecipitationKind.RAIN)
        self.assertEqual(precipitation_kind_from_wmo(66), PrecipitationKind.SLEET)
        self.assertEqual(precipitation_kind_from_wmo(73), PrecipitationKind.SNOW)
        self.assertEqual(precipitation_kind_from_wmo(86), PrecipitationKind.SNOW)
        self.assertEqual(precipitation_kind_from_wmo(99), PrecipitationKind.HAIL)

    def test_float_codes(self):
        self.assertEqual(precipitation_kind_from_wmo(71.0), PrecipitationKind.SNOW)


# ============================================================================
# 3. get_weather_summary
# ============================================================================


class TestGetWeatherSummary(unittest.TestCase):
    def setUp(self):
        self.service = OpenMeteoService(
            base_url="https://example.com/forecast",
            past_days=10,
            forecast_hours=24,
            timeout=5,
        )

    @patch("services.openmeteo_service.requests.request")
    def test_request_parameters(self, mock_request):
        mock_request.return_value = _mock_response(_build_payload())

        self.service.get_weather_summary(61.5, 10.2, now=FIXED_NOW)

        args, kwargs = mock_request.call_args
        self.assertEqual(args, ("GET", "https://example.com/forecast"))
        params = kwargs["params"]
        self.assertEqual(params["latitude"], 61.5)
        self.assertEqual(params["daily"], ",".join(DAILY_VARIABLES))
        self.assertEqual(params["hourly"], ",".join(HOURLY_VARIABLES))
        self.assertEqual(params["past_days"], 10)
        self.assertEqual(kwargs["timeout"], 5)

    @patch("services.openmeteo_service.requests.request")
    def test_history_is_past_days_newest_first(self, mock_request):
        mock_request.return_value = _mock_response(_build_payload())

        summary = self.service.get_weather_summary(61.5, 10.2, now=FIXED_NOW)

        days = [d.day for d in summary.past_daily]
        self.assertEqual(len(days), 10)
        self.assertEqual(days[0], date(2026, 2, 14))
        self.assertEqual(days[-1], date(2026, 2, 5))
        self.assertEqual(days, sorted(days, reverse=True))

    @patch("services.openmeteo_service.requests.request")
    def test_history_capped(self, mock_request):
        mock_request.return_value = _mock_response(_build_payload(past_days=14))

        summary = self.service.get_weather_summary(61.5, 10.2, now=FIXED_NOW)

        self.assertEqual(len(summary.past_daily), 10)
        self.assertEqual(summary.past_daily[0].day, date(2026, 2, 14))

    @patch("services.openmeteo_service.requests.request")
    def test_daily_values(self, mock_request):
        payload = _build_payload()
        i = _daily_index(payload, date(2026, 2, 14))
        payload["daily"]["snowfall_sum"][i] = 7.0
        payload["daily"]["precipitation_sum"][i] = 6.0
        payload["daily"]["weather_code"][i] = 73
        payload["daily"]["relative_humidity_2m_mean"][i] = 91
        mock_request.return_value = _mock_response(payload)

        yesterday = self.service.get_weather_summary(
            61.5, 10.2, now=FIXED_NOW
        ).past_daily[0]

        self.assertEqual(yesterday.snowfall_cm, 7.0)
        self.assertEqual(yesterday.precipitation_mm, 6.0)
        self.assertEqual(yesterday.precipitation_kind, PrecipitationKind.SNOW)
        self.assertAlmostEqual(yesterday.humidity, 0.91)
        self.assertEqual(yesterday.min_temp_celsius, -10.0)

    @patch("services.openmeteo_service.requests.request")
    def test_rain_and_snow_is_mixed(self, mock_request):
        payload = _build_payload()
        i = _daily_index(payload, date(2026, 2, 14))
        payload["daily"]["snowfall_sum"][i] = 1.4
        payload["daily"]["rain_sum"][i] = 3.0
        payload["daily"]["weather_code"][i] = 61
        mock_request.return_value = _mock_response(payload)

        summary = self.service.get_weather_summary(61.5, 10.2, now=FIXED_NOW)

        self.assertEqual(
            summary.past_daily[0].precipitation_kind, PrecipitationKind.MIXED
        )

    @patch("services.openmeteo_service.requests.request")
    def test_missing_daily_values_stay_unknown(self, mock_request):
        payload = _build_payload()
        i = _daily_index(payload, date(2026, 2, 14))
        payload["daily"]["snowfall_sum"][i] = None
        payload["daily"]["relative_humidity_2m_mean"][i] = None
        payload["daily"]["temperature_2m_max"][i] = None
        mock_request.return_value = _mock_response(payload)

        yesterday = self.service.get_weather_summary(
            61.5, 10.2, now=FIXED_NOW
        ).past_daily[0]

        self.assertIsNone(yesterday.snowfall_cm)
        self.assertIsNone(yesterday.humidity)
        self.assertIsNone(yesterday.max_temp_celsius)

    @patch("services.openmeteo_service.requests.request")
    def test_hours_start_at_current_hour(self, mock_request):
        mock_request.return_value = _mock_response(_build_payload())

        summary = self.service.get_weather_summary(61.5, 10.2, now=FIXED_NOW)

        self.assertEqual(len(summary.next_hours), 24)
        self.assertEqual(
            summary.next_hours[0].timestamp, datetime(2026, 2, 15, 8, tzinfo=UTC)
        )
        first = summary.next_hours[0]
        self.assertAlmostEqual(first.precipitation_probability, 0.1)
        self.assertAlmostEqual(first.humidity, 0.8)
        self.assertEqual(first.precipitation_kind, PrecipitationKind.NONE)

    @patch("services.openmeteo_service.requests.request")
    def test_hourly_snow_code(self, mock_request):
        payload = _build_payload()
        index = payload["hourly"]["time"].index("2026-02-15T09:00")
        payload["hourly"]["weather_code"][index] = 75
        payload["hourly"]["precipitation_probability"][index] = 90
        mock_request.return_value = _mock_response(payload)

        summary = self.service.get_weather_summary(61.5, 10.2, now=FIXED_NOW)

        self.assertEqual(
            summary.next_hours[1].precipitation_kind, PrecipitationKind.SNOW
        )
        self.assertAlmostEqual(summary.next_hours[1].precipitation_probability, 0.9)

    @patch("services.openmeteo_service.requests.request")
    def test_hours_without_temperature_skipped(self, mock_request):
        payload = _build_payload()
        index = payload["hourly"]["time"].index("2026-02-15T08:00")
        payload["hourly"]["temperature_2m"][index] = None
        payload["hourly"]["precipitation_probability"][index + 1] = None
        mock_request.return_value = _mock_response(payload)

        summary = self.service.get_weather_summary(61.5, 10.2, now=FIXED_NOW)

        self.assertEqual(
            summary.next_hours[0].timestamp, datetime(2026, 2, 15, 9, tzinfo=UTC)
        )
        self.assertEqual(summary.next_hours[0].precipitation_probability, 0.0)

    @patch("services.openmeteo_service.time.sleep")
    @patch("services.openmeteo_service.requests.request")
    def test_request_failure_raises_provider_error(self, mock_request, mock_sleep):
        mock_request.side_effect = requests.exceptions.ConnectionError("down")

        with self.assertRaises(WeatherProviderError):
            self.service.get_weather_summary(61.5, 10.2, now=FIXED_NOW)
        self.assertEqual(mock_request.call_count, MAX_RETRIES)

    @patch("services.openmeteo_service.requests.request")
    def test_malformed_payload_raises_provider_error(self, mock_request):
        mock_request.return_value = _mock_response({"daily": {}})

        with self.assertRaises(WeatherProviderError):
            self.service.get_weather_summary(61.5, 10.2, now=FIXED_NOW)

    @patch("services.openmeteo_service.requests.request")
    def test_invalid_json_raises_provider_error(self, mock_request):
        resp = _mock_response(None)
        resp.json.side_effect = ValueError("not json")
        mock_request.return_value = resp

        with self.assertRaises(WeatherProviderError):
            self.service.get_weather_summary(61.5, 10.2, now=FIXED_NOW)

    def test_env_defaults(self):
        service = OpenMeteoService()
        self.assertTrue(service.base_url.startswith("http"))
        self.assertGreater(service.past_days, 0)
        self.assertGreater(service.forecast_hours, 0)
