# athan/services/api_adapters/aladhan_adapter.py

import requests
from flask import current_app  # To access app.logger

from ...errors import NetworkError
from ...metrics import API_REQUESTS_TOTAL, API_REQUEST_DURATION_SECONDS
from ..prayer_time.data_processor import parse_month_calendar
from .base_adapter import BasePrayerTimeAdapter


class AlAdhanAdapter(BasePrayerTimeAdapter):
    """
    API Adapter for AlAdhan.com Prayer Times API.
    """

    def fetch_month_calendar_by_city(self, year, month, city, country, method_id):
        """
        Fetches a month of prayer times for a city from the calendarByCity endpoint.
        One request covers the whole month.
        """
        current_app.logger.info(f"AlAdhanAdapter: Fetching calendar for {city}, {country} {year}-{month:02d} with method:{method_id}")

        endpoint = f"{self.base_url}/calendarByCity/{year}/{month}"
        params = {
            "city": city,
            "country": country,
            "method": method_id,
        }

        current_app.logger.debug(f"AlAdhanAdapter: Fetching month with params: {params}")

        try:
            with API_REQUEST_DURATION_SECONDS.labels(adapter_name='AlAdhanAdapter', endpoint='calendarByCity').time():
                response = requests.get(endpoint, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            API_REQUESTS_TOTAL.labels(adapter_name='AlAdhanAdapter', endpoint='calendarByCity', status='timeout').inc()
            current_app.logger.error(f"AlAdhanAdapter: Timeout error fetching calendar for {city}, {country}.")
            raise NetworkError(f"Timeout fetching calendar for {city}, {country}") from e
        except requests.exceptions.RequestException as e:
            API_REQUESTS_TOTAL.labels(adapter_name='AlAdhanAdapter', endpoint='calendarByCity', status='error').inc()
            current_app.logger.error(f"AlAdhanAdapter: RequestException for {city}, {country}: {e}", exc_info=True)
            raise NetworkError(f"Request failed for {city}, {country}: {e}") from e
        except ValueError as e:
            # requests raises a ValueError subclass when the body is not JSON
            API_REQUESTS_TOTAL.labels(adapter_name='AlAdhanAdapter', endpoint='calendarByCity', status='malformed').inc()
            current_app.logger.error(f"AlAdhanAdapter: Response for {city}, {country} is not JSON: {e}")
            raise NetworkError(f"Malformed JSON for {city}, {country}") from e

        if not isinstance(data, dict) or data.get("code") != 200 or not data.get("data"):
            API_REQUESTS_TOTAL.labels(adapter_name='AlAdhanAdapter', endpoint='calendarByCity', status='api_error').inc()
            code = data.get('code') if isinstance(data, dict) else None
            status = data.get('status') if isinstance(data, dict) else None
            current_app.logger.error(f"AlAdhanAdapter: API error for {city}, {country}. Code: {code}, Status: {status}")
            raise NetworkError(f"API error for {city}, {country}: code={code}")

        month_times = parse_month_calendar(data["data"])
        API_REQUESTS_TOTAL.labels(adapter_name='AlAdhanAdapter', endpoint='calendarByCity', status='success').inc()
        current_app.logger.info(f"AlAdhanAdapter: Successfully fetched {len(month_times)} days for {city}, {country}.")
        return month_times


def get_selected_api_adapter():
    """
    Instantiates and returns the API adapter based on configuration.
    """
    adapter_name = current_app.config.get('PRAYER_API_ADAPTER', "AlAdhanAdapter")
    base_url = current_app.config.get('PRAYER_API_BASE_URL')
    timeout = current_app.config.get('REMOTE_FETCH_TIMEOUT_SECONDS', 10)

    if adapter_name == "AlAdhanAdapter":
        if not base_url:
            current_app.logger.error("AlAdhan API base URL is not configured.")
            return None
        return AlAdhanAdapter(base_url=base_url, timeout=timeout)

    current_app.logger.error(f"Unsupported Prayer API Adapter: {adapter_name}")
    return None
