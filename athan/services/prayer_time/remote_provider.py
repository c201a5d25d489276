# athan/services/prayer_time/remote_provider.py
"""
Authoritative month times from the remote calendar API, with a persistent cache in
front of it and local calculation behind it.

Per request: CacheLookup -> NetworkFetch -> Fallback. The provider guarantees that
day lookups return usable times (or raise ComputationError from the fallback
calculation), never a network failure.

The provider itself is shared by every client of the app. A client that switches
locations quickly can pass its own QueryContext; a fetch that completes after that
client moved on is still cached (cache keys include the location) but is not
handed back to it.
"""
import calendar
import datetime
import threading
from concurrent.futures import Future, TimeoutError as FutureTimeoutError
from typing import Dict, List, Optional

from flask import current_app

from ...errors import CacheError, NetworkError, StaleQueryError
from ...metrics import COALESCED_FETCHES_TOTAL, FALLBACK_CALCULATIONS_TOTAL, STALE_RESPONSES_TOTAL
from ..api_adapters.aladhan_adapter import get_selected_api_adapter
from .cache_layer import get_cached_month_times, store_month_times
from .key_utils import generate_month_cache_key
from .locations import get_default_location
from .timing_calculator import get_prayer_times
from .types import DailyPrayerTimes, EngineConfig

MonthTimes = Dict[int, List[str]]

# Extra time a coalesced caller waits beyond the leader's own HTTP timeout.
FOLLOWER_GRACE_SECONDS = 5.0


class QueryContext:
    """
    The location one client is currently looking at, e.g. one per user session.
    The generation changes whenever the client switches to a different location.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._location = None
        self._generation = 0

    def begin(self, city: str, country: str) -> int:
        location = (city.strip().lower(), country.strip().lower())
        with self._lock:
            if location != self._location:
                self._location = location
                self._generation += 1
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation


class RemoteTimesProvider:
    """Registered on the app as `app.extensions['remote_times']`; one instance per app."""

    def __init__(self, app=None):
        self._lock = threading.Lock()
        self._pending: Dict[str, Future] = {}
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.extensions['remote_times'] = self

    # --- Public API ---

    def get_day_times(self, city: str, country: str, date_obj: datetime.date,
                      fallback_config: Optional[EngineConfig] = None,
                      context: Optional[QueryContext] = None) -> DailyPrayerTimes:
        try:
            month_times = self._lookup(city, country, date_obj.month, date_obj.year, day=date_obj.day, context=context)
        except NetworkError as e:
            current_app.logger.warning(f"Remote times unavailable for {city}, {country} on {date_obj}: {e}. Falling back to local calculation.")
            return self._fallback_day(date_obj, fallback_config)

        values = month_times.get(date_obj.day)
        if not values:
            current_app.logger.warning(f"Day {date_obj.day} missing from fetched month for {city}, {country}. Falling back.")
            return self._fallback_day(date_obj, fallback_config)
        return DailyPrayerTimes.from_strings(date_obj, values, source="remote")

    def get_month_times(self, city: str, country: str, month: int, year: int,
                        fallback_config: Optional[EngineConfig] = None,
                        context: Optional[QueryContext] = None) -> MonthTimes:
        try:
            return self._lookup(city, country, month, year, day=None, context=context)
        except NetworkError as e:
            current_app.logger.warning(f"Remote month unavailable for {city}, {country} {year}-{month:02d}: {e}. Calculating locally.")
            days_in_month = calendar.monthrange(year, month)[1]
            return {
                day: self._fallback_day(datetime.date(year, month, day), fallback_config).as_strings()
                for day in range(1, days_in_month + 1)
            }

    # --- State machine ---

    def _lookup(self, city: str, country: str, month: int, year: int, day: Optional[int],
                context: Optional[QueryContext]) -> MonthTimes:
        generation = context.begin(city, country) if context is not None else None

        # 1. CacheLookup
        try:
            cached = get_cached_month_times(city, country, month, year)
        except CacheError as e:
            current_app.logger.error(f"Month cache read failed, treating as miss: {e}")
            cached = None

        if cached and (day is None or day in cached):
            return cached
        if cached:
            current_app.logger.info(f"Cached month for {city}, {country} {year}-{month:02d} lacks day {day}. Refetching.")

        # 2. NetworkFetch
        month_times = self._fetch_coalesced(city, country, month, year)

        if generation is not None and not context.is_current(generation) and self._guard_stale_responses():
            STALE_RESPONSES_TOTAL.inc()
            current_app.logger.info(f"Caller moved away from {city}, {country} while {year}-{month:02d} was fetched; response cached but not returned.")
            raise StaleQueryError(f"Location changed while fetching {city}, {country} {year}-{month:02d}")
        return month_times

    def _fetch_coalesced(self, city: str, country: str, month: int, year: int) -> MonthTimes:
        key = generate_month_cache_key(city, country, month, year)
        with self._lock:
            future = self._pending.get(key)
            is_leader = future is None
            if is_leader:
                future = Future()
                self._pending[key] = future

        if not is_leader:
            COALESCED_FETCHES_TOTAL.inc()
            current_app.logger.info(f"Joining in-flight fetch for {key}.")
            wait = current_app.config.get('REMOTE_FETCH_TIMEOUT_SECONDS', 10) + FOLLOWER_GRACE_SECONDS
            try:
                return future.result(timeout=wait)
            except FutureTimeoutError as e:
                raise NetworkError(f"Timed out waiting for in-flight fetch of {key}") from e

        try:
            month_times = self._fetch_and_store(city, country, month, year)
        except Exception as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(month_times)
            return month_times
        finally:
            with self._lock:
                self._pending.pop(key, None)

    def _fetch_and_store(self, city: str, country: str, month: int, year: int) -> MonthTimes:
        adapter = get_selected_api_adapter()
        if adapter is None:
            raise NetworkError("No remote prayer time adapter is configured")

        method_id = current_app.config.get('REMOTE_CALCULATION_METHOD_ID', 3)
        month_times = adapter.fetch_month_calendar_by_city(year, month, city, country, method_id)

        try:
            store_month_times(city, country, month, year, month_times)
        except CacheError as e:
            current_app.logger.error(f"Month cache write failed: {e}")
        return month_times

    # --- Fallback ---

    def _fallback_day(self, date_obj: datetime.date, fallback_config: Optional[EngineConfig]) -> DailyPrayerTimes:
        FALLBACK_CALCULATIONS_TOTAL.inc()
        calculated = get_prayer_times(date_obj, get_default_location(), fallback_config or EngineConfig())
        return DailyPrayerTimes(date=calculated.date, times=calculated.times, source="fallback")

    def _guard_stale_responses(self) -> bool:
        return current_app.config.get('REMOTE_GUARD_STALE_RESPONSES', True)


def get_remote_times_provider() -> RemoteTimesProvider:
    return current_app.extensions['remote_times']
