import calendar
import datetime
from typing import Any, Dict, List

from flask import current_app

from .calendar.hijri_converter import get_hijri_date_string
from .calendar_service import get_islamic_day_info, is_ramadan_active
from .prayer_time.locations import get_default_location
from .prayer_time.remote_provider import get_remote_times_provider
from .prayer_time.timing_calculator import get_prayer_times
from .prayer_time.types import DailyPrayerTimes
from ..utils.time_utils import find_next_prayer, format_countdown, iftar_countdown, is_daytime, unwrapped_minutes

# --- Main Service Functions ---

def get_prayer_times_for_date_from_service(date_obj: datetime.date, settings) -> DailyPrayerTimes:
    """
    Resolves the day's times for the selected location:
    the built-in location is calculated locally unless it is set to use the API,
    every other location goes through the remote provider (cache, network, fallback).
    ComputationError from a local calculation propagates.
    """
    remote_location = settings.remote_location
    if remote_location is None:
        if settings.location == "custom":
            current_app.logger.info("Custom location has no city set. Calculating for the built-in location.")
        return get_prayer_times(date_obj, get_default_location(settings.method), settings.engine_config)

    city, country = remote_location
    return get_remote_times_provider().get_day_times(city, country, date_obj, fallback_config=settings.engine_config)


def get_daily_prayer_data_from_service(date_obj: datetime.date, settings, locale: str = "ar") -> Dict[str, Any]:
    times = get_prayer_times_for_date_from_service(date_obj, settings)
    day_info = get_islamic_day_info(date_obj, settings.hijri_offset, locale=locale)
    return {
        "date": date_obj,
        "source": times.source,
        "times": times.as_dict(),
        "imsak": str(times.imsak(settings.imsak_minutes)),
        "hijri": day_info["hijri"],
        "status": day_info["status"],
    }


def get_month_calendar_from_service(year: int, month: int, settings) -> List[Dict[str, Any]]:
    """One row per day of the month with times, the Hijri date and Ramadan/Eid flags."""
    days_in_month = calendar.monthrange(year, month)[1]
    remote_location = settings.remote_location

    month_values = {}
    if remote_location is not None:
        city, country = remote_location
        month_values = get_remote_times_provider().get_month_times(
            city, country, month, year, fallback_config=settings.engine_config
        )

    rows = []
    for day in range(1, days_in_month + 1):
        date_obj = datetime.date(year, month, day)
        values = month_values.get(day)
        if values:
            times = DailyPrayerTimes.from_strings(date_obj, values, source="remote")
        else:
            times = get_prayer_times_for_date_from_service(date_obj, settings)

        status = get_islamic_day_info(date_obj, settings.hijri_offset)["status"]
        rows.append({
            "day": day,
            "date": date_obj,
            "times": times.as_dict(),
            "hijri": get_hijri_date_string(date_obj, settings.hijri_offset),
            "is_ramadan": status["is_ramadan"],
            "is_eid": status["is_eid"],
        })
    return rows


def get_next_prayer_info_from_service(now: datetime.datetime, settings) -> Dict[str, Any]:
    """
    The next prayer after `now` (local wall-clock time) with its countdown.
    After Isha this is tomorrow's Fajr. Adds an iftar countdown while Ramadan mode is active.
    """
    today = now.date()
    today_times = get_prayer_times_for_date_from_service(today, settings)

    tomorrow_fajr = None
    if now.hour * 60 + now.minute >= unwrapped_minutes(today_times)[-1]:
        tomorrow_times = get_prayer_times_for_date_from_service(today + datetime.timedelta(days=1), settings)
        tomorrow_fajr = tomorrow_times.fajr

    name, prayer_time, seconds_remaining = find_next_prayer(now, today_times, tomorrow_fajr)

    info = {
        "name": name,
        "time": str(prayer_time),
        "seconds_remaining": seconds_remaining,
        "countdown": format_countdown(seconds_remaining),
        "is_daytime": is_daytime(now, today_times),
        "iftar": None,
    }
    if settings.show_iftar_countdown and is_ramadan_active(today, settings):
        info["iftar"] = iftar_countdown(now, today_times)
    return info
