# This module turns the remote calendar payload into the cached month representation.
from typing import Any, Dict, List

from ...errors import NetworkError
from .types import PrayerTime

# Field names of the remote timings record, in DailyPrayerTimes order.
TIMING_FIELDS = ("Fajr", "Sunrise", "Dhuhr", "Asr", "Maghrib", "Isha")


def strip_time_metadata(value: str) -> str:
    """'05:12 (CET)' -> '05:12'"""
    return value.strip().split(' ')[0]


def parse_month_calendar(days: List[Dict[str, Any]]) -> Dict[int, List[str]]:
    """
    Converts the per-day records of a calendar response into
    {day_of_month: [fajr, sunrise, dhuhr, asr, maghrib, isha]}.
    Any missing or unparsable value makes the whole body malformed.
    """
    if not isinstance(days, list):
        raise NetworkError("Calendar payload is not a list of days")

    month_times = {}
    for index, day_record in enumerate(days):
        try:
            timings = day_record["timings"]
            values = [strip_time_metadata(timings[name]) for name in TIMING_FIELDS]
            for value in values:
                PrayerTime.parse(value)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise NetworkError(f"Malformed timings for day {index + 1}: {e}") from e

        day_of_month = _day_of_month(day_record, default=index + 1)
        month_times[day_of_month] = values
    return month_times


def _day_of_month(day_record: Dict[str, Any], default: int) -> int:
    try:
        return int(day_record["date"]["gregorian"]["day"])
    except (KeyError, TypeError, ValueError):
        return default
