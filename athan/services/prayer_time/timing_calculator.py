# athan/services/prayer_time/timing_calculator.py
import datetime
import logging
import math
from typing import Dict

from .solar_calculator import compute_sun_times
from .types import PRAYER_KEYS, DailyPrayerTimes, EngineConfig, LocationConfig, PrayerTime

logger = logging.getLogger(__name__)


def round_half_up_minutes(hours: float) -> int:
    """Fractional hours to whole minutes, rounding .5 upward."""
    return int(math.floor(hours * 60.0 + 0.5))


def get_local_hours(date_obj: datetime.date, location: LocationConfig, config: EngineConfig) -> Dict[str, float]:
    """
    Returns the six prayer times as fractional local hours, before rounding and
    before wrapping into a single day. Raises ComputationError for unreachable events.
    """
    sun_times = compute_sun_times(
        date_obj,
        location.coordinate,
        location.method,
        asr_juristic=location.asr_juristic,
        high_latitude_rule=location.high_latitude_rule,
    )
    shift = location.effective_utc_offset + config.dst_offset
    return {
        key: value + shift + config.adjustment_for(key) / 60.0
        for key, value in sun_times.as_dict().items()
    }


def get_prayer_times(date_obj: datetime.date, location: LocationConfig, config: EngineConfig) -> DailyPrayerTimes:
    """
    Computes the six daily prayer times at a fixed location in local civil time.
    Deterministic and uncached; ComputationError propagates to the caller.
    """
    local_hours = get_local_hours(date_obj, location, config)
    times = tuple(PrayerTime.from_minutes(round_half_up_minutes(local_hours[key])) for key in PRAYER_KEYS)
    logger.debug("Calculated prayer times for %s at %s: %s", date_obj, location.name, [str(t) for t in times])
    return DailyPrayerTimes(date=date_obj, times=times, source="calculated")
