import datetime

from ..services.prayer_time.types import PRAYER_KEYS, PrayerTime

SECONDS_PER_DAY = 24 * 60 * 60

# At or below this many seconds the countdown reads MM:SS instead of HH:MM.
SHORT_COUNTDOWN_SECONDS = 300


def parse_time_internal(time_str):
    """
    Parses a time string (HH:MM) into a PrayerTime.
    Returns None if parsing fails.
    """
    if not time_str or time_str.lower() == "n/a":
        return None
    try:
        return PrayerTime.parse(time_str)
    except ValueError:
        return None


def format_time_internal(prayer_time):
    """
    Formats a PrayerTime into a HH:MM string.
    Returns "N/A" if prayer_time is None.
    """
    if not prayer_time: return "N/A"
    return str(prayer_time)


def seconds_since_midnight(now):
    return now.hour * 3600 + now.minute * 60 + now.second


def format_countdown(seconds_remaining):
    """
    Renders the time left until the next prayer.
    From five minutes down the countdown reads MM:SS, otherwise HH:MM.
    """
    seconds_remaining = max(0, int(seconds_remaining))
    hours, rest = divmod(seconds_remaining, 3600)
    minutes, seconds = divmod(rest, 60)
    if seconds_remaining <= SHORT_COUNTDOWN_SECONDS:
        return f"{minutes:02d}:{seconds:02d}"
    return f"{hours:02d}:{minutes:02d}"


def unwrapped_minutes(today_times):
    """
    Minutes since midnight for each prayer, in order. A time earlier than the
    prayer before it (e.g. Isha pushed past midnight) counts into the next day.
    """
    result = []
    previous = 0
    for prayer_time in today_times:
        minutes = prayer_time.minutes
        if minutes < previous:
            minutes += 24 * 60
        result.append(minutes)
        previous = minutes
    return result


def find_next_prayer(now, today_times, tomorrow_fajr=None):
    """
    Returns (prayer_key, prayer_time, seconds_remaining) for the first prayer after `now`.
    After Isha the next prayer is tomorrow's Fajr; `tomorrow_fajr` defaults to today's.
    """
    current_seconds = seconds_since_midnight(now)
    for key, prayer_time, minutes in zip(PRAYER_KEYS, today_times, unwrapped_minutes(today_times)):
        prayer_seconds = minutes * 60
        if current_seconds < prayer_seconds:
            return key, prayer_time, prayer_seconds - current_seconds

    fajr = tomorrow_fajr or today_times.fajr
    return "fajr", fajr, SECONDS_PER_DAY - current_seconds + fajr.minutes * 60


def iftar_countdown(now, today_times):
    """
    Minutes until Maghrib as display text, or "iftar time" once Maghrib has passed.
    """
    current_minutes = now.hour * 60 + now.minute
    remaining = today_times.maghrib.minutes - current_minutes
    if remaining <= 0:
        return "iftar time"
    hours, minutes = divmod(remaining, 60)
    if hours:
        return f"{hours}h {minutes:02d}m until iftar"
    return f"{minutes}m until iftar"


def is_daytime(now, today_times):
    """Day runs from sunrise (inclusive) to Maghrib (exclusive)."""
    current_minutes = now.hour * 60 + now.minute
    return today_times.sunrise.minutes <= current_minutes < today_times.maghrib.minutes


def local_now(utc_offset_hours, utc_now=None):
    """Naive local wall-clock time for a fixed UTC offset."""
    utc_now = utc_now or datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
    return utc_now + datetime.timedelta(hours=utc_offset_hours)
