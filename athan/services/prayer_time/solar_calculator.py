# athan/services/prayer_time/solar_calculator.py
"""
Sun position events for a single day at a single coordinate.

Everything here is a pure function of (date, coordinate, method, asr juristic,
high latitude rule). Results are fractional hours in UTC.
"""

import datetime
import math
from typing import Optional, Tuple

from ...errors import ComputationError
from .types import AsrJuristic, CalculationMethod, GeoCoordinate, HighLatitudeRule, SunTimes

SUNRISE_ANGLE = 0.833  # refraction plus the sun's apparent radius


def _dtr(d: float) -> float:
    return (d * math.pi) / 180.0


def _rtd(r: float) -> float:
    return (r * 180.0) / math.pi


def _fix_angle(a: float) -> float:
    return a - 360.0 * math.floor(a / 360.0)


def _fix_hour(h: float) -> float:
    return h - 24.0 * math.floor(h / 24.0)


def julian_date(year: int, month: int, day: int) -> float:
    """Julian date at 0h UT (Meeus)."""
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    return math.floor(365.25 * (year + 4716)) + math.floor(30.6001 * (month + 1)) + day + b - 1524.5


def sun_position(jd: float) -> Tuple[float, float]:
    """Returns (declination in degrees, equation of time in hours)."""
    d = jd - 2451545.0
    g = _fix_angle(357.529 + 0.98560028 * d)
    q = _fix_angle(280.459 + 0.98564736 * d)
    ecliptic_lon = _fix_angle(q + 1.915 * math.sin(_dtr(g)) + 0.020 * math.sin(_dtr(2 * g)))
    obliquity = 23.439 - 0.00000036 * d
    ra = _rtd(math.atan2(math.cos(_dtr(obliquity)) * math.sin(_dtr(ecliptic_lon)), math.cos(_dtr(ecliptic_lon)))) / 15.0
    ra = _fix_hour(ra)
    eqt = q / 15.0 - ra
    # q/15 and ra are each reduced to [0, 24); bring their difference back near zero
    eqt = (eqt + 12.0) % 24.0 - 12.0
    decl = _rtd(math.asin(math.sin(_dtr(obliquity)) * math.sin(_dtr(ecliptic_lon))))
    return decl, eqt


def _mid_day(jdate: float, day_portion: float) -> float:
    _, eqt = sun_position(jdate + day_portion)
    return 12.0 - eqt


def _hour_angle(angle: float, decl: float, latitude: float, event: str, date: datetime.date) -> float:
    """Hours between solar noon and the moment the sun is `angle` degrees below the horizon."""
    numerator = -math.sin(_dtr(angle)) - math.sin(_dtr(decl)) * math.sin(_dtr(latitude))
    denominator = math.cos(_dtr(decl)) * math.cos(_dtr(latitude))
    if denominator == 0:
        raise ComputationError(event, latitude=latitude, date=date)
    x = numerator / denominator
    if x < -1.0 or x > 1.0:
        raise ComputationError(event, latitude=latitude, date=date)
    return _rtd(math.acos(x)) / 15.0


def _sun_angle_time(jdate: float, day_portion: float, angle: float, latitude: float,
                    ccw: bool, event: str, date: datetime.date) -> float:
    decl, _ = sun_position(jdate + day_portion)
    noon = _mid_day(jdate, day_portion)
    t = _hour_angle(angle, decl, latitude, event, date)
    return noon - t if ccw else noon + t


def _asr_time(jdate: float, day_portion: float, factor: int, latitude: float, date: datetime.date) -> float:
    decl, _ = sun_position(jdate + day_portion)
    # Altitude at which an object's shadow equals factor * length + noon shadow
    altitude = _rtd(math.atan(1.0 / (factor + math.tan(abs(_dtr(latitude - decl))))))
    return _sun_angle_time(jdate, day_portion, -altitude, latitude, ccw=False, event="asr", date=date)


def _night_portion(rule: HighLatitudeRule, angle: float) -> float:
    if rule == HighLatitudeRule.ANGLE_BASED:
        return angle / 60.0
    if rule == HighLatitudeRule.ONE_SEVENTH:
        return 1.0 / 7.0
    return 0.5


def _twilight_time(compute, base: float, angle: float, night: float, rule: HighLatitudeRule,
                   before_base: bool) -> float:
    """
    Resolves a Fajr/Isha time. With HighLatitudeRule.NONE an unreachable angle propagates
    ComputationError; otherwise the time is bounded by a portion of the night.
    """
    if rule == HighLatitudeRule.NONE:
        return compute()

    portion = _night_portion(rule, angle) * night
    try:
        time = compute()
    except ComputationError:
        time = None

    if time is not None:
        diff = (base - time) if before_base else (time - base)
        if diff <= portion:
            return time
    return base - portion if before_base else base + portion


def compute_sun_times(date: datetime.date, coordinate: GeoCoordinate, method: CalculationMethod,
                      asr_juristic: AsrJuristic = AsrJuristic.STANDARD,
                      high_latitude_rule: HighLatitudeRule = HighLatitudeRule.ANGLE_BASED) -> SunTimes:
    """
    Computes raw sun events for `date` at `coordinate` in fractional UTC hours.

    Raises ComputationError when sunrise, sunset or Asr do not occur (polar day/night),
    or when Fajr/Isha depression angles are unreachable and the rule is NONE.
    """
    lat = coordinate.latitude
    lng = coordinate.longitude
    jdate = julian_date(date.year, date.month, date.day) - lng / (15.0 * 24.0)

    # Initial guesses as fractions of a day, refined by one pass through sun_position
    guess = {"fajr": 5 / 24, "sunrise": 6 / 24, "dhuhr": 12 / 24, "asr": 13 / 24,
             "sunset": 18 / 24, "maghrib": 18 / 24, "isha": 18 / 24}

    sunrise = _sun_angle_time(jdate, guess["sunrise"], SUNRISE_ANGLE, lat, True, "sunrise", date)
    sunset = _sun_angle_time(jdate, guess["sunset"], SUNRISE_ANGLE, lat, False, "sunset", date)
    dhuhr = _mid_day(jdate, guess["dhuhr"])
    asr = _asr_time(jdate, guess["asr"], asr_juristic.shadow_factor, lat, date)

    night = 24.0 - (sunset - sunrise)

    fajr = _twilight_time(
        lambda: _sun_angle_time(jdate, guess["fajr"], method.fajr_angle, lat, True, "fajr", date),
        sunrise, method.fajr_angle, night, high_latitude_rule, before_base=True,
    )

    maghrib = sunset
    if method.maghrib_angle is not None:
        maghrib = _twilight_time(
            lambda: _sun_angle_time(jdate, guess["maghrib"], method.maghrib_angle, lat, False, "maghrib", date),
            sunset, method.maghrib_angle, night, high_latitude_rule, before_base=False,
        )
    maghrib += method.maghrib_minutes / 60.0

    if method.isha_minutes is not None:
        isha = maghrib + method.isha_minutes / 60.0
    else:
        isha = _twilight_time(
            lambda: _sun_angle_time(jdate, guess["isha"], method.isha_angle, lat, False, "isha", date),
            sunset, method.isha_angle, night, high_latitude_rule, before_base=False,
        )

    offset = -lng / 15.0
    return SunTimes(
        fajr=fajr + offset,
        sunrise=sunrise + offset,
        dhuhr=dhuhr + offset,
        asr=asr + offset,
        sunset=sunset + offset,
        maghrib=maghrib + offset,
        isha=isha + offset,
    )


def day_length_hours(date: datetime.date, coordinate: GeoCoordinate) -> Optional[float]:
    """Hours between sunrise and sunset, or None when the sun does not rise or set."""
    jdate = julian_date(date.year, date.month, date.day) - coordinate.longitude / (15.0 * 24.0)
    try:
        sunrise = _sun_angle_time(jdate, 0.25, SUNRISE_ANGLE, coordinate.latitude, True, "sunrise", date)
        sunset = _sun_angle_time(jdate, 0.75, SUNRISE_ANGLE, coordinate.latitude, False, "sunset", date)
    except ComputationError:
        return None
    return sunset - sunrise
