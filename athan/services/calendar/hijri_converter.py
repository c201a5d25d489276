# athan/services/calendar/hijri_converter.py
"""
Gregorian to Hijri conversion using the arithmetical (tabular) Islamic calendar:
a 30-year cycle of 10631 days with 11 leap years. The result can differ by a day
or two from local moon-sighting announcements, which is what the user's day
offset corrects for.
"""

import datetime
from dataclasses import dataclass

HIJRI_MONTHS_AR = (
    'محرم', 'صفر', 'ربيع الأول', 'ربيع الثاني',
    'جمادى الأولى', 'جمادى الآخرة', 'رجب', 'شعبان',
    'رمضان', 'شوال', 'ذو القعدة', 'ذو الحجة',
)

HIJRI_MONTHS_EN = (
    "Muharram", "Safar", "Rabi al-Awwal", "Rabi al-Thani",
    "Jumada al-Ula", "Jumada al-Akhirah", "Rajab", "Shaban",
    "Ramadan", "Shawwal", "Dhu al-Qadah", "Dhu al-Hijjah",
)

_MONTH_NAMES = {"ar": HIJRI_MONTHS_AR, "en": HIJRI_MONTHS_EN}


@dataclass(frozen=True)
class HijriDate:
    year: int
    month: int
    day: int
    month_name: str


def gregorian_to_jdn(year: int, month: int, day: int) -> int:
    """Julian Day Number of a proleptic Gregorian date."""
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def jdn_to_hijri(jdn: int):
    """Returns (year, month, day) in the tabular Islamic calendar."""
    l = jdn - 1948440 + 10632
    n = (l - 1) // 10631
    l = l - 10631 * n + 354
    j = ((10985 - l) // 5316) * ((50 * l) // 17719) + (l // 5670) * ((43 * l) // 15238)
    l = l - ((30 - j) // 15) * ((17719 * j) // 50) - (j // 16) * ((15238 * j) // 43) + 29
    month = (24 * l) // 709
    day = l - (709 * month) // 24
    year = 30 * n + j - 30
    return year, month, day


def gregorian_to_hijri(year: int, month: int, day: int, locale: str = "ar") -> HijriDate:
    h_year, h_month, h_day = jdn_to_hijri(gregorian_to_jdn(year, month, day))
    names = _MONTH_NAMES.get(locale, HIJRI_MONTHS_AR)
    return HijriDate(year=h_year, month=h_month, day=h_day, month_name=names[h_month - 1])


def get_adjusted_hijri(date_obj: datetime.date, offset: int = 0, locale: str = "ar") -> HijriDate:
    """Hijri date for `date_obj` shifted by the user's moon-sighting correction (in days)."""
    adjusted = date_obj + datetime.timedelta(days=offset or 0)
    return gregorian_to_hijri(adjusted.year, adjusted.month, adjusted.day, locale=locale)


def get_hijri_date_string(date_obj: datetime.date, offset: int = 0, locale: str = "ar") -> str:
    hijri = get_adjusted_hijri(date_obj, offset, locale=locale)
    suffix = "هـ" if locale == "ar" else "AH"
    return f"{hijri.day} {hijri.month_name} {hijri.year} {suffix}"
