# athan/services/calendar/islamic_events.py
from dataclasses import dataclass
from typing import Optional

from .hijri_converter import HijriDate

RAMADAN = 9
SHAWWAL = 10
DHU_AL_HIJJAH = 12

EID_AL_ADHA_DAYS = (10, 11, 12, 13)


@dataclass(frozen=True)
class IslamicCalendarStatus:
    is_ramadan: bool
    ramadan_day: Optional[int]
    is_eid: bool
    eid_type: Optional[str]  # 'fitr' | 'adha'


def classify(hijri_date: HijriDate, fitr_days: int = 3) -> IslamicCalendarStatus:
    """
    Ramadan/Eid membership of an already offset-adjusted Hijri date.
    Eid al-Fitr spans the first `fitr_days` of Shawwal; Eid al-Adha spans 10-13 Dhu al-Hijjah.
    """
    is_ramadan = hijri_date.month == RAMADAN
    eid_type = None
    if hijri_date.month == SHAWWAL and 1 <= hijri_date.day <= fitr_days:
        eid_type = "fitr"
    elif hijri_date.month == DHU_AL_HIJJAH and hijri_date.day in EID_AL_ADHA_DAYS:
        eid_type = "adha"

    return IslamicCalendarStatus(
        is_ramadan=is_ramadan,
        ramadan_day=hijri_date.day if is_ramadan else None,
        is_eid=eid_type is not None,
        eid_type=eid_type,
    )


def special_theme(status: IslamicCalendarStatus) -> Optional[str]:
    """Seasonal theme name; Eid takes precedence over Ramadan."""
    if status.is_eid:
        return f"eid-{status.eid_type}"
    if status.is_ramadan:
        return "ramadan"
    return None
