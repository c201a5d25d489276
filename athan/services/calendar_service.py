# athan/services/calendar_service.py
import datetime

from flask import current_app

from .calendar.hijri_converter import get_adjusted_hijri, get_hijri_date_string
from .calendar.islamic_events import classify, special_theme


def get_eid_fitr_days():
    return int(current_app.config.get('EID_FITR_DAYS', 3))


def get_islamic_day_info(date_obj: datetime.date, hijri_offset: int = 0, locale: str = "ar"):
    """
    Hijri date, display string and Ramadan/Eid status for one Gregorian date.
    The offset is applied once, before conversion and classification.
    """
    hijri = get_adjusted_hijri(date_obj, hijri_offset, locale=locale)
    status = classify(hijri, fitr_days=get_eid_fitr_days())
    return {
        "hijri": {
            "year": hijri.year,
            "month": hijri.month,
            "day": hijri.day,
            "month_name": hijri.month_name,
            "display": get_hijri_date_string(date_obj, hijri_offset, locale=locale),
        },
        "status": {
            "is_ramadan": status.is_ramadan,
            "ramadan_day": status.ramadan_day,
            "is_eid": status.is_eid,
            "eid_type": status.eid_type,
            "theme": special_theme(status),
        },
    }


def is_ramadan_active(date_obj: datetime.date, settings) -> bool:
    """Ramadan mode is on when forced in settings, or detected from the calendar when auto mode is enabled."""
    if settings.ramadan_mode:
        return True
    if not settings.auto_ramadan:
        return False
    return classify(get_adjusted_hijri(date_obj, settings.hijri_offset), fitr_days=get_eid_fitr_days()).is_ramadan
