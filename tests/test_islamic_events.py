# tests/test_islamic_events.py

import datetime

from athan.services.calendar.hijri_converter import HijriDate, get_adjusted_hijri
from athan.services.calendar.islamic_events import classify, special_theme


def _hijri(month, day):
    return HijriDate(year=1445, month=month, day=day, month_name="")


def test_ramadan_day():
    status = classify(_hijri(9, 15))
    assert status.is_ramadan
    assert status.ramadan_day == 15
    assert not status.is_eid
    assert special_theme(status) == "ramadan"


def test_eid_al_fitr_window():
    assert classify(_hijri(10, 1)).eid_type == "fitr"
    assert classify(_hijri(10, 3)).is_eid
    assert not classify(_hijri(10, 4)).is_eid
    assert not classify(_hijri(10, 2), fitr_days=1).is_eid


def test_eid_al_adha_window():
    assert not classify(_hijri(12, 9)).is_eid
    assert classify(_hijri(12, 10)).eid_type == "adha"
    assert classify(_hijri(12, 13)).eid_type == "adha"
    assert not classify(_hijri(12, 14)).is_eid
    assert special_theme(classify(_hijri(12, 10))) == "eid-adha"


def test_ordinary_day():
    status = classify(_hijri(7, 20))
    assert not status.is_ramadan
    assert status.ramadan_day is None
    assert status.eid_type is None
    assert special_theme(status) is None


def test_classification_uses_offset_adjusted_date():
    # 2024-04-09 is 30 Ramadan in the tabular calendar; a +1 sighting offset makes it Eid
    assert classify(get_adjusted_hijri(datetime.date(2024, 4, 9))).is_ramadan
    status = classify(get_adjusted_hijri(datetime.date(2024, 4, 9), offset=1))
    assert status.eid_type == "fitr"
    assert special_theme(status) == "eid-fitr"
