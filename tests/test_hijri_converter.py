# tests/test_hijri_converter.py

import datetime

import pytest

from athan.services.calendar.hijri_converter import (
    HIJRI_MONTHS_AR,
    gregorian_to_hijri,
    gregorian_to_jdn,
    get_adjusted_hijri,
    get_hijri_date_string,
)


def test_gregorian_to_jdn():
    assert gregorian_to_jdn(2000, 1, 1) == 2451545
    assert gregorian_to_jdn(2024, 3, 11) == 2460381


@pytest.mark.parametrize("gregorian,expected", [
    ((2024, 3, 11), (1445, 9, 1)),
    ((2024, 4, 9), (1445, 9, 30)),
    ((2024, 4, 10), (1445, 10, 1)),
    ((2024, 6, 17), (1445, 12, 10)),
])
def test_known_conversions(gregorian, expected):
    hijri = gregorian_to_hijri(*gregorian)
    assert (hijri.year, hijri.month, hijri.day) == expected


def test_first_of_ramadan_1445():
    hijri = gregorian_to_hijri(2024, 3, 11)
    assert hijri.month_name == "رمضان"
    assert gregorian_to_hijri(2024, 3, 11, locale="en").month_name == "Ramadan"


def test_consecutive_days_map_to_consecutive_hijri_days():
    date = datetime.date(2023, 1, 1)
    previous = gregorian_to_hijri(date.year, date.month, date.day)
    for _ in range(800):
        date += datetime.timedelta(days=1)
        current = gregorian_to_hijri(date.year, date.month, date.day)
        if current.day == 1:
            assert previous.day in (29, 30)
            if previous.month == 12:
                assert (current.year, current.month) == (previous.year + 1, 1)
            else:
                assert (current.year, current.month) == (previous.year, previous.month + 1)
        else:
            assert (current.year, current.month, current.day) == (previous.year, previous.month, previous.day + 1)
        assert current.month_name == HIJRI_MONTHS_AR[current.month - 1]
        previous = current


def test_offset_shifts_the_gregorian_date_before_conversion():
    assert get_adjusted_hijri(datetime.date(2024, 3, 10), offset=1) == gregorian_to_hijri(2024, 3, 11)
    assert get_adjusted_hijri(datetime.date(2024, 3, 12), offset=-1) == gregorian_to_hijri(2024, 3, 11)
    assert get_adjusted_hijri(datetime.date(2024, 3, 11)) == gregorian_to_hijri(2024, 3, 11)


def test_hijri_date_string():
    assert get_hijri_date_string(datetime.date(2024, 3, 11)) == "1 رمضان 1445 هـ"
    assert get_hijri_date_string(datetime.date(2024, 3, 11), locale="en") == "1 Ramadan 1445 AH"
    assert get_hijri_date_string(datetime.date(2024, 3, 10), offset=1) == "1 رمضان 1445 هـ"
