# tests/test_prayer_service.py

import datetime
from unittest.mock import MagicMock

import pytest

from athan.errors import ComputationError
from athan.services.calendar_service import get_islamic_day_info, is_ramadan_active
from athan.services.prayer_time.types import PrayerTime
from athan.services.prayer_time_service import (
    get_daily_prayer_data_from_service,
    get_month_calendar_from_service,
    get_next_prayer_info_from_service,
    get_prayer_times_for_date_from_service,
)
from athan.services.qibla_service import qibla_bearing
from athan.services.prayer_time.types import GeoCoordinate
from athan.services.settings_service import Settings, load_settings

from .conftest import make_month_times


@pytest.fixture
def mock_adapter(mocker):
    adapter = MagicMock()
    adapter.fetch_month_calendar_by_city.return_value = make_month_times(31)
    mocker.patch('athan.services.prayer_time.remote_provider.get_selected_api_adapter', return_value=adapter)
    return adapter


def test_berlin_is_calculated_locally(db, mock_adapter):
    times = get_prayer_times_for_date_from_service(datetime.date(2024, 3, 11), load_settings({}))
    assert times.source == "calculated"
    mock_adapter.fetch_month_calendar_by_city.assert_not_called()


def test_berlin_with_api_uses_remote_provider(db, mock_adapter):
    settings = load_settings({"berlin_use_api": True})
    times = get_prayer_times_for_date_from_service(datetime.date(2024, 3, 11), settings)
    assert times.source == "remote"
    mock_adapter.fetch_month_calendar_by_city.assert_called_once_with(2024, 3, "Berlin", "Germany", 3)


def test_damascus_uses_remote_provider(db, mock_adapter):
    times = get_prayer_times_for_date_from_service(datetime.date(2024, 3, 11), load_settings({"location": "damascus"}))
    assert times.source == "remote"
    assert times.fajr == PrayerTime(5, 0)


def test_custom_location_without_city_is_calculated(db, mock_adapter):
    times = get_prayer_times_for_date_from_service(datetime.date(2024, 3, 11), load_settings({"location": "custom"}))
    assert times.source == "calculated"
    mock_adapter.fetch_month_calendar_by_city.assert_not_called()


def test_method_setting_changes_local_calculation(db):
    date = datetime.date(2024, 3, 11)
    mwl = get_prayer_times_for_date_from_service(date, load_settings({"method": "MWL"}))
    isna = get_prayer_times_for_date_from_service(date, load_settings({"method": "ISNA"}))
    # ISNA uses a shallower 15 degree Fajr angle
    assert isna.fajr > mwl.fajr


def test_daily_prayer_data(db):
    data = get_daily_prayer_data_from_service(datetime.date(2024, 3, 11), load_settings({"imsak_minutes": 15}))
    assert data["hijri"]["month"] == 9
    assert data["hijri"]["day"] == 1
    assert data["status"]["is_ramadan"] is True
    assert data["status"]["theme"] == "ramadan"
    imsak = PrayerTime.parse(data["imsak"])
    fajr = PrayerTime.parse(data["times"]["fajr"])
    assert fajr.minutes - imsak.minutes == 15


def test_month_calendar_for_local_location(db):
    rows = get_month_calendar_from_service(2024, 3, load_settings({}))
    assert len(rows) == 31
    assert rows[0]["date"] == datetime.date(2024, 3, 1)
    assert rows[10]["hijri"] == "1 رمضان 1445 هـ"
    assert rows[10]["is_ramadan"] and not rows[9]["is_ramadan"]
    assert set(rows[0]["times"]) == {"fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha"}


def test_month_calendar_for_remote_location_fetches_once(db, mock_adapter):
    rows = get_month_calendar_from_service(2024, 4, load_settings({"location": "damascus"}))
    assert len(rows) == 30
    assert mock_adapter.fetch_month_calendar_by_city.call_count == 1
    assert rows[9]["is_eid"]  # 2024-04-10 is 1 Shawwal
    assert rows[0]["times"]["isha"] == "19:50"


def test_month_calendar_propagates_computation_error(db, mocker):
    mocker.patch('athan.services.prayer_time_service.get_prayer_times', side_effect=ComputationError("fajr"))
    with pytest.raises(ComputationError):
        get_month_calendar_from_service(2024, 6, load_settings({}))


def test_next_prayer_during_the_day(db, mock_adapter):
    info = get_next_prayer_info_from_service(datetime.datetime(2024, 1, 15, 12, 0), load_settings({"location": "damascus"}))
    assert info["name"] == "dhuhr"
    assert info["time"] == "12:30"
    assert info["seconds_remaining"] == 1800
    assert info["countdown"] == "00:30"
    assert info["is_daytime"] is True
    assert info["iftar"] is None


def test_next_prayer_after_isha_is_tomorrows_fajr(db, mock_adapter):
    info = get_next_prayer_info_from_service(datetime.datetime(2024, 1, 15, 23, 0), load_settings({"location": "damascus"}))
    assert info["name"] == "fajr"
    assert info["seconds_remaining"] == 6 * 3600
    assert info["is_daytime"] is False


def test_next_prayer_includes_iftar_countdown_in_ramadan(db, mock_adapter):
    info = get_next_prayer_info_from_service(datetime.datetime(2024, 3, 11, 17, 0), load_settings({"location": "damascus"}))
    assert info["iftar"] == "1h 20m until iftar"

    hidden = get_next_prayer_info_from_service(
        datetime.datetime(2024, 3, 11, 17, 0),
        load_settings({"location": "damascus", "show_iftar_countdown": False}),
    )
    assert hidden["iftar"] is None


def test_ramadan_mode_detection(app):
    with app.app_context():
        assert is_ramadan_active(datetime.date(2024, 3, 11), Settings())
        assert not is_ramadan_active(datetime.date(2024, 3, 11), Settings(auto_ramadan=False))
        assert is_ramadan_active(datetime.date(2024, 1, 15), Settings(ramadan_mode=True))
        assert not is_ramadan_active(datetime.date(2024, 3, 10), Settings())
        assert is_ramadan_active(datetime.date(2024, 3, 10), Settings(hijri_offset=1))


def test_eid_fitr_window_follows_config(app, mocker):
    mocker.patch.dict(app.config, {"EID_FITR_DAYS": 1})
    with app.app_context():
        assert get_islamic_day_info(datetime.date(2024, 4, 10))["status"]["eid_type"] == "fitr"
        assert get_islamic_day_info(datetime.date(2024, 4, 11))["status"]["is_eid"] is False


def test_qibla_bearing():
    assert 135.0 < qibla_bearing(GeoCoordinate(52.52, 13.405)) < 138.0
    assert qibla_bearing(GeoCoordinate(0.0, 39.8262)) == pytest.approx(0.0, abs=1e-9)
    assert 0.0 <= qibla_bearing(GeoCoordinate(40.71, -74.01)) < 360.0
