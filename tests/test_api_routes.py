# tests/test_api_routes.py

from unittest.mock import MagicMock, patch

from freezegun import freeze_time

from athan.errors import ComputationError

from .conftest import make_month_times


def test_app_registers_models_and_blueprint(app):
    from athan import db as _db

    assert 'API' in app.blueprints
    assert 'cached_month_times' in _db.metadata.tables


@freeze_time("2024-03-11 10:00:00")
def test_prayer_times_defaults_to_today_in_berlin(test_client):
    response = test_client.get('/api/prayer-times')

    assert response.status_code == 200
    data = response.get_json()
    assert data["date"] == "2024-03-11"
    assert data["source"] == "calculated"
    assert set(data["times"]) == {"fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha"}
    assert data["hijri"]["display"] == "1 رمضان 1445 هـ"
    assert data["status"]["is_ramadan"] is True
    assert data["status"]["ramadan_day"] == 1


def test_prayer_times_for_remote_city(test_client):
    adapter = MagicMock()
    adapter.fetch_month_calendar_by_city.return_value = make_month_times(31)
    with patch('athan.services.prayer_time.remote_provider.get_selected_api_adapter', return_value=adapter):
        response = test_client.get('/api/prayer-times?date=2024-03-11&location=custom&city=Cairo&country=Egypt')

    assert response.status_code == 200
    data = response.get_json()
    assert data["source"] == "remote"
    assert data["times"]["fajr"] == "05:00"
    adapter.fetch_month_calendar_by_city.assert_called_once_with(2024, 3, "Cairo", "Egypt", 3)


def test_prayer_times_remote_failure_still_returns_times(test_client):
    response = test_client.get('/api/prayer-times?date=2024-03-11&location=damascus')

    assert response.status_code == 200
    data = response.get_json()
    assert data["source"] == "fallback"
    assert len(data["times"]) == 6


def test_prayer_times_computation_error_is_422(test_client):
    with patch('athan.services.prayer_time_service.get_prayer_times', side_effect=ComputationError("fajr", latitude=70.0)):
        response = test_client.get('/api/prayer-times?date=2024-06-21')

    assert response.status_code == 422
    assert response.get_json()["message"] == "Prayer times unavailable for this location"


def test_prayer_times_rejects_invalid_arguments(test_client):
    assert test_client.get('/api/prayer-times?dst_offset=7').status_code == 422
    assert test_client.get('/api/prayer-times?location=atlantis').status_code == 422
    assert test_client.get('/api/prayer-times?method=Unknown').status_code == 422


def test_month_calendar(test_client):
    response = test_client.get('/api/prayer-times/month?year=2024&month=3')

    assert response.status_code == 200
    data = response.get_json()
    assert (data["year"], data["month"]) == (2024, 3)
    assert len(data["days"]) == 31
    assert data["days"][10]["is_ramadan"] is True
    assert data["days"][10]["hijri"] == "1 رمضان 1445 هـ"


def test_month_calendar_requires_year_and_month(test_client):
    assert test_client.get('/api/prayer-times/month?year=2024').status_code == 422


def test_next_prayer_with_explicit_now(test_client):
    response = test_client.get('/api/next-prayer?now=2024-03-11T12:00:00')

    assert response.status_code == 200
    data = response.get_json()
    assert data["name"] == "dhuhr"
    assert data["seconds_remaining"] > 0
    assert "until iftar" in data["iftar"]


@freeze_time("2024-03-11 22:30:00")
def test_next_prayer_after_isha_uses_location_clock(test_client):
    # 23:30 in Berlin winter time
    response = test_client.get('/api/next-prayer')

    assert response.status_code == 200
    data = response.get_json()
    assert data["name"] == "fajr"
    assert data["is_daytime"] is False
    assert data["iftar"] == "iftar time"


def test_hijri(test_client):
    response = test_client.get('/api/hijri?date=2024-03-11&locale=en')

    assert response.status_code == 200
    assert response.get_json() == {
        "year": 1445,
        "month": 9,
        "day": 1,
        "month_name": "Ramadan",
        "display": "1 Ramadan 1445 AH",
    }


def test_hijri_with_offset(test_client):
    response = test_client.get('/api/hijri?date=2024-04-09&offset=1')
    data = response.get_json()
    assert (data["month"], data["day"]) == (10, 1)


@freeze_time("2024-03-10 23:30:00")
def test_hijri_defaults_to_the_locations_date(test_client):
    # 23:30 UTC is already 00:30 on March 11 in Berlin (UTC+1)
    response = test_client.get('/api/hijri?locale=en')
    data = response.get_json()
    assert (data["year"], data["month"], data["day"]) == (1445, 9, 1)


def test_qibla(test_client):
    response = test_client.get('/api/qibla?lat=52.52&lon=13.405')

    assert response.status_code == 200
    assert 135.0 < response.get_json()["bearing"] < 138.0


def test_qibla_rejects_out_of_range_coordinates(test_client):
    assert test_client.get('/api/qibla?lat=95&lon=0').status_code == 422


def test_metrics(test_client):
    response = test_client.get('/api/metrics')
    assert response.status_code == 200
    assert b'athan_cache_hits_total' in response.data
