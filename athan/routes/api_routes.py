# athan/routes/api_routes.py
import datetime
from typing import Any, Dict

from flask import current_app
from flask_smorest import Blueprint, abort
from prometheus_client import generate_latest

from ..errors import ComputationError
from ..schemas import (
    DailyPrayerDataSchema,
    HijriArgsSchema,
    HijriDateSchema,
    MessageSchema,
    MonthCalendarArgsSchema,
    MonthCalendarSchema,
    NextPrayerArgsSchema,
    NextPrayerSchema,
    PrayerTimesArgsSchema,
    QiblaArgsSchema,
    QiblaSchema,
)
from ..services.calendar_service import get_islamic_day_info
from ..services.prayer_time.types import GeoCoordinate
from ..services.prayer_time_service import (
    get_daily_prayer_data_from_service,
    get_month_calendar_from_service,
    get_next_prayer_info_from_service,
)
from ..services.qibla_service import qibla_bearing
from ..services.settings_service import load_settings
from ..utils.time_utils import local_now

api_bp = Blueprint('API', __name__, url_prefix='/api')

UNAVAILABLE_MESSAGE = "Prayer times unavailable for this location"

SETTINGS_ARG_KEYS = (
    "location", "berlin_use_api", "custom_city", "custom_country", "dst_offset",
    "hijri_offset", "method", "imsak_minutes", "ramadan_mode",
)


@api_bp.route('/metrics')
def metrics():
    return generate_latest(), 200, {'Content-Type': 'text/plain; version=0.0.4; charset=utf-8'}


def settings_from_args(args: Dict[str, Any]):
    """Query-string settings on top of the stored-settings defaults."""
    return load_settings({key: args[key] for key in SETTINGS_ARG_KEYS if key in args})


def _location_today(settings) -> datetime.datetime:
    offset = float(current_app.config.get('DEFAULT_UTC_OFFSET', 1)) + settings.dst_offset
    return local_now(offset)


def _unavailable(e: ComputationError):
    current_app.logger.warning(f"Computation failed: {e}")
    abort(422, message=UNAVAILABLE_MESSAGE)


@api_bp.route('/prayer-times')
@api_bp.arguments(PrayerTimesArgsSchema, location='query')
@api_bp.response(200, DailyPrayerDataSchema)
@api_bp.alt_response(422, schema=MessageSchema, description="No solar solution for this date and location.")
def prayer_times(args: Dict[str, Any]):
    """
    Prayer times for one day with the Hijri date and Ramadan/Eid status.
    Defaults to today at the selected location.
    """
    settings = settings_from_args(args)
    date_obj = args.get('date') or _location_today(settings).date()
    try:
        return get_daily_prayer_data_from_service(date_obj, settings)
    except ComputationError as e:
        _unavailable(e)


@api_bp.route('/prayer-times/month')
@api_bp.arguments(MonthCalendarArgsSchema, location='query')
@api_bp.response(200, MonthCalendarSchema)
@api_bp.alt_response(422, schema=MessageSchema, description="No solar solution for a day of this month.")
def month_calendar(args: Dict[str, Any]):
    """Monthly prayer calendar, one row per day."""
    settings = settings_from_args(args)
    try:
        days = get_month_calendar_from_service(args['year'], args['month'], settings)
    except ComputationError as e:
        _unavailable(e)
    return {"year": args['year'], "month": args['month'], "days": days}


@api_bp.route('/next-prayer')
@api_bp.arguments(NextPrayerArgsSchema, location='query')
@api_bp.response(200, NextPrayerSchema)
@api_bp.alt_response(422, schema=MessageSchema, description="No solar solution for this date and location.")
def next_prayer(args: Dict[str, Any]):
    """
    Next prayer and countdown. `now` is the caller's local wall-clock time;
    without it the built-in location's clock is used.
    """
    settings = settings_from_args(args)
    now = args.get('now') or _location_today(settings)
    try:
        return get_next_prayer_info_from_service(now, settings)
    except ComputationError as e:
        _unavailable(e)


@api_bp.route('/hijri')
@api_bp.arguments(HijriArgsSchema, location='query')
@api_bp.response(200, HijriDateSchema)
def hijri_date(args: Dict[str, Any]):
    date_obj = args.get('date') or _location_today(load_settings()).date()
    return get_islamic_day_info(date_obj, args['offset'], locale=args['locale'])["hijri"]


@api_bp.route('/qibla')
@api_bp.arguments(QiblaArgsSchema, location='query')
@api_bp.response(200, QiblaSchema)
def qibla(args: Dict[str, Any]):
    coordinate = GeoCoordinate(latitude=args['lat'], longitude=args['lon'])
    return {"latitude": coordinate.latitude, "longitude": coordinate.longitude, "bearing": qibla_bearing(coordinate)}
