# athan/schemas.py

from marshmallow import EXCLUDE, Schema, fields, pre_load, post_load, validate

from .services.helpers.constants import (
    CALCULATION_METHODS,
    DEFAULT_IMSAK_MINUTES,
    DEFAULT_METHOD_KEY,
    DEFAULT_SOUND_ID,
    LOCATION_PRESETS,
)
from .services.prayer_time.types import PRAYER_KEYS


# --- Settings ---

class PrayerAlertSchema(Schema):
    """Per-prayer alert preferences. Only the sound id matters to the core (it is repaired on load)."""
    class Meta:
        unknown = EXCLUDE

    athan = fields.Bool(load_default=True)
    sound = fields.Str(load_default=DEFAULT_SOUND_ID, validate=validate.Length(min=1))
    volume = fields.Int(load_default=100, validate=validate.Range(min=0, max=100))


class SettingsSchema(Schema):
    """Stored user settings consumed read-only by the core."""
    class Meta:
        unknown = EXCLUDE

    location = fields.Str(load_default="berlin", validate=validate.OneOf(list(LOCATION_PRESETS)))
    berlin_use_api = fields.Bool(load_default=False)
    custom_city = fields.Str(load_default="")
    custom_country = fields.Str(load_default="")
    dst_offset = fields.Int(load_default=0, validate=validate.Range(min=-1, max=2))
    hijri_offset = fields.Int(load_default=0, validate=validate.Range(min=-3, max=3))
    method = fields.Str(load_default=DEFAULT_METHOD_KEY, validate=validate.OneOf(list(CALCULATION_METHODS)))
    imsak_minutes = fields.Int(load_default=DEFAULT_IMSAK_MINUTES, validate=validate.Range(min=0, max=60))
    auto_ramadan = fields.Bool(load_default=True)
    ramadan_mode = fields.Bool(load_default=False)
    show_iftar_countdown = fields.Bool(load_default=True)
    adjustments = fields.Dict(
        keys=fields.Str(validate=validate.OneOf(PRAYER_KEYS)),
        values=fields.Int(validate=validate.Range(min=-60, max=60)),
        load_default=dict,
    )
    prayers = fields.Dict(
        keys=fields.Str(validate=validate.OneOf(PRAYER_KEYS)),
        values=fields.Nested(PrayerAlertSchema),
        load_default=dict,
    )

    @pre_load
    def fill_missing_sound_ids(self, data, **kwargs):
        prayers = data.get("prayers") if isinstance(data, dict) else None
        if not isinstance(prayers, dict):
            return data
        repaired = {}
        for key, prefs in prayers.items():
            if isinstance(prefs, dict) and not prefs.get("sound"):
                prefs = {**prefs, "sound": DEFAULT_SOUND_ID}
            repaired[key] = prefs
        return {**data, "prayers": repaired}

    @post_load
    def complete_prayers(self, data, **kwargs):
        alert_schema = PrayerAlertSchema()
        prayers = dict(data.get("prayers", {}))
        for key in PRAYER_KEYS:
            if key not in prayers:
                prayers[key] = alert_schema.load({"athan": key != "sunrise"})
        data["prayers"] = prayers
        return data


# --- Query arguments ---

class SettingsArgsSchema(Schema):
    """Settings accepted on the query string. Missing values take the stored-settings defaults."""
    location = fields.Str(validate=validate.OneOf(list(LOCATION_PRESETS)))
    berlin_use_api = fields.Bool()
    city = fields.Str(data_key="city", attribute="custom_city")
    country = fields.Str(data_key="country", attribute="custom_country")
    dst_offset = fields.Int(validate=validate.Range(min=-1, max=2))
    hijri_offset = fields.Int(validate=validate.Range(min=-3, max=3))
    method = fields.Str(validate=validate.OneOf(list(CALCULATION_METHODS)))
    imsak_minutes = fields.Int(validate=validate.Range(min=0, max=60))
    ramadan_mode = fields.Bool()


class PrayerTimesArgsSchema(SettingsArgsSchema):
    date = fields.Date()


class MonthCalendarArgsSchema(SettingsArgsSchema):
    year = fields.Int(required=True, validate=validate.Range(min=1900, max=2200))
    month = fields.Int(required=True, validate=validate.Range(min=1, max=12))


class NextPrayerArgsSchema(SettingsArgsSchema):
    now = fields.NaiveDateTime()


class HijriArgsSchema(Schema):
    date = fields.Date()
    offset = fields.Int(load_default=0, validate=validate.Range(min=-3, max=3))
    locale = fields.Str(load_default="ar", validate=validate.OneOf(["ar", "en"]))


class QiblaArgsSchema(Schema):
    lat = fields.Float(required=True, validate=validate.Range(min=-90, max=90))
    lon = fields.Float(required=True, validate=validate.Range(min=-180, max=180))


# --- Responses ---

class PrayerTimesSchema(Schema):
    fajr = fields.Str(required=True)
    sunrise = fields.Str(required=True)
    dhuhr = fields.Str(required=True)
    asr = fields.Str(required=True)
    maghrib = fields.Str(required=True)
    isha = fields.Str(required=True)


class IslamicStatusSchema(Schema):
    is_ramadan = fields.Bool(required=True)
    ramadan_day = fields.Int(allow_none=True)
    is_eid = fields.Bool(required=True)
    eid_type = fields.Str(allow_none=True)
    theme = fields.Str(allow_none=True)


class HijriDateSchema(Schema):
    year = fields.Int(required=True)
    month = fields.Int(required=True)
    day = fields.Int(required=True)
    month_name = fields.Str(required=True)
    display = fields.Str(required=True)


class DailyPrayerDataSchema(Schema):
    date = fields.Date(required=True)
    source = fields.Str(required=True)
    times = fields.Nested(PrayerTimesSchema, required=True)
    imsak = fields.Str(required=True)
    hijri = fields.Nested(HijriDateSchema, required=True)
    status = fields.Nested(IslamicStatusSchema, required=True)


class CalendarDaySchema(Schema):
    day = fields.Int(required=True)
    date = fields.Date(required=True)
    times = fields.Nested(PrayerTimesSchema, required=True)
    hijri = fields.Str(required=True)
    is_ramadan = fields.Bool(required=True)
    is_eid = fields.Bool(required=True)


class MonthCalendarSchema(Schema):
    year = fields.Int(required=True)
    month = fields.Int(required=True)
    days = fields.List(fields.Nested(CalendarDaySchema), required=True)


class NextPrayerSchema(Schema):
    name = fields.Str(required=True)
    time = fields.Str(required=True)
    seconds_remaining = fields.Int(required=True)
    countdown = fields.Str(required=True)
    is_daytime = fields.Bool(required=True)
    iftar = fields.Str(allow_none=True)


class QiblaSchema(Schema):
    latitude = fields.Float(required=True)
    longitude = fields.Float(required=True)
    bearing = fields.Float(required=True)


class MessageSchema(Schema):
    message = fields.Str(required=True)
