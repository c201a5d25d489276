# athan/services/prayer_time/locations.py
from flask import current_app

from ..helpers.constants import CALCULATION_METHODS, DEFAULT_METHOD_KEY
from .types import AsrJuristic, GeoCoordinate, HighLatitudeRule, LocationConfig


def get_calculation_method(method_key):
    """Looks up a method preset, falling back to the canonical default for unknown keys."""
    method = CALCULATION_METHODS.get(method_key)
    if method is None:
        current_app.logger.warning(f"Unknown calculation method '{method_key}', using {DEFAULT_METHOD_KEY}.")
        method = CALCULATION_METHODS[DEFAULT_METHOD_KEY]
    return method


def get_default_location(method_key=None):
    """The built-in fixed location, configured through DEFAULT_* settings."""
    config = current_app.config
    return LocationConfig(
        name=config.get('DEFAULT_LOCATION_NAME', "Berlin"),
        coordinate=GeoCoordinate(
            latitude=float(config.get('DEFAULT_LATITUDE')),
            longitude=float(config.get('DEFAULT_LONGITUDE')),
        ),
        utc_offset=float(config.get('DEFAULT_UTC_OFFSET', 1)),
        method=get_calculation_method(method_key or config.get('DEFAULT_CALCULATION_METHOD', DEFAULT_METHOD_KEY)),
        asr_juristic=AsrJuristic[config.get('DEFAULT_ASR_JURISTIC', "STANDARD")],
        high_latitude_rule=HighLatitudeRule[config.get('DEFAULT_HIGH_LATITUDE_RULE', "ANGLE_BASED")],
    )
