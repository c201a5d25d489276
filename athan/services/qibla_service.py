# athan/services/qibla_service.py
import math

from .helpers.constants import KAABA_COORDINATE
from .prayer_time.types import GeoCoordinate


def qibla_bearing(coordinate: GeoCoordinate) -> float:
    """Initial great-circle bearing from `coordinate` to the Kaaba, in degrees clockwise from true north."""
    phi1 = math.radians(coordinate.latitude)
    phi2 = math.radians(KAABA_COORDINATE.latitude)
    delta_lambda = math.radians(KAABA_COORDINATE.longitude - coordinate.longitude)

    y = math.sin(delta_lambda)
    x = math.cos(phi1) * math.tan(phi2) - math.sin(phi1) * math.cos(delta_lambda)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0
