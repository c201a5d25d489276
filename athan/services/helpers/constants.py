# athan/services/helpers/constants.py

from ..prayer_time.types import CalculationMethod, GeoCoordinate

# Calculation method presets. The app's historical builds disagreed on angles
# (Egyptian 19.5/17.5 vs MWL 18/17); MWL is canonical because the remote API is
# queried with method 3 (MWL) and local fallbacks should agree with it.
CALCULATION_METHODS = {
    "MWL": CalculationMethod(key="MWL", name="Muslim World League", fajr_angle=18, isha_angle=17, aladhan_id=3),
    "ISNA": CalculationMethod(key="ISNA", name="Islamic Society of North America", fajr_angle=15, isha_angle=15, aladhan_id=2),
    "Egyptian": CalculationMethod(key="Egyptian", name="Egyptian General Authority of Survey", fajr_angle=19.5, isha_angle=17.5, aladhan_id=5),
    "Makkah": CalculationMethod(key="Makkah", name="Umm al-Qura University, Makkah", fajr_angle=18.5, isha_minutes=90, aladhan_id=4),
    "Karachi": CalculationMethod(key="Karachi", name="University of Islamic Sciences, Karachi", fajr_angle=18, isha_angle=18, aladhan_id=1),
    "Tehran": CalculationMethod(key="Tehran", name="Institute of Geophysics, University of Tehran", fajr_angle=17.7, isha_angle=14, maghrib_angle=4.5, aladhan_id=7),
    "Jafari": CalculationMethod(key="Jafari", name="Shia Ithna-Ashari, Leva Institute, Qum", fajr_angle=16, isha_angle=14, maghrib_angle=4, aladhan_id=0),
}

DEFAULT_METHOD_KEY = "MWL"

# Selectable locations. 'berlin' is the built-in fixed location computed locally;
# the others are resolved through the remote calendarByCity endpoint.
LOCATION_PRESETS = {
    "berlin": {"city": "Berlin", "country": "Germany"},
    "damascus": {"city": "Damascus", "country": "Syria"},
    "custom": {"city": "", "country": ""},
}

DEFAULT_LOCATION_NAME = "Berlin"
DEFAULT_COORDINATE = GeoCoordinate(latitude=52.52, longitude=13.405)
DEFAULT_UTC_OFFSET = 1.0

KAABA_COORDINATE = GeoCoordinate(latitude=21.4225, longitude=39.8262)

DEFAULT_SOUND_ID = "naji"
DEFAULT_IMSAK_MINUTES = 10
