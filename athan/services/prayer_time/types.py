# athan/services/prayer_time/types.py
"""Immutable value types shared by the solar calculator, the engine and the remote provider."""

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

PRAYER_KEYS = ("fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha")


class AsrJuristic(Enum):
    STANDARD = 1  # Shafi'i, Maliki, Hanbali
    HANAFI = 2

    @property
    def shadow_factor(self) -> int:
        return self.value


class HighLatitudeRule(Enum):
    """Mirrors AlAdhan's latitudeAdjustmentMethod ids, plus a strict NONE."""
    NONE = 0
    MIDDLE_OF_NIGHT = 1
    ONE_SEVENTH = 2
    ANGLE_BASED = 3


@dataclass(frozen=True)
class GeoCoordinate:
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")


@dataclass(frozen=True)
class CalculationMethod:
    """
    A twilight-angle convention. Fajr/Isha angles are positive depression magnitudes.
    Isha (and Maghrib) may instead be a fixed number of minutes after the preceding event.
    """
    key: str
    name: str
    fajr_angle: float
    isha_angle: Optional[float] = None
    isha_minutes: Optional[int] = None
    maghrib_angle: Optional[float] = None
    maghrib_minutes: int = 0
    aladhan_id: Optional[int] = None

    def __post_init__(self):
        if self.fajr_angle <= 0:
            raise ValueError(f"{self.key}: fajr_angle must be a positive depression angle")
        if (self.isha_angle is None) == (self.isha_minutes is None):
            raise ValueError(f"{self.key}: exactly one of isha_angle / isha_minutes must be set")
        if self.isha_angle is not None and self.isha_angle <= 0:
            raise ValueError(f"{self.key}: isha_angle must be a positive depression angle")
        if self.maghrib_angle is not None and self.maghrib_angle <= 0:
            raise ValueError(f"{self.key}: maghrib_angle must be a positive depression angle")


@dataclass(frozen=True)
class LocationConfig:
    name: str
    coordinate: GeoCoordinate
    method: CalculationMethod
    utc_offset: Optional[float] = None  # standard (winter) offset in hours
    asr_juristic: AsrJuristic = AsrJuristic.STANDARD
    high_latitude_rule: HighLatitudeRule = HighLatitudeRule.ANGLE_BASED

    @property
    def effective_utc_offset(self) -> float:
        if self.utc_offset is not None:
            return self.utc_offset
        return float(round(self.coordinate.longitude / 15.0))


@dataclass(frozen=True)
class EngineConfig:
    dst_offset: int = 0
    adjustments: Dict[str, int] = field(default_factory=dict)

    def adjustment_for(self, prayer_key: str) -> int:
        return int(self.adjustments.get(prayer_key, 0))


@dataclass(frozen=True)
class SunTimes:
    """Fractional UTC hours; may lie outside [0, 24) before local offsets are applied."""
    fajr: float
    sunrise: float
    dhuhr: float
    asr: float
    sunset: float
    maghrib: float
    isha: float

    def as_dict(self) -> Dict[str, float]:
        return {key: getattr(self, key) for key in PRAYER_KEYS}


@dataclass(frozen=True, order=True)
class PrayerTime:
    hour: int
    minute: int

    def __post_init__(self):
        if not (0 <= self.hour <= 23 and 0 <= self.minute <= 59):
            raise ValueError(f"Invalid time of day: {self.hour}:{self.minute}")

    @classmethod
    def from_minutes(cls, total_minutes: int) -> "PrayerTime":
        hour, minute = divmod(total_minutes % (24 * 60), 60)
        return cls(hour, minute)

    @classmethod
    def parse(cls, value: str) -> "PrayerTime":
        """Parses 'HH:MM', ignoring trailing metadata such as ' (CET)'."""
        hour_str, minute_str = value.strip().split(" ")[0].split(":")[:2]
        return cls(int(hour_str), int(minute_str))

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class DailyPrayerTimes:
    """Six wall-clock times in the fixed order Fajr, Sunrise, Dhuhr, Asr, Maghrib, Isha."""
    date: datetime.date
    times: Tuple[PrayerTime, ...]
    source: str = "calculated"

    def __post_init__(self):
        if len(self.times) != len(PRAYER_KEYS):
            raise ValueError(f"Expected {len(PRAYER_KEYS)} prayer times, got {len(self.times)}")

    @classmethod
    def from_strings(cls, date: datetime.date, values: List[str], source: str) -> "DailyPrayerTimes":
        return cls(date=date, times=tuple(PrayerTime.parse(v) for v in values), source=source)

    def __iter__(self) -> Iterator[PrayerTime]:
        return iter(self.times)

    def __getitem__(self, key):
        if isinstance(key, str):
            return self.times[PRAYER_KEYS.index(key)]
        return self.times[key]

    @property
    def fajr(self) -> PrayerTime:
        return self.times[0]

    @property
    def sunrise(self) -> PrayerTime:
        return self.times[1]

    @property
    def dhuhr(self) -> PrayerTime:
        return self.times[2]

    @property
    def asr(self) -> PrayerTime:
        return self.times[3]

    @property
    def maghrib(self) -> PrayerTime:
        return self.times[4]

    @property
    def isha(self) -> PrayerTime:
        return self.times[5]

    def imsak(self, minutes: int = 10) -> PrayerTime:
        """Start of the pre-dawn fasting margin: Fajr minus `minutes`."""
        return PrayerTime.from_minutes(self.fajr.minutes - int(minutes))

    def as_strings(self) -> List[str]:
        return [str(t) for t in self.times]

    def as_dict(self) -> Dict[str, str]:
        return {key: str(t) for key, t in zip(PRAYER_KEYS, self.times)}
