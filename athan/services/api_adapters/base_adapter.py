# This module defines the base interface for all prayer time API adapters.
from abc import ABC, abstractmethod


class BasePrayerTimeAdapter(ABC):
    """
    Abstract base class for prayer time API adapters. It ensures that all adapters
    adhere to a common interface, returning data in a standardized format.
    """

    def __init__(self, base_url, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    @abstractmethod
    def fetch_month_calendar_by_city(self, year, month, city, country, method_id):
        """
        Fetches a month of prayer times for a city.
        Returns {day_of_month: [fajr, sunrise, dhuhr, asr, maghrib, isha]} as "HH:MM" strings,
        or raises NetworkError.
        """
        pass
