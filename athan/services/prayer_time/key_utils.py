# athan/services/prayer_time/key_utils.py

from flask import current_app


def generate_month_cache_key(city: str, country: str, month: int, year: int) -> str:
    """Generates the persistent cache key for a city's month of prayer times."""
    return f"{city}-{country}-{month}-{year}"


def generate_month_redis_key(city: str, country: str, month: int, year: int) -> str:
    """Generates a consistent Redis key for a city's month of prayer times."""
    schema_version = current_app.config.get('CACHE_SCHEMA_VERSION', 'v1')
    return f"month:{schema_version}:{city.lower()}:{country.lower()}:{year}:{month}"
