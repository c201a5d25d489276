# athan/services/prayer_time/cache_layer.py
# Two-tier month cache: Redis in front of the database.
import datetime
import json
from flask import current_app
from typing import Dict, List, Optional
from redis import exceptions as redis_exceptions
from sqlalchemy.exc import SQLAlchemyError

from ...errors import CacheError
from ...extensions import db, redis_client
from ...metrics import CACHE_HITS, CACHE_MISSES
from ...models import CachedMonthTimes
from .key_utils import generate_month_cache_key, generate_month_redis_key

MonthTimes = Dict[int, List[str]]


def _normalize_days(times: Dict) -> MonthTimes:
    """JSON object keys come back as strings; day numbers are ints everywhere else."""
    return {int(day): list(values) for day, values in times.items()}


def get_cached_month_times(city: str, country: str, month: int, year: int) -> Optional[MonthTimes]:
    """
    Checks Redis first, then the database. A database hit is copied back into Redis.
    Redis failures are logged and skipped; database failures raise CacheError.
    """
    redis_key = generate_month_redis_key(city, country, month, year)

    # 1. Check Redis Cache first
    cached_data = _cache_get_json(redis_key)
    if cached_data:
        CACHE_HITS.labels(tier='redis').inc()
        current_app.logger.info(f"Redis Cache HIT for {city}, {country} {year}-{month:02d}.")
        return _normalize_days(cached_data)

    CACHE_MISSES.labels(tier='redis').inc()

    # 2. Check Database Cache
    cache_key = generate_month_cache_key(city, country, month, year)
    try:
        row = db.session.get(CachedMonthTimes, cache_key)
    except SQLAlchemyError as e:
        db.session.rollback()
        raise CacheError(f"Database read failed for {cache_key}: {e}") from e

    if row is None:
        CACHE_MISSES.labels(tier='database').inc()
        current_app.logger.info(f"DB Cache MISS for {cache_key}.")
        return None

    CACHE_HITS.labels(tier='database').inc()
    current_app.logger.info(f"DB Cache HIT for {cache_key}.")

    # 3. Populate Redis Cache from DB data
    _cache_set_json(redis_key, row.times)
    return _normalize_days(row.times)


def store_month_times(city: str, country: str, month: int, year: int, times: MonthTimes) -> None:
    """
    Writes a freshly fetched month through to both tiers. The database write is an
    upsert keyed on (city, country, month, year); a failure raises CacheError.
    """
    cache_key = generate_month_cache_key(city, country, month, year)
    payload = {str(day): values for day, values in times.items()}

    try:
        existing = db.session.get(CachedMonthTimes, cache_key)
        if existing:
            existing.times = payload
            existing.captured_at = datetime.datetime.utcnow()
            current_app.logger.info(f"Updated cached month {cache_key} in DB.")
        else:
            db.session.add(CachedMonthTimes(
                cache_key=cache_key,
                city=city,
                country=country,
                year=year,
                month=month,
                times=payload,
            ))
            current_app.logger.info(f"Added cached month {cache_key} to DB.")
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise CacheError(f"Database write failed for {cache_key}: {e}") from e

    _cache_set_json(generate_month_redis_key(city, country, month, year), payload)


def _cache_get_json(key: str) -> Optional[Dict]:
    """Helper function to safely get and deserialize a JSON object from Redis."""
    try:
        cached_data = redis_client.get(key)
        if cached_data:
            return json.loads(cached_data)
        return None
    except (redis_exceptions.RedisError, json.JSONDecodeError) as e:
        current_app.logger.error(f"Redis GET or JSON load failed for key {key}: {e}", exc_info=True)
        return None


def _cache_set_json(key: str, value) -> None:
    """Helper function to safely serialize and set a JSON object in Redis. Entries do not expire."""
    try:
        redis_client.set(key, json.dumps(value))
    except redis_exceptions.RedisError as e:
        current_app.logger.error(f"Redis SET failed for key {key}: {e}", exc_info=True)
