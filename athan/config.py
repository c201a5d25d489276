import os
from dotenv import load_dotenv

# Load .env file
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a_default_fallback_secret_key_for_development_only'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', "INFO")

    # Sentry Configuration
    SENTRY_DSN = os.environ.get('SENTRY_DSN')

    # Redis hot cache in front of the database-backed month cache.
    REDIS_URL = os.environ.get('REDIS_URL') or 'redis://localhost:6379/0'
    CACHE_SCHEMA_VERSION = os.environ.get('CACHE_SCHEMA_VERSION', 'v1')

    # Remote Prayer Time API Configuration
    PRAYER_API_ADAPTER = os.environ.get('PRAYER_API_ADAPTER') or "AlAdhanAdapter"
    PRAYER_API_BASE_URL = os.environ.get('PRAYER_API_BASE_URL') or "https://api.aladhan.com/v1"
    REMOTE_CALCULATION_METHOD_ID = int(os.environ.get('REMOTE_CALCULATION_METHOD_ID', 3))  # 3 = Muslim World League
    REMOTE_FETCH_TIMEOUT_SECONDS = float(os.environ.get('REMOTE_FETCH_TIMEOUT_SECONDS', 10))
    # Withhold late responses from a caller that has already moved to another location.
    REMOTE_GUARD_STALE_RESPONSES = os.environ.get('REMOTE_GUARD_STALE_RESPONSES', 'true').lower() == 'true'

    # Built-in fixed location (computed locally) and its calculation parameters
    DEFAULT_LOCATION_NAME = os.environ.get('DEFAULT_LOCATION_NAME', "Berlin")
    DEFAULT_LATITUDE = os.environ.get('DEFAULT_LATITUDE', "52.52")
    DEFAULT_LONGITUDE = os.environ.get('DEFAULT_LONGITUDE', "13.405")
    DEFAULT_UTC_OFFSET = os.environ.get('DEFAULT_UTC_OFFSET', "1")
    DEFAULT_CALCULATION_METHOD = os.environ.get('DEFAULT_CALCULATION_METHOD', "MWL")
    DEFAULT_ASR_JURISTIC = os.environ.get('DEFAULT_ASR_JURISTIC', "STANDARD")
    DEFAULT_HIGH_LATITUDE_RULE = os.environ.get('DEFAULT_HIGH_LATITUDE_RULE', "ANGLE_BASED")

    # Eid al-Fitr display window in days
    EID_FITR_DAYS = int(os.environ.get('EID_FITR_DAYS', 3))

    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', "120 per minute")


class DevelopmentConfig(Config):
    FLASK_ENV = 'development'
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///athan-dev.db'
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    FLASK_ENV = 'production'
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')


class TestingConfig(Config):
    TESTING = True
    # Use an in-memory SQLite database for tests to ensure speed and isolation.
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    RATELIMIT_ENABLED = False  # Disable rate limiting for tests
    SECRET_KEY = 'test-secret-key'
    REMOTE_FETCH_TIMEOUT_SECONDS = 2.0


config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
