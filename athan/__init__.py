import logging

import sentry_sdk
from flask import Flask
from flask_cors import CORS
from flask_smorest import Api
from sentry_sdk.integrations.flask import FlaskIntegration

# Import extensions from the central extensions file
from .extensions import db, limiter, migrate, redis_client
from .services.prayer_time.remote_provider import RemoteTimesProvider

# Declare extensions that are not in the extensions file
cors = CORS()
api = Api()  # Initialize Flask-Smorest API
remote_times = RemoteTimesProvider()


def create_app(config_name):
    """
    Flask Application Factory function.
    """
    app = Flask(__name__,
                instance_relative_config=False)

    # 1. Load Config
    from .config import config_by_name
    config_obj = config_by_name.get(config_name, config_by_name['default'])
    app.config.from_object(config_obj)
    app.logger.info(f"App configured with: {config_obj.__name__}")

    # Flask-Smorest API documentation configuration
    app.config["API_TITLE"] = "Athan API"
    app.config["API_VERSION"] = "v1"
    app.config["OPENAPI_VERSION"] = "3.0.2"
    app.config["OPENAPI_URL_PREFIX"] = "/api/docs"
    app.config["OPENAPI_SWAGGER_UI_PATH"] = "/swagger-ui"
    app.config["OPENAPI_SWAGGER_UI_URL"] = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"

    # 2. Sentry SDK initialization - for error and performance tracking
    if app.config.get('SENTRY_DSN'):
        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            traces_sample_rate=1.0
        )
        app.logger.info("Sentry initialized for error tracking.")

    # 3. Initialize Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    redis_client.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": "*"}})
    limiter.init_app(app)
    remote_times.init_app(app)

    # 4. Initialize Flask-Smorest API
    api.init_app(app)

    # 5. Register models and Blueprints
    with app.app_context():
        from . import models  # noqa: F401  registers CachedMonthTimes with SQLAlchemy
        from .routes.api_routes import api_bp

        api.register_blueprint(api_bp)

        # 6. Set up Logging
        log_level_str = app.config.get('LOG_LEVEL', 'INFO').upper()
        log_level = getattr(logging, log_level_str, logging.INFO)
        app.logger.setLevel(log_level)

        app.logger.info(f"Application initialized with environment: {app.config.get('FLASK_ENV')}, Debug: {app.config.get('DEBUG')}")

    # 7. Finally, return the app
    return app
