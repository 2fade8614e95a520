import logging
import os
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv
from flask import Flask

from mentorbook import __version__
from mentorbook.core.api_utils import register_error_handlers
from mentorbook.core.clock import Clock, utc_now
from mentorbook.core.config import Settings, load_settings, log_settings
from mentorbook.core.dependencies import EXTENSION_KEY, build_services
from mentorbook.core.limiter_config import limiter
from mentorbook.core.logging_config import setup_logging
from mentorbook.services.user_service import new_id

logger = logging.getLogger(__name__)

# Load environment variables conditionally.
# Only read .env when DATABASE_URL is not already defined by the environment.
if not os.getenv("DATABASE_URL"):
    load_dotenv()


def _init_sentry(settings: Settings) -> None:
    if not settings.sentry_dsn:
        logger.info(
            "Sentry not initialized (SENTRY_DSN not set)",
            extra={"context": {"environment": settings.env}},
        )
        return

    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.env,
        release=os.getenv("GIT_SHA", __version__),
        integrations=[FlaskIntegration(), SqlalchemyIntegration()],
        traces_sample_rate=0.1,
        send_default_pii=False,  # usernames and passwords stay out of Sentry
    )
    logger.info(
        "Sentry initialized",
        extra={"context": {"environment": settings.env, "traces_sample_rate": 0.1}},
    )


def _init_metrics(app: Flask, settings: Settings) -> None:
    """Expose Prometheus metrics on /metrics.

    Each app gets its own registry so building several apps in one process
    (tests, the CLI) never registers the same series twice.
    """
    if not settings.metrics_enabled:
        return

    from prometheus_client import CollectorRegistry
    from prometheus_flask_exporter import PrometheusMetrics

    metrics = PrometheusMetrics(app, registry=CollectorRegistry())
    metrics.info(
        "app_info",
        "Application information",
        version=__version__,
        environment=settings.env,
    )
    logger.info(
        "Prometheus metrics initialized",
        extra={"context": {"metrics_endpoint": "/metrics"}},
    )


def _init_security_headers(app: Flask, settings: Settings) -> None:
    """HTTPS enforcement and security headers in production."""
    if not settings.is_production:
        return

    from flask_talisman import Talisman

    Talisman(
        app,
        content_security_policy={"default-src": "'none'"},
        force_https=True,
        strict_transport_security=True,
        strict_transport_security_max_age=63072000,  # 2 years
        strict_transport_security_include_subdomains=True,
        referrer_policy="no-referrer",
        session_cookie_secure=True,
    )


def create_app(
    config_overrides: Optional[Dict[str, Any]] = None,
    clock: Clock = utc_now,
    id_factory: Callable[[], str] = new_id,
) -> Flask:
    """Application factory.

    Args:
        config_overrides: Settings to apply over the environment, e.g.
            ``{"storage_backend": "memory"}`` in tests
        clock: Source of record timestamps
        id_factory: Source of user and booking ids
    """
    settings = load_settings().with_overrides(config_overrides)

    app = Flask(__name__)
    app.config["TESTING"] = settings.testing
    app.config["MENTORBOOK_SETTINGS"] = settings
    app.json.sort_keys = False

    setup_logging(
        app=app,
        log_level=settings.log_level,
        log_to_file=settings.log_to_file,
        use_json_format=settings.log_json,
    )
    log_settings(settings)
    _init_sentry(settings)
    _init_metrics(app, settings)
    _init_security_headers(app, settings)

    # Rate limiting; RATE_LIMIT_ENABLED=0 turns it off (tests, local runs)
    app.config["RATELIMIT_STORAGE_URI"] = settings.limiter_storage_uri
    app.config["RATELIMIT_ENABLED"] = settings.rate_limit_enabled
    limiter.init_app(app)

    register_error_handlers(app)

    services = build_services(settings, clock=clock, id_factory=id_factory)
    app.extensions[EXTENSION_KEY] = services

    @app.teardown_appcontext
    def remove_db_session(exception=None):
        services.close_request()

    from mentorbook.controllers import auth_bp, booking_bp, health_bp, user_bp

    app.register_blueprint(user_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(booking_bp)
    app.register_blueprint(health_bp)

    logger.info(
        "Application created",
        extra={
            "context": {
                "environment": settings.env,
                "storage_backend": settings.storage_backend,
                "blueprints": sorted(app.blueprints),
            }
        },
    )
    return app
