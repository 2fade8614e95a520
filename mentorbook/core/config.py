"""
Centralized configuration module for application-wide settings.

All values come from environment variables (optionally loaded from a .env
file by the application factory) and are exposed as a frozen ``Settings``
snapshot so every app instance works from one consistent view.
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# ===========================
# Allowed values
# ===========================

STORAGE_BACKENDS = ("sqlalchemy", "memory")
TRANSITION_POLICIES = ("permissive", "strict")
PASSWORD_HASHERS = ("plaintext", "bcrypt")

DEFAULT_DATABASE_URL = "sqlite:///./mentorbook.db"

# Environment variable names that differ from their Settings field
_ENV_ALIASES = {
    "flask_env": "env",
    "booking_transition_policy": "transition_policy",
}


def _env_flag(name: str, default: str) -> bool:
    """Read a boolean environment variable.

    Truthy values: "true", "1", "yes" (case-insensitive)
    """
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


def _env_choice(name: str, default: str, allowed: tuple) -> str:
    """Read an enumerated environment variable, falling back to the default."""
    value = os.getenv(name, default).strip().lower()
    if value not in allowed:
        logger.warning(
            f"Invalid value '{value}' for {name}. Falling back to '{default}'.",
            extra={"context": {"variable": name, "allowed": list(allowed)}},
        )
        return default
    return value


# ===========================
# Settings snapshot
# ===========================


@dataclass(frozen=True)
class Settings:
    """Application settings resolved from the environment."""

    env: str = "development"
    database_url: str = DEFAULT_DATABASE_URL
    storage_backend: str = "sqlalchemy"
    transition_policy: str = "permissive"
    password_hasher: str = "plaintext"
    log_level: str = "INFO"
    log_to_file: bool = False
    log_json: bool = False
    rate_limit_enabled: bool = True
    metrics_enabled: bool = True
    limiter_storage_uri: str = "memory://"
    sentry_dsn: Optional[str] = None
    testing: bool = False

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    def with_overrides(self, overrides: Optional[Dict[str, Any]]) -> "Settings":
        """Return a copy with the known keys of ``overrides`` applied.

        Keys may be given as field names (``storage_backend``) or in
        environment style (``STORAGE_BACKEND``).
        """
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        changes = {}
        for key, value in overrides.items():
            name = _ENV_ALIASES.get(key.lower(), key.lower())
            if name in known:
                changes[name] = value
        return replace(self, **changes)


def load_settings() -> Settings:
    """
    Build a Settings instance from the current environment.

    Environment Variables:
        FLASK_ENV: 'development' (default) or 'production'
        DATABASE_URL: SQLAlchemy URL for the durable store
        STORAGE_BACKEND: 'sqlalchemy' (default) or 'memory'
        BOOKING_TRANSITION_POLICY: 'permissive' (default) or 'strict'
        PASSWORD_HASHER: 'plaintext' (default) or 'bcrypt'
        LOG_LEVEL, LOG_TO_FILE, LOG_JSON: logging behavior
        RATE_LIMIT_ENABLED, LIMITER_STORAGE_URI: Flask-Limiter behavior
        METRICS_ENABLED: exposes Prometheus metrics on /metrics
        SENTRY_DSN: enables Sentry error tracking when set
        TESTING: marks the process as a test run
    """
    env = os.getenv("FLASK_ENV", "development").strip().lower()
    is_production = env == "production"

    return Settings(
        env=env,
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        storage_backend=_env_choice("STORAGE_BACKEND", "sqlalchemy", STORAGE_BACKENDS),
        transition_policy=_env_choice(
            "BOOKING_TRANSITION_POLICY", "permissive", TRANSITION_POLICIES
        ),
        password_hasher=_env_choice("PASSWORD_HASHER", "plaintext", PASSWORD_HASHERS),
        log_level=os.getenv("LOG_LEVEL", "INFO" if is_production else "DEBUG").upper(),
        log_to_file=_env_flag("LOG_TO_FILE", "0"),
        log_json=_env_flag("LOG_JSON", "true" if is_production else "false"),
        rate_limit_enabled=_env_flag("RATE_LIMIT_ENABLED", "1"),
        metrics_enabled=_env_flag("METRICS_ENABLED", "1"),
        limiter_storage_uri=os.getenv("LIMITER_STORAGE_URI", "memory://"),
        sentry_dsn=os.getenv("SENTRY_DSN") or None,
        testing=_env_flag("TESTING", "0"),
    )


def log_settings(settings: Settings) -> None:
    """
    Log the active configuration.

    Should be called during application startup to provide visibility into
    which backend and policies are in effect (without exposing secrets).
    """
    logger.info(
        "Configuration initialized",
        extra={
            "context": {
                "environment": settings.env,
                "storage_backend": settings.storage_backend,
                "transition_policy": settings.transition_policy,
                "password_hasher": settings.password_hasher,
                "rate_limit_enabled": settings.rate_limit_enabled,
                "metrics_enabled": settings.metrics_enabled,
                "sentry_enabled": bool(settings.sentry_dsn),
            }
        },
    )
