"""
Pytest configuration and shared fixtures.

The environment is pinned before any application import so every app built
here uses in-memory storage and skips rate limiting unless a test opts in.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("TESTING", "true")
os.environ["FLASK_ENV"] = "testing"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("SENTRY_DSN", None)

from mentorbook.main import create_app  # noqa: E402
from mentorbook.repositories import (  # noqa: E402
    InMemoryBookingRepository,
    InMemorySessionRepository,
    InMemoryUserRepository,
)
from mentorbook.services import AuthService, BookingService, UserService  # noqa: E402
from tests.factories.api_client import ApiHelper  # noqa: E402
from tests.config.markers import (  # noqa: E402,F401
    pytest_collection_modifyitems,
    pytest_configure,
)


class FakeClock:
    """Deterministic clock: each call returns the next tick."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2024, 4, 1, 9, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


class SequentialIds:
    """Id factory yielding ``id-1``, ``id-2``, ..."""

    def __init__(self, prefix="id"):
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


# =====================================================
# DOMAIN / SERVICE FIXTURES
# =====================================================


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def session_repo():
    return InMemorySessionRepository()


@pytest.fixture
def booking_repo():
    return InMemoryBookingRepository()


@pytest.fixture
def user_service(user_repo, clock, ids):
    return UserService(user_repo, clock=clock, id_factory=ids)


@pytest.fixture
def auth_service(user_repo, session_repo, clock):
    return AuthService(user_repo, session_repo, clock=clock)


@pytest.fixture
def booking_service(booking_repo, user_repo, session_repo, clock, ids):
    return BookingService(
        booking_repo, user_repo, session_repo, clock=clock, id_factory=ids
    )


# =====================================================
# FLASK APPLICATION FIXTURES
# =====================================================


@pytest.fixture
def app_config():
    """Base overrides for test applications."""
    return {
        "storage_backend": "memory",
        "rate_limit_enabled": False,
        "testing": True,
        "log_to_file": False,
        "sentry_dsn": None,
    }


@pytest.fixture
def app(app_config, clock):
    return create_app(app_config, clock=clock)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sql_app(app_config, clock, tmp_path):
    """Application backed by a throwaway SQLite file."""
    overrides = dict(app_config)
    overrides["storage_backend"] = "sqlalchemy"
    overrides["database_url"] = f"sqlite:///{tmp_path / 'mentorbook-test.db'}"
    return create_app(overrides, clock=clock)


@pytest.fixture
def sql_client(sql_app):
    return sql_app.test_client()


# =====================================================
# API HELPERS
# =====================================================


@pytest.fixture
def api(client):
    return ApiHelper(client)


@pytest.fixture
def john_and_jane(api):
    """Register mentor John (ICP) and mentee Jane, and log Jane in."""
    john = api.register("John", "john-pass", "mentor", "ICP")
    jane = api.register("Jane", "jane-pass", "mentee")
    assert api.login("Jane", "jane-pass").status_code == 200
    return john, jane
