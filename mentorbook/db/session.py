import logging
import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import declarative_base, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from mentorbook.core.config import DEFAULT_DATABASE_URL

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()

# Internal lazy globals
_engine: Optional[Engine] = None
_database_url: Optional[str] = None


def build_engine(database_url: str) -> Engine:
    """Create an engine suited to the URL's backend."""
    url = make_url(database_url)
    is_postgres = url.drivername.startswith("postgres")

    if is_postgres:
        return create_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,  # Detects and refreshes stale connections
            pool_recycle=3600,
            connect_args={"application_name": "mentorbook", "connect_timeout": 10},
        )

    if url.drivername.startswith("sqlite"):
        if ":memory:" in database_url or url.database in (None, ""):
            # One shared in-memory database across the process so tables
            # created at startup stay visible to every session.
            return create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(database_url, connect_args={"check_same_thread": False})

    return create_engine(database_url)


def get_engine(database_url: Optional[str] = None) -> Engine:
    """Return a cached engine, (re)creating it when the target URL changes.

    Falls back to DATABASE_URL so tests can set it before first use.
    """
    global _engine
    global _database_url
    database_url = database_url or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    if _engine is None or _database_url != database_url:
        if _engine is not None:
            _engine.dispose()
        _engine = build_engine(database_url)
        _database_url = database_url
        logger.debug(
            "SQLAlchemy engine created",
            extra={
                "context": {
                    "url": make_url(database_url).render_as_string(hide_password=True),
                    "dialect": _engine.dialect.name,
                }
            },
        )
    return _engine


def create_scoped_session(engine: Engine) -> scoped_session:
    """Thread-local session registry bound to ``engine``.

    The application factory removes the current session at the end of each
    request.
    """
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return scoped_session(factory)


def create_tables(engine: Optional[Engine] = None) -> None:
    """Create all tables in the database."""
    # Models must be imported so Base.metadata is populated
    from mentorbook.db import base  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
