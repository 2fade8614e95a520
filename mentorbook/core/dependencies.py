"""Service wiring.

``build_services`` assembles repositories and services for the configured
storage backend once per application. Controllers reach them through
``get_services()`` instead of constructing their own.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from flask import current_app
from sqlalchemy import text
from sqlalchemy.orm import scoped_session

from mentorbook.core.clock import Clock, utc_now
from mentorbook.core.config import Settings
from mentorbook.core.locking import KeyedLock
from mentorbook.core.security import get_password_hasher
from mentorbook.db.session import create_scoped_session, create_tables, get_engine
from mentorbook.domain.interfaces import (
    IBookingRepository,
    ISessionRepository,
    IUserRepository,
)
from mentorbook.domain.transitions import get_transition_policy
from mentorbook.repositories import (
    BookingRepository,
    InMemoryBookingRepository,
    InMemorySessionRepository,
    InMemoryUserRepository,
    SessionRepository,
    UserRepository,
)
from mentorbook.services import AuthService, BookingService, UserService
from mentorbook.services.user_service import new_id

logger = logging.getLogger(__name__)

EXTENSION_KEY = "mentorbook"


@dataclass
class ServiceContainer:
    """Everything a request handler needs, built once per app."""

    user_repo: IUserRepository
    session_repo: ISessionRepository
    booking_repo: IBookingRepository
    user_service: UserService
    auth_service: AuthService
    booking_service: BookingService
    storage_backend: str
    db_session: Optional[scoped_session] = None

    def check_storage(self) -> bool:
        """True when the backing store answers."""
        if self.db_session is None:
            return True
        try:
            self.db_session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(
                "Storage health check failed",
                extra={"context": {"error": str(e)}},
                exc_info=True,
            )
            return False

    def close_request(self) -> None:
        """Release the request's database session, if any."""
        if self.db_session is not None:
            self.db_session.remove()


def build_services(
    settings: Settings,
    clock: Clock = utc_now,
    id_factory: Callable[[], str] = new_id,
) -> ServiceContainer:
    """Create repositories and services for ``settings.storage_backend``."""
    db_session = None
    if settings.storage_backend == "memory":
        user_repo = InMemoryUserRepository()
        session_repo = InMemorySessionRepository()
        booking_repo = InMemoryBookingRepository()
    else:
        engine = get_engine(settings.database_url)
        create_tables(engine)
        db_session = create_scoped_session(engine)
        user_repo = UserRepository(db_session)
        session_repo = SessionRepository(db_session)
        booking_repo = BookingRepository(db_session)

    hasher = get_password_hasher(settings.password_hasher)
    policy = get_transition_policy(settings.transition_policy)

    container = ServiceContainer(
        user_repo=user_repo,
        session_repo=session_repo,
        booking_repo=booking_repo,
        user_service=UserService(user_repo, hasher, clock=clock, id_factory=id_factory),
        auth_service=AuthService(user_repo, session_repo, hasher, clock=clock),
        booking_service=BookingService(
            booking_repo,
            user_repo,
            session_repo,
            policy=policy,
            clock=clock,
            id_factory=id_factory,
            locks=KeyedLock(),
        ),
        storage_backend=settings.storage_backend,
        db_session=db_session,
    )
    logger.info(
        "Services initialized",
        extra={
            "context": {
                "storage_backend": settings.storage_backend,
                "transition_policy": policy.name,
                "password_hasher": hasher.name,
            }
        },
    )
    return container


def get_services() -> ServiceContainer:
    """Return the container bound to the current Flask app."""
    return current_app.extensions[EXTENSION_KEY]
