"""
Domain layer - entities, repository interfaces and transition policies.

Nothing in this package imports Flask or SQLAlchemy.
"""

from .entities import (
    BOOKING_STATUSES,
    EXPERTISE_TAGS,
    ROLE_MENTEE,
    ROLE_MENTOR,
    ROLES,
    STATUS_ACCEPTED,
    STATUS_CANCELLED,
    STATUS_REJECTED,
    STATUS_RESCHEDULED,
    Booking,
    LoginSession,
    User,
)
from .interfaces import (
    IBookingReader,
    IBookingRepository,
    IBookingWriter,
    ISessionRepository,
    IUserReader,
    IUserRepository,
    IUserWriter,
)
from .transitions import (
    PermissiveTransitionPolicy,
    StrictTransitionPolicy,
    TransitionPolicy,
    get_transition_policy,
)

__all__ = [
    "User",
    "LoginSession",
    "Booking",
    "ROLES",
    "ROLE_MENTOR",
    "ROLE_MENTEE",
    "EXPERTISE_TAGS",
    "BOOKING_STATUSES",
    "STATUS_ACCEPTED",
    "STATUS_RESCHEDULED",
    "STATUS_CANCELLED",
    "STATUS_REJECTED",
    "IUserReader",
    "IUserWriter",
    "IUserRepository",
    "ISessionRepository",
    "IBookingReader",
    "IBookingWriter",
    "IBookingRepository",
    "TransitionPolicy",
    "PermissiveTransitionPolicy",
    "StrictTransitionPolicy",
    "get_transition_policy",
]
