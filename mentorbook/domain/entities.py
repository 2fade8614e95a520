"""
Domain entities - pure business data, no framework dependencies.

These are the representations services work with, independent of:
- Database implementation (SQLAlchemy)
- HTTP frameworks (Flask)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

ROLE_MENTOR = "mentor"
ROLE_MENTEE = "mentee"
ROLES = (ROLE_MENTOR, ROLE_MENTEE)

EXPERTISE_TAGS = (
    "ALGORAND",
    "SUI",
    "ETHEREUM",
    "ICP",
    "BITCOIN",
    "SOLIDITY",
    "SOLANA",
)

STATUS_ACCEPTED = "accepted"
STATUS_RESCHEDULED = "rescheduled"
STATUS_CANCELLED = "cancelled"
STATUS_REJECTED = "rejected"
BOOKING_STATUSES = (
    STATUS_ACCEPTED,
    STATUS_RESCHEDULED,
    STATUS_CANCELLED,
    STATUS_REJECTED,
)


@dataclass
class User:
    """Domain entity representing a registered mentor or mentee.

    ``password`` holds whatever the configured hasher produced; it is never
    part of an API response.
    """

    id: str = ""
    username: str = ""
    password: str = ""
    role: str = ROLE_MENTEE  # 'mentor', 'mentee'; other values are kept as given
    expertise: Optional[str] = None  # normally one of EXPERTISE_TAGS, not enforced
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        if not self.id:
            raise ValueError("User id is required")

    @property
    def is_mentor(self) -> bool:
        return self.role == ROLE_MENTOR

    @property
    def is_mentee(self) -> bool:
        return self.role == ROLE_MENTEE


@dataclass
class LoginSession:
    """Marker saying a user is currently logged in. One per user id."""

    user_id: str
    role: str
    logged_in_at: datetime


@dataclass
class Booking:
    """Domain entity for a scheduled session between a mentor and a mentee."""

    id: str = ""
    mentor_id: str = ""
    mentee_id: str = ""
    date: Optional[str] = None  # free-form; ISO input is stored as YYYY-MM-DD
    start_time: str = ""
    end_time: str = ""
    status: str = STATUS_ACCEPTED  # accepted, rescheduled, cancelled, rejected
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self):
        """Validate business rules."""
        if not self.id:
            raise ValueError("Booking id is required")
        if not self.mentor_id or not self.mentee_id:
            raise ValueError("Both mentor_id and mentee_id are required")
        if self.status not in BOOKING_STATUSES:
            raise ValueError(f"Invalid booking status: {self.status!r}")

    def involves(self, user_id: str) -> bool:
        """True when the user is this booking's mentor or mentee."""
        return user_id in (self.mentor_id, self.mentee_id)

    def apply_status(self, status: str, at: datetime) -> None:
        if status not in BOOKING_STATUSES:
            raise ValueError(f"Invalid booking status: {status!r}")
        self.status = status
        self.updated_at = at

    def reschedule(
        self, new_date: str, start_time: str, end_time: str, at: datetime
    ) -> None:
        self.date = new_date
        self.start_time = start_time
        self.end_time = end_time
        self.apply_status(STATUS_RESCHEDULED, at)
