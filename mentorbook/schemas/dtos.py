"""
Data Transfer Objects (DTOs) and validation schemas.

Request DTOs are built by controllers from the JSON body and validated
before any store is touched. Response DTOs render domain entities in the
camelCase wire format.
"""

from dataclasses import dataclass
from datetime import date as date_type, datetime
from typing import Any, Dict, Optional

from mentorbook.core.exceptions import ValidationError
from mentorbook.domain.entities import Booking, User


def _require_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def normalize_booking_date(value: Any) -> str:
    """Return the booking date to store.

    ISO input (``YYYY-MM-DD`` or a full ISO datetime) is stored as
    ``YYYY-MM-DD``, truncating datetimes to their calendar date. Any other
    non-empty text is stored as given.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date_type):
        return value.isoformat()
    text = _require_text(value, "date").strip()
    try:
        return date_type.fromisoformat(text).isoformat()
    except ValueError:
        pass
    iso_text = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso_text).date().isoformat()
    except ValueError:
        return value


def normalize_expertise(value: Any) -> Optional[str]:
    """Upper-case an expertise tag for lookup; None or blank means none."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("expertise must be a string")
    value = value.strip().upper()
    return value or None


@dataclass
class RegisterRequest:
    """DTO for registration requests."""

    username: Any
    password: Any
    role: Any
    expertise: Any = None

    def validate(self) -> None:
        """Require username, password and role.

        Role and expertise are stored exactly as given, even outside the
        known values.
        """
        _require_text(self.username, "username")
        _require_text(self.password, "password")
        _require_text(self.role, "role")
        if self.expertise is not None and not isinstance(self.expertise, str):
            raise ValidationError("expertise must be a string")


@dataclass
class LoginRequest:
    """DTO for login requests."""

    username: Any
    password: Any

    def validate(self) -> None:
        _require_text(self.username, "username")
        _require_text(self.password, "password")


@dataclass
class SearchRequest:
    """DTO for expertise search requests."""

    expertise: Any

    def validate(self) -> None:
        """Require an expertise tag and upper-case it.

        Unknown tags are not an error; they simply match no mentor.
        """
        self.expertise = normalize_expertise(_require_text(self.expertise, "expertise"))


@dataclass
class BookingCreateRequest:
    """DTO for booking creation requests."""

    mentor_id: Any
    date: Any
    start_time: Any
    end_time: Any

    def validate(self) -> None:
        _require_text(self.mentor_id, "mentorId")
        self.date = normalize_booking_date(self.date)
        _require_text(self.start_time, "startTime")
        _require_text(self.end_time, "endTime")


@dataclass
class BookingRescheduleRequest:
    """DTO for booking reschedule requests."""

    date: Any
    start_time: Any
    end_time: Any

    def validate(self) -> None:
        self.date = normalize_booking_date(self.date)
        _require_text(self.start_time, "startTime")
        _require_text(self.end_time, "endTime")


@dataclass
class UserResponse:
    """DTO for user API responses. The stored password is never included."""

    id: str
    username: str
    role: str
    expertise: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        """Create response from domain entity."""
        return cls(
            id=user.id,
            username=user.username,
            role=user.role,
            expertise=user.expertise,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role,
            "expertise": self.expertise,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass
class BookingResponse:
    """DTO for booking API responses."""

    id: str
    mentor_id: str
    mentee_id: str
    date: Optional[str]
    start_time: str
    end_time: str
    status: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingResponse":
        """Create response from domain entity."""
        return cls(
            id=booking.id,
            mentor_id=booking.mentor_id,
            mentee_id=booking.mentee_id,
            date=booking.date,
            start_time=booking.start_time,
            end_time=booking.end_time,
            status=booking.status,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "mentorId": self.mentor_id,
            "menteeId": self.mentee_id,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "status": self.status,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
