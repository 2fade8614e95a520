"""Builders for domain entities with sensible defaults."""

from datetime import datetime, timezone

from mentorbook.domain.entities import (
    ROLE_MENTEE,
    ROLE_MENTOR,
    STATUS_ACCEPTED,
    Booking,
    LoginSession,
    User,
)

FIXED_TIME = datetime(2024, 4, 1, 9, 0, tzinfo=timezone.utc)


def make_mentor(user_id="mentor-1", username="John", expertise="ICP", **kwargs) -> User:
    return User(
        id=user_id,
        username=username,
        password=kwargs.pop("password", "john-pass"),
        role=ROLE_MENTOR,
        expertise=expertise,
        created_at=kwargs.pop("created_at", FIXED_TIME),
        **kwargs,
    )


def make_mentee(user_id="mentee-1", username="Jane", **kwargs) -> User:
    return User(
        id=user_id,
        username=username,
        password=kwargs.pop("password", "jane-pass"),
        role=ROLE_MENTEE,
        created_at=kwargs.pop("created_at", FIXED_TIME),
        **kwargs,
    )


def make_session(user: User) -> LoginSession:
    return LoginSession(user_id=user.id, role=user.role, logged_in_at=FIXED_TIME)


def make_booking(
    booking_id="booking-1",
    mentor_id="mentor-1",
    mentee_id="mentee-1",
    status=STATUS_ACCEPTED,
    **kwargs,
) -> Booking:
    return Booking(
        id=booking_id,
        mentor_id=mentor_id,
        mentee_id=mentee_id,
        date=kwargs.pop("date", "2024-04-10"),
        start_time=kwargs.pop("start_time", "10:00"),
        end_time=kwargs.pop("end_time", "11:00"),
        status=status,
        created_at=kwargs.pop("created_at", FIXED_TIME),
        **kwargs,
    )
