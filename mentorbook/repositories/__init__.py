from .booking_repo import BookingRepository
from .memory_repo import (
    InMemoryBookingRepository,
    InMemorySessionRepository,
    InMemoryUserRepository,
)
from .session_repo import SessionRepository
from .user_repo import UserRepository

__all__ = [
    "UserRepository",
    "SessionRepository",
    "BookingRepository",
    "InMemoryUserRepository",
    "InMemorySessionRepository",
    "InMemoryBookingRepository",
]
