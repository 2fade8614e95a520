"""
In-memory repository implementations.

Used by the test suite and by ``STORAGE_BACKEND=memory``. Entities are
copied in and out so a caller mutating a returned object never changes the
store without an explicit write, matching the SQL repositories.
"""

import threading
from dataclasses import replace
from typing import Dict, List, Optional

from mentorbook.domain.entities import ROLE_MENTOR, Booking, LoginSession, User
from mentorbook.domain.interfaces import (
    IBookingRepository,
    ISessionRepository,
    IUserRepository,
)


class InMemoryUserRepository(IUserRepository):
    def __init__(self) -> None:
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()

    def get_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
        return replace(user) if user else None

    def get_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return replace(user)
        return None

    def get_mentors_by_expertise(self, expertise: str) -> List[User]:
        with self._lock:
            return [
                replace(user)
                for user in self._users.values()
                if user.role == ROLE_MENTOR and user.expertise == expertise
            ]

    def create(self, user: User) -> User:
        with self._lock:
            self._users[user.id] = replace(user)
        return replace(user)

    def __len__(self) -> int:
        return len(self._users)


class InMemorySessionRepository(ISessionRepository):
    def __init__(self) -> None:
        self._sessions: Dict[str, LoginSession] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> Optional[LoginSession]:
        with self._lock:
            session = self._sessions.get(user_id)
        return replace(session) if session else None

    def save(self, session: LoginSession) -> LoginSession:
        with self._lock:
            self._sessions[session.user_id] = replace(session)
        return session

    def delete(self, user_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(user_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)


class InMemoryBookingRepository(IBookingRepository):
    def __init__(self) -> None:
        self._bookings: Dict[str, Booking] = {}
        self._lock = threading.Lock()

    def get_by_id(self, booking_id: str) -> Optional[Booking]:
        with self._lock:
            booking = self._bookings.get(booking_id)
        return replace(booking) if booking else None

    def get_by_participant(self, user_id: str) -> List[Booking]:
        with self._lock:
            return [
                replace(booking)
                for booking in self._bookings.values()
                if booking.involves(user_id)
            ]

    def save(self, booking: Booking) -> Booking:
        # Overwriting an existing key keeps its original insertion position
        with self._lock:
            self._bookings[booking.id] = replace(booking)
        return replace(booking)

    def __len__(self) -> int:
        return len(self._bookings)
