"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define the get/put/scan contracts of the three stores
without implementation details, so services can run against the in-memory
or the SQLAlchemy implementation interchangeably.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities import Booking, LoginSession, User


class IUserReader(ABC):
    """Interface for user read operations."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[User]:
        """Get the first user (in creation order) with this username."""
        pass

    @abstractmethod
    def get_mentors_by_expertise(self, expertise: str) -> List[User]:
        """Get all mentors whose expertise equals ``expertise`` exactly."""
        pass


class IUserWriter(ABC):
    """Interface for user write operations."""

    @abstractmethod
    def create(self, user: User) -> User:
        """Insert a new user."""
        pass


class IUserRepository(IUserReader, IUserWriter):
    """Complete user repository interface combining read/write operations."""

    pass


class ISessionRepository(ABC):
    """Interface for login session markers, keyed by user id."""

    @abstractmethod
    def get(self, user_id: str) -> Optional[LoginSession]:
        """Get the session marker for a user, if any."""
        pass

    @abstractmethod
    def save(self, session: LoginSession) -> LoginSession:
        """Insert or replace the marker for ``session.user_id``."""
        pass

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """Remove the marker. Returns False when none existed."""
        pass


class IBookingReader(ABC):
    """Interface for booking read operations."""

    @abstractmethod
    def get_by_id(self, booking_id: str) -> Optional[Booking]:
        """Get booking by ID."""
        pass

    @abstractmethod
    def get_by_participant(self, user_id: str) -> List[Booking]:
        """Get all bookings where the user is mentor or mentee, oldest first."""
        pass


class IBookingWriter(ABC):
    """Interface for booking write operations."""

    @abstractmethod
    def save(self, booking: Booking) -> Booking:
        """Insert or replace a booking keyed by its id."""
        pass


class IBookingRepository(IBookingReader, IBookingWriter):
    """Complete booking repository interface."""

    pass
