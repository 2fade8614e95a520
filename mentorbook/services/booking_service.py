"""
Booking service - the booking ledger's state machine and its authorization rules.
"""

import logging
from typing import Callable, List, Optional, Tuple

from mentorbook.core.clock import Clock, utc_now
from mentorbook.core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from mentorbook.core.locking import KeyedLock
from mentorbook.domain.entities import Booking as DomainBooking
from mentorbook.domain.entities import (
    ROLE_MENTEE,
    STATUS_ACCEPTED,
    STATUS_CANCELLED,
    STATUS_REJECTED,
    STATUS_RESCHEDULED,
)
from mentorbook.domain.entities import User as DomainUser
from mentorbook.domain.interfaces import (
    IBookingRepository,
    ISessionRepository,
    IUserReader,
)
from mentorbook.domain.transitions import PermissiveTransitionPolicy, TransitionPolicy
from mentorbook.schemas.dtos import BookingCreateRequest, BookingRescheduleRequest

from .user_service import new_id

logger = logging.getLogger(__name__)

# Which side of a booking may perform each status change
MENTOR = "mentor"
MENTEE = "mentee"
EITHER = "either"


class BookingService:
    """Application service for booking use-cases.

    Business Rules:
    - Only a logged-in mentee can create a booking, and only with an
      existing mentor
    - Either participant may reschedule
    - Only the mentee may cancel; only the mentor may accept or reject
    - The transition policy decides whether the current status may change

    Each read-check-write on a booking runs under a lock keyed by booking id.
    """

    def __init__(
        self,
        booking_repo: IBookingRepository,
        user_repo: IUserReader,
        session_repo: ISessionRepository,
        policy: Optional[TransitionPolicy] = None,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = new_id,
        locks: Optional[KeyedLock] = None,
    ) -> None:
        self.booking_repo = booking_repo
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.policy = policy or PermissiveTransitionPolicy()
        self.clock = clock
        self.id_factory = id_factory
        self.locks = locks if locks is not None else KeyedLock()

    def create_booking(
        self, mentee_id: str, request: BookingCreateRequest
    ) -> DomainBooking:
        """Create a booking on behalf of a logged-in mentee.

        Raises:
            UnauthorizedError: No session for ``mentee_id`` or it is not a mentee
            ValidationError: Missing/malformed fields or mentorId is not a mentor
            NotFoundError: mentorId does not reference a user
        """
        session = self.session_repo.get(mentee_id)
        if session is None or session.role != ROLE_MENTEE:
            logger.warning(
                "Booking creation refused",
                extra={
                    "context": {
                        "mentee_id": mentee_id,
                        "has_session": session is not None,
                    }
                },
            )
            raise UnauthorizedError("Unauthorized to create booking")

        request.validate()

        mentor = self.user_repo.get_by_id(request.mentor_id)
        if mentor is None:
            raise NotFoundError("Mentor not found")
        if not mentor.is_mentor:
            raise ValidationError("mentorId does not reference a mentor")

        now = self.clock()
        booking = DomainBooking(
            id=self.id_factory(),
            mentor_id=mentor.id,
            mentee_id=mentee_id,
            date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            status=STATUS_ACCEPTED,
            created_at=now,
            updated_at=None,
        )
        created = self.booking_repo.save(booking)

        logger.info(
            "Booking created",
            extra={
                "context": {
                    "booking_id": created.id,
                    "mentor_id": created.mentor_id,
                    "mentee_id": created.mentee_id,
                }
            },
        )
        return created

    def get_booking(self, booking_id: str) -> DomainBooking:
        booking = self.booking_repo.get_by_id(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    def list_for_user(self, user_id: str) -> List[DomainBooking]:
        """All bookings where the user is mentor or mentee.

        Raises:
            NotFoundError: If the user does not exist
        """
        if self.user_repo.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        return self.booking_repo.get_by_participant(user_id)

    def reschedule(
        self, user_id: str, booking_id: str, request: BookingRescheduleRequest
    ) -> DomainBooking:
        """Move a booking to a new slot. Either participant may do this."""
        with self.locks.hold(booking_id):
            _, booking = self._load_for_action(user_id, booking_id, EITHER, "reschedule")
            request.validate()
            self._check_policy(booking, STATUS_RESCHEDULED)

            booking.reschedule(
                request.date, request.start_time, request.end_time, self.clock()
            )
            return self._persist(booking, "rescheduled", user_id)

    def cancel(self, user_id: str, booking_id: str) -> DomainBooking:
        """Cancel a booking. Mentee only."""
        return self._change_status(user_id, booking_id, STATUS_CANCELLED, MENTEE, "cancel")

    def accept(self, user_id: str, booking_id: str) -> DomainBooking:
        """Accept a booking. Mentor only."""
        return self._change_status(user_id, booking_id, STATUS_ACCEPTED, MENTOR, "accept")

    def reject(self, user_id: str, booking_id: str) -> DomainBooking:
        """Reject a booking. Mentor only."""
        return self._change_status(user_id, booking_id, STATUS_REJECTED, MENTOR, "reject")

    def _change_status(
        self, user_id: str, booking_id: str, target: str, side: str, action: str
    ) -> DomainBooking:
        with self.locks.hold(booking_id):
            _, booking = self._load_for_action(user_id, booking_id, side, action)
            self._check_policy(booking, target)
            booking.apply_status(target, self.clock())
            return self._persist(booking, target, user_id)

    def _load_for_action(
        self, user_id: str, booking_id: str, side: str, action: str
    ) -> Tuple[DomainUser, DomainBooking]:
        """Fetch both records and check the caller's side of the booking."""
        user = self.user_repo.get_by_id(user_id)
        booking = self.booking_repo.get_by_id(booking_id)
        if user is None or booking is None:
            raise NotFoundError("User or booking not found")

        if side == MENTOR:
            allowed = user.id == booking.mentor_id
        elif side == MENTEE:
            allowed = user.id == booking.mentee_id
        else:
            allowed = booking.involves(user.id)

        if not allowed:
            logger.warning(
                "Booking action refused",
                extra={
                    "context": {
                        "action": action,
                        "user_id": user_id,
                        "booking_id": booking_id,
                    }
                },
            )
            raise UnauthorizedError(f"Unauthorized to {action} booking")
        return user, booking

    def _check_policy(self, booking: DomainBooking, target: str) -> None:
        if not self.policy.allows(booking.status, target):
            raise InvalidTransitionError(booking.status, target)

    def _persist(self, booking: DomainBooking, event: str, user_id: str) -> DomainBooking:
        saved = self.booking_repo.save(booking)
        logger.info(
            f"Booking {event}",
            extra={
                "context": {
                    "booking_id": saved.id,
                    "status": saved.status,
                    "by_user_id": user_id,
                }
            },
        )
        return saved
