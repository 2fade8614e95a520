from typing import List, Optional

from sqlalchemy import or_, select

from mentorbook.db.base import BookingModel
from mentorbook.domain.entities import Booking as DomainBooking
from mentorbook.domain.interfaces import IBookingRepository

from .sequence import insert_with_seq
from .user_repo import as_utc


class BookingRepository(IBookingRepository):
    """Repository for Booking persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, booking_id: str) -> Optional[DomainBooking]:
        """Get booking by ID."""
        db_booking = self.db.get(BookingModel, booking_id)
        return self._to_domain(db_booking) if db_booking else None

    def get_by_participant(self, user_id: str) -> List[DomainBooking]:
        """Get all bookings for a user, either side, oldest first."""
        db_bookings = self.db.scalars(
            select(BookingModel)
            .where(
                or_(BookingModel.mentor_id == user_id, BookingModel.mentee_id == user_id)
            )
            .order_by(BookingModel.seq)
        ).all()
        return [self._to_domain(db_booking) for db_booking in db_bookings]

    def save(self, booking: DomainBooking) -> DomainBooking:
        """Insert a new booking or overwrite the stored one with the same id."""
        db_booking = self.db.get(BookingModel, booking.id)
        is_new = db_booking is None
        if is_new:
            db_booking = BookingModel(id=booking.id)

        db_booking.mentor_id = booking.mentor_id
        db_booking.mentee_id = booking.mentee_id
        db_booking.booking_date = booking.date
        db_booking.start_time = booking.start_time
        db_booking.end_time = booking.end_time
        db_booking.status = booking.status
        db_booking.created_at = booking.created_at
        db_booking.updated_at = booking.updated_at

        if is_new:
            insert_with_seq(self.db, db_booking, BookingModel)
        else:
            try:
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
        self.db.refresh(db_booking)
        return self._to_domain(db_booking)

    def _to_domain(self, db_booking: BookingModel) -> DomainBooking:
        """Convert database model to domain entity."""
        return DomainBooking(
            id=db_booking.id,
            mentor_id=db_booking.mentor_id,
            mentee_id=db_booking.mentee_id,
            date=db_booking.booking_date,
            start_time=db_booking.start_time,
            end_time=db_booking.end_time,
            status=db_booking.status,
            created_at=as_utc(db_booking.created_at),
            updated_at=as_utc(db_booking.updated_at),
        )
