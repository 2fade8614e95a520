from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .session import Base


class UserModel(Base):
    """Registered mentor or mentee."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # Insertion order; username lookups return the earliest match
    seq: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String, nullable=False, index=True)
    password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False)  # normally 'mentor', 'mentee'
    expertise: Mapped[Optional[str]] = mapped_column(String, nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class LoginSessionModel(Base):
    """Login marker; the row's existence means the user is logged in."""

    __tablename__ = "login_sessions"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    role: Mapped[str] = mapped_column(String, nullable=False)
    logged_in_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class BookingModel(Base):
    """Scheduled session between a mentor and a mentee."""

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    seq: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    mentor_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    mentee_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    # Free-form text; ISO dates are stored as YYYY-MM-DD
    booking_date: Mapped[Optional[str]] = mapped_column("date", String, nullable=True)
    start_time: Mapped[str] = mapped_column(String, nullable=False)
    end_time: Mapped[str] = mapped_column(String, nullable=False)
    # 'accepted', 'rescheduled', 'cancelled', 'rejected'
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
