from .dtos import (
    BookingCreateRequest,
    BookingRescheduleRequest,
    BookingResponse,
    LoginRequest,
    RegisterRequest,
    SearchRequest,
    UserResponse,
    normalize_expertise,
    normalize_booking_date,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "SearchRequest",
    "BookingCreateRequest",
    "BookingRescheduleRequest",
    "UserResponse",
    "BookingResponse",
    "normalize_expertise",
    "normalize_booking_date",
]
