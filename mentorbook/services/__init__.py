from .auth_service import AuthService
from .booking_service import BookingService
from .user_service import UserService

__all__ = ["AuthService", "BookingService", "UserService"]
