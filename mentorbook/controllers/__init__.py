from .auth_controller import auth_bp
from .booking_controller import booking_bp
from .health_controller import health_bp
from .user_controller import user_bp

__all__ = ["auth_bp", "booking_bp", "health_bp", "user_bp"]
