from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

LOGIN_RATE_LIMIT = "5 per minute;20 per hour"


def build_limiter() -> Limiter:
    """Create a Limiter with the service's default limits.

    No storage URI is fixed here: ``init_app`` reads RATELIMIT_STORAGE_URI,
    which create_app() fills from LIMITER_STORAGE_URI.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=["200 per hour", "50 per minute"],
        enabled=True,
    )


# Global Limiter instance to be imported by controllers.
# create_app() binds it and switches it off when RATE_LIMIT_ENABLED=0.
limiter = build_limiter()
