"""Wall-clock source for record timestamps."""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current host time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
