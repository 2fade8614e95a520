"""
Booking status transition policies.

Every transition endpoint sets a fixed target status. The policy decides
whether the booking's current status may move to that target.
"""

from abc import ABC, abstractmethod
from typing import Dict, FrozenSet

from .entities import (
    BOOKING_STATUSES,
    STATUS_ACCEPTED,
    STATUS_CANCELLED,
    STATUS_REJECTED,
    STATUS_RESCHEDULED,
)


class TransitionPolicy(ABC):
    """Decides which status changes are allowed."""

    name = ""

    @abstractmethod
    def allows(self, current: str, target: str) -> bool:
        pass


class PermissiveTransitionPolicy(TransitionPolicy):
    """Any status may follow any other, including itself."""

    name = "permissive"

    def allows(self, current: str, target: str) -> bool:
        return target in BOOKING_STATUSES


class StrictTransitionPolicy(TransitionPolicy):
    """Cancelled and rejected bookings are final."""

    name = "strict"

    TABLE: Dict[str, FrozenSet[str]] = {
        STATUS_ACCEPTED: frozenset(
            {STATUS_RESCHEDULED, STATUS_CANCELLED, STATUS_REJECTED, STATUS_ACCEPTED}
        ),
        STATUS_RESCHEDULED: frozenset(
            {STATUS_ACCEPTED, STATUS_RESCHEDULED, STATUS_CANCELLED, STATUS_REJECTED}
        ),
        STATUS_CANCELLED: frozenset(),
        STATUS_REJECTED: frozenset(),
    }

    def allows(self, current: str, target: str) -> bool:
        return target in self.TABLE.get(current, frozenset())


def get_transition_policy(name: str) -> TransitionPolicy:
    """Return the policy registered under ``name``."""
    if name == StrictTransitionPolicy.name:
        return StrictTransitionPolicy()
    if name == PermissiveTransitionPolicy.name:
        return PermissiveTransitionPolicy()
    raise ValueError(f"Unknown transition policy '{name}'")
