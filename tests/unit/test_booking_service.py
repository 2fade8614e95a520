"""
Unit tests for BookingService.

Covers creation, lookups and each status change, including which side of
a booking may perform it and the order in which checks are applied.
"""

from datetime import datetime, timezone

import pytest

from mentorbook.core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from mentorbook.domain.transitions import StrictTransitionPolicy
from mentorbook.schemas.dtos import BookingCreateRequest, BookingRescheduleRequest
from mentorbook.services import BookingService
from tests.factories.entity_factories import (
    make_booking,
    make_mentee,
    make_mentor,
    make_session,
)
from tests.factories.repository_factories import (
    BookingRepositoryFactory,
    SessionRepositoryFactory,
    UserRepositoryFactory,
)

NOW = datetime(2024, 4, 2, 12, 0, tzinfo=timezone.utc)

MENTOR = make_mentor()
MENTEE = make_mentee()
OTHER_MENTEE = make_mentee(user_id="mentee-2", username="Jim")
USERS = {u.id: u for u in (MENTOR, MENTEE, OTHER_MENTEE)}


@pytest.fixture
def mock_booking_repo():
    return BookingRepositoryFactory.create_mock_full()


@pytest.fixture
def mock_user_repo():
    repo = UserRepositoryFactory.create_mock_reader()
    repo.get_by_id.side_effect = USERS.get
    return repo


@pytest.fixture
def mock_session_repo():
    return SessionRepositoryFactory.create_mock_full()


@pytest.fixture
def service(mock_booking_repo, mock_user_repo, mock_session_repo):
    return BookingService(
        mock_booking_repo,
        mock_user_repo,
        mock_session_repo,
        clock=lambda: NOW,
        id_factory=lambda: "booking-1",
    )


def create_request(mentor_id="mentor-1", booking_date="2024-04-10"):
    return BookingCreateRequest(mentor_id, booking_date, "10:00", "11:00")


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.booking
class TestCreateBooking:
    def test_logged_in_mentee_creates_accepted_booking(
        self, service, mock_session_repo, mock_booking_repo
    ):
        mock_session_repo.get.return_value = make_session(MENTEE)

        booking = service.create_booking("mentee-1", create_request())

        assert booking.id == "booking-1"
        assert booking.mentor_id == "mentor-1"
        assert booking.mentee_id == "mentee-1"
        assert booking.date == "2024-04-10"
        assert booking.status == "accepted"
        assert booking.created_at == NOW
        assert booking.updated_at is None
        mock_booking_repo.save.assert_called_once()

    def test_without_session(self, service, mock_booking_repo):
        with pytest.raises(UnauthorizedError, match="Unauthorized to create booking"):
            service.create_booking("mentee-1", create_request())

        mock_booking_repo.save.assert_not_called()

    def test_mentor_session_cannot_book(self, service, mock_session_repo):
        mock_session_repo.get.return_value = make_session(MENTOR)

        with pytest.raises(UnauthorizedError):
            service.create_booking("mentor-1", create_request())

    def test_session_is_checked_before_body(self, service):
        with pytest.raises(UnauthorizedError):
            service.create_booking("mentee-1", create_request(booking_date=None))

    def test_invalid_body(self, service, mock_session_repo, mock_booking_repo):
        mock_session_repo.get.return_value = make_session(MENTEE)

        with pytest.raises(ValidationError, match="date is required"):
            service.create_booking("mentee-1", create_request(booking_date="  "))

        mock_booking_repo.save.assert_not_called()

    def test_free_form_date_stored_as_given(self, service, mock_session_repo):
        mock_session_repo.get.return_value = make_session(MENTEE)

        booking = service.create_booking("mentee-1", create_request(booking_date="soon"))

        assert booking.date == "soon"

    def test_unknown_mentor(self, service, mock_session_repo, mock_booking_repo):
        mock_session_repo.get.return_value = make_session(MENTEE)

        with pytest.raises(NotFoundError, match="Mentor not found"):
            service.create_booking("mentee-1", create_request(mentor_id="ghost"))

        mock_booking_repo.save.assert_not_called()

    def test_mentor_id_must_be_a_mentor(self, service, mock_session_repo):
        mock_session_repo.get.return_value = make_session(MENTEE)

        with pytest.raises(ValidationError, match="does not reference a mentor"):
            service.create_booking("mentee-1", create_request(mentor_id="mentee-2"))


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.booking
class TestBookingQueries:
    def test_get_booking(self, service, mock_booking_repo):
        mock_booking_repo.get_by_id.return_value = make_booking()

        assert service.get_booking("booking-1").status == "accepted"

    def test_get_booking_missing(self, service):
        with pytest.raises(NotFoundError, match="Booking not found"):
            service.get_booking("nope")

    def test_list_for_user(self, service, mock_booking_repo):
        mock_booking_repo.get_by_participant.return_value = [make_booking()]

        assert len(service.list_for_user("mentor-1")) == 1
        mock_booking_repo.get_by_participant.assert_called_once_with("mentor-1")

    def test_list_for_unknown_user(self, service, mock_booking_repo):
        with pytest.raises(NotFoundError, match="User not found"):
            service.list_for_user("ghost")

        mock_booking_repo.get_by_participant.assert_not_called()


@pytest.mark.unit
@pytest.mark.services
@pytest.mark.booking
class TestStatusChanges:
    @pytest.fixture(autouse=True)
    def stored_booking(self, mock_booking_repo):
        mock_booking_repo.get_by_id.return_value = make_booking()

    def test_mentee_cancels(self, service, mock_booking_repo):
        booking = service.cancel("mentee-1", "booking-1")

        assert booking.status == "cancelled"
        assert booking.updated_at == NOW
        mock_booking_repo.save.assert_called_once()

    def test_mentor_cannot_cancel(self, service, mock_booking_repo):
        with pytest.raises(UnauthorizedError, match="Unauthorized to cancel booking"):
            service.cancel("mentor-1", "booking-1")

        mock_booking_repo.save.assert_not_called()

    def test_mentor_accepts(self, service):
        assert service.accept("mentor-1", "booking-1").status == "accepted"

    def test_mentor_rejects(self, service):
        assert service.reject("mentor-1", "booking-1").status == "rejected"

    @pytest.mark.parametrize("action", ["accept", "reject"])
    def test_mentee_cannot_accept_or_reject(self, service, action):
        with pytest.raises(UnauthorizedError, match=f"Unauthorized to {action} booking"):
            getattr(service, action)("mentee-1", "booking-1")

    def test_outsider_cannot_reschedule(self, service):
        request = BookingRescheduleRequest("2024-04-11", "14:00", "15:00")

        with pytest.raises(UnauthorizedError, match="Unauthorized to reschedule booking"):
            service.reschedule("mentee-2", "booking-1", request)

    @pytest.mark.parametrize("user_id", ["mentor-1", "mentee-1"])
    def test_either_side_reschedules(self, service, user_id):
        request = BookingRescheduleRequest("2024-04-11", "14:00", "15:00")

        booking = service.reschedule(user_id, "booking-1", request)

        assert booking.status == "rescheduled"
        assert booking.date == "2024-04-11"
        assert (booking.start_time, booking.end_time) == ("14:00", "15:00")

    def test_reschedule_checks_side_before_body(self, service):
        request = BookingRescheduleRequest(None, None, None)

        with pytest.raises(UnauthorizedError):
            service.reschedule("mentee-2", "booking-1", request)

    def test_reschedule_invalid_body(self, service, mock_booking_repo):
        request = BookingRescheduleRequest("2024-04-11", "", "15:00")

        with pytest.raises(ValidationError, match="startTime is required"):
            service.reschedule("mentee-1", "booking-1", request)

        mock_booking_repo.save.assert_not_called()

    @pytest.mark.parametrize(
        "user_id, booking_id", [("ghost", "booking-1"), ("mentee-1", "missing")]
    )
    def test_missing_user_or_booking(
        self, service, mock_booking_repo, user_id, booking_id
    ):
        mock_booking_repo.get_by_id.side_effect = {"booking-1": make_booking()}.get

        with pytest.raises(NotFoundError, match="User or booking not found"):
            service.cancel(user_id, booking_id)

    def test_permissive_policy_allows_reviving_cancelled(
        self, service, mock_booking_repo
    ):
        mock_booking_repo.get_by_id.return_value = make_booking(status="cancelled")

        assert service.accept("mentor-1", "booking-1").status == "accepted"

    def test_strict_policy_refuses_reviving_cancelled(
        self, service, mock_booking_repo
    ):
        service.policy = StrictTransitionPolicy()
        mock_booking_repo.get_by_id.return_value = make_booking(status="cancelled")

        with pytest.raises(InvalidTransitionError) as exc_info:
            service.accept("mentor-1", "booking-1")

        assert exc_info.value.status_code == 409
        assert exc_info.value.current == "cancelled"
        assert exc_info.value.target == "accepted"
        mock_booking_repo.save.assert_not_called()

    def test_status_change_releases_lock(self, service):
        service.cancel("mentee-1", "booking-1")

        assert len(service.locks) == 0
