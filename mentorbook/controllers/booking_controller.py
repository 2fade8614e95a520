"""
Booking controller.

The acting user id always comes from the URL path. Creation additionally
requires that user to hold a session marker; the other endpoints check
only the user's side of the booking.
"""

from flask import Blueprint, jsonify, request

from mentorbook.core.api_utils import api_response
from mentorbook.core.dependencies import get_services
from mentorbook.schemas.dtos import (
    BookingCreateRequest,
    BookingRescheduleRequest,
    BookingResponse,
)

booking_bp = Blueprint("bookings", __name__)


def _booking_payload(booking) -> dict:
    return BookingResponse.from_domain(booking).to_dict()


@booking_bp.route("/book/<mentee_id>", methods=["POST"])
def create_booking(mentee_id: str):
    """Create a booking.

    Expected JSON: {"mentorId", "date", "startTime", "endTime"}
    """
    data = request.get_json(silent=True) or {}
    create_request = BookingCreateRequest(
        mentor_id=data.get("mentorId"),
        date=data.get("date"),
        start_time=data.get("startTime"),
        end_time=data.get("endTime"),
    )

    booking = get_services().booking_service.create_booking(mentee_id, create_request)

    return api_response(
        "Booking created successfully", booking=_booking_payload(booking)
    )


@booking_bp.route("/bookings/<booking_id>", methods=["GET"])
def get_booking(booking_id: str):
    booking = get_services().booking_service.get_booking(booking_id)
    return jsonify(_booking_payload(booking)), 200


@booking_bp.route("/users/<user_id>/bookings", methods=["GET"])
def list_user_bookings(user_id: str):
    bookings = get_services().booking_service.list_for_user(user_id)
    return jsonify([_booking_payload(booking) for booking in bookings]), 200


@booking_bp.route(
    "/users/<user_id>/bookings/<booking_id>/reschedule", methods=["PATCH"]
)
def reschedule_booking(user_id: str, booking_id: str):
    """Expected JSON: {"date", "startTime", "endTime"}"""
    data = request.get_json(silent=True) or {}
    reschedule_request = BookingRescheduleRequest(
        date=data.get("date"),
        start_time=data.get("startTime"),
        end_time=data.get("endTime"),
    )

    booking = get_services().booking_service.reschedule(
        user_id, booking_id, reschedule_request
    )

    return api_response(
        "Booking rescheduled successfully", booking=_booking_payload(booking)
    )


@booking_bp.route("/users/<user_id>/bookings/<booking_id>/cancel", methods=["PATCH"])
def cancel_booking(user_id: str, booking_id: str):
    booking = get_services().booking_service.cancel(user_id, booking_id)
    return api_response(
        "Booking cancelled successfully", booking=_booking_payload(booking)
    )


@booking_bp.route("/users/<user_id>/bookings/<booking_id>/accept", methods=["PATCH"])
def accept_booking(user_id: str, booking_id: str):
    booking = get_services().booking_service.accept(user_id, booking_id)
    return api_response(
        "Booking accepted successfully", booking=_booking_payload(booking)
    )


@booking_bp.route("/users/<user_id>/bookings/<booking_id>/reject", methods=["PATCH"])
def reject_booking(user_id: str, booking_id: str):
    booking = get_services().booking_service.reject(user_id, booking_id)
    return api_response(
        "Booking rejected successfully", booking=_booking_payload(booking)
    )
