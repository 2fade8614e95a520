"""
User controller - registration, profile lookup and mentor search.

Handles only HTTP concerns: JSON in, DTOs to the service, JSON out. Domain
errors propagate to the handlers registered in ``core.api_utils``.
"""

from flask import Blueprint, jsonify, request

from mentorbook.core.api_utils import api_response
from mentorbook.core.dependencies import get_services
from mentorbook.schemas.dtos import RegisterRequest, SearchRequest, UserResponse

user_bp = Blueprint("users", __name__)


@user_bp.route("/register", methods=["POST"])
def register():
    """Register a mentor or mentee.

    Expected JSON: {"username", "password", "role", "expertise"?}
    """
    data = request.get_json(silent=True) or {}
    register_request = RegisterRequest(
        username=data.get("username"),
        password=data.get("password"),
        role=data.get("role"),
        expertise=data.get("expertise"),
    )

    user = get_services().user_service.register(register_request)

    return api_response(
        "User registered successfully", user=UserResponse.from_domain(user).to_dict()
    )


@user_bp.route("/users/<user_id>", methods=["GET"])
def get_user(user_id: str):
    user = get_services().user_service.get_user(user_id)
    return jsonify(UserResponse.from_domain(user).to_dict()), 200


@user_bp.route("/search", methods=["POST"])
def search_mentors():
    """Find mentors by expertise. Expected JSON: {"expertise": str}"""
    data = request.get_json(silent=True) or {}
    search_request = SearchRequest(expertise=data.get("expertise"))

    mentors = get_services().user_service.search_mentors(search_request)

    return api_response(
        "Mentor(s) found",
        mentor=[UserResponse.from_domain(mentor).to_dict() for mentor in mentors],
    )
