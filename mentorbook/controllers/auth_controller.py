from flask import Blueprint, request

from mentorbook.core.api_utils import api_response
from mentorbook.core.dependencies import get_services
from mentorbook.core.limiter_config import LOGIN_RATE_LIMIT, limiter
from mentorbook.schemas.dtos import LoginRequest, UserResponse

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(LOGIN_RATE_LIMIT)
def login():
    """Username/password login.

    Expected JSON: {"username": str, "password": str}
    Records a session marker for the user on success.
    """
    data = request.get_json(silent=True) or {}
    login_request = LoginRequest(
        username=data.get("username"), password=data.get("password")
    )

    user = get_services().auth_service.login(login_request)

    return api_response(
        "User logged in successfully", user=UserResponse.from_domain(user).to_dict()
    )


@auth_bp.route("/logout/<user_id>", methods=["POST"])
def logout(user_id: str):
    """Drop the user's session marker. 401 when there is none."""
    get_services().auth_service.logout(user_id)
    return api_response("User logged out successfully")
