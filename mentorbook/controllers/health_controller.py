"""
Health controller - liveness/readiness endpoint for monitoring.
"""

import logging

from flask import Blueprint, jsonify

from mentorbook.core.dependencies import get_services
from mentorbook.core.limiter_config import limiter

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
@limiter.exempt
def health_check():
    """
    Report whether the service and its store are reachable.

    Returns:
        200 {"status": "healthy", "storage": <backend>} when the store answers
        503 {"status": "unhealthy", "storage": <backend>} otherwise

    Note:
        - No authentication required (monitoring endpoint)
        - Exempt from rate limiting
    """
    services = get_services()
    healthy = services.check_storage()
    status = "healthy" if healthy else "unhealthy"

    if not healthy:
        logger.warning(
            "Health check failed",
            extra={"context": {"storage": services.storage_backend}},
        )

    return (
        jsonify({"status": status, "storage": services.storage_backend}),
        200 if healthy else 503,
    )
