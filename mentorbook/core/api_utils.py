"""
Common API utilities for consistent response formatting across all controllers.
"""

import logging
from typing import Any, Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from mentorbook.core.exceptions import MentorBookError

logger = logging.getLogger(__name__)


def api_response(message: str, status_code: int = 200, **payload: Any) -> tuple:
    """
    Standardized success response: ``{"message": ..., <payload keys>}``.

    Args:
        message: Human-readable message about the operation
        status_code: HTTP status code
        **payload: Extra top-level keys such as ``user=`` or ``booking=``

    Returns:
        Tuple of (json_response, status_code)
    """
    body = {"message": message}
    body.update(payload)
    return jsonify(body), status_code


def error_response(
    message: str, status_code: int, error: Optional[str] = None
) -> tuple:
    """Standardized error response: ``{"message": ..., "error": ...}``."""
    body = {"message": message}
    if error:
        body["error"] = error
    return jsonify(body), status_code


def register_error_handlers(app: Flask) -> None:
    """Map the application exception taxonomy onto HTTP responses."""

    @app.errorhandler(MentorBookError)
    def handle_domain_error(exc: MentorBookError):
        logger.info(
            "Request rejected",
            extra={
                "context": {
                    "error": exc.error_code,
                    "status_code": exc.status_code,
                    "reason": exc.message,
                }
            },
        )
        return error_response(exc.message, exc.status_code, exc.error_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return error_response(
            exc.description or exc.name,
            exc.code or 500,
            exc.name.lower().replace(" ", "_"),
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        logger.error(
            "Unhandled error while processing request",
            extra={"context": {"error": str(exc), "type": type(exc).__name__}},
            exc_info=True,
        )
        return error_response("Internal server error", 500, "server_error")
