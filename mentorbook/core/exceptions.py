"""
Custom exceptions for the application.

Services raise these; the Flask error handler registered in
``core.api_utils`` maps each class to its HTTP status.
"""


class MentorBookError(Exception):
    """Base exception for all booking service errors."""

    status_code = 500
    error_code = "server_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(MentorBookError):
    """Raised when a referenced user or booking does not exist."""

    status_code = 404
    error_code = "not_found"


class UnauthorizedError(MentorBookError):
    """Raised when a session is missing or the caller lacks the right identity/role."""

    status_code = 401
    error_code = "unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    """Raised when login fails. Never says whether the username exists."""

    error_code = "invalid_credentials"

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class ValidationError(MentorBookError):
    """Raised when request data is missing or malformed."""

    status_code = 400
    error_code = "validation_error"


class InvalidTransitionError(MentorBookError):
    """Raised when the transition policy forbids a booking status change."""

    status_code = 409
    error_code = "invalid_transition"

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change booking status from '{current}' to '{target}'")
