"""Application error taxonomy. Each error carries its HTTP status and stable error code."""

from typing import Any


class AppError(Exception):
    """Base for errors that are converted to the JSON error envelope at the API boundary."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: Any = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class BadRequest(AppError):
    """Missing or invalid input; raised before any store access."""

    status_code = 400
    code = "BAD_REQUEST"
    default_message = "Bad request"


class InvalidCredentials(AppError):
    """Unknown email or wrong password. Both cases share this exact message and status."""

    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Invalid email or password"


class AccountDeactivated(AppError):
    status_code = 403
    code = "ACCOUNT_DEACTIVATED"
    default_message = "Account is deactivated"


class AuthenticationError(AppError):
    """Token missing, malformed or expired."""

    status_code = 401
    code = "AUTHENTICATION_ERROR"
    default_message = "Authentication failed"


class MissingToken(AuthenticationError):
    default_message = "No token provided"


class MalformedToken(AuthenticationError):
    default_message = "Invalid token"


class ExpiredToken(AuthenticationError):
    default_message = "Token expired"


class InsufficientPermissions(AppError):
    status_code = 403
    code = "FORBIDDEN"
    default_message = "Insufficient permissions"


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


class EmailAlreadyRegistered(AppError):
    status_code = 409
    code = "CONFLICT"
    default_message = "A user with this email already exists"


class InternalError(AppError):
    """Generic failure returned in place of any unexpected exception."""
