"""
Authentication failures.

The HTTP layer maps each class to ``status_code``; the core itself never
builds responses.
"""

from app.services.errors import AppError


class AuthError(AppError):
    default_message = "Authentication failed"
    default_code = "AUTH_ERROR"


class ValidationError(AuthError):
    """Missing or malformed input. Fixable by resubmitting."""

    status_code = 400
    default_message = "All fields are required"
    default_code = "VALIDATION_ERROR"


class WeakPasswordError(ValidationError):
    default_message = "Password too weak. Must include upper/lowercase, number, and symbol (min 8 chars)"
    default_code = "WEAK_PASSWORD"


class EmailTakenError(AuthError):
    status_code = 409
    default_message = "Email is already registered"
    default_code = "EMAIL_TAKEN"


class InvalidCredentialsError(AuthError):
    """Raised for unknown email and wrong password alike."""

    status_code = 401
    default_message = "Invalid credentials"
    default_code = "INVALID_CREDENTIALS"


class InvalidTokenError(AuthError):
    status_code = 401
    default_message = "Invalid or expired token"
    default_code = "INVALID_TOKEN"


class SessionExpiredError(AuthError):
    """Token is well-formed but its version has been revoked."""

    status_code = 401
    default_message = "Session expired, please log in again"
    default_code = "SESSION_EXPIRED"


class WrongCurrentPasswordError(AuthError):
    status_code = 400
    default_message = "Current password is incorrect"
    default_code = "WRONG_CURRENT_PASSWORD"


class WrongAnswerError(AuthError):
    status_code = 400
    default_message = "Security answer is incorrect"
    default_code = "WRONG_ANSWER"


class UserNotFoundError(AuthError):
    status_code = 404
    default_message = "User not found"
    default_code = "USER_NOT_FOUND"


class ServerError(AuthError):
    status_code = 500
    default_message = "Server error"
    default_code = "SERVER_ERROR"
