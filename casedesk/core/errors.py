"""Error taxonomy shared by services and the HTTP layer.

Each error class carries the HTTP status it maps to; the application installs
one exception handler for ``AppError`` that renders ``{"message": ...}``.
"""


class AppError(Exception):
    """Base class for errors that map to a client-facing status and message."""

    status_code: int = 500
    default_message: str = "Server error"

    def __init__(self, message: str | None = None, cause: Exception | None = None) -> None:
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(self.message)


class InvalidInputError(AppError):
    """A required field is missing or empty, or an upload is unacceptable."""

    status_code = 400
    default_message = "All fields required"


class ConflictError(AppError):
    """A record with the same unique key already exists."""

    status_code = 400
    default_message = "Email already registered"


class UserNotFoundError(AppError):
    """Login attempted for an email with no account."""

    status_code = 400
    default_message = "User not found"


class WrongPasswordError(AppError):
    """Login password does not match the stored hash."""

    status_code = 400
    default_message = "Wrong password"


class UnauthenticatedError(AppError):
    """Missing, malformed, tampered or expired bearer token."""

    status_code = 401
    default_message = "Invalid or expired token"


class ForbiddenError(AppError):
    """Authenticated caller lacks the required role."""

    status_code = 403
    default_message = "Admin only"


class BlockedError(ForbiddenError):
    """Credentials are correct but the account is blocked."""

    default_message = "User is blocked"


class NotFoundError(AppError):
    """Target record of an update or delete does not exist."""

    status_code = 404
    default_message = "Not found"


class InternalError(AppError):
    """Store or other unexpected failure; details stay server-side."""

    status_code = 500
    default_message = "Server error"
