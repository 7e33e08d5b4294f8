"""Application error types. Each carries the HTTP status it maps to."""


class ExpenseTrackerError(Exception):
    """Base error; handlers in app.main turn it into {"message": ...}."""

    status_code = 500

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class ValidationError(ExpenseTrackerError):
    """A required field is missing or blank."""

    status_code = 400


class DuplicateError(ExpenseTrackerError):
    """A unique value (email, username) is already taken."""

    status_code = 400


class NotFoundError(ExpenseTrackerError):
    """Lookup miss surfaced to the client (login with an unknown email)."""

    status_code = 400


class AuthError(ExpenseTrackerError):
    """Request is not authenticated."""

    status_code = 401


class InvalidTokenError(AuthError):
    """Token signature, expiry, or payload check failed."""


class StoreError(ExpenseTrackerError):
    """Unexpected persistence failure. Message is generic on the wire."""

    status_code = 500
