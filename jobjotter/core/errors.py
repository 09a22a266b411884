"""
Domain error hierarchy.

Services raise these; the application-level exception handler renders them as
``{"error": {"message": ..., "status": ...}}`` responses.
"""

from __future__ import annotations

from http import HTTPStatus


class JobJotterError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(JobJotterError):
    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Bad request."


class UnauthorizedError(JobJotterError):
    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Unauthorized."


class ForbiddenError(JobJotterError):
    status_code = HTTPStatus.FORBIDDEN
    default_message = "Unauthorized access."


class NotFoundError(JobJotterError):
    status_code = HTTPStatus.NOT_FOUND
    default_message = "Not found."


class EmptyUpdateError(BadRequestError):
    """Raised when a partial update carries no fields."""

    default_message = "No data provided for update."


class NoStoredCredentialError(UnauthorizedError):
    """Raised when no persisted Google credential is available for a user."""

    default_message = "Google account not connected."


class InteractiveAuthError(UnauthorizedError):
    """Raised when the local consent flow fails or times out."""

    default_message = "Google authorization was not completed."


class InvalidStateError(BadRequestError):
    """Raised for tampered, malformed or expired OAuth state tokens."""

    default_message = "Invalid OAuth state."

    def __init__(self) -> None:
        # Never carry verification details back to the caller.
        super().__init__(self.default_message)


class TokenRefreshError(JobJotterError):
    """Raised when the token endpoint rejects or fails a refresh."""

    default_message = "Failed to refresh Google access token."


class CodeExchangeError(JobJotterError):
    """Raised when the token endpoint rejects an authorization code."""

    default_message = "Failed to exchange authorization code."


class CalendarAPIError(JobJotterError):
    """Raised when a Google Calendar API call fails."""

    default_message = "Google Calendar request failed."


__all__ = [
    "BadRequestError",
    "CalendarAPIError",
    "CodeExchangeError",
    "EmptyUpdateError",
    "ForbiddenError",
    "InteractiveAuthError",
    "InvalidStateError",
    "JobJotterError",
    "NoStoredCredentialError",
    "NotFoundError",
    "TokenRefreshError",
    "UnauthorizedError",
]
