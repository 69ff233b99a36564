"""User-facing error taxonomy.

Domain services raise these; the API layer renders them as
``{"success": false, "message": ...}`` with the matching status code.
Storage and messaging internals never reach the caller.
"""

from fastapi import status


class WaitlistError(Exception):
    """Base class for errors that are safe to show to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(WaitlistError):
    """Missing or malformed client input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(WaitlistError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(WaitlistError):
    """Duplicate active subscription."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Already subscribed"


class MessagingError(Exception):
    """Outbound SMS failure. Logged by callers, never shown to users."""
