"""
Error taxonomy for the audio service.

Every failure the API reports is an ``AudioServiceError`` carrying the
HTTP status code and the message rendered to the client as
``{"error": message}``.  Validation errors are raised before any
storage access; ``StorageFailure`` wraps errors raised by SQLite.
"""

from fastapi import status


class AudioServiceError(Exception):
    """Base class for errors reported to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidIdentifier(AudioServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid id value"


class MissingAudio(AudioServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Audio file required"


class MissingTitle(AudioServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Title field required"


class MissingGenre(AudioServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Genre Field required"


class NotFound(AudioServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Audio entry not found"


class StorageFailure(AudioServiceError):
    """Raised when the underlying SQLite store reports an error.

    The message of the original exception is exposed to the caller.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage failure"
