"""
Cancionero - Error taxonomy

Domain outcomes that the API reports to the client carry their own HTTP
status code and a client-safe message.  ``StorageError`` is the exception:
it marks a broken backing file and is reported as an opaque 500.
"""

from cancionero.config import (
    MSG_DUPLICATE_ID,
    MSG_INTERNAL_ERROR,
    MSG_NOT_FOUND,
)


class RepertorioError(Exception):
    """Base class for songbook errors."""

    status_code = 500
    default_message = MSG_INTERNAL_ERROR

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class SongNotFoundError(RepertorioError):
    status_code = 404
    default_message = MSG_NOT_FOUND


class DuplicateSongIdError(RepertorioError):
    status_code = 409
    default_message = MSG_DUPLICATE_ID


class StorageError(RepertorioError):
    """The backing file exists but cannot be used as a song collection."""
