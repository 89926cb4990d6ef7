"""Exception types for videocalls.

Storage failures are not wrapped: SQLAlchemy exceptions reach callers as-is.
"""

from __future__ import annotations


class VideoCallsError(Exception):
    """Base class for videocalls errors."""


class ValidationError(VideoCallsError):
    """A record or request is missing required data."""


class ProviderError(VideoCallsError):
    """The video provider rejected a request or could not be reached.

    str(error) is the provider's own message, unmodified.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
