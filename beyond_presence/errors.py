"""
Error types raised while processing webhook items and API calls.

Parse and filter errors are item-scoped: the batch driver either turns them
into an error record for the offending item or aborts the batch.
"""

from typing import Optional


class InvalidPayloadError(ValueError):
    """Raised when a webhook payload is not valid JSON or not an object."""


class FilterConfigError(ValueError):
    """Raised when agent-ID filtering is enabled without any agent IDs."""


class BeyondPresenceAPIError(RuntimeError):
    """Raised when a request to the Beyond Presence API fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
