"""
Beyond Presence API credential.

The API authenticates with a single key sent in the ``x-api-key`` header.
Credentials can be checked against ``GET /auth/verify``.
"""

from typing import ClassVar, Dict

from pydantic import BaseModel, SecretStr


class BeyondPresenceCredentials(BaseModel):
    """API key credential for the Beyond Presence API."""

    NAME: ClassVar[str] = "beyondPresenceApi"
    DISPLAY_NAME: ClassVar[str] = "Beyond Presence API"
    DOCUMENTATION_URL: ClassVar[str] = "https://docs.bey.dev"
    AUTH_HEADER: ClassVar[str] = "x-api-key"
    TEST_PATH: ClassVar[str] = "auth/verify"

    api_key: SecretStr

    def auth_headers(self) -> Dict[str, str]:
        """Headers that authenticate a request."""
        return {self.AUTH_HEADER: self.api_key.get_secret_value()}
