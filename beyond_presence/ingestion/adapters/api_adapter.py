"""
Beyond Presence API Adapter.

Thin REST client for the three calls the node makes:
- POST /agent        create a video agent
- GET  /avatar       list available avatars
- GET  /auth/verify  check the API key
"""

from typing import Any, Dict, List, Optional
import time

import requests

from beyond_presence.errors import BeyondPresenceAPIError
from beyond_presence.schemas.agent import Avatar, CreateAgentRequest
from beyond_presence.schemas.credentials import BeyondPresenceCredentials

from .base_adapter import AdapterConfig, BaseAPIAdapter

DEFAULT_BASE_URL = "https://api.bey.dev/v1"


class BeyondPresenceAPIAdapter(BaseAPIAdapter):
    """
    Adapter for the Beyond Presence REST API.

    Provides:
    - Static JSON headers plus ``x-api-key`` authentication
    - Retry logic with exponential backoff
    - Typed helpers for each supported operation
    """

    def __init__(self, config: AdapterConfig):
        """
        Initialize the API adapter.

        Args:
            config: AdapterConfig with base URL and API key
        """
        self._session: Optional[requests.Session] = None
        super().__init__(config)

    def _validate_config(self) -> None:
        """Validate API configuration."""
        if not self.config.base_url:
            raise ValueError("Beyond Presence adapter requires base_url")
        if not self.config.api_key:
            raise ValueError("Beyond Presence adapter requires an API key")

    def _get_session(self) -> requests.Session:
        """Get or create HTTP session."""
        if self._session is None:
            credentials = BeyondPresenceCredentials(api_key=self.config.api_key)
            self._session = requests.Session()
            self._session.headers.update({
                "Accept": "application/json",
                "Content-Type": "application/json",
                **credentials.auth_headers(),
                **self.config.headers,
            })
        return self._session

    def _url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            BeyondPresenceAPIError: If the request still fails after retries
        """
        return self._make_request(self._get_session(), method.upper(), self._url(path), body)

    def _make_request(
        self,
        session: requests.Session,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]],
        retry_count: int = 0,
    ) -> Any:
        """
        Make HTTP request with retry logic.

        Args:
            session: HTTP session
            method: HTTP method
            url: Absolute URL
            body: JSON body, if any
            retry_count: Current retry attempt

        Returns:
            Response JSON, or None for an empty body
        """
        try:
            response = session.request(
                method,
                url,
                json=body,
                timeout=self.config.request_timeout,
            )
            response.raise_for_status()
            return response.json() if response.content else None

        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            # Client errors will not succeed on retry
            if status is not None and 400 <= status < 500 and status != 429:
                self.logger.error(f"{method} {url} rejected with {status}")
                raise BeyondPresenceAPIError(f"{method} {url} failed: {e}", status) from e
            return self._retry_or_raise(session, method, url, body, retry_count, e, status)

        except requests.RequestException as e:
            return self._retry_or_raise(session, method, url, body, retry_count, e, None)

    def _retry_or_raise(
        self,
        session: requests.Session,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]],
        retry_count: int,
        error: requests.RequestException,
        status: Optional[int],
    ) -> Any:
        if retry_count < self.config.max_retries:
            wait_time = 2 ** retry_count
            self.logger.warning(f"Request failed, retrying in {wait_time}s: {error}")
            time.sleep(wait_time)
            return self._make_request(session, method, url, body, retry_count + 1)

        self.logger.error(f"Request failed after {retry_count} retries: {error}")
        raise BeyondPresenceAPIError(f"{method} {url} failed: {error}", status) from error

    # ========================================================================
    # OPERATIONS
    # ========================================================================

    def create_agent(self, agent: CreateAgentRequest) -> Dict[str, Any]:
        """Create a video agent."""
        return self.request("POST", "/agent", body=agent.to_payload())

    def list_avatars(self) -> List[Dict[str, Any]]:
        """List the avatars available to the account."""
        return avatar_records(self.request("GET", "/avatar"))

    def verify_credentials(self) -> bool:
        """Return True when the configured API key is accepted."""
        try:
            self.request("GET", BeyondPresenceCredentials.TEST_PATH)
        except BeyondPresenceAPIError as e:
            if e.status_code in (401, 403):
                return False
            raise
        return True

    def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            self._session.close()
            self._session = None


def avatar_records(response: Any) -> List[Dict[str, Any]]:
    """
    Split an avatar listing into one record per avatar.

    Accepts a bare list, a paginated ``{"data": [...]}`` object, or a single
    object.
    """
    if isinstance(response, dict) and isinstance(response.get("data"), list):
        response = response["data"]
    if isinstance(response, list):
        return [Avatar.model_validate(avatar).to_record() for avatar in response]
    if response is None:
        return []
    if isinstance(response, dict):
        return [Avatar.model_validate(response).to_record()]
    return [response]
