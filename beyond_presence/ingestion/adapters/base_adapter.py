"""
Base API Adapter.

Abstract base class defining the interface for REST adapters. The node's
operations only depend on ``request``, so any transport honoring it can be
injected in place of the default HTTP adapter.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import logging


@dataclass
class AdapterConfig:
    """
    Configuration for REST adapters.
    """
    base_url: str
    api_key: Optional[str] = None
    request_timeout: int = 30
    max_retries: int = 3
    headers: Dict[str, str] = field(default_factory=dict)


class BaseAPIAdapter(ABC):
    """
    Abstract base class for API adapters.

    Subclasses must implement:
        - request(): Send a request and return the decoded JSON body
        - _validate_config(): Validate adapter-specific configuration
    """

    def __init__(self, config: AdapterConfig):
        """
        Initialize the adapter.

        Args:
            config: AdapterConfig with connection settings
        """
        self.config = config
        self.logger = logging.getLogger(f"adapter.{type(self).__name__}")
        self._validate_config()

    @abstractmethod
    def request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send a request to the API.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            body: Optional JSON body

        Returns:
            Decoded JSON response
        """
        pass

    @abstractmethod
    def _validate_config(self) -> None:
        """
        Validate adapter-specific configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        pass

    def close(self) -> None:
        """
        Release any resources held by the adapter.
        """
        pass

    def __enter__(self) -> "BaseAPIAdapter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
