"""
HTTP adapters for the Beyond Presence REST API.
"""

from .base_adapter import AdapterConfig, BaseAPIAdapter
from .api_adapter import BeyondPresenceAPIAdapter

__all__ = [
    "AdapterConfig",
    "BaseAPIAdapter",
    "BeyondPresenceAPIAdapter",
]
