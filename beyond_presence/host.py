"""
Host runtime collaborators.

The workflow host supplies parameter values and the HTTP transport. The
node only depends on these narrow interfaces, so it can run against plain
data in tests and in the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol


class ParameterSource(Protocol):
    """Resolves node parameter values for an input item."""

    def get_parameter(self, name: str, item_index: int = 0, default: Any = None) -> Any:
        ...


class HttpCaller(Protocol):
    """Sends authenticated requests to the Beyond Presence API."""

    def request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        ...


@dataclass
class StaticParameters:
    """
    In-memory parameter source.

    ``values`` apply to every item; ``per_item`` overrides them by item index.
    """

    values: Dict[str, Any] = field(default_factory=dict)
    per_item: Dict[int, Dict[str, Any]] = field(default_factory=dict)

    def get_parameter(self, name: str, item_index: int = 0, default: Any = None) -> Any:
        overrides = self.per_item.get(item_index, {})
        if name in overrides:
            return overrides[name]
        return self.values.get(name, default)
