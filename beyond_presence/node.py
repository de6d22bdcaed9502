"""
Beyond Presence node.

Runs the REST operations over a batch of input items:
- agent:create -> POST /agent, one output record per item
- avatar:get   -> GET /avatar, one output record per avatar

Routing (method and path) comes from the declarative node description.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from beyond_presence.configs.config import Config
from beyond_presence.host import HttpCaller, ParameterSource
from beyond_presence.ingestion.adapters.api_adapter import avatar_records
from beyond_presence.ingestion.batch import BatchResult, ItemOutput, run_batch
from beyond_presence.schemas.agent import CreateAgentRequest

logger = logging.getLogger(__name__)

Handler = Callable[[ParameterSource, int], ItemOutput]


def _optional(value: Any) -> Any:
    """Unset form fields arrive as "" or 0."""
    return value if value not in ("", 0, None) else None


class BeyondPresenceNode:
    """
    Dispatches each input item to the selected resource operation.
    """

    def __init__(self, http: HttpCaller):
        """
        Initialize the node.

        Args:
            http: Authenticated transport, usually a BeyondPresenceAPIAdapter
        """
        self.http = http
        self.description = Config.load_node_description()["node"]
        self._routing: Dict[Tuple[str, str], Dict[str, str]] = Config.operation_routing()
        self._handlers: Dict[Tuple[str, str], Handler] = {
            ("agent", "create"): self._create_agent,
            ("avatar", "get"): self._get_avatars,
        }

    def execute(
        self,
        items: Sequence[Dict[str, Any]],
        parameters: ParameterSource,
        continue_on_fail: bool = False,
    ) -> BatchResult:
        """
        Run the configured operation once per input item.

        Args:
            items: Input items from the previous workflow step
            parameters: Per-item parameter values
            continue_on_fail: Emit error records instead of aborting the batch

        Returns:
            BatchResult with the API responses
        """

        def process(_item: Dict[str, Any], index: int) -> ItemOutput:
            resource = parameters.get_parameter(
                "resource", index, self.description["default_resource"]
            )
            operation = parameters.get_parameter("operation", index, self._default_operation(resource))
            handler = self._handlers.get((resource, operation))
            if handler is None:
                raise ValueError(
                    f"The operation '{operation}' is not supported for resource '{resource}'"
                )
            return handler(parameters, index)

        return run_batch(items, process, continue_on_fail=continue_on_fail, batch_logger=logger)

    def _default_operation(self, resource: str) -> Optional[str]:
        for entry in self.description["resources"]:
            if entry["value"] == resource and entry["operations"]:
                return entry["operations"][0]["value"]
        return None

    def _call(self, resource: str, operation: str, body: Optional[Dict[str, Any]] = None) -> Any:
        route = self._routing[(resource, operation)]
        return self.http.request(route["method"], route["url"], body=body)

    def _create_agent(self, parameters: ParameterSource, index: int) -> Dict[str, Any]:
        agent = CreateAgentRequest(
            name=parameters.get_parameter("name", index, ""),
            avatar_id=parameters.get_parameter("avatarId", index, ""),
            system_prompt=parameters.get_parameter("systemPrompt", index, ""),
            language=_optional(parameters.get_parameter("language", index)),
            greeting=_optional(parameters.get_parameter("greeting", index)),
            max_session_length_minutes=_optional(
                parameters.get_parameter("maxSessionLengthMinutes", index)
            ),
        )
        logger.info(f"Creating agent {agent.name!r} with avatar {agent.avatar_id}")
        response = self._call("agent", "create", body=agent.to_payload())
        return response if isinstance(response, dict) else {"response": response}

    def _get_avatars(self, parameters: ParameterSource, index: int) -> List[Dict[str, Any]]:
        avatars = avatar_records(self._call("avatar", "get"))
        logger.info(f"Fetched {len(avatars)} avatar(s)")
        return avatars
