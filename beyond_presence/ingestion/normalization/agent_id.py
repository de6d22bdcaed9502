"""
Agent identifier lookup.

The canonical location of the agent identifier is ``call_data.agentId``.
Older payloads also carried it in ``call_data.agent_id`` and at the top
level as ``agentId`` / ``agent_id``; the legacy lookup checks those too.
"""

from enum import Enum
from typing import Any, Iterable, Mapping, Union

from beyond_presence.schemas.webhook import BaseWebhookEvent, classify_event


class AgentIdLookup(str, Enum):
    """Which payload locations are searched for the agent identifier."""

    CANONICAL = "canonical"
    LEGACY = "legacy"


def _candidates(event: BaseWebhookEvent, lookup: AgentIdLookup) -> Iterable[Any]:
    call_data = event.call_data
    yield call_data.agent_id if call_data else None
    if lookup is AgentIdLookup.LEGACY:
        yield call_data.legacy_agent_id if call_data else None
        yield event.top_level_agent_id
        yield event.top_level_legacy_agent_id


def extract_agent_id(
    event: Union[BaseWebhookEvent, Mapping[str, Any]],
    lookup: AgentIdLookup = AgentIdLookup.CANONICAL,
) -> str:
    """
    Resolve the agent identifier of an event.

    Args:
        event: Classified event or raw payload mapping
        lookup: Lookup policy; canonical reads only ``call_data.agentId``

    Returns:
        The first non-empty, non-boolean identifier as a string, or "" when
        unknown
    """
    if isinstance(event, Mapping):
        event = classify_event(event)
    for value in _candidates(event, AgentIdLookup(lookup)):
        if value is None or value == "" or isinstance(value, bool):
            continue
        return value if isinstance(value, str) else str(value)
    return ""
