"""
Webhook event filtering.

Events are checked against the configured event kind first, then against
the agent-ID allow-list. Filtering only decides emit/skip; it never alters
the event.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Mapping, Optional, Union

from beyond_presence.errors import FilterConfigError
from beyond_presence.ingestion.normalization.agent_id import (
    AgentIdLookup,
    extract_agent_id,
)
from beyond_presence.schemas.webhook import WebhookEvent, classify_event

logger = logging.getLogger(__name__)


class EventTypeFilter(str, Enum):
    """Event kinds a trigger can listen to."""

    ALL = "all"
    MESSAGE = "message"
    CALL_ENDED = "call_ended"


class FilterDecision(str, Enum):
    """Outcome of filtering a single event."""

    EMIT = "emit"
    SKIP = "skip"


def parse_agent_ids(raw: Optional[str]) -> FrozenSet[str]:
    """
    Split a comma-separated agent ID list.

    Example:
        >>> sorted(parse_agent_ids(" a1, a2 ,,"))
        ['a1', 'a2']
    """
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class FilterConfig:
    """
    Filter settings for one invocation.

    ``agent_id_allow_list`` is None when agent filtering is disabled. An empty
    set means filtering was requested without any IDs, which is reported as
    a misconfiguration when an event is filtered.
    """

    event_type_filter: EventTypeFilter = EventTypeFilter.ALL
    agent_id_allow_list: Optional[FrozenSet[str]] = None
    agent_id_lookup: AgentIdLookup = AgentIdLookup.CANONICAL

    @classmethod
    def from_parameters(
        cls,
        event_type_filter: Union[str, EventTypeFilter] = EventTypeFilter.ALL,
        filter_by_agent_ids: bool = False,
        agent_ids: Optional[str] = "",
        agent_id_lookup: Union[str, AgentIdLookup] = AgentIdLookup.CANONICAL,
    ) -> "FilterConfig":
        """
        Build a config from trigger parameter values.

        Raises:
            ValueError: If event_type_filter or agent_id_lookup is not a known value
        """
        return cls(
            event_type_filter=EventTypeFilter(event_type_filter),
            agent_id_allow_list=parse_agent_ids(agent_ids) if filter_by_agent_ids else None,
            agent_id_lookup=AgentIdLookup(agent_id_lookup),
        )

    @property
    def filters_by_agent_id(self) -> bool:
        return self.agent_id_allow_list is not None


def should_process(
    event: Union[WebhookEvent, Mapping[str, Any]],
    config: FilterConfig,
) -> FilterDecision:
    """
    Decide whether an event is emitted or skipped.

    Args:
        event: Classified event or raw payload mapping
        config: Filter settings for the invocation

    Returns:
        FilterDecision.EMIT or FilterDecision.SKIP

    Raises:
        FilterConfigError: If agent filtering is enabled with an empty allow-list
    """
    if config.filters_by_agent_id and not config.agent_id_allow_list:
        raise FilterConfigError("Agent IDs required when filtering is enabled")

    if isinstance(event, Mapping):
        event = classify_event(event)

    if (
        config.event_type_filter is not EventTypeFilter.ALL
        and event.event_type != config.event_type_filter.value
    ):
        logger.debug(f"Skipping event of type {event.event_type!r}")
        return FilterDecision.SKIP

    if config.filters_by_agent_id:
        agent_id = extract_agent_id(event, config.agent_id_lookup)
        if not agent_id or agent_id not in config.agent_id_allow_list:
            logger.debug(f"Skipping event for agent {agent_id!r}")
            return FilterDecision.SKIP

    return FilterDecision.EMIT
