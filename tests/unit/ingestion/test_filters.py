"""
Unit tests for the filters module.

Tests for FilterConfig construction and should_process decisions.
"""

import pytest

from beyond_presence.errors import FilterConfigError
from beyond_presence.ingestion.filters import (
    EventTypeFilter,
    FilterConfig,
    FilterDecision,
    parse_agent_ids,
    should_process,
)
from beyond_presence.ingestion.normalization.agent_id import AgentIdLookup

# =============================================================================
# TEST DATA
# =============================================================================


MESSAGE = {"event_type": "message", "call_data": {"agentId": "a1"}}
CALL_ENDED = {"event_type": "call_ended", "call_data": {"agentId": "a2"}}
PING = {"event_type": "ping"}


# =============================================================================
# TEST CLASSES
# =============================================================================


class TestParseAgentIds:
    """Tests for parse_agent_ids."""

    def test_trims_elements(self):
        """Should trim whitespace around each ID."""
        assert parse_agent_ids(" a1 , a2") == frozenset({"a1", "a2"})

    def test_drops_empty_elements(self):
        """Should drop blank entries."""
        assert parse_agent_ids("a1,, ,") == frozenset({"a1"})

    @pytest.mark.parametrize("raw", ["", None, " , "])
    def test_blank(self, raw):
        """Should return an empty set for blank input."""
        assert parse_agent_ids(raw) == frozenset()


class TestFilterConfig:
    """Tests for FilterConfig."""

    def test_defaults(self):
        """Should emit everything by default."""
        config = FilterConfig()
        assert config.event_type_filter is EventTypeFilter.ALL
        assert config.agent_id_allow_list is None
        assert config.filters_by_agent_id is False

    def test_from_parameters(self):
        """Should build the allow-list when filtering is enabled."""
        config = FilterConfig.from_parameters("message", True, "a1, a2")
        assert config.event_type_filter is EventTypeFilter.MESSAGE
        assert config.agent_id_allow_list == frozenset({"a1", "a2"})

    def test_agent_ids_ignored_when_disabled(self):
        """Should ignore agent IDs unless filtering is enabled."""
        config = FilterConfig.from_parameters("all", False, "a1")
        assert config.agent_id_allow_list is None

    def test_invalid_event_type(self):
        """Should reject unknown event type filters."""
        with pytest.raises(ValueError):
            FilterConfig.from_parameters("everything")

    def test_lookup_from_string(self):
        """Should accept the lookup policy as a string."""
        config = FilterConfig.from_parameters(agent_id_lookup="legacy")
        assert config.agent_id_lookup is AgentIdLookup.LEGACY

    def test_is_frozen(self):
        """Should be immutable during a batch."""
        config = FilterConfig()
        with pytest.raises(AttributeError):
            config.event_type_filter = EventTypeFilter.MESSAGE


class TestEventTypeFiltering:
    """Tests for event-type filtering."""

    @pytest.mark.parametrize("event", [MESSAGE, CALL_ENDED, PING, {}])
    def test_all_emits_everything(self, event):
        """Should emit every event kind with the all filter."""
        assert should_process(event, FilterConfig()) is FilterDecision.EMIT

    def test_message_filter(self):
        """Should skip everything that is not a message, including unknown kinds."""
        config = FilterConfig.from_parameters("message")
        assert should_process(MESSAGE, config) is FilterDecision.EMIT
        assert should_process(CALL_ENDED, config) is FilterDecision.SKIP
        assert should_process(PING, config) is FilterDecision.SKIP
        assert should_process({}, config) is FilterDecision.SKIP

    def test_call_ended_filter(self):
        """Should only emit call_ended events."""
        config = FilterConfig.from_parameters("call_ended")
        assert should_process(CALL_ENDED, config) is FilterDecision.EMIT
        assert should_process(MESSAGE, config) is FilterDecision.SKIP


class TestAgentIdFiltering:
    """Tests for allow-list filtering."""

    @pytest.fixture
    def config(self):
        return FilterConfig.from_parameters("all", True, "a1,a2")

    def test_allowed_agent(self, config):
        """Should emit events from allowed agents."""
        assert should_process(MESSAGE, config) is FilterDecision.EMIT

    def test_other_agent(self, config):
        """Should skip events from other agents."""
        event = {"event_type": "message", "call_data": {"agentId": "a3"}}
        assert should_process(event, config) is FilterDecision.SKIP

    def test_missing_agent(self, config):
        """Should skip events without an agent ID."""
        assert should_process({"event_type": "message"}, config) is FilterDecision.SKIP

    def test_empty_allow_list_raises(self):
        """Should raise FilterConfigError regardless of event content."""
        config = FilterConfig.from_parameters("message", True, "")
        for event in (MESSAGE, CALL_ENDED, PING, {}):
            with pytest.raises(FilterConfigError, match="Agent IDs required"):
                should_process(event, config)

    def test_legacy_lookup_used(self):
        """Should resolve the agent with the configured lookup."""
        event = {"event_type": "message", "agentId": "a1"}
        canonical = FilterConfig.from_parameters("all", True, "a1")
        legacy = FilterConfig.from_parameters("all", True, "a1", agent_id_lookup="legacy")
        assert should_process(event, canonical) is FilterDecision.SKIP
        assert should_process(event, legacy) is FilterDecision.EMIT

    def test_order_does_not_change_outcome(self):
        """Should skip when either filter rejects the event."""
        config = FilterConfig.from_parameters("call_ended", True, "a1")
        assert should_process(MESSAGE, config) is FilterDecision.SKIP
        assert should_process(CALL_ENDED, config) is FilterDecision.SKIP
