"""
Unit tests for the trigger module.

Tests for webhook lifecycle hooks and event handling.
"""

import pytest

from beyond_presence.configs.settings import Settings
from beyond_presence.errors import FilterConfigError, InvalidPayloadError
from beyond_presence.host import StaticParameters
from beyond_presence.ingestion.filters import EventTypeFilter
from beyond_presence.ingestion.normalization.agent_id import AgentIdLookup
from beyond_presence.trigger import BeyondPresenceTrigger


@pytest.fixture
def settings():
    return Settings(_env_file=None)


def _trigger(settings, **values):
    return BeyondPresenceTrigger(StaticParameters(values), settings=settings)


class TestLifecycle:
    """Webhook registration hooks have no side effects."""

    def test_hooks_succeed(self, settings):
        trigger = _trigger(settings)
        assert trigger.check_exists() is True
        assert trigger.create() is True
        assert trigger.delete() is True


class TestFilterConfig:
    """Tests for building filters from trigger parameters."""

    def test_defaults_from_description(self, settings):
        """Should use the node description defaults."""
        config = _trigger(settings).filter_config()
        assert config.event_type_filter is EventTypeFilter.ALL
        assert config.agent_id_allow_list is None
        assert config.agent_id_lookup is AgentIdLookup.CANONICAL

    def test_parameters(self, settings):
        """Should read all filter parameters."""
        config = _trigger(
            settings, eventTypeFilter="call_ended", filterByAgentIds=True, agentIds="a1, a2"
        ).filter_config()
        assert config.event_type_filter is EventTypeFilter.CALL_ENDED
        assert config.agent_id_allow_list == frozenset({"a1", "a2"})

    def test_lookup_from_settings(self):
        """Should take the lookup policy from settings."""
        settings = Settings(_env_file=None, AGENT_ID_LOOKUP="legacy")
        config = _trigger(settings).filter_config()
        assert config.agent_id_lookup is AgentIdLookup.LEGACY


class TestWebhook:
    """Tests for single-request handling."""

    def test_emits_normalized_event(self, settings, message_payload):
        """Should emit the normalized record."""
        response = _trigger(settings).webhook(message_payload)
        assert response["workflow_data"][0]["agent_id"] == "a1"

    def test_filtered_event(self, settings, message_payload):
        """Should emit nothing for filtered events."""
        response = _trigger(settings, eventTypeFilter="call_ended").webhook(message_payload)
        assert response == {"workflow_data": []}

    def test_invalid_body(self, settings):
        """Should raise InvalidPayloadError for malformed bodies."""
        with pytest.raises(InvalidPayloadError):
            _trigger(settings).webhook("<html>")

    def test_missing_agent_ids(self, settings, message_payload):
        """Should raise FilterConfigError when filtering without IDs."""
        trigger = _trigger(settings, filterByAgentIds=True, agentIds="")
        with pytest.raises(FilterConfigError):
            trigger.webhook(message_payload)


class TestExecute:
    """Tests for batch handling."""

    def test_batch_with_errors(self, settings, message_payload, call_ended_payload):
        """Should keep 1:1 accounting with continue-on-fail."""
        result = _trigger(settings).execute(
            [message_payload, "oops", call_ended_payload], continue_on_fail=True
        )
        output = result.to_output()

        assert [r.item_index for r in result.items] == [0, 1, 2]
        assert "error" in output[1]
        assert output[2]["event_type"] == "call_ended"
