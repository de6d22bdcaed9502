"""
Unit tests for the webhook_pipeline module.

Tests for the parse -> filter -> normalize workflow over batches.
"""

import json

import pytest

from beyond_presence.errors import FilterConfigError, InvalidPayloadError
from beyond_presence.ingestion.filters import FilterConfig
from beyond_presence.ingestion.webhook_pipeline import WebhookPipeline


@pytest.fixture
def pipeline():
    """Pipeline without filters."""
    return WebhookPipeline()


class TestProcessItem:
    """Tests for WebhookPipeline.process_item."""

    def test_normalizes_text_body(self, pipeline, message_payload):
        """Should accept a JSON string body."""
        record = pipeline.process_item(json.dumps(message_payload))
        assert record["event_type"] == "message"
        assert record["message"]["content"] == "hi"

    def test_filtered_returns_none(self, message_payload):
        """Should return None for filtered events."""
        pipeline = WebhookPipeline(FilterConfig.from_parameters("call_ended"))
        assert pipeline.process_item(message_payload) is None

    def test_invalid_payload(self, pipeline):
        """Should raise InvalidPayloadError for malformed JSON."""
        with pytest.raises(InvalidPayloadError):
            pipeline.process_item("{broken")

    def test_deeply_nested_body(self, pipeline):
        """Should raise InvalidPayloadError when nesting is too deep to decode."""
        with pytest.raises(InvalidPayloadError):
            pipeline.process_item("[" * 100000 + "]" * 100000)

    def test_filter_misconfiguration(self, message_payload):
        """Should raise FilterConfigError when agent IDs are missing."""
        pipeline = WebhookPipeline(FilterConfig.from_parameters("all", True, " "))
        with pytest.raises(FilterConfigError):
            pipeline.process_item(message_payload)


class TestRun:
    """Tests for WebhookPipeline.run."""

    def test_mixed_batch(self, message_payload, call_ended_payload):
        """Should emit one record per passing item, in order."""
        pipeline = WebhookPipeline(FilterConfig.from_parameters("all", True, "a1"))
        other_agent = dict(message_payload, call_data={"agentId": "zz"})

        result = pipeline.run([message_payload, other_agent, call_ended_payload])

        assert [r["event_type"] for r in result.to_output()] == ["message", "call_ended"]
        assert [r.item_index for r in result.items] == [0, 2]
        assert result.skipped_items == 1

    def test_continue_on_fail(self, message_payload):
        """Should report bad payloads as error records."""
        result = WebhookPipeline().run(
            ["not json", message_payload], continue_on_fail=True
        )
        output = result.to_output()

        assert len(output) == 2
        assert output[0]["error"].startswith("Invalid JSON payload")
        assert output[1]["event_type"] == "message"

    def test_abort_on_fail(self, message_payload):
        """Should abort the whole batch without continue-on-fail."""
        with pytest.raises(InvalidPayloadError):
            WebhookPipeline().run([message_payload, "[]", message_payload])
