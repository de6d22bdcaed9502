"""
Webhook Pipeline.

Processes inbound webhook bodies through a fixed workflow:
1. Parse the body into a JSON object
2. Classify it as a message, call-ended or unrecognized event
3. Apply event-type and agent-ID filters
4. Normalize to the output shape for its kind

Architecture:
    raw body -> parse_payload -> classify_event -> should_process -> normalize_event
"""

import logging
from typing import Any, Dict, Optional, Sequence

from beyond_presence.ingestion.batch import BatchResult, run_batch
from beyond_presence.ingestion.filters import FilterConfig, FilterDecision, should_process
from beyond_presence.ingestion.normalization.webhook_normalizer import normalize_event
from beyond_presence.ingestion.parsers.webhook_parser import RawPayload, parse_payload
from beyond_presence.schemas.webhook import classify_event


class WebhookPipeline:
    """
    Parse, filter and normalize Beyond Presence webhook events.

    The pipeline holds no per-item state, so one instance can process any
    number of batches with the same filter settings.
    """

    def __init__(self, filter_config: Optional[FilterConfig] = None):
        """
        Initialize the pipeline.

        Args:
            filter_config: Filter settings; defaults to emitting every event
        """
        self.filter_config = filter_config or FilterConfig()
        self.logger = logging.getLogger("pipeline.webhook")

    def process_item(self, raw: RawPayload, item_index: int = 0) -> Optional[Dict[str, Any]]:
        """
        Process one webhook body.

        Args:
            raw: JSON text or decoded object
            item_index: Position of the item in its batch, for logging

        Returns:
            Normalized record, or None if the event was filtered out

        Raises:
            InvalidPayloadError: If the body is not a JSON object
            FilterConfigError: If agent filtering is misconfigured
        """
        event = classify_event(parse_payload(raw))

        if should_process(event, self.filter_config) is FilterDecision.SKIP:
            self.logger.debug(f"Item {item_index}: {event.event_type!r} event filtered out")
            return None

        return normalize_event(event, self.filter_config.agent_id_lookup).model_dump()

    def run(self, payloads: Sequence[RawPayload], continue_on_fail: bool = False) -> BatchResult:
        """
        Process a batch of webhook bodies in order.

        Args:
            payloads: Raw bodies, one per input item
            continue_on_fail: Emit ``{"error": ...}`` records instead of aborting

        Returns:
            BatchResult with one record per emitted or failed item
        """
        self.logger.info(f"Processing {len(payloads)} webhook item(s)")
        return run_batch(
            payloads,
            self.process_item,
            continue_on_fail=continue_on_fail,
            batch_logger=self.logger,
        )
