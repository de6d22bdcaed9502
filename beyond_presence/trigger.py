"""
Beyond Presence webhook trigger.

Beyond Presence webhooks are configured in the Beyond Presence dashboard,
so the trigger's registration hooks have nothing to register: they always
report success. Inbound bodies go through the WebhookPipeline.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from beyond_presence.configs.config import Config
from beyond_presence.configs.settings import Settings, get_settings
from beyond_presence.host import ParameterSource
from beyond_presence.ingestion.batch import BatchResult
from beyond_presence.ingestion.filters import FilterConfig
from beyond_presence.ingestion.parsers.webhook_parser import RawPayload
from beyond_presence.ingestion.webhook_pipeline import WebhookPipeline

logger = logging.getLogger(__name__)


class BeyondPresenceTrigger:
    """Webhook trigger emitting normalized Beyond Presence events."""

    def __init__(self, parameters: ParameterSource, settings: Optional[Settings] = None):
        """
        Initialize the trigger.

        Args:
            parameters: Trigger parameter values (eventTypeFilter, filterByAgentIds, agentIds)
            settings: Settings providing the agent-ID lookup policy
        """
        self.parameters = parameters
        self.settings = settings or get_settings()
        self.defaults = Config.trigger_defaults()

    # ========================================================================
    # WEBHOOK LIFECYCLE
    # ========================================================================

    def check_exists(self) -> bool:
        return True

    def create(self) -> bool:
        return True

    def delete(self) -> bool:
        return True

    # ========================================================================
    # EVENTS
    # ========================================================================

    def _param(self, name: str) -> Any:
        return self.parameters.get_parameter(name, 0, self.defaults.get(name))

    def filter_config(self) -> FilterConfig:
        """Build the filter settings from the trigger parameters."""
        return FilterConfig.from_parameters(
            event_type_filter=self._param("eventTypeFilter"),
            filter_by_agent_ids=bool(self._param("filterByAgentIds")),
            agent_ids=self._param("agentIds"),
            agent_id_lookup=self.settings.AGENT_ID_LOOKUP,
        )

    def execute(self, bodies: Sequence[RawPayload], continue_on_fail: bool = False) -> BatchResult:
        """Normalize a batch of webhook bodies."""
        return WebhookPipeline(self.filter_config()).run(bodies, continue_on_fail=continue_on_fail)

    def webhook(self, body: RawPayload) -> Dict[str, List[Dict[str, Any]]]:
        """
        Handle a single webhook request.

        Returns:
            ``{"workflow_data": [record]}`` for an emitted event, or
            ``{"workflow_data": []}`` when the event was filtered out

        Raises:
            InvalidPayloadError: If the body is not a JSON object
            FilterConfigError: If agent filtering is enabled without agent IDs
        """
        record = WebhookPipeline(self.filter_config()).process_item(body)
        if record is None:
            return {"workflow_data": []}
        logger.info(f"Emitting {record['event_type']} event for call {record['call_id']!r}")
        return {"workflow_data": [record]}
