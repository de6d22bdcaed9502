# beyond_presence/schemas/webhook.py
"""
Inbound webhook event models.

Beyond Presence posts loosely-typed JSON: fields may be missing, nested
objects may be absent or replaced by scalars, and numeric fields arrive as
either numbers or numeric strings. These models accept anything and never
reject a payload; scalar fields are kept as ``Any`` and nested objects that
are not mappings are dropped to ``None``.

Events are decoded in two steps: ``classify_event`` picks the model from the
``event_type`` discriminator, then the model validates the payload. Downstream
normalization works over the three known cases instead of probing fields.
"""

from typing import Any, Dict, List, Literal, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _mapping_or_none(value: Any) -> Optional[Dict[str, Any]]:
    """Keep mappings, drop everything else."""
    return dict(value) if isinstance(value, Mapping) else None


class _LenientModel(BaseModel):
    """Base for webhook models: unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)


# ============================================================================
# NESTED OBJECTS
# ============================================================================


class WebhookMessage(_LenientModel):
    """A single chat message exchanged during a call."""

    sender: Any = None
    message: Any = None
    sent_at: Any = None


class CallData(_LenientModel):
    """Call metadata attached to most events."""

    user_name: Any = Field(default=None, alias="userName")
    agent_id: Any = Field(default=None, alias="agentId")
    # Older payloads used snake_case for the agent identifier
    legacy_agent_id: Any = Field(default=None, alias="agent_id")
    started_at: Any = Field(default=None, alias="startedAt")
    ended_at: Any = Field(default=None, alias="endedAt")
    left_at: Any = Field(default=None, alias="leftAt")


class Evaluation(_LenientModel):
    """Post-call evaluation. Numeric fields may be numbers or numeric strings."""

    topic: Any = None
    user_sentiment: Any = None
    duration_minutes: Any = None
    messages_count: Any = None


# ============================================================================
# EVENTS
# ============================================================================


class BaseWebhookEvent(_LenientModel):
    """Fields shared by every webhook event."""

    event_type: Any = None
    call_id: Any = None
    call_data: Optional[CallData] = None
    # Deprecated top-level agent identifiers, only read by the legacy lookup
    top_level_agent_id: Any = Field(default=None, alias="agentId")
    top_level_legacy_agent_id: Any = Field(default=None, alias="agent_id")

    @field_validator("call_data", mode="before")
    @classmethod
    def _drop_invalid_call_data(cls, value: Any) -> Optional[Dict[str, Any]]:
        return _mapping_or_none(value)


class MessageEvent(BaseWebhookEvent):
    """A chat message sent during a live call."""

    event_type: Literal["message"] = "message"
    message: Optional[WebhookMessage] = None

    @field_validator("message", mode="before")
    @classmethod
    def _drop_invalid_message(cls, value: Any) -> Optional[Dict[str, Any]]:
        return _mapping_or_none(value)


class CallEndedEvent(BaseWebhookEvent):
    """Summary of a finished call, with its transcript."""

    event_type: Literal["call_ended"] = "call_ended"
    evaluation: Optional[Evaluation] = None
    messages: Optional[List[WebhookMessage]] = None
    user_name: Any = None
    sentiment_disclaimer: Any = None

    @field_validator("evaluation", mode="before")
    @classmethod
    def _drop_invalid_evaluation(cls, value: Any) -> Optional[Dict[str, Any]]:
        return _mapping_or_none(value)

    @field_validator("messages", mode="before")
    @classmethod
    def _coerce_messages(cls, value: Any) -> Optional[List[Dict[str, Any]]]:
        """Non-list transcripts are treated as absent; non-object entries as empty."""
        if not isinstance(value, list):
            return None
        return [_mapping_or_none(item) or {} for item in value]


class UnrecognizedEvent(BaseWebhookEvent):
    """Any event whose ``event_type`` is missing or not handled."""


WebhookEvent = Union[MessageEvent, CallEndedEvent, UnrecognizedEvent]

_EVENT_MODELS: Dict[str, Type[BaseWebhookEvent]] = {
    "message": MessageEvent,
    "call_ended": CallEndedEvent,
}


def classify_event(payload: Mapping[str, Any]) -> WebhookEvent:
    """
    Decode a raw payload into the matching event model.

    Args:
        payload: Parsed JSON object from the webhook body

    Returns:
        MessageEvent, CallEndedEvent, or UnrecognizedEvent

    Example:
        >>> classify_event({"event_type": "ping"}).event_type
        'ping'
    """
    kind = payload.get("event_type")
    model = _EVENT_MODELS.get(kind) if isinstance(kind, str) else None
    return (model or UnrecognizedEvent).model_validate(dict(payload))
