"""
Webhook event normalizer.

Dispatches on the event kind and builds one of three output shapes:
- call_ended -> NormalizedCallEndedEvent
- message    -> NormalizedMessageEvent
- other      -> MinimalEvent (event_type, call_id, agent_id)

Absent fields are always defaulted, never rejected. ``call_details`` and
``call_summary`` share one ``CallMetrics`` computation.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Union

from beyond_presence.ingestion.normalization.agent_id import (
    AgentIdLookup,
    extract_agent_id,
)
from beyond_presence.ingestion.normalization.coercion import (
    Number,
    coerce_duration,
    coerce_message_count,
)
from beyond_presence.schemas.normalized import (
    CallDetails,
    CallSummary,
    MessageContent,
    MinimalEvent,
    NormalizedCallEndedEvent,
    NormalizedEvent,
    NormalizedMessageEvent,
    ProcessedMessage,
    UserInfo,
)
from beyond_presence.schemas.webhook import (
    CallData,
    CallEndedEvent,
    Evaluation,
    MessageEvent,
    WebhookEvent,
    WebhookMessage,
    classify_event,
)

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class CallMetrics:
    """Figures shared by ``call_details`` and ``call_summary``."""

    duration_minutes: Number
    message_count: Number
    topic: Any
    user_sentiment: Any

    @classmethod
    def from_event(cls, event: CallEndedEvent) -> "CallMetrics":
        evaluation = event.evaluation or Evaluation()
        return cls(
            duration_minutes=coerce_duration(evaluation.duration_minutes),
            message_count=coerce_message_count(evaluation.messages_count, event.messages),
            topic=evaluation.topic or UNKNOWN,
            user_sentiment=evaluation.user_sentiment or UNKNOWN,
        )


def _process_messages(messages: List[WebhookMessage]) -> List[ProcessedMessage]:
    return [
        ProcessedMessage(
            sender=msg.sender or "",
            message=msg.message or "",
            timestamp=msg.sent_at or "",
        )
        for msg in messages
    ]


def _normalize_call_ended(
    event: CallEndedEvent, lookup: AgentIdLookup
) -> NormalizedCallEndedEvent:
    call_data = event.call_data or CallData()
    metrics = CallMetrics.from_event(event)
    messages = _process_messages(event.messages or [])

    return NormalizedCallEndedEvent(
        call_id=event.call_id or "",
        agent_id=extract_agent_id(event, lookup),
        call_details=CallDetails(
            duration_minutes=metrics.duration_minutes,
            message_count=metrics.message_count,
            topic=metrics.topic,
            user_sentiment=metrics.user_sentiment,
        ),
        user=UserInfo(name=event.user_name or call_data.user_name or UNKNOWN),
        call_summary=CallSummary(
            duration_minutes=metrics.duration_minutes,
            message_count=metrics.message_count,
            first_message=messages[0].message if messages else "",
            last_message=messages[-1].message if messages else "",
            user_sentiment=metrics.user_sentiment,
        ),
        messages=messages,
    )


def _normalize_message(event: MessageEvent, lookup: AgentIdLookup) -> NormalizedMessageEvent:
    call_data = event.call_data or CallData()
    message = event.message or WebhookMessage()

    return NormalizedMessageEvent(
        call_id=event.call_id or "",
        agent_id=extract_agent_id(event, lookup),
        user=UserInfo(name=call_data.user_name or UNKNOWN),
        message=MessageContent(
            sender=message.sender or "",
            content=message.message or "",
            timestamp=message.sent_at or "",
        ),
    )


def normalize_event(
    event: Union[WebhookEvent, Mapping[str, Any]],
    lookup: AgentIdLookup = AgentIdLookup.CANONICAL,
) -> NormalizedEvent:
    """
    Normalize a webhook event into its output model.

    Args:
        event: Classified event, or a raw payload mapping to classify first
        lookup: Agent-ID lookup policy

    Returns:
        NormalizedCallEndedEvent, NormalizedMessageEvent or MinimalEvent
    """
    if isinstance(event, Mapping):
        event = classify_event(event)
    lookup = AgentIdLookup(lookup)

    if isinstance(event, CallEndedEvent):
        return _normalize_call_ended(event, lookup)
    if isinstance(event, MessageEvent):
        return _normalize_message(event, lookup)
    return MinimalEvent(
        event_type=event.event_type or "unknown",
        call_id=event.call_id or "",
        agent_id=extract_agent_id(event, lookup),
    )


def normalize(
    event: Union[WebhookEvent, Mapping[str, Any]],
    lookup: AgentIdLookup = AgentIdLookup.CANONICAL,
) -> Dict[str, Any]:
    """Normalize an event and return the output record as a plain dict."""
    return normalize_event(event, lookup).model_dump()
