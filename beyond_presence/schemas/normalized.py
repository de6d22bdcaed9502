# beyond_presence/schemas/normalized.py
"""
Normalized webhook output shapes.

Downstream workflows depend on these exact field names, so field order and
naming here mirror the emitted JSON. Values copied from the payload are typed
``Any`` because they are passed through unvalidated.
"""

from typing import Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class _OutputModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class UserInfo(_OutputModel):
    """User information."""

    name: Any = "Unknown"


class MessageContent(_OutputModel):
    """Content of a single live chat message."""

    sender: Any = ""
    content: Any = ""
    timestamp: Any = ""


class ProcessedMessage(_OutputModel):
    """A transcript entry of a completed call."""

    sender: Any = ""
    message: Any = ""
    timestamp: Any = ""


class CallDetails(_OutputModel):
    """Call details for a completed call."""

    duration_minutes: Number = 0
    message_count: Number = 0
    topic: Any = "Unknown"
    user_sentiment: Any = "Unknown"


class CallSummary(_OutputModel):
    """Summary of a completed call."""

    duration_minutes: Number = 0
    message_count: Number = 0
    first_message: Any = ""
    last_message: Any = ""
    user_sentiment: Any = "Unknown"


class NormalizedMessageEvent(_OutputModel):
    """Normalized ``message`` event."""

    call_id: Any = ""
    agent_id: str = ""
    user: UserInfo = Field(default_factory=UserInfo)
    message: MessageContent = Field(default_factory=MessageContent)
    event_type: Literal["message"] = "message"


class NormalizedCallEndedEvent(_OutputModel):
    """Normalized ``call_ended`` event."""

    call_id: Any = ""
    agent_id: str = ""
    call_details: CallDetails = Field(default_factory=CallDetails)
    user: UserInfo = Field(default_factory=UserInfo)
    call_summary: CallSummary = Field(default_factory=CallSummary)
    messages: List[ProcessedMessage] = Field(default_factory=list)
    event_type: Literal["call_ended"] = "call_ended"


class MinimalEvent(_OutputModel):
    """Passthrough record for events of an unrecognized kind."""

    event_type: Any = "unknown"
    call_id: Any = ""
    agent_id: str = ""


NormalizedEvent = Union[NormalizedMessageEvent, NormalizedCallEndedEvent, MinimalEvent]
