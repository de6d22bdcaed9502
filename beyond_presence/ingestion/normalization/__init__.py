"""
Webhook normalization.

Pure functions turning loosely-typed Beyond Presence payloads into one of
three fixed output shapes.
"""

from .agent_id import AgentIdLookup, extract_agent_id
from .coercion import coerce_duration, coerce_int_like, coerce_message_count
from .webhook_normalizer import CallMetrics, normalize, normalize_event

__all__ = [
    "AgentIdLookup",
    "CallMetrics",
    "coerce_duration",
    "coerce_int_like",
    "coerce_message_count",
    "extract_agent_id",
    "normalize",
    "normalize_event",
]
