"""
Numeric field coercion.

The API emits ``duration_minutes`` and ``messages_count`` either as JSON
numbers or as numeric strings. Strings are read like an integer prefix:
``"15"`` -> 15, ``"12.7"`` -> 12, ``" 8 min"`` -> 8. Text without leading
digits yields NaN rather than failing the item.
"""

import math
import re
from typing import Any, Optional, Sequence, Union

Number = Union[int, float]

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_int_prefix(text: str) -> Number:
    """
    Parse the leading base-10 integer of a string.

    Args:
        text: String such as "15", "-3", "12.7" or "abc"

    Returns:
        The integer, or NaN when the string has no leading digits. Digit runs
        too long to convert to int come back as a float (usually +-inf).
    """
    match = _INT_PREFIX.match(text)
    if match is None:
        return math.nan
    try:
        return int(match.group(1))
    except ValueError:
        return float(match.group(1))


def coerce_int_like(value: Any, default: Number = 0) -> Number:
    """
    Coerce a number-or-numeric-string field.

    Strings are parsed with ``parse_int_prefix``; ints and floats pass through
    unchanged. Anything else (absent, None, booleans, containers) returns
    ``default``.
    """
    if isinstance(value, str):
        return parse_int_prefix(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return default


def coerce_duration(value: Any) -> Number:
    """Coerce ``evaluation.duration_minutes``, defaulting to 0."""
    return coerce_int_like(value, default=0)


def coerce_message_count(value: Any, messages: Optional[Sequence[Any]] = None) -> Number:
    """
    Coerce ``evaluation.messages_count``.

    When the count is absent, fall back to the transcript length, then to 0.
    """
    fallback = len(messages) if isinstance(messages, (list, tuple)) else 0
    return coerce_int_like(value, default=fallback)
