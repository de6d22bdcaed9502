"""
Webhook payload parser.

Accepts the body as JSON text or as an already-decoded object. Only checks
that the result is a JSON object; deeper shape problems are defaulted away
during normalization.
"""

import json
import logging
from typing import Any, Dict, Mapping, Union

from beyond_presence.errors import InvalidPayloadError

logger = logging.getLogger(__name__)

RawPayload = Union[str, bytes, bytearray, Mapping[str, Any]]


def parse_payload(raw: RawPayload) -> Dict[str, Any]:
    """
    Parse a webhook body into a raw event mapping.

    Args:
        raw: JSON text (str or bytes) or a decoded mapping

    Returns:
        The payload as a dict

    Raises:
        InvalidPayloadError: If the text is not valid JSON or the payload is
            not a JSON object
    """
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.debug(f"Rejected webhook body: {e}")
            raise InvalidPayloadError(f"Invalid JSON payload: {e}") from e

    if not isinstance(raw, Mapping):
        raise InvalidPayloadError(
            f"Webhook payload must be a JSON object, got {type(raw).__name__}"
        )
    return dict(raw)
