"""
Parsers for inbound webhook bodies.
"""

from .webhook_parser import parse_payload

__all__ = [
    "parse_payload",
]
