"""
GitHub webhook handling

Signature verification, payload normalization and message formatting.
"""

from .events import Event
from .formatter import format_message
from .normalizer import parse_event
from .signature import extract_signature, verify

__all__ = ["Event", "extract_signature", "format_message", "parse_event", "verify"]
