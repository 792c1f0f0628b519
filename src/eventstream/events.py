"""
Event Info Extraction
=====================

Pulls the well-known routing headers out of a decoded message.

Lookup order for each field: the colon-prefixed name first
(``:event-type``), then the bare name (``event-type``). The payload is
passed through untouched.
"""

from typing import Any, Mapping, Optional, Union

from eventstream.models.event_info import EventInfo
from eventstream.models.message import DecodedMessage


def _lookup(headers: Mapping[str, str], name: str) -> Optional[str]:
    return headers.get(f":{name}") or headers.get(name)


def extract_event_info(message: Union[DecodedMessage, Mapping[str, Any]]) -> EventInfo:
    """
    Extract event type, content type and message type from a message.

    Args:
        message: DecodedMessage, or a mapping with ``headers`` / ``payload``

    Returns:
        EventInfo with the three header values and the original payload
    """
    if isinstance(message, DecodedMessage):
        headers, payload = message.headers, message.payload
    else:
        headers = message.get("headers") or {}
        payload = message.get("payload")

    return EventInfo(
        event_type=_lookup(headers, "event-type"),
        content_type=_lookup(headers, "content-type"),
        message_type=_lookup(headers, "message-type"),
        payload=payload,
    )
