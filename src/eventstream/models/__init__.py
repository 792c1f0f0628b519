"""
Data Models
===========

Typed data model for the event stream decoder.

Models:
    Headers:
        - HeaderType: Closed enumeration of header value type tags
        - HeaderEntry: One decoded header (name, type, value)

    Messages:
        - Prelude: The fixed 12-byte frame prefix
        - Frame: One complete frame, sliced into raw parts
        - StructuredPayload / RawPayload: Payload sum type
        - DecodedMessage: Headers + payload exposed to consumers

    Output:
        - EventInfo: Well-known header values of a message
"""

from eventstream.models.headers import HeaderEntry, HeaderType
from eventstream.models.message import (
    MIN_FRAME_LENGTH,
    PRELUDE_LENGTH,
    TRAILER_LENGTH,
    DecodedMessage,
    Frame,
    Payload,
    Prelude,
    RawPayload,
    StructuredPayload,
)
from eventstream.models.event_info import EventInfo

__all__ = [
    # Headers
    "HeaderType",
    "HeaderEntry",
    # Messages
    "PRELUDE_LENGTH",
    "TRAILER_LENGTH",
    "MIN_FRAME_LENGTH",
    "Prelude",
    "Frame",
    "Payload",
    "StructuredPayload",
    "RawPayload",
    "DecodedMessage",
    # Output
    "EventInfo",
]
