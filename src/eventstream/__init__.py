"""
EventStream
===========

Decoder for length-prefixed, self-framing binary event streams.

Each frame carries a block of typed key/value headers and an opaque payload.
This package decodes single frames and incrementally decodes chunked byte
streams (e.g. a streaming HTTP response body) into ordered messages.

Components:
    - codec: Header block, frame and payload decoders
    - stream: Byte sources, stream buffer and async StreamDecoder
    - models: Typed frames, messages and payloads
    - events: Well-known header extraction for downstream consumers

Example:
    from eventstream import StreamDecoder, extract_event_info

    async with StreamDecoder(response.aiter_bytes()) as messages:
        async for message in messages:
            info = extract_event_info(message)
            print(info.event_type, info.payload)
"""

__version__ = "0.1.0"

from eventstream.codec import decode_headers, decode_message
from eventstream.events import extract_event_info
from eventstream.exceptions import EventStreamError, MalformedFrameError, SourceLockedError
from eventstream.models import DecodedMessage, EventInfo, RawPayload, StructuredPayload
from eventstream.stream import IterableByteSource, StreamDecoder, WebSocketByteSource

__all__ = [
    "__version__",
    "decode_headers",
    "decode_message",
    "extract_event_info",
    "EventStreamError",
    "MalformedFrameError",
    "SourceLockedError",
    "DecodedMessage",
    "EventInfo",
    "RawPayload",
    "StructuredPayload",
    "IterableByteSource",
    "StreamDecoder",
    "WebSocketByteSource",
]
