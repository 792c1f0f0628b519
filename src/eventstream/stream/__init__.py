"""
Stream Module
=============

Incremental decoding of chunked byte streams.

This module provides the streaming layer of the decoder:
    - ByteSource: Chunked source with an exclusive, scoped reader
    - IterableByteSource / WebSocketByteSource: Concrete sources
    - StreamBuffer: Byte accumulator that pops complete frames
    - StreamDecoder: Async iterator of DecodedMessage

Example:
    from eventstream.stream import StreamDecoder

    async with StreamDecoder(response.aiter_bytes()) as messages:
        async for message in messages:
            process(message)
"""

from eventstream.stream.source import (
    ByteSource,
    IterableByteSource,
    SourceReader,
    WebSocketByteSource,
    as_byte_source,
)
from eventstream.stream.buffer import StreamBuffer
from eventstream.stream.decoder import StreamDecoder, StreamDecoderMetrics


__all__ = [
    "ByteSource",
    "SourceReader",
    "IterableByteSource",
    "WebSocketByteSource",
    "as_byte_source",
    "StreamBuffer",
    "StreamDecoder",
    "StreamDecoderMetrics",
]
