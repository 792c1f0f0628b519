"""
Stream Decoder
==============

Incremental decoder that turns a chunked byte source into an ordered
sequence of decoded messages.

Each iteration acquires the source's exclusive reader, starts from an empty
buffer, and yields one DecodedMessage per complete frame in arrival order.
The reader is released on every exit path.

Example:
    decoder = StreamDecoder(IterableByteSource(response.aiter_bytes()))

    async with decoder as messages:
        async for message in messages:
            info = extract_event_info(message)
            ...

Design Rules:
    - The only suspension point is awaiting the next chunk
    - Trailing partial bytes at end of input are discarded, not raised
    - Source failures propagate unchanged; buffered bytes are dropped
    - Frames declaring fewer than 16 bytes are consumed and skipped
    - Iteration goes through ``async with`` (or ``contextlib.aclosing``) so
      leaving the loop early releases the reader immediately
"""

import logging
from typing import AsyncGenerator, Optional, Union

from eventstream.codec.frame import decode_message
from eventstream.models.message import MIN_FRAME_LENGTH, DecodedMessage
from eventstream.stream.buffer import StreamBuffer
from eventstream.stream.source import ByteSource, Chunks, as_byte_source


logger = logging.getLogger(__name__)


class StreamDecoderMetrics:
    """Metrics for StreamDecoder observability."""

    __slots__ = (
        "chunks_received",
        "bytes_received",
        "messages_decoded",
        "trailing_bytes_discarded",
        "undersized_frames_skipped",
    )

    def __init__(self) -> None:
        self.chunks_received: int = 0
        self.bytes_received: int = 0
        self.messages_decoded: int = 0
        self.trailing_bytes_discarded: int = 0
        self.undersized_frames_skipped: int = 0

    def to_dict(self) -> dict:
        """Export metrics as dict."""
        return {
            "chunks_received": self.chunks_received,
            "bytes_received": self.bytes_received,
            "messages_decoded": self.messages_decoded,
            "trailing_bytes_discarded": self.trailing_bytes_discarded,
            "undersized_frames_skipped": self.undersized_frames_skipped,
        }


class StreamDecoder:
    """
    Async decoder over a chunked byte source.

    Attributes:
        source: ByteSource the messages are read from
        parse_json: Whether payloads are decoded as JSON
        warn_on_trailing_data: Log a warning when partial bytes are dropped
        metrics: Cumulative metrics across all iterations

    Example:
        async with StreamDecoder(source) as messages:
            async for message in messages:
                ...

        async with contextlib.aclosing(decoder.messages()) as messages:
            ...
    """

    def __init__(
        self,
        source: Union[ByteSource, Chunks],
        parse_json: bool = True,
        warn_on_trailing_data: bool = True,
    ) -> None:
        """
        Initialize stream decoder.

        Args:
            source: ByteSource, or any (async) iterable of byte chunks
            parse_json: Attempt to decode payloads as JSON
            warn_on_trailing_data: Warn when incomplete bytes remain at end
        """
        self.source = as_byte_source(source)
        self.parse_json = parse_json
        self.warn_on_trailing_data = warn_on_trailing_data

        self.metrics = StreamDecoderMetrics()
        self._active: Optional[AsyncGenerator[DecodedMessage, None]] = None

    @classmethod
    def from_settings(cls, source: Union[ByteSource, Chunks], settings) -> "StreamDecoder":
        """Build a decoder from the ``decoder`` section of Settings."""
        return cls(
            source,
            parse_json=settings.decoder.parse_json_payload,
            warn_on_trailing_data=settings.decoder.warn_on_trailing_data,
        )

    async def messages(self) -> AsyncGenerator[DecodedMessage, None]:
        """
        Decode messages from the source until end of input.

        The returned generator holds the source reader until it is closed.
        Wrap it in ``contextlib.aclosing`` or use ``async with decoder``.

        Yields:
            DecodedMessage per complete frame, in arrival order

        Raises:
            SourceLockedError: If the source is held by another reader
            MalformedFrameError: If a frame declares a total length of zero
        """
        buffer = StreamBuffer()
        decoded = 0

        async with self.source.reader() as reader:
            logger.info(f"Stream decoding started on {type(self.source).__name__}")

            while True:
                try:
                    chunk = await reader.read()
                except Exception as e:
                    logger.error(
                        f"Byte source failed after {decoded} messages, "
                        f"dropping {len(buffer)} buffered bytes: {e}"
                    )
                    raise

                if chunk is None:
                    break

                buffer.append(chunk)
                self.metrics.chunks_received += 1
                self.metrics.bytes_received += len(chunk)

                while (frame := buffer.pop_frame()) is not None:
                    if len(frame) < MIN_FRAME_LENGTH:
                        self.metrics.undersized_frames_skipped += 1
                        logger.warning(
                            f"Skipped undersized frame declaring {len(frame)} bytes"
                        )
                        continue

                    message = decode_message(frame, parse_json=self.parse_json)
                    decoded += 1
                    self.metrics.messages_decoded += 1
                    logger.debug(
                        f"Decoded message {decoded}: {message.total_length} bytes, "
                        f"{len(message.headers)} headers"
                    )
                    yield message

            if len(buffer):
                discarded = buffer.clear()
                self.metrics.trailing_bytes_discarded += discarded
                if self.warn_on_trailing_data:
                    logger.warning(
                        f"End of input with {discarded} bytes of incomplete "
                        f"frame data, discarded"
                    )

            logger.info(
                f"Stream decoding finished: {decoded} messages from "
                f"{buffer.total_appended} bytes"
            )

    async def __aenter__(self) -> AsyncGenerator[DecodedMessage, None]:
        """Start an iteration that is closed deterministically on exit."""
        self._active = self.messages()
        return self._active

    async def __aexit__(self, *args) -> None:
        """Close the active iteration, releasing the source reader."""
        if self._active is not None:
            await self._active.aclose()
            self._active = None
