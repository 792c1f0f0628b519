"""
Byte Sources
============

Chunked byte sources consumed by the StreamDecoder.

A ByteSource hands out ONE exclusive reader at a time through the
``reader()`` async context manager. The reader is released on every exit
path of the ``async with`` block. Releasing a reader does not close the
source: a later reader continues from where the previous one stopped.

Example:
    source = IterableByteSource(response.aiter_bytes())

    async with source.reader() as reader:
        while (chunk := await reader.read()) is not None:
            handle(chunk)

Design Rules:
    - Chunk boundaries carry no meaning
    - End of input is signalled by read() returning None
    - Source failures propagate unchanged to the caller
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterable, AsyncIterator, Iterable, Optional, Union

from websockets.exceptions import ConnectionClosedError, ConnectionClosedOK

from eventstream.exceptions import EventStreamError, SourceLockedError


logger = logging.getLogger(__name__)


Chunks = Union[AsyncIterable[bytes], Iterable[bytes]]


class SourceReader:
    """
    Exclusive read handle on a ByteSource.

    Only valid inside the ``async with source.reader()`` block that
    produced it.
    """

    def __init__(self, source: "ByteSource") -> None:
        self._source = source
        self._released = False

    @property
    def released(self) -> bool:
        """Whether the handle has been released back to the source."""
        return self._released

    async def read(self) -> Optional[bytes]:
        """
        Pull the next chunk.

        Returns:
            Next chunk of bytes, or None at end of input.

        Raises:
            EventStreamError: If the handle was already released
        """
        if self._released:
            raise EventStreamError("Reader has been released")
        return await self._source._read_chunk()

    def _release(self) -> None:
        self._released = True


class ByteSource(ABC):
    """
    Base class for chunked byte sources with an exclusive reader lock.

    Subclasses implement ``_read_chunk``.
    """

    def __init__(self) -> None:
        self._reader: Optional[SourceReader] = None

    @property
    def locked(self) -> bool:
        """Whether a reader currently holds the source."""
        return self._reader is not None

    @asynccontextmanager
    async def reader(self) -> AsyncIterator[SourceReader]:
        """
        Acquire the exclusive reader.

        Raises:
            SourceLockedError: If another reader already holds the source
        """
        if self._reader is not None:
            raise SourceLockedError(f"{type(self).__name__} is already locked by a reader")

        reader = SourceReader(self)
        self._reader = reader
        logger.debug(f"Reader acquired on {type(self).__name__}")
        try:
            yield reader
        finally:
            reader._release()
            self._reader = None
            logger.debug(f"Reader released on {type(self).__name__}")

    @abstractmethod
    async def _read_chunk(self) -> Optional[bytes]:
        """Return the next chunk, or None at end of input."""

    async def aclose(self) -> None:
        """Close the underlying source. Default is a no-op."""


class IterableByteSource(ByteSource):
    """
    ByteSource over an async or plain iterable of bytes-like chunks.

    Suitable for ``httpx.Response.aiter_bytes()``, an async generator, or
    a list of chunks in tests. The iterator is created on first read and
    kept across readers.

    Attributes:
        exhausted: Whether the iterable has signalled end of input
    """

    def __init__(self, chunks: Chunks) -> None:
        super().__init__()
        self._chunks = chunks
        self._iterator = None
        self.exhausted = False

    async def _read_chunk(self) -> Optional[bytes]:
        if self.exhausted:
            return None

        if self._iterator is None:
            if isinstance(self._chunks, AsyncIterable):
                self._iterator = aiter(self._chunks)
            else:
                self._iterator = iter(self._chunks)

        try:
            if isinstance(self._chunks, AsyncIterable):
                chunk = await anext(self._iterator)
            else:
                chunk = next(self._iterator)
                # Yield to the loop so sync sources behave like network reads
                await asyncio.sleep(0)
        except (StopAsyncIteration, StopIteration):
            self.exhausted = True
            return None

        return bytes(chunk)

    async def aclose(self) -> None:
        """Close the wrapped iterator if it supports closing."""
        self.exhausted = True
        closer = getattr(self._iterator, "aclose", None) or getattr(self._iterator, "close", None)
        if closer is None:
            return
        result = closer()
        if inspect.isawaitable(result):
            await result


class WebSocketByteSource(ByteSource):
    """
    ByteSource over an already-open ``websockets`` connection.

    Each received message is one chunk; text messages are UTF-8 encoded.
    A normal close ends input, an abnormal close propagates as a source
    failure. Connecting and reconnecting are the caller's concern.

    Example:
        async with websockets.connect(url) as ws:
            async with StreamDecoder(WebSocketByteSource(ws)) as messages:
                async for message in messages:
                    handle(message)
    """

    def __init__(self, websocket) -> None:
        super().__init__()
        self._websocket = websocket

    async def _read_chunk(self) -> Optional[bytes]:
        try:
            message = await self._websocket.recv()
        except ConnectionClosedOK:
            logger.info("WebSocket closed normally, end of input")
            return None
        except ConnectionClosedError as e:
            logger.warning(f"WebSocket closed with error: {e}")
            raise

        if isinstance(message, str):
            return message.encode("utf-8")
        return bytes(message)

    async def aclose(self) -> None:
        """Close the websocket connection."""
        await self._websocket.close()


def as_byte_source(source: Union[ByteSource, Chunks]) -> ByteSource:
    """Return ``source`` as a ByteSource, wrapping plain iterables."""
    if isinstance(source, ByteSource):
        return source
    return IterableByteSource(source)
