"""
Stream Buffer
=============

Growable byte buffer that accumulates chunks until whole frames are
available.

Design Rules:
    - Owned by exactly one StreamDecoder iteration
    - Mutated only by append() and by popping a complete frame
    - Does NOT interpret headers or payloads
"""

import logging
from typing import Optional

from eventstream.codec.frame import read_prelude
from eventstream.models.message import Prelude


logger = logging.getLogger(__name__)


class StreamBuffer:
    """
    Byte accumulator for the stream decoder.

    Example:
        buffer = StreamBuffer()
        buffer.append(chunk)
        while (frame_bytes := buffer.pop_frame()) is not None:
            handle(frame_bytes)
    """

    def __init__(self) -> None:
        self._data = bytearray()
        self._total_appended: int = 0

    def __len__(self) -> int:
        return len(self._data)

    @property
    def total_appended(self) -> int:
        """Total bytes ever appended."""
        return self._total_appended

    def append(self, chunk: bytes) -> None:
        """Append a newly arrived chunk."""
        self._data.extend(chunk)
        self._total_appended += len(chunk)

    def peek_prelude(self) -> Optional[Prelude]:
        """
        Read the prelude of the frame at the front, without consuming it.

        Returns:
            Prelude, or None if fewer than 12 bytes are buffered

        Raises:
            MalformedFrameError: If the declared total length is zero
        """
        return read_prelude(self._data)

    def pop_frame(self) -> Optional[bytes]:
        """
        Remove and return the frame at the front if it is complete.

        Returns:
            Exactly ``total_length`` bytes, or None if more input is needed
        """
        prelude = self.peek_prelude()
        if prelude is None or len(self._data) < prelude.total_length:
            return None

        frame = bytes(self._data[:prelude.total_length])
        del self._data[:prelude.total_length]
        return frame

    def clear(self) -> int:
        """
        Discard all buffered bytes.

        Returns:
            Number of bytes discarded.
        """
        discarded = len(self._data)
        self._data.clear()
        return discarded
