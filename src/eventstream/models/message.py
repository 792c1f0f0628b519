"""
Message Data Model
==================

Typed representation of frames and decoded messages.

Wire layout of one frame (big-endian throughout):

    [4B total_length][4B header_block_length][4B prelude_checksum]
    [header_block][payload][4B message_checksum]

Design Rules:
    - Frames and messages are immutable once decoded
    - Checksums are carried as read, never verified
    - Payloads are a closed sum type: StructuredPayload | RawPayload
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


PRELUDE_LENGTH = 12
TRAILER_LENGTH = 4
MIN_FRAME_LENGTH = PRELUDE_LENGTH + TRAILER_LENGTH


@dataclass(frozen=True, slots=True)
class Prelude:
    """The fixed 12-byte frame prefix."""

    total_length: int
    header_block_length: int
    prelude_checksum: int


@dataclass(frozen=True, slots=True)
class Frame:
    """
    One complete frame, sliced but not interpreted.

    Attributes:
        total_length: Bytes in the whole frame, including the prelude
        header_block_length: Declared size of the header block
        prelude_checksum: Checksum over the first 8 bytes (not verified)
        header_block: Raw header block bytes
        payload: Raw payload bytes
        message_checksum: Trailing checksum over the frame (not verified)
    """

    total_length: int
    header_block_length: int
    prelude_checksum: int
    header_block: bytes
    payload: bytes
    message_checksum: int

    @property
    def trailer(self) -> bytes:
        """The 4 trailer bytes as they appeared on the wire."""
        return self.message_checksum.to_bytes(TRAILER_LENGTH, "big")

    def __repr__(self) -> str:
        return (
            f"Frame(total_length={self.total_length}, "
            f"header_block_length={self.header_block_length}, "
            f"payload_length={len(self.payload)})"
        )


@dataclass(frozen=True, slots=True)
class StructuredPayload:
    """Payload that parsed as JSON text."""

    value: Any


@dataclass(frozen=True, slots=True)
class RawPayload:
    """Payload that is not UTF-8 JSON, passed through unchanged."""

    data: bytes

    def __repr__(self) -> str:
        return f"RawPayload({len(self.data)} bytes)"


Payload = Union[StructuredPayload, RawPayload]


@dataclass(frozen=True, slots=True)
class DecodedMessage:
    """
    A decoded frame as exposed to consumers.

    Attributes:
        headers: String-typed headers by name (last occurrence wins)
        payload: StructuredPayload, RawPayload, or None for an empty payload
        total_length: Declared length of the source frame
    """

    headers: Dict[str, str] = field(default_factory=dict)
    payload: Optional[Payload] = None
    total_length: int = 0
