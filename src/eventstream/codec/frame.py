"""
Frame Decoder
=============

Validates and slices one complete frame, then splits it into headers and
payload.

Frame layout (big-endian):

    [4B total_length][4B header_block_length][4B prelude_checksum]
    [header_block][payload][4B message_checksum]

Design Rules:
    - Incomplete input returns None, it is never an error
    - Checksums are read but not verified
    - A header block that overruns the frame is clamped to the frame body
    - Frames shorter than prelude + trailer decode with empty parts
    - Only a zero total_length is raised, since the stream cannot move past it
"""

import logging
import struct
from typing import Optional

from eventstream.codec.headers import decode_headers
from eventstream.codec.payload import interpret_payload
from eventstream.exceptions import MalformedFrameError
from eventstream.models.message import (
    MIN_FRAME_LENGTH,
    PRELUDE_LENGTH,
    TRAILER_LENGTH,
    DecodedMessage,
    Frame,
    Prelude,
)


logger = logging.getLogger(__name__)


_PRELUDE = struct.Struct(">III")
_CHECKSUM = struct.Struct(">I")


def read_prelude(data: bytes) -> Optional[Prelude]:
    """
    Read the 12-byte prelude.

    Args:
        data: Bytes starting at a frame boundary

    Returns:
        Prelude, or None if fewer than 12 bytes are available

    Raises:
        MalformedFrameError: If the declared total length is zero
    """
    if len(data) < PRELUDE_LENGTH:
        return None

    total_length, header_block_length, prelude_checksum = _PRELUDE.unpack_from(data, 0)
    if total_length == 0:
        raise MalformedFrameError(total_length)

    return Prelude(
        total_length=total_length,
        header_block_length=header_block_length,
        prelude_checksum=prelude_checksum,
    )


def decode_frame(data: bytes) -> Optional[Frame]:
    """
    Slice one complete frame into its raw parts.

    Bytes beyond the declared total length are ignored. A frame declaring
    fewer than 16 bytes has no room for headers, payload or trailer: it
    decodes with all three empty and a zero message checksum.

    Args:
        data: Bytes starting at a frame boundary

    Returns:
        Frame, or None if the frame is not yet complete
    """
    prelude = read_prelude(data)
    if prelude is None or len(data) < prelude.total_length:
        return None

    view = memoryview(data)[:max(prelude.total_length, PRELUDE_LENGTH)]
    body_end = max(prelude.total_length - TRAILER_LENGTH, PRELUDE_LENGTH)
    header_end = min(PRELUDE_LENGTH + prelude.header_block_length, body_end)

    message_checksum = 0
    if prelude.total_length >= MIN_FRAME_LENGTH:
        (message_checksum,) = _CHECKSUM.unpack_from(view, body_end)

    return Frame(
        total_length=prelude.total_length,
        header_block_length=prelude.header_block_length,
        prelude_checksum=prelude.prelude_checksum,
        header_block=bytes(view[PRELUDE_LENGTH:header_end]),
        payload=bytes(view[header_end:body_end]),
        message_checksum=message_checksum,
    )



def decode_message(data: bytes, parse_json: bool = True) -> Optional[DecodedMessage]:
    """
    Decode one frame into headers and payload.

    Args:
        data: Bytes starting at a frame boundary
        parse_json: Attempt to decode the payload as JSON

    Returns:
        DecodedMessage, or None if the frame is not yet complete

    Raises:
        MalformedFrameError: If the declared total length is zero
    """
    frame = decode_frame(data)
    if frame is None:
        return None

    if frame.header_block_length > len(frame.header_block):
        logger.debug(
            f"Header block length {frame.header_block_length} overruns "
            f"frame of {frame.total_length} bytes, clamped"
        )

    return DecodedMessage(
        headers=decode_headers(frame.header_block),
        payload=interpret_payload(frame.payload, parse_json=parse_json),
        total_length=frame.total_length,
    )
