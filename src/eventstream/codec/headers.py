"""
Header Block Decoder
====================

Walks the tagged key/value encoding of a frame's header block.

Entry layout:

    [1B name_len][name][1B type_tag][value bytes per HeaderType]

Design Rules:
    - Decoding is tolerant: truncation stops the walk, it never raises
    - An unknown type tag stops the walk; entries before it are kept
    - Only STRING values are materialized, all others are skipped by width
"""

import logging
import struct
from typing import Dict, Iterator

from eventstream.models.headers import HeaderEntry, HeaderType


logger = logging.getLogger(__name__)


_VALUE_LENGTH = struct.Struct(">H")


def iter_header_entries(block: bytes) -> Iterator[HeaderEntry]:
    """
    Yield header entries in wire order.

    Stops silently at the first truncated field or unknown type tag.

    Args:
        block: Bytes of exactly one header block

    Yields:
        HeaderEntry for each fully decoded entry
    """
    view = memoryview(block)
    end = len(view)
    offset = 0

    while offset < end:
        name_length = view[offset]
        offset += 1

        if offset + name_length > end:
            logger.debug(f"Header name truncated at offset {offset}")
            return
        name = bytes(view[offset:offset + name_length]).decode("utf-8", errors="replace")
        offset += name_length

        if offset >= end:
            logger.debug(f"Header type tag missing for {name!r}")
            return
        tag = view[offset]
        offset += 1

        header_type = HeaderType.from_tag(tag)
        value = None

        match header_type:
            case None:
                logger.debug(f"Unknown header type tag {tag} for {name!r}, stopping")
                return

            case HeaderType.BYTE_ARRAY | HeaderType.STRING:
                if offset + _VALUE_LENGTH.size > end:
                    logger.debug(f"Header value length truncated for {name!r}")
                    return
                (length,) = _VALUE_LENGTH.unpack_from(view, offset)
                offset += _VALUE_LENGTH.size
                if offset + length > end:
                    logger.debug(
                        f"Header value for {name!r} truncated: "
                        f"needs {length} bytes, {end - offset} left"
                    )
                    return
                if header_type is HeaderType.STRING:
                    value = bytes(view[offset:offset + length]).decode(
                        "utf-8", errors="replace"
                    )
                offset += length

            case _:
                width = header_type.fixed_width
                if offset + width > end:
                    logger.debug(f"Header value for {name!r} truncated")
                    return
                offset += width

        yield HeaderEntry(name=name, type=header_type, value=value)


def decode_headers(block: bytes) -> Dict[str, str]:
    """
    Decode a header block into a name -> string value mapping.

    Non-string headers are skipped. Duplicate names keep the last value.

    Args:
        block: Bytes of exactly one header block

    Returns:
        Mapping of header name to string value (empty for an empty block)
    """
    headers: Dict[str, str] = {}
    for entry in iter_header_entries(block):
        if entry.type is HeaderType.STRING:
            headers[entry.name] = entry.value
    return headers
