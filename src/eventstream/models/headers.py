"""
Header Types
============

Closed enumeration of the header value types found in a header block.

Each header entry on the wire is laid out as:

    [1B name_len][name_len B name][1B type_tag][value bytes]

The number of value bytes depends on the type tag. Fixed-width types carry
their width here; the two variable-width types (byte array, string) carry a
2-byte big-endian length prefix followed by that many bytes.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class HeaderType(IntEnum):
    """
    Header value type tags.

    Attributes:
        BOOL_TRUE: Boolean true, no value bytes
        BOOL_FALSE: Boolean false, no value bytes
        BYTE: 8-bit integer
        INT16: 16-bit integer
        INT32: 32-bit integer
        INT64: 64-bit integer
        BYTE_ARRAY: Length-prefixed raw bytes
        STRING: Length-prefixed UTF-8 text (the only captured type)
        TIMESTAMP: 64-bit milliseconds since epoch
        UUID: 128-bit identifier
    """

    BOOL_TRUE = 0
    BOOL_FALSE = 1
    BYTE = 2
    INT16 = 3
    INT32 = 4
    INT64 = 5
    BYTE_ARRAY = 6
    STRING = 7
    TIMESTAMP = 8
    UUID = 9

    @property
    def fixed_width(self) -> Optional[int]:
        """Value width in bytes, or None for length-prefixed types."""
        return _FIXED_WIDTHS.get(self)

    @classmethod
    def from_tag(cls, tag: int) -> Optional["HeaderType"]:
        """Map a raw tag byte to a HeaderType, None if unknown."""
        try:
            return cls(tag)
        except ValueError:
            return None


_FIXED_WIDTHS = {
    HeaderType.BOOL_TRUE: 0,
    HeaderType.BOOL_FALSE: 0,
    HeaderType.BYTE: 1,
    HeaderType.INT16: 2,
    HeaderType.INT32: 4,
    HeaderType.INT64: 8,
    HeaderType.TIMESTAMP: 8,
    HeaderType.UUID: 16,
}


@dataclass(frozen=True, slots=True)
class HeaderEntry:
    """
    A single decoded header.

    Attributes:
        name: Header name (at most 255 bytes on the wire)
        type: Value type tag
        value: Decoded string for STRING headers, None for every other type
    """

    name: str
    type: HeaderType
    value: Optional[str] = None
