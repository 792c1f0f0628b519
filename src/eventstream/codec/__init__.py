"""
Codec Module
============

Synchronous decoders for the event stream wire format.

    - decode_headers / iter_header_entries: header block walk
    - read_prelude / decode_frame / decode_message: single frame decode
    - interpret_payload: JSON-or-raw payload policy
"""

from eventstream.codec.headers import decode_headers, iter_header_entries
from eventstream.codec.payload import interpret_payload
from eventstream.codec.frame import decode_frame, decode_message, read_prelude


__all__ = [
    "decode_headers",
    "iter_header_entries",
    "interpret_payload",
    "read_prelude",
    "decode_frame",
    "decode_message",
]
