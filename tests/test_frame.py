"""
Frame Decoder Tests
===================

Tests for single frame decoding and payload interpretation.
"""

import struct
import sys
import zlib

import pytest

from eventstream.codec.frame import decode_frame, decode_message, read_prelude
from eventstream.codec.payload import interpret_payload
from eventstream.exceptions import MalformedFrameError
from eventstream.models import DecodedMessage, RawPayload, StructuredPayload


class TestReadPrelude:
    """Tests for read_prelude."""

    def test_fewer_than_twelve_bytes(self, builder):
        """Verify a short prelude reads as incomplete."""
        assert read_prelude(builder.frame()[:11]) is None

    def test_reads_lengths(self, builder):
        """Verify lengths and prelude checksum are read big-endian."""
        frame = builder.frame(builder.string_header("a", "b"), b"xyz")
        prelude = read_prelude(frame)
        assert prelude.total_length == len(frame)
        assert prelude.header_block_length == 6
        assert prelude.prelude_checksum == zlib.crc32(frame[:8])

    def test_zero_total_length_raises(self):
        """Verify a zero total length is rejected."""
        with pytest.raises(MalformedFrameError) as exc_info:
            read_prelude(struct.pack(">III", 0, 0, 0))
        assert exc_info.value.total_length == 0

    def test_undersized_total_length_is_read(self):
        """Verify a total length below prelude + trailer is still read."""
        prelude = read_prelude(struct.pack(">III", 15, 0, 0))
        assert prelude.total_length == 15


class TestDecodeFrame:
    """Tests for decode_frame."""

    def test_slices_parts(self, builder):
        """Verify a frame is sliced into header block, payload and trailer."""
        header_block = builder.string_header("k", "v")
        data = builder.frame(header_block, b"payload")
        frame = decode_frame(data)

        assert frame.total_length == len(data)
        assert frame.header_block == header_block
        assert frame.payload == b"payload"
        assert frame.message_checksum == zlib.crc32(data[:-4])
        assert frame.trailer == data[-4:]
        assert frame.total_length == 12 + frame.header_block_length + len(frame.payload) + 4

    def test_incomplete_frame(self, builder):
        """Verify a frame missing its last byte reads as incomplete."""
        data = builder.frame(payload=b"0123456789")
        assert decode_frame(data[:-1]) is None

    def test_ignores_bytes_after_frame(self, builder):
        """Verify bytes past total_length are not part of the frame."""
        data = builder.frame(payload=b"abc")
        frame = decode_frame(data + b"\x00\x00\x00\x2a")
        assert frame.payload == b"abc"

    def test_header_block_overrun_is_clamped(self):
        """Verify an oversized header block length is clamped to the body."""
        body = struct.pack(">III", 19, 100, 0) + b"\x01a\x00"
        frame = decode_frame(body + b"\x00\x00\x00\x00")
        assert frame.header_block == b"\x01a\x00"
        assert frame.payload == b""

    @pytest.mark.parametrize("total_length", [1, 5, 12, 15])
    def test_undersized_frame_has_empty_parts(self, total_length):
        """Verify a frame shorter than prelude + trailer decodes empty."""
        data = struct.pack(">III", total_length, 3, 7) + b"\x01a\x00\x00"
        frame = decode_frame(data)

        assert frame.total_length == total_length
        assert frame.prelude_checksum == 7
        assert frame.header_block == b""
        assert frame.payload == b""
        assert frame.message_checksum == 0


class TestDecodeMessage:
    """Tests for decode_message."""

    def test_incomplete_prelude(self):
        """Verify fewer than 12 bytes is incomplete, not an error."""
        assert decode_message(b"\x00" * 11) is None

    def test_shorter_than_total_length(self, builder):
        """Verify a partial frame is incomplete, not an error."""
        data = builder.frame(builder.string_header("a", "b"), b'{"a":1}')
        assert decode_message(data[:20]) is None

    def test_json_payload(self, builder):
        """Verify a JSON payload decodes to a structured value."""
        data = builder.frame(builder.string_header(":content-type", "application/json"), b'{"a":1}')
        message = decode_message(data)

        assert message.headers == {":content-type": "application/json"}
        assert message.payload == StructuredPayload({"a": 1})
        assert message.payload.value["a"] == 1
        assert message.total_length == len(data)

    def test_non_text_payload_is_raw(self, builder):
        """Verify a non-UTF-8 payload is kept as raw bytes."""
        message = decode_message(builder.frame(payload=b"\xff"))
        assert message.payload == RawPayload(b"\xff")

    def test_text_that_is_not_json_is_raw(self, builder):
        """Verify text that is not JSON is kept as raw bytes."""
        message = decode_message(builder.frame(payload=b"hello"))
        assert message.payload == RawPayload(b"hello")

    def test_empty_payload(self, builder):
        """Verify an empty payload decodes to None."""
        message = decode_message(builder.frame(builder.string_header("a", "b")))
        assert message.payload is None
        assert message.headers == {"a": "b"}

    def test_parse_json_disabled(self, builder):
        """Verify parse_json=False keeps JSON as raw bytes."""
        message = decode_message(builder.frame(payload=b'{"a":1}'), parse_json=False)
        assert message.payload == RawPayload(b'{"a":1}')

    def test_unknown_header_tag_does_not_fail_frame(self, builder):
        """Verify an unknown header tag still yields headers and payload."""
        header_block = builder.string_header("a", "1") + builder.header("b", 99)
        message = decode_message(builder.frame(header_block, b"[1, 2]"))
        assert message.headers == {"a": "1"}
        assert message.payload == StructuredPayload([1, 2])

    def test_undersized_total_length_decodes_empty(self):
        """Verify a 12-byte declared frame decodes with no headers or payload."""
        message = decode_message(struct.pack(">III", 12, 0, 0) + b"\x00" * 4)
        assert message == DecodedMessage(headers={}, payload=None, total_length=12)

    def test_zero_total_length_raises(self):
        """Verify a zero total length is rejected."""
        with pytest.raises(MalformedFrameError):
            decode_message(struct.pack(">III", 0, 0, 0))

    def test_unparseable_nested_payload_is_raw(self, builder):
        """Verify a payload the JSON parser rejects never fails the frame."""
        payload = b"[" * 100000 + b"]" * 100000
        message = decode_message(builder.frame(payload=payload))
        assert message.payload == RawPayload(payload)


class TestInterpretPayload:
    """Tests for interpret_payload."""

    def test_empty(self):
        """Verify an empty payload is None."""
        assert interpret_payload(b"") is None

    def test_json_scalar(self):
        """Verify a JSON scalar is a structured value."""
        assert interpret_payload(b"42") == StructuredPayload(42)

    def test_invalid_json(self):
        """Verify truncated JSON is kept raw."""
        assert interpret_payload(b'{"a":') == RawPayload(b'{"a":')

    @pytest.mark.skipif(
        not hasattr(sys, "get_int_max_str_digits"),
        reason="interpreter has no integer digit limit",
    )
    def test_integer_over_digit_limit_is_raw(self):
        """Verify an integer beyond the digit limit is kept raw."""
        payload = b"1" * 5000
        assert interpret_payload(payload) == RawPayload(payload)

    def test_deep_nesting_is_raw(self):
        """Verify nesting beyond the recursion limit is kept raw."""
        payload = b"[" * 100000 + b"]" * 100000
        assert interpret_payload(payload) == RawPayload(payload)

    @pytest.mark.parametrize("payload", [b"NaN", b"Infinity", b"[-Infinity]", b'{"a": NaN}'])
    def test_non_standard_constants_are_raw(self, payload):
        """Verify NaN and Infinity are not accepted as JSON."""
        assert interpret_payload(payload) == RawPayload(payload)

    def test_leading_bom_is_ignored(self):
        """Verify a UTF-8 byte order mark before JSON is skipped."""
        assert interpret_payload(b'\xef\xbb\xbf{"a":1}') == StructuredPayload({"a": 1})
