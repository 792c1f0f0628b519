"""
Test Configuration
==================

Pytest fixtures and test configuration for the event stream decoder.

The library has no encoder, so frames are built here byte by byte.
"""

import struct
import zlib

import pytest


class FrameBuilder:
    """Test-only encoder for header blocks and frames."""

    @staticmethod
    def header(name: str, type_tag: int, value: bytes = b"") -> bytes:
        encoded = name.encode("utf-8")
        return bytes([len(encoded)]) + encoded + bytes([type_tag]) + value

    @classmethod
    def string_header(cls, name: str, value: str) -> bytes:
        encoded = value.encode("utf-8")
        return cls.header(name, 7, struct.pack(">H", len(encoded)) + encoded)

    @classmethod
    def headers(cls, mapping: dict) -> bytes:
        return b"".join(cls.string_header(k, v) for k, v in mapping.items())

    @staticmethod
    def frame(header_block: bytes = b"", payload: bytes = b"") -> bytes:
        total_length = 12 + len(header_block) + len(payload) + 4
        prelude = struct.pack(">II", total_length, len(header_block))
        prelude += struct.pack(">I", zlib.crc32(prelude))
        body = prelude + header_block + payload
        return body + struct.pack(">I", zlib.crc32(body))

    @staticmethod
    def split(data: bytes, sizes) -> list:
        """Split data into chunks of the given sizes, remainder last."""
        chunks, offset = [], 0
        for size in sizes:
            chunks.append(data[offset:offset + size])
            offset += size
        if offset < len(data):
            chunks.append(data[offset:])
        return chunks


@pytest.fixture
def builder():
    """Provide the test frame builder."""
    return FrameBuilder


@pytest.fixture
def json_frames(builder):
    """Provide two JSON frames as in a typical streaming response."""
    header_block = builder.headers({
        ":event-type": "chunk",
        ":content-type": "application/json",
        ":message-type": "event",
    })
    return [
        builder.frame(header_block, b'{"x":1}'),
        builder.frame(header_block, b'{"x":2}'),
    ]
