#!/usr/bin/env python3
"""
Capture Replay Script
=====================

Standalone script to decode a captured event stream from disk.

This script:
    1. Reads a binary capture file in fixed-size chunks
    2. Feeds the chunks through the StreamDecoder
    3. Logs event type, content type and payload of each message
    4. Reports final decoder metrics

Usage:
    python scripts/decode_capture.py capture.bin
    python scripts/decode_capture.py capture.bin --chunk-size 7 --raw
"""

import argparse
import asyncio
import logging
import sys
from typing import Iterator

from eventstream.config import settings, setup_logging
from eventstream.events import extract_event_info
from eventstream.models import RawPayload, StructuredPayload
from eventstream.stream import IterableByteSource, StreamDecoder


logger = logging.getLogger(__name__)


def read_chunks(path: str, chunk_size: int) -> Iterator[bytes]:
    """Yield the file contents in chunks of ``chunk_size`` bytes."""
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            yield chunk


def describe_payload(payload) -> str:
    if isinstance(payload, StructuredPayload):
        return f"json {payload.value!r}"
    if isinstance(payload, RawPayload):
        return f"raw {len(payload.data)} bytes"
    return "empty"


async def run(path: str, chunk_size: int, parse_json: bool) -> dict:
    """
    Decode a capture file.

    Args:
        path: Capture file path
        chunk_size: Bytes per simulated network read
        parse_json: Decode payloads as JSON

    Returns:
        Final metrics dict
    """
    logger.info("=" * 60)
    logger.info(f"Capture: {path}")
    logger.info(f"Chunk size: {chunk_size} bytes")
    logger.info("=" * 60)

    decoder = StreamDecoder(
        IterableByteSource(read_chunks(path, chunk_size)),
        parse_json=parse_json,
        warn_on_trailing_data=settings.decoder.warn_on_trailing_data,
    )

    async with decoder as messages:
        async for message in messages:
            info = extract_event_info(message)
            logger.info(
                f"[{decoder.metrics.messages_decoded}] "
                f"event={info.event_type} content={info.content_type} "
                f"type={info.message_type} payload={describe_payload(info.payload)}"
            )

    metrics = decoder.metrics.to_dict()
    logger.info("=" * 60)
    logger.info("SUMMARY")
    for key, value in metrics.items():
        logger.info(f"  {key}: {value}")
    logger.info("=" * 60)
    return metrics


def main():
    parser = argparse.ArgumentParser(
        description="Decode a captured binary event stream"
    )
    parser.add_argument("path", help="Path to the capture file")
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=settings.capture.read_chunk_size,
        help=f"Bytes per read (default: {settings.capture.read_chunk_size})",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Keep payloads as raw bytes instead of decoding JSON",
    )

    args = parser.parse_args()
    setup_logging(settings)

    parse_json = settings.decoder.parse_json_payload and not args.raw
    result = asyncio.run(run(args.path, args.chunk_size, parse_json))

    sys.exit(0 if result["messages_decoded"] > 0 else 1)


if __name__ == "__main__":
    main()
