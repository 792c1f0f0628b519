"""
Payload Interpretation
======================

Best-effort conversion of a frame payload into a structured value.

A payload that is valid UTF-8 JSON becomes a StructuredPayload; anything else
is returned unchanged as a RawPayload. This never fails the frame decode.

Parsing rules:
    - A leading UTF-8 byte order mark is ignored
    - NaN, Infinity and -Infinity are not JSON and fall back to raw
    - Integers beyond the interpreter's digit limit and nesting beyond the
      recursion limit fall back to raw
"""

import json
import logging
from typing import Optional

from eventstream.models.message import Payload, RawPayload, StructuredPayload


logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant {name!r}")


def interpret_payload(data: bytes, parse_json: bool = True) -> Optional[Payload]:
    """
    Interpret raw payload bytes.

    Args:
        data: Payload region of a frame
        parse_json: Attempt JSON decoding. False always yields RawPayload.

    Returns:
        None for an empty payload, StructuredPayload when the bytes are
        UTF-8 JSON, RawPayload otherwise.
    """
    if not data:
        return None

    raw = bytes(data)
    if not parse_json:
        return RawPayload(raw)

    try:
        value = json.loads(raw.decode("utf-8-sig"), parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        # ValueError covers UnicodeDecodeError and JSONDecodeError
        logger.debug(f"Payload is not JSON ({len(raw)} bytes), keeping raw: {type(e).__name__}")
        return RawPayload(raw)

    return StructuredPayload(value)
