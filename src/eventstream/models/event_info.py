"""
Event Info Schema
=================

Output contract of the well-known header extraction performed by
``eventstream.events.extract_event_info``.

Example:
    {
        "event_type": "chunk",
        "content_type": "application/json",
        "message_type": "event",
        "payload": StructuredPayload(value={"bytes": "..."})
    }
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class EventInfo(BaseModel):
    """
    Well-known header values of one decoded message.

    Attributes:
        event_type: Value of ``:event-type`` / ``event-type``
        content_type: Value of ``:content-type`` / ``content-type``
        message_type: Value of ``:message-type`` / ``message-type``
        payload: The message payload, passed through unchanged
    """

    model_config = ConfigDict(frozen=True)

    event_type: Optional[str] = Field(
        default=None,
        description="Event type header value",
    )

    content_type: Optional[str] = Field(
        default=None,
        description="Content type header value",
    )

    message_type: Optional[str] = Field(
        default=None,
        description="Message type header value (e.g. 'event', 'exception')",
    )

    payload: Any = Field(
        default=None,
        description="Decoded payload, untouched",
    )
