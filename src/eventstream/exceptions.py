"""
Exceptions
==========

Hard failures raised by the event stream decoder.

Truncated input, unknown header tags and non-JSON payloads are NOT errors:
the decoders stop early or fall back instead. Only conditions that make the
stream impossible to continue are raised.
"""


class EventStreamError(Exception):
    """Base class for event stream decoding errors."""
    pass


class MalformedFrameError(EventStreamError):
    """Raised when a frame declares a total length of zero."""

    def __init__(self, total_length: int) -> None:
        self.total_length = total_length
        super().__init__(
            f"Declared total_length {total_length} cannot advance the stream"
        )


class SourceLockedError(EventStreamError):
    """Raised when a byte source is already locked by another reader."""
    pass
