"""Streaming package.

Exposes the SSE decoder, its event variants and per-stream metrics under a
single namespace.
"""

from .sse_events import Delta, Done, Malformed, MalformedReason, Metadata, StreamEvent
from .sse_decoder import DATA_PREFIX, DONE_SENTINEL, StreamDecoder, decode_stream, parse_frame
from .streaming_metrics import StreamMetrics, StreamTermination

__all__ = [
    "Delta",
    "Done",
    "Malformed",
    "MalformedReason",
    "Metadata",
    "StreamEvent",
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "StreamDecoder",
    "decode_stream",
    "parse_frame",
    "StreamMetrics",
    "StreamTermination",
]
