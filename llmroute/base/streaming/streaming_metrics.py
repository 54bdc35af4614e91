"""Streaming metrics data structures.

Collected by the decoder for a single stream and logged with the
``stream.end`` event.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal, Optional

StreamTermination = Literal["done", "closed", "cancelled"]


@dataclass
class StreamMetrics:
    """Counters for one decoded stream.

    Attributes:
        frames: ``data:`` lines seen (the ``[DONE]`` sentinel included).
        emitted: Delta events yielded.
        malformed: Frames skipped as unparsable.
        metadata: Well-formed records without text (role, finish, usage).
        time_to_first_delta_ms: Latency from decode start to the first delta.
        total_duration_ms: Latency from decode start to termination.
        terminated_by: How the stream ended, once it has.
    """

    frames: int = 0
    emitted: int = 0
    malformed: int = 0
    metadata: int = 0
    time_to_first_delta_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    terminated_by: Optional[StreamTermination] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["StreamMetrics", "StreamTermination"]
