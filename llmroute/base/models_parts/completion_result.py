"""
CompletionResult DTO.

The aggregate outcome of one request: the reassembled text and, when full
fidelity was requested, every provider-native record in arrival order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class CompletionResult:
    """Text content plus optional raw provider records.

    Attributes:
        text: Deltas concatenated in arrival order, or the single
            non-streaming message content.
        raw_events: Provider JSON records (one per streamed frame, or the one
            blocking response body); ``None`` unless full fidelity was asked for.
    """

    text: str
    raw_events: Optional[Tuple[Dict[str, Any], ...]] = None

    def __str__(self) -> str:
        return self.text

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {
            "text": self.text,
            "raw_events": list(self.raw_events) if self.raw_events is not None else None,
        }


__all__ = ["CompletionResult"]
