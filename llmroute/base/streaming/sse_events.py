"""Stream event variants produced by the SSE decoder.

Four variants form a closed union:

- :class:`Delta`: one non-empty fragment of generated text, with the parsed
  provider record it came from.
- :class:`Metadata`: a well-formed provider record that carries no text
  (role announcement, ``finish_reason``, ``usage`` or error chunks). It never
  contributes text; it exists so full-fidelity capture sees every record.
- :class:`Done`: the ``[DONE]`` sentinel was received; nothing follows.
- :class:`Malformed`: a ``data:`` frame that could not be parsed as a
  provider record. Diagnostic only; it never contributes text and never
  raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Union

from ..dto import ContentShape

MalformedReason = Literal["json", "shape"]


@dataclass(frozen=True)
class Delta:
    """Incremental text extracted from one frame.

    Fields:
      text: non-empty text fragment
      shape: which wire shape carried it (``"delta"`` or ``"message"``)
      record: the provider-native JSON object, kept for full-fidelity capture
    """

    text: str
    shape: ContentShape = "delta"
    record: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Metadata:
    """A text-free provider record, e.g. ``{"choices": [], "usage": {...}}``."""

    record: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Done:
    """Terminal sentinel; the decoder stops reading after yielding it."""


@dataclass(frozen=True)
class Malformed:
    """A frame skipped by the decoder.

    Fields:
      raw: the payload text after the ``data:`` marker
      reason: ``"json"`` when it is not JSON, ``"shape"`` when the JSON does
        not match the record shape
    """

    raw: str
    reason: MalformedReason = "json"


StreamEvent = Union[Delta, Metadata, Done, Malformed]


__all__ = [
    "Delta",
    "Metadata",
    "Done",
    "Malformed",
    "MalformedReason",
    "StreamEvent",
]
