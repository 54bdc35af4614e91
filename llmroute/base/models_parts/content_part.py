"""
Structured prompt content for the vision request variant.

A prompt is either plain text or a :class:`StructuredContent`: an ordered
sequence of :class:`TextPart` and at most one :class:`ImagePart`. Order is
kept exactly as given because providers render parts in sequence.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Literal, Tuple, Union

from ..errors import CallerError

ContentPartKind = Literal["text", "image"]


@dataclass(frozen=True)
class TextPart:
    """A text fragment of a structured prompt."""

    value: str
    kind: ContentPartKind = "text"

    def to_wire(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.value}


@dataclass(frozen=True)
class ImagePart:
    """An inline image, already base64-encoded by the caller.

    Attributes:
        mime_type: Image MIME type, e.g. ``"image/png"``.
        base64_data: Base64 payload without a ``data:`` prefix.
    """

    mime_type: str
    base64_data: str
    kind: ContentPartKind = "image"

    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"

    def to_wire(self) -> Dict[str, Any]:
        return {"type": "image_url", "image_url": {"url": self.data_url()}}


ContentPart = Union[TextPart, ImagePart]


@dataclass(frozen=True)
class StructuredContent:
    """Ordered, immutable sequence of content parts.

    Raises:
        CallerError: when the sequence is empty or holds more than one image.
    """

    parts: Tuple[ContentPart, ...]

    def __post_init__(self) -> None:
        if not self.parts:
            raise CallerError("structured content must contain at least one part")
        images = sum(1 for p in self.parts if isinstance(p, ImagePart))
        if images > 1:
            raise CallerError(f"structured content supports one image, got {images}")

    @classmethod
    def of(cls, *parts: ContentPart) -> "StructuredContent":
        return cls(parts=tuple(parts))

    def __iter__(self) -> Iterator[ContentPart]:
        return iter(self.parts)

    def __len__(self) -> int:
        return len(self.parts)

    def is_empty(self) -> bool:
        """Return True when every part is blank text (no image, no words)."""
        return all(isinstance(p, TextPart) and not p.value.strip() for p in self.parts)

    def to_wire(self) -> List[Dict[str, Any]]:
        """Return the OpenAI-style content array for the ``messages`` field."""
        return [p.to_wire() for p in self.parts]


__all__ = [
    "ContentPartKind",
    "TextPart",
    "ImagePart",
    "ContentPart",
    "StructuredContent",
]
