"""
Pydantic DTOs for the OpenAI-style chat-completion wire format.

Purpose
-------
Validate the JSON records exchanged with the completion endpoint: the
outbound request body and the inbound response/chunk shapes. Only the
members the client reads are modelled; everything else is ignored so
provider-specific additions (usage, ids, reasoning fields) never fail
validation.

Content shapes
--------------
A record carries text in one of two places:

- ``choices[0].delta.content``: incremental shape used by streams.
- ``choices[0].message.content``: whole-message shape, used by blocking
  responses and by providers that stream complete messages.

:func:`extract_content` tries them in that order and reports which one
matched, so callers never inspect attributes themselves.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class WireText(BaseModel):
    """A ``delta`` or ``message`` object; only ``content`` matters here."""

    model_config = ConfigDict(extra="ignore")

    content: Optional[str] = None


class WireChoice(BaseModel):
    """One entry of ``choices``."""

    model_config = ConfigDict(extra="ignore")

    delta: Optional[WireText] = None
    message: Optional[WireText] = None


class ChatCompletionRecord(BaseModel):
    """A blocking response body or a single streamed chunk.

    Failure Modes:
        ``pydantic.ValidationError`` for non-JSON input, non-object JSON or
        ill-typed members (e.g. ``content`` that is not a string).
    """

    model_config = ConfigDict(extra="ignore")

    choices: List[WireChoice] = Field(default_factory=list)


ContentShape = Literal["delta", "message"]


def extract_content(record: ChatCompletionRecord) -> Optional[Tuple[ContentShape, str]]:
    """Return ``(shape, text)`` for the first choice, or ``None``.

    The delta shape wins whenever it carries a string, even an empty one; the
    message shape is consulted only when the delta shape is absent.
    """
    if not record.choices:
        return None
    choice = record.choices[0]
    if choice.delta is not None and choice.delta.content is not None:
        return "delta", choice.delta.content
    if choice.message is not None and choice.message.content is not None:
        return "message", choice.message.content
    return None


class PayloadMessage(BaseModel):
    """The single user message sent with every request."""

    role: Literal["user"] = "user"
    content: Union[str, List[Dict[str, Any]]]


class ChatCompletionPayload(BaseModel):
    """Outbound JSON body for ``POST /chat/completions``.

    Field order matches the serialized order.
    """

    model: str
    messages: List[PayloadMessage]
    temperature: float
    max_tokens: int
    stream: bool


__all__ = [
    "WireText",
    "WireChoice",
    "ChatCompletionRecord",
    "ContentShape",
    "extract_content",
    "PayloadMessage",
    "ChatCompletionPayload",
]
