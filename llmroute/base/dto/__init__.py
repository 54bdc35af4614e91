"""Wire-format DTOs (pydantic) for the chat-completion endpoint."""

from .chat_completion import (
    ChatCompletionPayload,
    ChatCompletionRecord,
    ContentShape,
    PayloadMessage,
    WireChoice,
    WireText,
    extract_content,
)

__all__ = [
    "ChatCompletionPayload",
    "ChatCompletionRecord",
    "ContentShape",
    "PayloadMessage",
    "WireChoice",
    "WireText",
    "extract_content",
]
