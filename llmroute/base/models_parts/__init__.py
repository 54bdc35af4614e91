"""Model parts package (one value type per module)."""

from .content_part import ContentPart, ContentPartKind, ImagePart, StructuredContent, TextPart
from .completion_request import CompletionRequest, Prompt
from .completion_result import CompletionResult

__all__ = [
    "ContentPart",
    "ContentPartKind",
    "ImagePart",
    "StructuredContent",
    "TextPart",
    "CompletionRequest",
    "Prompt",
    "CompletionResult",
]
