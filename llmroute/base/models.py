"""
Completion data model public surface.

Re-exports the value types under ``llmroute.base.models_parts`` so callers
import from one stable path.
"""

from .models_parts.content_part import (
    ContentPart,
    ContentPartKind,
    ImagePart,
    StructuredContent,
    TextPart,
)
from .models_parts.completion_request import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    CompletionRequest,
    Prompt,
)
from .models_parts.completion_result import CompletionResult

__all__ = [
    "ContentPart",
    "ContentPartKind",
    "ImagePart",
    "StructuredContent",
    "TextPart",
    "CompletionRequest",
    "Prompt",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "CompletionResult",
]
