"""
CompletionRequest value object.

Built once per call after default-model resolution and never mutated.
Temperature is carried as given: values outside the usual 0.0 to 1.0 range
are forwarded to the remote API unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .content_part import StructuredContent

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000

Prompt = Union[str, StructuredContent]


@dataclass(frozen=True)
class CompletionRequest:
    """Normalized chat-completion request.

    Attributes:
        model: Target model identifier (already resolved).
        prompt: Plain text or structured content for the single user message.
        temperature: Sampling temperature, passed through without clamping.
        max_tokens: Completion token limit.
        stream: Whether the response is consumed as an event stream.
    """

    model: str
    prompt: Prompt
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    stream: bool = False

    def is_structured(self) -> bool:
        """Return True if the prompt is a structured content sequence."""
        return isinstance(self.prompt, StructuredContent)


__all__ = ["CompletionRequest", "Prompt", "DEFAULT_TEMPERATURE", "DEFAULT_MAX_TOKENS"]
