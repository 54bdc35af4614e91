"""Payload and header builder for ``POST /chat/completions``.

Purpose:
    Turn a resolved :class:`CompletionRequest` plus the credential into the
    exact headers and JSON body sent to the endpoint, for both plain-text
    and structured (image-attached) prompts.

Notes:
    - Temperature and max tokens are forwarded as given; the remote API is
      the only validator.
    - The credential is not inspected. An empty credential still produces a
      bearer header and surfaces upstream as an authorization error.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..base.dto import ChatCompletionPayload, PayloadMessage
from ..base.errors import CallerError
from ..base.models import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    CompletionRequest,
    Prompt,
    StructuredContent,
)
from ..config.defaults import DEFAULT_REFERER, DEFAULT_TITLE

EVENT_STREAM = "text/event-stream"


class RequestBuilder:
    """Build ``(headers, body_bytes)`` for one completion call.

    Parameters:
        referer: Value of the ``HTTP-Referer`` identification header.
        title: Value of the ``X-Title`` identification header.
    """

    def __init__(self, referer: str = DEFAULT_REFERER, title: str = DEFAULT_TITLE) -> None:
        self.referer = referer
        self.title = title

    def build_headers(self, credential: str, *, stream: bool) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.referer,
            "X-Title": self.title,
        }
        if stream:
            headers["Accept"] = EVENT_STREAM
        return headers

    @staticmethod
    def build_payload(request: CompletionRequest) -> ChatCompletionPayload:
        """Return the validated body model for ``request``."""
        prompt = request.prompt
        content = prompt.to_wire() if isinstance(prompt, StructuredContent) else prompt
        return ChatCompletionPayload(
            model=request.model,
            messages=[PayloadMessage(content=content)],
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            stream=request.stream,
        )

    def build_request(self, request: CompletionRequest, credential: str) -> Tuple[Dict[str, str], bytes]:
        if not request.model or not request.model.strip():
            raise CallerError("model must be a non-empty identifier")
        prompt = request.prompt
        blank = prompt.is_empty() if isinstance(prompt, StructuredContent) else not prompt.strip()
        if blank:
            raise CallerError("prompt must not be empty", model=request.model)
        body = self.build_payload(request).model_dump_json().encode("utf-8")
        return self.build_headers(credential, stream=request.stream), body

    def build(
        self,
        model: Optional[str],
        prompt: Prompt,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        stream: bool = False,
        credential: str = "",
    ) -> Tuple[Dict[str, str], bytes]:
        """Build headers and the UTF-8 JSON body.

        Parameters:
            model: Resolved model identifier; empty is a caller error.
            prompt: Plain text or :class:`StructuredContent`.
            temperature: Sampling temperature, not clamped.
            max_tokens: Completion token limit.
            stream: Request an SSE response (adds ``Accept: text/event-stream``).
            credential: API key placed in the bearer header.

        Returns:
            ``(headers, body_bytes)``.

        Raises:
            CallerError: if ``model`` or ``prompt`` is empty (structured content
                counts as empty when it holds only blank text).
        """
        request = CompletionRequest(
            model=(model or "").strip(),
            prompt=prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            stream=stream,
        )
        return self.build_request(request, credential)


__all__ = ["EVENT_STREAM", "RequestBuilder"]
