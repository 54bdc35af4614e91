"""Shared test doubles: static credentials, a recording mock transport and
builders for blocking and SSE chat-completion responses."""

from __future__ import annotations

import json
from typing import Callable, Dict, List, Optional

import httpx

from llmroute.base.credentials import CredentialBackend

Handler = Callable[[httpx.Request], httpx.Response]


class StaticCredentials:
    """In-memory credential provider."""

    def __init__(self, secret: Optional[str] = "sk-or-test") -> None:  # pragma: allowlist secret - test value
        self.backend = CredentialBackend.ENVIRONMENT
        self.secret = secret
        self.get_calls = 0

    def get(self) -> Optional[str]:
        self.get_calls += 1
        return self.secret

    def set(self, secret: str) -> None:
        self.secret = secret


class RecordingTransport:
    """``httpx.MockTransport`` wrapper that records every request it serves."""

    def __init__(self, handler: Handler) -> None:
        self.requests: List[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._serve)

    def _serve(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self._handler(request)

    @property
    def count(self) -> int:
        return len(self.requests)

    def body(self, index: int = -1) -> Dict:
        return json.loads(self.requests[index].content)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=self.transport)


def chat_response(text: Optional[str], status: int = 200) -> httpx.Response:
    """Blocking chat-completion response with ``text`` as message content."""
    message = {"role": "assistant"} if text is None else {"role": "assistant", "content": text}
    return httpx.Response(status, json={"id": "gen-1", "choices": [{"index": 0, "message": message}]})


def sse_frames(*chunks: str, done: bool = True) -> bytes:
    """Encode delta chunks as an SSE body, optionally terminated by ``[DONE]``."""
    lines = [": OPENROUTER PROCESSING", ""]
    for chunk in chunks:
        lines.append("data: " + json.dumps({"choices": [{"index": 0, "delta": {"content": chunk}}]}))
        lines.append("")
    if done:
        lines.extend(["data: [DONE]", ""])
    return ("\n".join(lines) + "\n").encode("utf-8")


def sse_response(*chunks: str, done: bool = True, status: int = 200) -> httpx.Response:
    return httpx.Response(
        status,
        content=sse_frames(*chunks, done=done),
        headers={"content-type": "text/event-stream"},
    )




__all__ = [
    "Handler",
    "StaticCredentials",
    "RecordingTransport",
    "chat_response",
    "sse_frames",
    "sse_response",
]
