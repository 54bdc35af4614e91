"""
Structured completion error exception types.

``LlmRouteError`` is the package root. ``CompletionError`` carries a
normalized `ErrorCode` together with the model and the HTTP status (when one
exists) so callers and log events see the same shape for every fatal failure.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


class LlmRouteError(Exception):
    """Base class for every error raised by ``llmroute``."""


@dataclass(eq=False)
class CompletionError(LlmRouteError):
    """Represents a fatal completion failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        model: Optional model identifier the call targeted.
        status_code: HTTP status returned by the endpoint, when any.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    model: Optional[str] = None
    status_code: Optional[int] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining model, code, status and message."""
        status = f" [{self.status_code}]" if self.status_code is not None else ""
        return f"{self.model or '-'} {self.code.value}{status}: {self.message}"


__all__ = ["LlmRouteError", "CompletionError"]
