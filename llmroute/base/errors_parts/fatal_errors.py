"""
Fatal error kinds propagated to callers.

Each kind pins its :class:`ErrorCode` so callers can catch by type while log
events keep the normalized code. Absorbed conditions (malformed stream frames,
empty results) are deliberately not represented here; they never raise.
"""
from __future__ import annotations

from typing import Optional

from .classification import classify_exception, status_to_code
from .completion_error import CompletionError
from .error_code import ErrorCode

_BODY_EXCERPT_CHARS = 800


class CredentialNotFound(CompletionError):
    """No credential is available from any configured store."""

    def __init__(self, message: str, *, model: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.CREDENTIAL_NOT_FOUND, message=message, model=model)


class CredentialStoreError(CompletionError):
    """Persisting a credential to the selected backend failed."""

    def __init__(self, message: str, *, raw: Optional[BaseException] = None) -> None:
        super().__init__(code=ErrorCode.CREDENTIAL_STORE, message=message, raw=raw)


class CallerError(CompletionError):
    """Invalid input that defaults could not resolve; raised before any I/O."""

    def __init__(self, message: str, *, model: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.CALLER, message=message, model=model)


class RequestFailed(CompletionError):
    """Transport failure or non-success HTTP status for a completion call."""

    @classmethod
    def from_exception(cls, exc: BaseException, *, model: Optional[str] = None) -> "RequestFailed":
        """Wrap a transport exception, keeping its detail in the message.

        Parameters:
            exc: The exception raised by the HTTP layer.
            model: Target model for error context.

        Returns:
            A ``RequestFailed`` classified via :func:`classify_exception`.
        """
        detail = str(exc) or type(exc).__name__
        return cls(
            code=classify_exception(exc),
            message=f"request failed: {detail}",
            model=model,
            raw=exc,
        )

    @classmethod
    def from_status(cls, status: int, body: str, *, model: Optional[str] = None) -> "RequestFailed":
        """Build the error for a non-2xx response from its status and body.

        The body is truncated so that HTML error pages do not flood logs.
        """
        excerpt = (body or "").strip()[:_BODY_EXCERPT_CHARS]
        return cls(
            code=status_to_code(status),
            message=f"http {status}: {excerpt}" if excerpt else f"http {status}",
            model=model,
            status_code=status,
        )


__all__ = ["CredentialNotFound", "CredentialStoreError", "CallerError", "RequestFailed"]
