"""
Normalized completion error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the completion client, the
credential layer and the output aggregator. Values are lowercase snake_case
and are considered a stable contract for structured log events.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    # Fatal, raised to the caller
    CREDENTIAL_NOT_FOUND = "credential_not_found"
    CREDENTIAL_STORE = "credential_store"
    CALLER = "caller"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    DECODE = "decode"
    UNKNOWN = "unknown"

    # Absorbed locally, only ever logged
    EMPTY_RESULT = "empty_result"
    MALFORMED_FRAME = "malformed_frame"
    CANCELLED = "cancelled"


__all__ = ["ErrorCode"]
