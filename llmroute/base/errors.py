"""Unified completion error taxonomy public surface.

This module re-exports the implementations under
``llmroute.base.errors_parts`` to keep a stable import path.

Propagation policy:
    ``CredentialNotFound``, ``RequestFailed`` and ``CallerError`` propagate to
    the caller. Malformed stream frames and empty results are absorbed: the
    former become ``Malformed`` stream events, the latter an absent return
    value plus an ``output.empty_result`` log event.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.completion_error import CompletionError, LlmRouteError
from .errors_parts.classification import classify_exception, status_to_code
from .errors_parts.fatal_errors import (
    CallerError,
    CredentialNotFound,
    CredentialStoreError,
    RequestFailed,
)

__all__ = [
    "ErrorCode",
    "LlmRouteError",
    "CompletionError",
    "classify_exception",
    "status_to_code",
    "CallerError",
    "CredentialNotFound",
    "CredentialStoreError",
    "RequestFailed",
]
