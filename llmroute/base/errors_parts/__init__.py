"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `llmroute.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .completion_error import CompletionError, LlmRouteError
from .classification import classify_exception, status_to_code
from .fatal_errors import CallerError, CredentialNotFound, CredentialStoreError, RequestFailed

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
