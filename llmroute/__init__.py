"""llmroute package

Client and CLI for OpenRouter-style chat completions: streaming or blocking
calls, console/file/return-value output routing, and platform credential
storage for the API key.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`CompletionClient`, :class:`RequestBuilder`
    - Default model: :class:`ModelSettings`
    - Results: :class:`CompletionResult`, :class:`StructuredContent`,
      :class:`TextPart`, :class:`ImagePart`
    - Exceptions: :class:`LlmRouteError`, :class:`CompletionError`,
      :class:`CallerError`, :class:`CredentialNotFound`,
      :class:`CredentialStoreError`, :class:`RequestFailed`, :class:`ErrorCode`
    - Cancellation: :class:`CancellationToken`

Example::

    from llmroute import CompletionClient, ModelSettings

    settings = ModelSettings()
    client = CompletionClient(settings)
    result = client.complete("Summarize RFC 9110 in one line")
"""

from .base.cancellation import CancellationToken
from .base.errors import (
    CallerError,
    CompletionError,
    CredentialNotFound,
    CredentialStoreError,
    ErrorCode,
    LlmRouteError,
    RequestFailed,
)
from .base.models import CompletionResult, ImagePart, StructuredContent, TextPart
from .config import ModelSettings
from .openrouter import CompletionClient, RequestBuilder

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CompletionClient",
    "RequestBuilder",
    "ModelSettings",
    "CompletionResult",
    "StructuredContent",
    "TextPart",
    "ImagePart",
    "CancellationToken",
    "ErrorCode",
    "LlmRouteError",
    "CompletionError",
    "CallerError",
    "CredentialNotFound",
    "CredentialStoreError",
    "RequestFailed",
]
