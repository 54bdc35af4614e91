"""
llmroute base package

Provider-agnostic building blocks shared by the OpenRouter client and the CLI:

- Errors: fatal taxonomy and exception classification
- Models: immutable request/result values
- Streaming: SSE decoding into stream events
- Output: output-plan derivation and response aggregation
- Timeouts & cancellation for the single blocking read loop

Credential backends live in :mod:`llmroute.base.credentials` and are imported
from there directly.
"""

from .errors import (
    CallerError,
    CompletionError,
    CredentialNotFound,
    CredentialStoreError,
    ErrorCode,
    LlmRouteError,
    RequestFailed,
)
from .models import (
    CompletionRequest,
    CompletionResult,
    ContentPart,
    ImagePart,
    StructuredContent,
    TextPart,
)
from .timeouts import TimeoutConfig, get_timeout_config
from .cancellation import CancellationToken, CancelledError
from .streaming import (
    Delta,
    Done,
    Malformed,
    Metadata,
    StreamDecoder,
    StreamEvent,
    StreamMetrics,
)
from .output import OutputPlan, ResponseAggregator

__all__ = [
    # Errors
    "ErrorCode",
    "LlmRouteError",
    "CompletionError",
    "CallerError",
    "CredentialNotFound",
    "CredentialStoreError",
    "RequestFailed",
    # Models
    "TextPart",
    "ImagePart",
    "ContentPart",
    "StructuredContent",
    "CompletionRequest",
    "CompletionResult",
    # Timeouts & Cancellation
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "Delta",
    "Done",
    "Malformed",
    "Metadata",
    "StreamEvent",
    "StreamDecoder",
    "StreamMetrics",
    # Output
    "OutputPlan",
    "ResponseAggregator",
]
