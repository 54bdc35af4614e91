"""llmroute.config.defaults
=========================

Central place for the small, stable default values used across llmroute.
Every value here can be overridden through the configuration file, the
environment or explicit overrides (see :func:`llmroute.config.get_client_config`).

This module performs no I/O and imports nothing from the rest of the package
so it can be used from anywhere without circular imports.
"""

from __future__ import annotations

# ---- Endpoint ----
# Model used by every call that does not name one, until changed at runtime.
DEFAULT_MODEL = "openrouter/auto"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
COMPLETIONS_PATH = "/chat/completions"

# Attribution headers sent with every request.
DEFAULT_REFERER = "https://github.com/llmroute/llmroute"
DEFAULT_TITLE = "llmroute"

# ---- Vision ----
# Instruction paired with an image by ``CompletionClient.describe_image``.
ALT_TEXT_INSTRUCTION = (
    "Write concise alt text for this image. Describe the subject, any visible "
    "text verbatim, and the details a reader who cannot see the image would "
    "need. Answer with the alt text only, in one or two sentences."
)

# ---- Credentials ----
# Fixed identifier under which the API key is stored in every backend.
CREDENTIAL_SERVICE = "llmroute"
CREDENTIAL_ACCOUNT = "openrouter-api-key"  # pragma: allowlist secret - account label, not a secret
API_KEY_ENV = "OPENROUTER_API_KEY"  # pragma: allowlist secret - env var name, not a secret
KEYSTORE_FILENAME = "keys.db"

# ---- SQLite keystore ----
SQLITE_BUSY_TIMEOUT_MS = 5000


__all__ = [
    "DEFAULT_MODEL",
    "DEFAULT_BASE_URL",
    "COMPLETIONS_PATH",
    "DEFAULT_REFERER",
    "DEFAULT_TITLE",
    "ALT_TEXT_INSTRUCTION",
    "CREDENTIAL_SERVICE",
    "CREDENTIAL_ACCOUNT",
    "API_KEY_ENV",
    "KEYSTORE_FILENAME",
    "SQLITE_BUSY_TIMEOUT_MS",
]
