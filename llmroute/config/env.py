"""llmroute.config.env
====================

Environment variable names and the helpers that read them.

Purpose
-------
- Single source of truth for the ``LLMROUTE_*`` variables that override
  client configuration, and for the credential variable.
- Helpers never raise on unset variables; blank values count as unset.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

from .defaults import API_KEY_ENV

CONFIG_FILE_ENV = "LLMROUTE_CONFIG_FILE"

# Config field -> environment variable
ENV_MAP: Dict[str, str] = {
    "model": "LLMROUTE_MODEL",
    "base_url": "LLMROUTE_BASE_URL",
    "referer": "LLMROUTE_REFERER",
    "title": "LLMROUTE_TITLE",
    "credential_backend": "LLMROUTE_CREDENTIAL_BACKEND",
}


def read_env(name: str) -> Optional[str]:
    """Return the stripped value of ``name`` or ``None`` when unset or blank."""
    val = os.environ.get(name)
    if val is None:
        return None
    val = val.strip()
    return val or None


def env_overrides() -> Dict[str, str]:
    """Collect configuration fields set through the environment."""
    out: Dict[str, str] = {}
    for field, name in ENV_MAP.items():
        if (val := read_env(name)) is not None:
            out[field] = val
    return out


def resolve_api_key_env() -> Optional[str]:
    """Return the API key from :data:`API_KEY_ENV`, if set."""
    return read_env(API_KEY_ENV)


__all__ = [
    "API_KEY_ENV",
    "CONFIG_FILE_ENV",
    "ENV_MAP",
    "read_env",
    "env_overrides",
    "resolve_api_key_env",
]
