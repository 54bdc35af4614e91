"""Unified configuration layer for llmroute.

Goals
-----
* Centralize defaults (model, base URL, attribution headers, credential backend).
* Merge sources in a predictable order, later wins:
    1. Built-in defaults (:mod:`llmroute.config.defaults`)
    2. Optional external config file (JSON or YAML) named by ``LLMROUTE_CONFIG_FILE``
    3. Environment variables (``LLMROUTE_MODEL``, ``LLMROUTE_BASE_URL``, ...)
    4. In-code overrides passed to :func:`get_client_config`
* Provide a single call site: ``get_client_config(overrides)``.

External Config File (Optional)
-------------------------------
If ``LLMROUTE_CONFIG_FILE`` is set to a path, JSON is attempted first and
YAML second. Either a flat mapping or one nested under ``openrouter`` is
accepted:

```
openrouter:
  model: openrouter/auto
  base_url: https://openrouter.ai/api/v1
  title: my-tool
```

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
* ModelSettings: explicit holder of the default model
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from ..base.logging import get_logger, log_event
from .defaults import DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_REFERER, DEFAULT_TITLE
from .env import CONFIG_FILE_ENV, env_overrides, read_env
from .model_settings import ModelSettings

_logger = get_logger("llmroute.config")

DEFAULTS: Dict[str, Any] = {
    "model": DEFAULT_MODEL,
    "base_url": DEFAULT_BASE_URL,
    "referer": DEFAULT_REFERER,
    "title": DEFAULT_TITLE,
    "credential_backend": None,
}

_SECTION = "openrouter"

# (path, mtime) -> parsed mapping
_FILE_CACHE: Optional[Tuple[Tuple[str, float], Dict[str, Any]]] = None


def _parse_config_text(text: str, path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            log_event(_logger, "config.file_invalid", level=logging.WARNING, path=str(path), error=str(exc))
            return {}
    if not isinstance(data, dict):
        return {}
    section = data.get(_SECTION)
    if isinstance(section, dict):
        return section
    return data


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    raw = read_env(CONFIG_FILE_ENV)
    if not raw:
        return {}
    p = Path(raw).expanduser()
    if not p.is_file():
        return {}
    key = (str(p), p.stat().st_mtime)
    if _FILE_CACHE is not None and _FILE_CACHE[0] == key:
        return _FILE_CACHE[1]
    data = _parse_config_text(p.read_text(encoding="utf-8"), p)
    _FILE_CACHE = (key, data)
    return data


def reset_config_cache() -> None:
    """Forget the parsed config file (tests)."""
    global _FILE_CACHE
    _FILE_CACHE = None


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    Unknown keys from the file are dropped; ``None`` overrides are ignored.
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)
    file_cfg = _load_external_config()
    cfg |= {k: v for k, v in file_cfg.items() if k in DEFAULTS and v is not None}
    cfg |= env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_model() -> str:
    return get_client_config()["model"]


__all__ = [
    "DEFAULTS",
    "ModelSettings",
    "get_client_config",
    "get_model",
    "reset_config_cache",
]
