"""Persistent CLI settings.

Purpose
-------
Persist the user's default model (and preferred log level) across CLI
invocations. Settings are stored as JSON under the user's configuration
directory: ``$XDG_CONFIG_HOME/llmroute/settings.json`` when set, otherwise
``~/.config/llmroute/settings.json``.

Public API
----------
- ``CLISettings``: dataclass container for settings.
- ``load_settings()``: load from disk (defaults on first run or unreadable file).
- ``save_settings(settings)``: persist atomically.
- ``model_settings_for(settings)``: build the :class:`ModelSettings` the
  client uses for omitted-model calls.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from ..base.logging import get_logger, log_event
from ..config import ModelSettings, get_client_config
from ..config.paths import user_config_dir

CONFIG_FILE_NAME = "settings.json"

_logger = get_logger("llmroute.cli")


def settings_path() -> Path:
    return user_config_dir() / CONFIG_FILE_NAME


@dataclass
class CLISettings:
    """Container for CLI user preferences.

    Attributes
    ----------
    default_model: Optional[str]
        Model used when ``--model`` is omitted; ``None`` defers to configuration.
    log_level: Optional[str]
        Level name applied at start-up unless ``--log-level`` is given.
    """

    default_model: Optional[str] = None
    log_level: Optional[str] = None


def _clean(value: object) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


def load_settings() -> CLISettings:
    """Load CLI settings from disk or return defaults if absent or unreadable."""
    path = settings_path()
    if not path.is_file():
        return CLISettings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        log_event(_logger, "cli.settings_unreadable", level=logging.WARNING, path=str(path), error=str(exc))
        return CLISettings()
    if not isinstance(data, dict):
        return CLISettings()
    return CLISettings(
        default_model=_clean(data.get("default_model")),
        log_level=(_clean(data.get("log_level")) or "").upper() or None,
    )


def save_settings(settings: CLISettings) -> Path:
    """Persist ``settings`` atomically and return the file path.

    Raises
    ------
    OSError
        When the directory or file cannot be written.
    """
    path = settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(".tmp")
    tmp_path.write_text(json.dumps(asdict(settings), ensure_ascii=False, indent=2), encoding="utf-8")
    os.replace(tmp_path, path)
    return path


def model_settings_for(settings: CLISettings) -> ModelSettings:
    """Return a :class:`ModelSettings` seeded from the persisted default."""
    return ModelSettings(settings.default_model or get_client_config()["model"])


__all__ = [
    "CLISettings",
    "CONFIG_FILE_NAME",
    "load_settings",
    "model_settings_for",
    "save_settings",
    "settings_path",
]
