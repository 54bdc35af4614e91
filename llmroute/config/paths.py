"""User configuration directory resolution.

Follows the XDG spec: ``$XDG_CONFIG_HOME/llmroute`` when set and non-empty,
``%APPDATA%\\llmroute`` on Windows, otherwise ``~/.config/llmroute``.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

CONFIG_DIR_NAME = "llmroute"


def user_config_dir() -> Path:
    """Return the per-user configuration directory (not created)."""
    if root := os.environ.get("XDG_CONFIG_HOME"):
        return Path(root).expanduser() / CONFIG_DIR_NAME
    if sys.platform == "win32" and (appdata := os.environ.get("APPDATA")):
        return Path(appdata) / CONFIG_DIR_NAME
    return Path.home() / ".config" / CONFIG_DIR_NAME


__all__ = ["CONFIG_DIR_NAME", "user_config_dir"]
