"""Helpers for invoking trusted platform credential tools.

Purpose
    Resolve and run the fixed platform executables (``security`` on macOS,
    ``secret-tool`` on Linux) with ``shell=False`` and a fixed argument list.

Fallback Semantics
    Resolution and validation errors propagate; backends decide whether a
    failure means "not found" (``get``) or a store error (``set``).
"""

from __future__ import annotations

import os
import shutil
import stat
import subprocess  # nosec B404 - required for invoking trusted platform credential tools (fixed arg list)
from typing import Callable, List, Optional

# Seconds allowed for one tool invocation; keyring unlock prompts can be slow.
TOOL_TIMEOUT_SECONDS = 30

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


def _validate_executable(path: str, expected: str) -> None:
    """Validate a resolved executable path.

    Raises
    ------
    RuntimeError
        If the basename differs, the file is not a regular executable, or it
        is group/other writable.
    """
    if os.path.basename(path) != expected:
        raise RuntimeError(f"resolved executable basename mismatch (expected {expected!r}): {path}")
    try:
        st = os.stat(path)
    except OSError as exc:  # pragma: no cover - unexpected I/O failure
        raise RuntimeError(f"cannot stat {expected} executable {path}: {exc}") from exc
    if not stat.S_ISREG(st.st_mode) or not os.access(path, os.X_OK):
        raise RuntimeError(f"{expected} is not an executable regular file: {path}")
    if st.st_mode & 0o022:
        raise RuntimeError(f"{expected} executable has insecure write permissions (group/other writable): {path}")


def resolve_tool(name: str) -> str:
    """Return the absolute, validated path of ``name`` on ``PATH``.

    Raises
    ------
    FileNotFoundError
        If the executable cannot be located.
    RuntimeError
        If validation fails.
    """
    exe_path = shutil.which(name)
    if not exe_path:
        raise FileNotFoundError(f"{name!r} executable not found on PATH")
    abs_path = os.path.abspath(exe_path)
    _validate_executable(abs_path, name)
    return abs_path


def tool_available(name: str) -> bool:
    return shutil.which(name) is not None


def run_tool(cmd: List[str], *, stdin: Optional[str] = None, runner: Optional[Runner] = None) -> "subprocess.CompletedProcess[str]":
    """Run ``cmd`` and return the completed process without checking its status."""
    run = runner or subprocess.run
    return run(  # nosec B603 - fixed, validated arg list; shell=False
        cmd,
        input=stdin,
        capture_output=True,
        text=True,
        encoding="utf-8",
        check=False,
        timeout=TOOL_TIMEOUT_SECONDS,
    )


__all__ = ["TOOL_TIMEOUT_SECONDS", "Runner", "resolve_tool", "tool_available", "run_tool"]
