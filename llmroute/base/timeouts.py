"""Unified timeout configuration for completion calls.

This module centralizes the timeout values used by the HTTP layer so no
other module carries numeric literals for them. Model generation can be
slow, so the read/write timeout is measured in minutes while connection
establishment keeps a short bound.

Key Components
--------------
TimeoutConfig
    Frozen dataclass capturing normalized timeout values.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again only when the relevant variables change. Supported
    environment variables (all optional):
        LLMROUTE_TIMEOUT_CONNECT_SECONDS
        LLMROUTE_TIMEOUT_READ_SECONDS

Failure Modes
-------------
Unparsable or non-positive overrides fall back to the defaults. A read that
exceeds ``read_timeout_seconds`` surfaces from ``httpx`` as a timeout and is
reported as ``RequestFailed``; it is never treated as a malformed frame.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

CONNECT_ENV = "LLMROUTE_TIMEOUT_CONNECT_SECONDS"
READ_ENV = "LLMROUTE_TIMEOUT_READ_SECONDS"

DEFAULT_CONNECT_TIMEOUT_SECONDS = 30.0
DEFAULT_READ_TIMEOUT_SECONDS = 300.0


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Bound on establishing the TCP/TLS connection
            and acquiring a pooled connection.
        read_timeout_seconds: Bound on each blocking read or write, including
            the wait for the next streamed line.
    """

    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    read_timeout_seconds: float = DEFAULT_READ_TIMEOUT_SECONDS

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        return httpx.Timeout(
            self.read_timeout_seconds,
            connect=self.connect_timeout_seconds,
            pool=self.connect_timeout_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = f"{os.getenv(CONNECT_ENV, '')}/{os.getenv(READ_ENV, '')}"
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(CONNECT_ENV, DEFAULT_CONNECT_TIMEOUT_SECONDS),
        read_timeout_seconds=_parse_env_float(READ_ENV, DEFAULT_READ_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
