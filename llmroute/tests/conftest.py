"""Pytest configuration for the llmroute test suite.

Every test runs with:

- no ``OPENROUTER_API_KEY`` or ``LLMROUTE_*`` variables from the host,
- ``XDG_CONFIG_HOME`` pointed at a temporary directory, so settings and the
  SQLite keystore never touch the real user config,
- a fresh HTTP client pool and config-file cache,
- the shared ``llmroute`` logger writing to an in-memory sink instead of the
  real stderr, with its level restored afterwards.
"""

from __future__ import annotations

import io
import json
import logging
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import pytest

from llmroute.base.http import close_all_clients
from llmroute.base.logging import BASE_LOGGER_NAME, get_logger
from llmroute.config import reset_config_cache
from llmroute.tests.utils import Handler, RecordingTransport, StaticCredentials

_ENV_VARS = (
    "OPENROUTER_API_KEY",
    "LLMROUTE_CONFIG_FILE",
    "LLMROUTE_MODEL",
    "LLMROUTE_BASE_URL",
    "LLMROUTE_REFERER",
    "LLMROUTE_TITLE",
    "LLMROUTE_CREDENTIAL_BACKEND",
    "LLMROUTE_LOG_LEVEL",
    "LLMROUTE_TIMEOUT_CONNECT_SECONDS",
    "LLMROUTE_TIMEOUT_READ_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    close_all_clients()
    reset_config_cache()
    yield
    close_all_clients()
    reset_config_cache()


@pytest.fixture(autouse=True)
def quiet_logging() -> Iterator[io.StringIO]:
    """Route the shared console handler to a buffer for the test's duration."""
    base = get_logger()
    level = base.level
    sink = io.StringIO()
    swapped = []
    for h in base.handlers:
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
            swapped.append((h, h.setStream(sink)))
    yield sink
    for h, stream in swapped:
        h.setStream(stream)
    base.setLevel(level)


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


class LogCapture:
    """Structured view over captured ``log_event`` records."""

    def __init__(self, handler: _ListHandler) -> None:
        self._handler = handler

    def events(self, name: Optional[str] = None) -> List[Tuple[int, Dict]]:
        out = []
        for rec in self._handler.records:
            try:
                payload = json.loads(rec.getMessage())
            except ValueError:
                continue
            if name is None or payload.get("event") == name:
                out.append((rec.levelno, payload))
        return out


@pytest.fixture()
def log_capture() -> Iterator[LogCapture]:
    """Attach a list handler to the ``llmroute`` logger at DEBUG.

    The base logger does not propagate, so pytest's ``caplog`` never sees
    these records.
    """
    base = logging.getLogger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    try:
        yield LogCapture(handler)
    finally:
        base.removeHandler(handler)


@pytest.fixture()
def static_credentials() -> StaticCredentials:
    return StaticCredentials()


@pytest.fixture()
def recording_transport() -> Callable[[Handler], RecordingTransport]:
    return RecordingTransport
