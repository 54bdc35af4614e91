"""Cooperative cancellation for streaming calls.

A streaming completion runs until ``[DONE]``, connection close or timeout.
Callers that need to stop earlier (another thread, a signal handler, a UI)
hand a :class:`CancellationToken` to ``CompletionClient.complete``. The
stream decoder polls it before each blocking line read; once set, the event
sequence ends and leaving the response context closes the connection.
"""

from __future__ import annotations

import threading
from typing import Optional


class CancelledError(RuntimeError):
    """Raised by :meth:`CancellationToken.raise_if_cancelled` once cancelled."""


class CancellationToken:
    """Thread-safe, one-shot cancellation flag with an optional reason."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        """Reason supplied to the first :meth:`cancel` call, if any."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation; later calls keep the first reason."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if cancellation was requested."""
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken", "CancelledError"]
