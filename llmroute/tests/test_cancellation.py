from __future__ import annotations

import threading

import pytest

from llmroute.base.cancellation import CancellationToken, CancelledError


def test_first_reason_wins():
    token = CancellationToken()
    assert not token.cancelled  # nosec B101 - pytest assert in tests
    token.cancel("user")
    token.cancel("timeout")
    assert token.cancelled and token.reason == "user"  # nosec B101 - pytest assert in tests


def test_raise_if_cancelled():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel()
    with pytest.raises(CancelledError, match="operation cancelled"):
        token.raise_if_cancelled()


def test_cancel_from_another_thread():
    token = CancellationToken()
    worker = threading.Thread(target=token.cancel, args=("worker",))
    worker.start()
    worker.join(timeout=5)
    assert token.cancelled and token.reason == "worker"  # nosec B101 - pytest assert in tests
