"""Primary backend with an environment-variable fallback."""

from __future__ import annotations

from typing import Optional, Tuple

from ..logging import get_logger, log_event
from .environment import EnvironmentCredentialProvider
from .provider import CredentialBackend, CredentialProvider

_logger = get_logger("llmroute.credentials")


class CredentialChain:
    """Read from ``primary`` first and ``fallback`` second; write to ``primary``.

    The secret itself is never logged; ``credentials.lookup`` records only
    which backend answered.
    """

    def __init__(self, primary: CredentialProvider, fallback: Optional[CredentialProvider] = None) -> None:
        self.primary = primary
        self.fallback = fallback if fallback is not None else EnvironmentCredentialProvider()

    @property
    def backend(self) -> CredentialBackend:
        return self.primary.backend

    def lookup(self) -> Tuple[Optional[str], Optional[CredentialBackend]]:
        """Return ``(secret, backend that held it)``; ``(None, None)`` if absent."""
        for provider in (self.primary, self.fallback):
            if secret := provider.get():
                log_event(_logger, "credentials.lookup", source=provider.backend.value, found=True)
                return secret, provider.backend
        log_event(_logger, "credentials.lookup", source=None, found=False, keep_none=True)
        return None, None

    def get(self) -> Optional[str]:
        return self.lookup()[0]

    def set(self, secret: str) -> None:
        self.primary.set(secret)

    def __repr__(self) -> str:
        return f"CredentialChain(primary={self.primary!r}, fallback={self.fallback!r})"


__all__ = ["CredentialChain"]
