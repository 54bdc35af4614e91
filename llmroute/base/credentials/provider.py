"""Credential provider contract and backend identifiers.

A credential provider stores one secret under a fixed identifier. ``get``
returns ``None`` when nothing is stored; ``set`` raises
:class:`~llmroute.base.errors.CredentialStoreError` when the store rejects
the write. Nothing else is required by the completion client.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol, runtime_checkable


class CredentialBackend(str, Enum):
    """Closed set of storage backends."""

    KEYCHAIN = "keychain"  # macOS login keychain
    SECRET_SERVICE = "secret_service"  # freedesktop Secret Service (GNOME keyring, KWallet)
    KEYSTORE = "keystore"  # SQLite file under the user config dir
    ENVIRONMENT = "environment"  # OPENROUTER_API_KEY

    @classmethod
    def parse(cls, value: str) -> "CredentialBackend":
        """Return the backend named by ``value`` (case-insensitive, ``-`` or ``_``)."""
        norm = value.strip().lower().replace("-", "_")
        try:
            return cls(norm)
        except ValueError:
            choices = ", ".join(b.value for b in cls)
            raise ValueError(f"unknown credential backend {value!r} (expected one of: {choices})") from None


@runtime_checkable
class CredentialProvider(Protocol):
    """Two-method capability consumed by the completion client."""

    backend: CredentialBackend

    def get(self) -> Optional[str]:
        """Return the stored secret, or ``None`` when not found."""
        ...

    def set(self, secret: str) -> None:
        """Store ``secret``, replacing any previous value."""
        ...


__all__ = ["CredentialBackend", "CredentialProvider"]
