"""SQLite-backed credential backend.

Used on Windows and on any host without a platform credential tool. Keys live
in a ``keys`` table of a database file under the user config directory; the
file is created with owner-only permissions where the platform supports them.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sqlite3
from pathlib import Path
from typing import Iterator, Optional, Union

from ...config.defaults import CREDENTIAL_ACCOUNT, KEYSTORE_FILENAME, SQLITE_BUSY_TIMEOUT_MS
from ...config.paths import user_config_dir
from ..errors import CredentialStoreError
from ..logging import get_logger, log_event
from .provider import CredentialBackend

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS keys ("
    "account TEXT PRIMARY KEY, "
    "api_key TEXT NOT NULL, "
    "updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP)"
)
_UPSERT = (
    "INSERT INTO keys(account, api_key, updated_at) VALUES(?, ?, CURRENT_TIMESTAMP) "
    "ON CONFLICT(account) DO UPDATE SET api_key=excluded.api_key, updated_at=CURRENT_TIMESTAMP"
)

_logger = get_logger("llmroute.credentials")


def default_keystore_path() -> Path:
    return user_config_dir() / KEYSTORE_FILENAME


class KeystoreCredentialProvider:
    """Store the key in a local SQLite file.

    Parameters
    ----------
    db_path:
        Database file; defaults to ``<user config dir>/keys.db``.
    account:
        Row identifier, normalized to lowercase.
    """

    backend = CredentialBackend.KEYSTORE

    def __init__(self, db_path: Optional[Union[str, Path]] = None, account: str = CREDENTIAL_ACCOUNT) -> None:
        self.db_path = Path(db_path).expanduser() if db_path else default_keystore_path()
        self.account = account.lower()

    @contextlib.contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.execute(f"PRAGMA busy_timeout={int(SQLITE_BUSY_TIMEOUT_MS)}")
            conn.execute(_SCHEMA)
            yield conn
        finally:
            conn.close()

    def get(self) -> Optional[str]:
        """Return the stored key.

        A missing database file means not found; so does an unreadable or
        corrupt one, which is logged as ``credentials.tool_error``.
        """
        if not self.db_path.is_file():
            return None
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT api_key FROM keys WHERE account = ?", (self.account,)).fetchone()
        except sqlite3.Error as exc:
            log_event(
                _logger,
                "credentials.tool_error",
                level=logging.WARNING,
                backend=self.backend.value,
                path=str(self.db_path),
                error=str(exc),
            )
            return None
        return row[0] if row and row[0] else None

    def set(self, secret: str) -> None:
        if not secret:
            raise CredentialStoreError("refusing to store an empty credential")
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            created = not self.db_path.exists()
            with self._connect() as conn:
                with conn:
                    conn.execute(_UPSERT, (self.account, secret))
            if created:
                with contextlib.suppress(OSError):
                    os.chmod(self.db_path, 0o600)
        except (OSError, sqlite3.Error) as exc:
            raise CredentialStoreError(f"keystore write failed: {exc}", raw=exc) from exc

    def delete(self) -> None:
        """Remove the stored key (idempotent)."""
        if not self.db_path.is_file():
            return
        with self._connect() as conn:
            with conn:
                conn.execute("DELETE FROM keys WHERE account = ?", (self.account,))

    def __repr__(self) -> str:
        return f"KeystoreCredentialProvider(db_path={str(self.db_path)!r})"


__all__ = ["KeystoreCredentialProvider", "default_keystore_path"]
