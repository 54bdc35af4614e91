"""macOS keychain backend built on the ``security`` command-line tool."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - exception types only
from typing import Optional

from ...config.defaults import CREDENTIAL_ACCOUNT, CREDENTIAL_SERVICE
from ..errors import CredentialStoreError
from ..logging import get_logger, log_event
from ._tool import Runner, resolve_tool, run_tool
from .provider import CredentialBackend

# ``security`` exit status for "The specified item could not be found in the keychain."
_ITEM_NOT_FOUND = 44

_logger = get_logger("llmroute.credentials")


class KeychainCredentialProvider:
    """Generic-password item in the login keychain.

    Parameters
    ----------
    service, account:
        Item identifiers; fixed per installation.
    runner:
        ``subprocess.run`` replacement (tests).
    """

    backend = CredentialBackend.KEYCHAIN
    tool = "security"

    def __init__(
        self,
        service: str = CREDENTIAL_SERVICE,
        account: str = CREDENTIAL_ACCOUNT,
        *,
        runner: Optional[Runner] = None,
        executable: Optional[str] = None,
    ) -> None:
        self.service = service
        self.account = account
        self._runner = runner
        self._executable = executable

    def _exe(self) -> str:
        return self._executable or resolve_tool(self.tool)

    def get(self) -> Optional[str]:
        try:
            proc = run_tool(
                [self._exe(), "find-generic-password", "-s", self.service, "-a", self.account, "-w"],
                runner=self._runner,
            )
        except (OSError, RuntimeError, subprocess.SubprocessError) as exc:
            log_event(_logger, "credentials.tool_error", level=logging.WARNING, backend=self.backend.value, error=str(exc))
            return None
        if proc.returncode == _ITEM_NOT_FOUND:
            return None
        if proc.returncode != 0:
            log_event(
                _logger,
                "credentials.tool_error",
                level=logging.WARNING,
                backend=self.backend.value,
                returncode=proc.returncode,
                stderr=(proc.stderr or "").strip()[:200],
            )
            return None
        return (proc.stdout or "").strip() or None

    def set(self, secret: str) -> None:
        if not secret:
            raise CredentialStoreError("refusing to store an empty credential")
        try:
            # -U updates an existing item in place
            proc = run_tool(
                [self._exe(), "add-generic-password", "-U", "-s", self.service, "-a", self.account, "-w", secret],
                runner=self._runner,
            )
        except (OSError, RuntimeError, subprocess.SubprocessError) as exc:
            raise CredentialStoreError(f"keychain write failed: {exc}", raw=exc) from exc
        if proc.returncode != 0:
            detail = (proc.stderr or "").strip() or f"exit status {proc.returncode}"
            raise CredentialStoreError(f"keychain write failed: {detail}")


__all__ = ["KeychainCredentialProvider"]
