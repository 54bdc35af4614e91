"""freedesktop Secret Service backend built on ``secret-tool`` (libsecret)."""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - exception types only
from typing import List, Optional

from ...config.defaults import CREDENTIAL_ACCOUNT, CREDENTIAL_SERVICE
from ..errors import CredentialStoreError
from ..logging import get_logger, log_event
from ._tool import Runner, resolve_tool, run_tool
from .provider import CredentialBackend

_logger = get_logger("llmroute.credentials")


class SecretServiceCredentialProvider:
    """Secret stored under the attributes ``service=<service> account=<account>``.

    ``secret-tool lookup`` exits non-zero with empty output when nothing
    matches, so any failed lookup reads as "not found". The secret is passed
    to ``secret-tool store`` on stdin, never on the command line.
    """

    backend = CredentialBackend.SECRET_SERVICE
    tool = "secret-tool"

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

    def _attributes(self) -> List[str]:
        return ["service", self.service, "account", self.account]

    def _exe(self) -> str:
        return self._executable or resolve_tool(self.tool)

    def get(self) -> Optional[str]:
        try:
            proc = run_tool([self._exe(), "lookup", *self._attributes()], runner=self._runner)
        except (OSError, RuntimeError, subprocess.SubprocessError) as exc:
            log_event(_logger, "credentials.tool_error", level=logging.WARNING, backend=self.backend.value, error=str(exc))
            return None
        if proc.returncode != 0:
            if stderr := (proc.stderr or "").strip():
                log_event(
                    _logger,
                    "credentials.tool_error",
                    level=logging.WARNING,
                    backend=self.backend.value,
                    returncode=proc.returncode,
                    stderr=stderr[:200],
                )
            return None
        return (proc.stdout or "").strip() or None

    def set(self, secret: str) -> None:
        if not secret:
            raise CredentialStoreError("refusing to store an empty credential")
        try:
            cmd = [self._exe(), "store", f"--label={self.service} API key", *self._attributes()]
            proc = run_tool(cmd, stdin=secret, runner=self._runner)
        except (OSError, RuntimeError, subprocess.SubprocessError) as exc:
            raise CredentialStoreError(f"secret service write failed: {exc}", raw=exc) from exc
        if proc.returncode != 0:
            detail = (proc.stderr or "").strip() or f"exit status {proc.returncode}"
            raise CredentialStoreError(f"secret service write failed: {detail}")


__all__ = ["SecretServiceCredentialProvider"]
