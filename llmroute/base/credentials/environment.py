"""Environment-variable credential backend."""

from __future__ import annotations

import os
from typing import Optional

from ...config.defaults import API_KEY_ENV
from ..errors import CredentialStoreError
from .provider import CredentialBackend


class EnvironmentCredentialProvider:
    """Read the key from an environment variable.

    ``set`` only updates the current process environment; nothing outlives
    the process.
    """

    backend = CredentialBackend.ENVIRONMENT

    def __init__(self, var_name: str = API_KEY_ENV) -> None:
        self.var_name = var_name

    def get(self) -> Optional[str]:
        val = os.environ.get(self.var_name, "").strip()
        return val or None

    def set(self, secret: str) -> None:
        if not secret:
            raise CredentialStoreError("refusing to store an empty credential")
        os.environ[self.var_name] = secret

    def __repr__(self) -> str:
        return f"EnvironmentCredentialProvider(var_name={self.var_name!r})"


__all__ = ["EnvironmentCredentialProvider"]
