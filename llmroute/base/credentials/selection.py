"""Backend selection.

The backend is picked once, from the platform identifier and the tools
present on ``PATH``, unless configuration names one explicitly:

============  ==============================================
Platform      Backend
============  ==============================================
``darwin``    ``keychain`` when ``security`` is available
``linux*``    ``secret_service`` when ``secret-tool`` is available
``win32``     ``keystore``
other         ``keystore``
============  ==============================================
"""

from __future__ import annotations

import sys
from typing import Callable, Dict, Optional, Union

from ..logging import get_logger, log_event
from ._tool import tool_available
from .chain import CredentialChain
from .environment import EnvironmentCredentialProvider
from .keychain import KeychainCredentialProvider
from .keystore import KeystoreCredentialProvider
from .provider import CredentialBackend, CredentialProvider
from .secret_service import SecretServiceCredentialProvider

_logger = get_logger("llmroute.credentials")

_FACTORIES: Dict[CredentialBackend, Callable[[], CredentialProvider]] = {
    CredentialBackend.KEYCHAIN: KeychainCredentialProvider,
    CredentialBackend.SECRET_SERVICE: SecretServiceCredentialProvider,
    CredentialBackend.KEYSTORE: KeystoreCredentialProvider,
    CredentialBackend.ENVIRONMENT: EnvironmentCredentialProvider,
}


def select_backend(platform: Optional[str] = None, *, has_tool: Callable[[str], bool] = tool_available) -> CredentialBackend:
    """Return the default backend for ``platform`` (``sys.platform`` when omitted)."""
    plat = (platform or sys.platform).lower()
    if plat == "darwin" and has_tool(KeychainCredentialProvider.tool):
        return CredentialBackend.KEYCHAIN
    if plat.startswith("linux") and has_tool(SecretServiceCredentialProvider.tool):
        return CredentialBackend.SECRET_SERVICE
    return CredentialBackend.KEYSTORE


def build_credential_provider(
    backend: Optional[Union[str, CredentialBackend]] = None,
    *,
    platform: Optional[str] = None,
) -> CredentialProvider:
    """Build the credential provider for this process.

    Resolution: explicit ``backend`` argument, then the ``credential_backend``
    config value (``LLMROUTE_CREDENTIAL_BACKEND``), then :func:`select_backend`.
    Every backend except ``environment`` is wrapped in a
    :class:`CredentialChain` with the environment variable as fallback.

    Raises:
        ValueError: for an unknown backend name.
    """
    source = "argument"
    if backend is None:
        from ...config import get_client_config

        backend = get_client_config().get("credential_backend")
        source = "config"
    if backend is None:
        chosen = select_backend(platform)
        source = "platform"
    elif isinstance(backend, CredentialBackend):
        chosen = backend
    else:
        chosen = CredentialBackend.parse(backend)
    log_event(_logger, "credentials.backend_selected", backend=chosen.value, source=source)
    provider = _FACTORIES[chosen]()
    if chosen is CredentialBackend.ENVIRONMENT:
        return provider
    return CredentialChain(provider)


__all__ = ["select_backend", "build_credential_provider"]
