"""Credential storage backends.

Public surface:
    - :class:`CredentialProvider` protocol (``get`` / ``set``)
    - :class:`CredentialBackend` closed set of variants
    - concrete backends and :class:`CredentialChain`
    - :func:`select_backend` / :func:`build_credential_provider`
"""

from .provider import CredentialBackend, CredentialProvider
from .environment import EnvironmentCredentialProvider
from .keychain import KeychainCredentialProvider
from .secret_service import SecretServiceCredentialProvider
from .keystore import KeystoreCredentialProvider, default_keystore_path
from .chain import CredentialChain
from .selection import build_credential_provider, select_backend

__all__ = [
    "CredentialBackend",
    "CredentialProvider",
    "EnvironmentCredentialProvider",
    "KeychainCredentialProvider",
    "SecretServiceCredentialProvider",
    "KeystoreCredentialProvider",
    "default_keystore_path",
    "CredentialChain",
    "build_credential_provider",
    "select_backend",
]
