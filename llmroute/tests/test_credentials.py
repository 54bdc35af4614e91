"""Tests for credential backends, the env fallback chain and backend selection.

Platform tools are never executed: keychain and secret-service backends get a
fake ``runner`` and a fixed executable path.
"""
from __future__ import annotations

import subprocess  # nosec B404 - CompletedProcess only
from typing import List

import pytest

from llmroute.base.credentials import (
    CredentialBackend,
    CredentialChain,
    CredentialProvider,
    EnvironmentCredentialProvider,
    KeychainCredentialProvider,
    KeystoreCredentialProvider,
    SecretServiceCredentialProvider,
    build_credential_provider,
    select_backend,
)
from llmroute.base.errors import CredentialStoreError


class FakeRunner:
    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.calls: List[tuple] = []
        self._result = (returncode, stdout, stderr)

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        rc, out, err = self._result
        return subprocess.CompletedProcess(cmd, rc, stdout=out, stderr=err)


def test_environment_provider_reads_and_sets_process_env(monkeypatch):
    provider = EnvironmentCredentialProvider()
    assert provider.get() is None  # nosec B101 - pytest assert in tests
    monkeypatch.setenv("OPENROUTER_API_KEY", "  sk-env  ")  # pragma: allowlist secret - dummy test value
    assert provider.get() == "sk-env"  # nosec B101 - pytest assert in tests
    provider.set("sk-new")
    assert provider.get() == "sk-new"  # nosec B101 - pytest assert in tests
    assert isinstance(provider, CredentialProvider)  # nosec B101 - pytest assert in tests


def test_keystore_roundtrip_and_upsert(tmp_path):
    store = KeystoreCredentialProvider(tmp_path / "cfg" / "keys.db")
    assert store.get() is None  # nosec B101 - pytest assert in tests
    store.set("sk-one")
    store.set("sk-two")
    assert store.get() == "sk-two"  # nosec B101 - pytest assert in tests
    # a fresh instance sees the persisted value
    assert KeystoreCredentialProvider(tmp_path / "cfg" / "keys.db").get() == "sk-two"  # nosec B101 - pytest assert in tests
    store.delete()
    assert store.get() is None  # nosec B101 - pytest assert in tests


def test_keystore_rejects_empty_secret(tmp_path):
    with pytest.raises(CredentialStoreError):
        KeystoreCredentialProvider(tmp_path / "keys.db").set("")


def test_keystore_default_path_follows_xdg_config_home(tmp_path):
    store = KeystoreCredentialProvider()
    assert store.db_path == tmp_path / "xdg" / "llmroute" / "keys.db"  # nosec B101 - pytest assert in tests


def test_keychain_get_parses_stdout_and_treats_44_as_not_found():
    found = KeychainCredentialProvider(runner=FakeRunner(0, "sk-mac\n"), executable="/usr/bin/security")
    assert found.get() == "sk-mac"  # nosec B101 - pytest assert in tests
    cmd, _ = found._runner.calls[0]
    assert cmd[:2] == ["/usr/bin/security", "find-generic-password"] and cmd[-1] == "-w"  # nosec B101 - pytest assert in tests

    missing = KeychainCredentialProvider(runner=FakeRunner(44, "", "could not be found"), executable="/usr/bin/security")
    assert missing.get() is None  # nosec B101 - pytest assert in tests


def test_keychain_tool_failure_on_get_is_logged_and_not_found(log_capture):
    provider = KeychainCredentialProvider(runner=FakeRunner(51, "", "user interaction not allowed"), executable="/usr/bin/security")
    assert provider.get() is None  # nosec B101 - pytest assert in tests
    (_, payload), = log_capture.events("credentials.tool_error")
    assert payload["returncode"] == 51  # nosec B101 - pytest assert in tests


def test_keychain_set_updates_in_place_and_raises_on_failure():
    ok = FakeRunner(0)
    KeychainCredentialProvider(runner=ok, executable="/usr/bin/security").set("sk-x")
    cmd, _ = ok.calls[0]
    assert "add-generic-password" in cmd and "-U" in cmd  # nosec B101 - pytest assert in tests

    with pytest.raises(CredentialStoreError):
        KeychainCredentialProvider(runner=FakeRunner(1, "", "denied"), executable="/usr/bin/security").set("sk-x")


def test_secret_service_passes_secret_on_stdin_only():
    runner = FakeRunner(0)
    SecretServiceCredentialProvider(runner=runner, executable="/usr/bin/secret-tool").set("sk-linux")
    cmd, kwargs = runner.calls[0]
    assert cmd[1] == "store"  # nosec B101 - pytest assert in tests
    assert "sk-linux" not in cmd  # nosec B101 - pytest assert in tests
    assert kwargs["input"] == "sk-linux"  # nosec B101 - pytest assert in tests


def test_secret_service_lookup_miss_is_not_found():
    provider = SecretServiceCredentialProvider(runner=FakeRunner(1), executable="/usr/bin/secret-tool")
    assert provider.get() is None  # nosec B101 - pytest assert in tests
    hit = SecretServiceCredentialProvider(runner=FakeRunner(0, "sk-linux"), executable="/usr/bin/secret-tool")
    assert hit.get() == "sk-linux"  # nosec B101 - pytest assert in tests


def test_missing_tool_reads_as_not_found_and_fails_writes(monkeypatch):
    monkeypatch.setenv("PATH", "")
    assert SecretServiceCredentialProvider().get() is None  # nosec B101 - pytest assert in tests
    with pytest.raises(CredentialStoreError):
        SecretServiceCredentialProvider().set("sk")
    assert KeychainCredentialProvider().get() is None  # nosec B101 - pytest assert in tests
    with pytest.raises(CredentialStoreError):
        KeychainCredentialProvider().set("sk")


def test_chain_falls_back_to_environment(tmp_path, monkeypatch):
    chain = CredentialChain(KeystoreCredentialProvider(tmp_path / "keys.db"))
    assert chain.lookup() == (None, None)  # nosec B101 - pytest assert in tests

    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-env")  # pragma: allowlist secret - dummy test value
    assert chain.lookup() == ("sk-env", CredentialBackend.ENVIRONMENT)  # nosec B101 - pytest assert in tests

    chain.set("sk-stored")
    assert chain.lookup() == ("sk-stored", CredentialBackend.KEYSTORE)  # nosec B101 - pytest assert in tests
    assert chain.backend is CredentialBackend.KEYSTORE  # nosec B101 - pytest assert in tests


def test_chain_lookup_never_logs_the_secret(tmp_path, monkeypatch, log_capture):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-very-secret")  # pragma: allowlist secret - dummy test value
    CredentialChain(KeystoreCredentialProvider(tmp_path / "keys.db")).get()
    rendered = repr(log_capture.events())
    assert "sk-very-secret" not in rendered  # nosec B101 - pytest assert in tests
    assert log_capture.events("credentials.lookup")  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize(
    "platform,tools,expected",
    [
        ("darwin", {"security"}, CredentialBackend.KEYCHAIN),
        ("darwin", set(), CredentialBackend.KEYSTORE),
        ("linux", {"secret-tool"}, CredentialBackend.SECRET_SERVICE),
        ("linux", set(), CredentialBackend.KEYSTORE),
        ("win32", {"security", "secret-tool"}, CredentialBackend.KEYSTORE),
        ("freebsd13", set(), CredentialBackend.KEYSTORE),
    ],
)
def test_select_backend(platform, tools, expected):
    assert select_backend(platform, has_tool=lambda name: name in tools) is expected  # nosec B101 - pytest assert in tests


def test_build_provider_variants(monkeypatch):
    env_only = build_credential_provider("environment")
    assert isinstance(env_only, EnvironmentCredentialProvider)  # nosec B101 - pytest assert in tests

    keystore = build_credential_provider(CredentialBackend.KEYSTORE)
    assert isinstance(keystore, CredentialChain)  # nosec B101 - pytest assert in tests
    assert isinstance(keystore.primary, KeystoreCredentialProvider)  # nosec B101 - pytest assert in tests

    monkeypatch.setenv("LLMROUTE_CREDENTIAL_BACKEND", "secret-service")
    from_config = build_credential_provider()
    assert isinstance(from_config.primary, SecretServiceCredentialProvider)  # nosec B101 - pytest assert in tests

    with pytest.raises(ValueError):
        build_credential_provider("floppy-disk")


def test_corrupt_keystore_reads_as_not_found_and_env_fallback_applies(tmp_path, monkeypatch, log_capture):
    db = tmp_path / "keys.db"
    db.write_bytes(b"this is not an sqlite database, just garbage bytes " * 8)
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-env")  # pragma: allowlist secret - dummy test value

    store = KeystoreCredentialProvider(db)
    assert store.get() is None  # nosec B101 - pytest assert in tests
    assert CredentialChain(store, EnvironmentCredentialProvider()).lookup() == (  # nosec B101 - pytest assert in tests
        "sk-env",
        CredentialBackend.ENVIRONMENT,
    )
    errors = log_capture.events("credentials.tool_error")
    assert errors and errors[0][1]["backend"] == "keystore"  # nosec B101 - pytest assert in tests


def test_corrupt_keystore_write_is_store_error(tmp_path):
    db = tmp_path / "keys.db"
    db.write_bytes(b"garbage " * 64)
    with pytest.raises(CredentialStoreError):
        KeystoreCredentialProvider(db).set("sk-new")
