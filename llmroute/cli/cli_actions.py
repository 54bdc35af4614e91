"""CLI action handlers.

Purpose
-------
Thin subcommand handlers for ``llmroute``. They translate parsed arguments
into :class:`CompletionClient` and credential-backend calls and map outcomes
to exit codes; no completion logic lives here. The module has no top-level
side effects and is safe to import in tests.

Exit codes
----------
0 success, 1 empty result, 2 caller error, 3 credential missing or local
store failure, 4 request failed.

Streams
-------
Model output goes to stdout. Confirmations and error messages go to stderr,
so ``llmroute ask ... > answer.txt`` captures the answer only.
"""

from __future__ import annotations

import argparse
import getpass
import io
import json
import sys
from typing import Any, Callable, Dict, Optional, TextIO

from ..base.credentials import CredentialChain, build_credential_provider
from ..base.errors import (
    CallerError,
    CompletionError,
    CredentialNotFound,
    CredentialStoreError,
)
from ..base.models import CompletionResult
from ..config import ModelSettings
from ..config.defaults import API_KEY_ENV
from ..openrouter import CompletionClient
from .settings import load_settings, model_settings_for, save_settings

EXIT_OK = 0
EXIT_EMPTY = 1
EXIT_CALLER = 2
EXIT_CREDENTIAL = 3
EXIT_REQUEST = 4

Call = Callable[[CompletionClient, Dict[str, Any]], Optional[CompletionResult]]


def build_client(settings: ModelSettings, *, console: Optional[TextIO] = None) -> CompletionClient:
    """Return the client used by completion subcommands (patched in tests)."""
    return CompletionClient(settings, console=console)


def exit_code_for(exc: CompletionError) -> int:
    if isinstance(exc, CallerError):
        return EXIT_CALLER
    if isinstance(exc, (CredentialNotFound, CredentialStoreError)):
        return EXIT_CREDENTIAL
    return EXIT_REQUEST


def _fail(message: str, code: int) -> int:
    print(f"llmroute: error: {message}", file=sys.stderr)
    return code


def _run_completion(args: argparse.Namespace, call: Call, *, raw: bool = False) -> int:
    """Shared body of ``ask`` and ``describe-image``.

    The call always captures its result so an empty response maps to exit
    code 1. With ``--out-file`` (or ``--raw``) the client echoes into an
    in-memory sink instead of stdout, so stdout stays silent while the file
    is written as usual.
    """
    out_file = args.out_file
    quiet = raw or out_file is not None
    options: Dict[str, Any] = {
        "model": args.model,
        "temperature": args.temperature,
        "max_tokens": args.max_tokens,
        "stream": args.stream,
        "return_requested": True,
        "out_file": out_file,
        "full_fidelity": raw,
    }
    try:
        client = build_client(model_settings_for(load_settings()), console=io.StringIO() if quiet else None)
        result = call(client, options)
    except ValueError as exc:
        return _fail(str(exc), EXIT_CALLER)
    except CompletionError as exc:
        return _fail(exc.message, exit_code_for(exc))

    if result is None:
        return EXIT_EMPTY
    if raw:
        print(json.dumps(list(result.raw_events or ()), ensure_ascii=False, indent=2))
    return EXIT_OK


def handle_ask(args: argparse.Namespace) -> int:
    prompt = sys.stdin.read() if args.prompt == "-" else args.prompt
    return _run_completion(args, lambda client, opts: client.complete(prompt, **opts), raw=args.raw)


def handle_describe_image(args: argparse.Namespace) -> int:
    def _call(client: CompletionClient, opts: Dict[str, Any]) -> Optional[CompletionResult]:
        opts.pop("full_fidelity")
        return client.describe_image(args.path, **opts)

    return _run_completion(args, _call)


def _read_secret(stdin: TextIO) -> str:
    if stdin.isatty():
        return getpass.getpass("OpenRouter API key: ")
    return stdin.readline()


def handle_set_key(args: argparse.Namespace) -> int:
    """Store the API key; the secret is never echoed."""
    secret = args.secret if args.secret is not None else _read_secret(sys.stdin)
    secret = secret.strip()
    if not secret:
        return _fail("empty API key", EXIT_CALLER)
    try:
        provider = build_credential_provider(args.backend)
    except ValueError as exc:
        return _fail(str(exc), EXIT_CALLER)
    try:
        provider.set(secret)
    except CredentialStoreError as exc:
        return _fail(exc.message, EXIT_CREDENTIAL)
    print(f"API key stored (backend: {provider.backend.value})")
    return EXIT_OK


def handle_key_status(args: argparse.Namespace) -> int:
    """Report which backend holds a key, without printing it."""
    try:
        provider = build_credential_provider(args.backend)
    except ValueError as exc:
        return _fail(str(exc), EXIT_CALLER)
    if isinstance(provider, CredentialChain):
        secret, source = provider.lookup()
    else:
        secret = provider.get()
        source = provider.backend if secret else None
    if secret is None or source is None:
        print(f"No API key found (backend: {provider.backend.value}; fallback: {API_KEY_ENV})")
        return EXIT_CREDENTIAL
    print(f"API key available (source: {source.value})")
    return EXIT_OK


def handle_set_default_model(args: argparse.Namespace) -> int:
    try:
        model = ModelSettings(args.model).get_default_model()
    except CallerError as exc:
        return _fail(exc.message, EXIT_CALLER)
    settings = load_settings()
    settings.default_model = model
    try:
        path = save_settings(settings)
    except OSError as exc:
        return _fail(f"cannot save settings: {exc}", EXIT_CREDENTIAL)
    print(f"Default model set to {model}")
    print(f"Saved to {path}", file=sys.stderr)
    return EXIT_OK


def handle_get_default_model(args: argparse.Namespace) -> int:
    print(model_settings_for(load_settings()).get_default_model())
    return EXIT_OK


HANDLERS: Dict[str, Callable[[argparse.Namespace], int]] = {
    "ask": handle_ask,
    "describe-image": handle_describe_image,
    "set-key": handle_set_key,
    "key-status": handle_key_status,
    "set-default-model": handle_set_default_model,
    "get-default-model": handle_get_default_model,
}


__all__ = [
    "EXIT_OK",
    "EXIT_EMPTY",
    "EXIT_CALLER",
    "EXIT_CREDENTIAL",
    "EXIT_REQUEST",
    "HANDLERS",
    "build_client",
    "exit_code_for",
    "handle_ask",
    "handle_describe_image",
    "handle_set_key",
    "handle_key_status",
    "handle_set_default_model",
    "handle_get_default_model",
]
