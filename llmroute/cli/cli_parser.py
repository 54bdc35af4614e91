"""CLI parser construction for ``llmroute``.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ..base.models import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    """Attach the flags shared by every completion subcommand."""
    parser.add_argument("--model", default=None, help="Model identifier (default: the saved default model)")
    parser.add_argument("--stream", action="store_true", help="Stream tokens to the console as they arrive")
    parser.add_argument("--out-file", default=None, metavar="PATH", help="Write the full response to PATH")
    parser.add_argument("--temperature", type=float, default=DEFAULT_TEMPERATURE)
    parser.add_argument("--max-tokens", type=int, default=DEFAULT_MAX_TOKENS)


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``ask``, ``describe-image``, ``set-key``, ``key-status``,
        ``set-default-model`` and ``get-default-model`` subcommands. No I/O
        happens here.
    """
    p = argparse.ArgumentParser(prog="llmroute", description="Send prompts to OpenRouter-hosted models")
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Diagnostic log level on stderr (default: LLMROUTE_LOG_LEVEL or WARNING)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_ask = sub.add_parser("ask", help="Send a text prompt")
    p_ask.add_argument("prompt", help="Prompt text; '-' reads it from stdin")
    _add_output_flags(p_ask)
    p_ask.add_argument("--raw", action="store_true", help="Print the raw provider records as JSON")

    p_img = sub.add_parser("describe-image", help="Generate alt text for an image file")
    p_img.add_argument("path", help="Image file (PNG, JPEG, GIF, WEBP, BMP)")
    _add_output_flags(p_img)

    p_key = sub.add_parser("set-key", help="Store the API key in the credential backend")
    p_key.add_argument("secret", nargs="?", default=None, help="API key; read from stdin when omitted")
    p_key.add_argument("--backend", default=None, help="Override the credential backend")

    p_status = sub.add_parser("key-status", help="Report whether an API key is available (never prints it)")
    p_status.add_argument("--backend", default=None, help="Override the credential backend")

    p_set = sub.add_parser("set-default-model", help="Persist the model used when --model is omitted")
    p_set.add_argument("model")

    sub.add_parser("get-default-model", help="Print the model used when --model is omitted")

    return p


__all__ = ["LOG_LEVELS", "build_parser"]
