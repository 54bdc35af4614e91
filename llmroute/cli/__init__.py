"""``llmroute`` command-line interface (package entrypoint).

Wires argument parsing to the handlers in ``cli_actions``; performs no
completion logic directly.
"""

from __future__ import annotations

import sys
from typing import List, Optional

from ..base.logging import configure_logger
from .cli_actions import HANDLERS
from .cli_parser import build_parser
from .settings import load_settings


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[List[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (see ``cli_actions`` for the mapping).
    """
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    level = args.log_level or load_settings().log_level
    if level:
        configure_logger(level=level)
    return HANDLERS[args.cmd](args)


__all__ = ["main"]
