"""Output plan derivation.

An :class:`OutputPlan` is computed once per call from the caller's flags and
says where the result goes. The mapping from flags is fixed:

| streamed | return requested | out file | console | value returned |
|----------|------------------|----------|---------|----------------|
| no       | no               | no       | yes     | yes            |
| no       | yes              | no       | yes     | yes            |
| no       | no               | yes      | no      | no             |
| no       | yes              | yes      | yes     | yes            |
| yes      | no               | no       | yes     | no             |
| yes      | yes              | no       | yes     | yes            |
| yes      | no               | yes      | no      | no             |
| yes      | yes              | yes      | yes     | yes            |

The console stays on whenever no file was named, so a call that returns
nothing and writes nothing is still observable. A streaming call returns a
value only when asked, since its text was already echoed.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


@dataclass(frozen=True)
class OutputPlan:
    """Destinations for one call.

    Attributes:
        emit_to_console: Echo text to stdout (incrementally when streamed).
        capture_for_return: Hand a :class:`CompletionResult` back to the caller.
        write_to_file: Destination file, or ``None``.
        streamed: Whether the call consumes an event stream.
    """

    emit_to_console: bool
    capture_for_return: bool
    write_to_file: Optional[Path] = None
    streamed: bool = False

    @classmethod
    def from_flags(
        cls,
        *,
        stream: bool,
        return_requested: bool,
        out_file: Optional[PathLike] = None,
    ) -> "OutputPlan":
        """Derive the plan from ``(stream, return_requested, out_file)``."""
        path = Path(out_file) if out_file else None
        file_only = path is not None and not return_requested
        return cls(
            emit_to_console=not file_only,
            capture_for_return=return_requested or (not stream and path is None),
            write_to_file=path,
            streamed=stream,
        )

    @property
    def suppressed(self) -> bool:
        """True in file-only mode, where nothing reaches the console."""
        return not self.emit_to_console


__all__ = ["OutputPlan", "PathLike"]
