"""Response aggregation and output side effects.

:class:`ResponseAggregator` reconciles one response, streamed or blocking,
with an :class:`OutputPlan`. Side effects happen in a fixed order:

1. Console: streamed deltas are written as they arrive with no newline, then
   exactly one newline once the stream ends; a blocking response is written
   once, followed by a newline.
2. File: the full text, verbatim and UTF-8 encoded, after the whole response
   is known. Parent directories are created; a confirmation line goes to the
   notices stream.
3. Return: a :class:`CompletionResult` when the plan captures for return,
   else ``None``.

A response without extractable content is an empty result: it is logged as
``output.empty_result`` (ERROR, or DEBUG in file-only mode), no file is
written, no newline is emitted and ``None`` is returned.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Iterable, List, Optional, TextIO

from pydantic import ValidationError

from ..dto import ChatCompletionRecord, extract_content
from ..errors import ErrorCode
from ..logging import LogContext, get_logger, log_event
from ..models import CompletionResult
from ..streaming import Delta, Done, Malformed, Metadata, StreamEvent
from .output_plan import OutputPlan


class ResponseAggregator:
    """Accumulate content and perform the plan's side effects.

    Parameters:
        plan: Destinations for this call.
        full_fidelity: Keep every provider record in ``raw_events``.
        console: Text stream for model output; defaults to ``sys.stdout``.
        notices: Text stream for confirmations; defaults to ``sys.stderr``.
        ctx: Log context shared with the rest of the call.
        logger: Logger override; defaults to ``llmroute.output``.
    """

    def __init__(
        self,
        plan: OutputPlan,
        *,
        full_fidelity: bool = False,
        console: Optional[TextIO] = None,
        notices: Optional[TextIO] = None,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.plan = plan
        self.full_fidelity = full_fidelity
        self._console = console
        self._notices = notices
        self.ctx = ctx or LogContext()
        self._logger = logger or get_logger("llmroute.output")

    # Resolved lazily so pytest's capsys replacement of sys.stdout is honored
    @property
    def console(self) -> TextIO:
        return self._console if self._console is not None else sys.stdout

    @property
    def notices(self) -> TextIO:
        return self._notices if self._notices is not None else sys.stderr

    def consume_stream(self, events: Iterable[StreamEvent]) -> Optional[CompletionResult]:
        """Drain a decoded event sequence and apply the plan.

        Deltas reach the console before the next event is pulled, so echo
        latency equals network delivery latency. With ``full_fidelity`` every
        parsed record is kept in arrival order, text-free ones included.
        """
        parts: List[str] = []
        records: List[Dict[str, Any]] = []
        for event in events:
            if isinstance(event, Done):
                break
            if isinstance(event, Malformed):
                continue
            if isinstance(event, Metadata):
                if self.full_fidelity:
                    records.append(event.record)
                continue
            if isinstance(event, Delta):
                parts.append(event.text)
                if self.full_fidelity:
                    records.append(event.record)
                if self.plan.emit_to_console:
                    self.console.write(event.text)
                    self.console.flush()
        text = "".join(parts)
        if text and self.plan.emit_to_console:
            self.console.write("\n")
            self.console.flush()
        return self._finalize(text, records)

    def consume_response(self, body: Dict[str, Any]) -> Optional[CompletionResult]:
        """Apply the plan to a blocking response body.

        The text is ``choices[0].message.content``; a body without it, or one
        that does not match the record shape, is an empty result.
        """
        text = ""
        try:
            record = ChatCompletionRecord.model_validate(body)
        except ValidationError:
            record = None
        if record is not None:
            found = extract_content(record)
            if found is not None:
                text = found[1]
        if text and self.plan.emit_to_console:
            print(text, file=self.console, flush=True)
        return self._finalize(text, [body] if self.full_fidelity else [])

    def _finalize(self, text: str, records: List[Dict[str, Any]]) -> Optional[CompletionResult]:
        if not text:
            self._report_empty()
            return None
        if self.plan.write_to_file is not None:
            self._write_file(text)
        if not self.plan.capture_for_return:
            return None
        return CompletionResult(
            text=text,
            raw_events=tuple(records) if self.full_fidelity else None,
        )

    def _write_file(self, text: str) -> None:
        path = self.plan.write_to_file
        assert path is not None  # nosec B101 - guarded by caller
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the text byte-for-byte on every platform
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)
        print(f"Response written to {path}", file=self.notices, flush=True)
        log_event(self._logger, "output.file_written", self.ctx, path=str(path), chars=len(text))

    def _report_empty(self) -> None:
        level = logging.DEBUG if self.plan.suppressed else logging.ERROR
        log_event(
            self._logger,
            "output.empty_result",
            self.ctx,
            level=level,
            error_code=ErrorCode.EMPTY_RESULT.value,
            streamed=self.plan.streamed,
        )


__all__ = ["ResponseAggregator"]
