"""Server-Sent-Events decoder for chat-completion streams.

Turns the line iterator of a streaming HTTP response into a lazy, finite,
single-pass sequence of :data:`StreamEvent` values.

Per line:

1. Lines without the ``data:`` marker (blank keep-alives, ``: comment``
   lines, ``event:`` fields) are skipped without an event.
2. A ``[DONE]`` payload yields :class:`Done` and ends the sequence; no
   further line is read.
3. Any other payload is parsed as JSON and validated as a
   :class:`ChatCompletionRecord`. Content is taken from the delta shape
   first and the whole-message shape second (:func:`extract_content`).
4. A payload that fails to parse or validate yields :class:`Malformed` and
   is logged at DEBUG; the stream continues.
5. A valid record without text (no content field, or an empty content
   string) yields :class:`Metadata` carrying the record and is logged at
   DEBUG. Role, finish and usage chunks take this path.

When the iterator is exhausted without ``[DONE]`` the sequence just ends;
this is treated as a clean completion and logged at DEBUG as
``stream.unconfirmed_end``. Transport exceptions (read timeouts, dropped
connections) are not caught here; they propagate to the caller, which
reports them as ``RequestFailed``.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Iterable, Iterator, Optional, Union

from pydantic import ValidationError

from ..cancellation import CancellationToken
from ..dto import ChatCompletionRecord, extract_content
from ..errors import ErrorCode
from ..logging import LogContext, get_logger, log_event
from .sse_events import Delta, Done, Malformed, Metadata, StreamEvent
from .streaming_metrics import StreamMetrics

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"
_RAW_LOG_CHARS = 200

Line = Union[str, bytes]


def _data_payload(line: Line) -> Optional[str]:
    """Return the text after ``data:`` or ``None`` for non-data lines."""
    if isinstance(line, bytes):
        line = line.decode("utf-8", errors="replace")
    if not line.startswith(DATA_PREFIX):
        return None
    return line[len(DATA_PREFIX):].strip()


def parse_frame(payload: str) -> StreamEvent:
    """Classify a single ``data:`` payload.

    Returns:
        ``Done`` for the sentinel, ``Delta`` for non-empty content,
        ``Metadata`` for a valid record without text, and ``Malformed`` for
        payloads that are not JSON or not record-shaped.
    """
    if payload == DONE_SENTINEL:
        return Done()
    try:
        obj = json.loads(payload)
    except ValueError:
        return Malformed(raw=payload, reason="json")
    try:
        record = ChatCompletionRecord.model_validate(obj)
    except ValidationError:
        return Malformed(raw=payload, reason="shape")
    found = extract_content(record)
    if found is None or not found[1]:
        return Metadata(record=obj)
    shape, text = found
    return Delta(text=text, shape=shape, record=obj)


class StreamDecoder:
    """Decode SSE lines into stream events.

    Parameters:
        ctx: Log context shared with the rest of the call.
        cancellation_token: Optional token polled before every line read.
        logger: Logger override; defaults to ``llmroute.stream``.

    Attributes:
        metrics: :class:`StreamMetrics` for the most recent :meth:`decode`.
    """

    def __init__(
        self,
        *,
        ctx: Optional[LogContext] = None,
        cancellation_token: Optional[CancellationToken] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.ctx = ctx or LogContext(stream=True)
        self._token = cancellation_token
        self._logger = logger or get_logger("llmroute.stream")
        self.metrics = StreamMetrics()

    def decode(self, lines: Iterable[Line]) -> Iterator[StreamEvent]:
        """Yield events lazily from ``lines`` (single pass)."""
        self.metrics = StreamMetrics()
        t0 = time.perf_counter()
        source = iter(lines)
        while True:
            if self._token is not None and self._token.cancelled:
                self._finish("cancelled", t0)
                log_event(
                    self._logger,
                    "stream.cancelled",
                    self.ctx,
                    level=logging.WARNING,
                    error_code=ErrorCode.CANCELLED.value,
                    reason=self._token.reason,
                    emitted=self.metrics.emitted,
                )
                return
            line = next(source, None)
            if line is None:
                self._finish("closed", t0)
                log_event(self._logger, "stream.unconfirmed_end", self.ctx, level=logging.DEBUG, emitted=self.metrics.emitted)
                return
            payload = _data_payload(line)
            if payload is None:
                continue
            self.metrics.frames += 1
            event = parse_frame(payload)
            if isinstance(event, Done):
                self._finish("done", t0)
                yield event
                return
            if isinstance(event, Malformed):
                self.metrics.malformed += 1
                log_event(
                    self._logger,
                    "stream.malformed_frame",
                    self.ctx,
                    level=logging.DEBUG,
                    error_code=ErrorCode.MALFORMED_FRAME.value,
                    reason=event.reason,
                    raw=event.raw[:_RAW_LOG_CHARS],
                )
                yield event
                continue
            if isinstance(event, Metadata):
                self.metrics.metadata += 1
                log_event(
                    self._logger,
                    "stream.metadata_frame",
                    self.ctx,
                    level=logging.DEBUG,
                    keys=sorted(event.record),
                )
                yield event
                continue
            if self.metrics.emitted == 0:
                self.metrics.time_to_first_delta_ms = (time.perf_counter() - t0) * 1000.0
            self.metrics.emitted += 1
            yield event

    def _finish(self, how: str, t0: float) -> None:
        self.metrics.terminated_by = how  # type: ignore[assignment]
        self.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
        log_event(self._logger, "stream.end", self.ctx, **self.metrics.to_dict())


def decode_stream(
    lines: Iterable[Line],
    *,
    cancellation_token: Optional[CancellationToken] = None,
) -> Iterator[StreamEvent]:
    """Convenience wrapper around ``StreamDecoder().decode(lines)``."""
    return StreamDecoder(cancellation_token=cancellation_token).decode(lines)


__all__ = [
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "StreamDecoder",
    "decode_stream",
    "parse_frame",
]
