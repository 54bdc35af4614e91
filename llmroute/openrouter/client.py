"""OpenRouter completion client (OpenAI-style chat completions over HTTP).

Summary:
- Blocking calls via ``httpx.Client.post``; streaming via
  ``httpx.Client.stream`` decoded by :class:`StreamDecoder`
- Output handling delegated to :class:`ResponseAggregator` per the
  :class:`OutputPlan` derived from ``(stream, return_requested, out_file)``

Order of checks in :meth:`CompletionClient.complete`:
1. Prompt validation (``CallerError``)
2. Model resolution against the shared :class:`ModelSettings`
3. Credential lookup (``CredentialNotFound``); no request is sent without one

Timeouts & Retries:
- Timeouts come from ``get_timeout_config()`` through the pooled client
- There are no retries; transport failures and non-2xx statuses raise
  ``RequestFailed`` immediately

This module orchestrates I/O only; parsing and output policy live in the
shared base layers.
"""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

import httpx

from ..base.cancellation import CancellationToken
from ..base.credentials import CredentialProvider, build_credential_provider
from ..base.errors import CallerError, CompletionError, CredentialNotFound, ErrorCode, RequestFailed
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    CompletionRequest,
    CompletionResult,
    Prompt,
    StructuredContent,
    TextPart,
)
from ..base.output import OutputPlan, ResponseAggregator
from ..base.streaming import StreamDecoder
from ..config import ModelSettings, get_client_config
from ..config.defaults import ALT_TEXT_INSTRUCTION, API_KEY_ENV, COMPLETIONS_PATH
from .request_builder import RequestBuilder
from .vision import load_image_part


class CompletionClient:
    """Public entry point for chat completions.

    Parameters:
        settings: Default-model holder shared by reference; a later
            ``settings.set_default_model(...)`` affects every following call
            that omits ``model``. Built from configuration when omitted.
        credentials: Credential provider; built for the current platform
            when omitted.
        http_client: Injected ``httpx.Client`` (tests use
            ``httpx.MockTransport``). Pooled clients are used when omitted.
        config: Overrides merged last into :func:`get_client_config`.
        console: Stream for model output (default ``sys.stdout``).
        notices: Stream for confirmations (default ``sys.stderr``).

    Side effects:
        - Reads merged configuration once at construction.
        - Initializes a structured logger under ``llmroute.openrouter``.
    """

    def __init__(
        self,
        settings: Optional[ModelSettings] = None,
        credentials: Optional[CredentialProvider] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        config: Optional[Dict[str, Any]] = None,
        console: Optional[TextIO] = None,
        notices: Optional[TextIO] = None,
    ) -> None:
        cfg = get_client_config(config)
        self.settings = settings if settings is not None else ModelSettings(cfg["model"])
        self.credentials = (
            credentials if credentials is not None else build_credential_provider(cfg.get("credential_backend"))
        )
        self.base_url: str = cfg["base_url"]
        self.builder = RequestBuilder(referer=cfg["referer"], title=cfg["title"])
        self._http_client = http_client
        self._console = console
        self._notices = notices
        self._logger = get_logger("llmroute.openrouter")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}{COMPLETIONS_PATH}"

    def _client(self, stream: bool) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(self.base_url, purpose="openrouter.stream" if stream else "openrouter.chat")

    def complete(
        self,
        prompt: Prompt,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        stream: bool = False,
        return_requested: bool = False,
        out_file: Optional[Union[str, Path]] = None,
        full_fidelity: bool = False,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Optional[CompletionResult]:
        """Run one chat completion and apply the output plan.

        Parameters:
            prompt: Plain text or :class:`StructuredContent`.
            model: Model identifier; the current default when omitted or blank.
            temperature: Sampling temperature, forwarded unchanged.
            max_tokens: Completion token limit.
            stream: Consume the response as an SSE stream, echoing deltas.
            return_requested: Return the result even when streaming or
                writing to a file.
            out_file: Write the full text here once the response is complete.
            full_fidelity: Keep every raw provider record in the result.
            cancellation_token: Ends a streaming call early when cancelled.

        Returns:
            A :class:`CompletionResult` when the plan captures for return and
            the response had content, else ``None``.

        Raises:
            CallerError: empty prompt, before any I/O.
            CredentialNotFound: no credential from any store, before any I/O.
            RequestFailed: transport failure, timeout or non-2xx status.
        """
        if isinstance(prompt, str):
            if not prompt.strip():
                raise CallerError("prompt must not be empty")
        elif not isinstance(prompt, StructuredContent):
            raise CallerError(f"unsupported prompt type: {type(prompt).__name__}")
        elif prompt.is_empty():
            raise CallerError("structured prompt has no text or image content")

        resolved = self.settings.resolve(model)
        credential = self.credentials.get()
        if credential is None:
            raise CredentialNotFound(
                f"no API key available; run 'llmroute set-key' or set {API_KEY_ENV}",
                model=resolved,
            )

        request = CompletionRequest(
            model=resolved,
            prompt=prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            stream=stream,
        )
        headers, body = self.builder.build_request(request, credential)
        plan = OutputPlan.from_flags(stream=stream, return_requested=return_requested, out_file=out_file)
        ctx = LogContext(model=resolved, request_id=uuid.uuid4().hex[:12], stream=stream)
        aggregator = ResponseAggregator(
            plan,
            full_fidelity=full_fidelity,
            console=self._console,
            notices=self._notices,
            ctx=ctx,
        )

        log_event(
            self._logger,
            "request.start",
            ctx,
            structured=request.is_structured(),
            temperature=temperature,
            max_tokens=max_tokens,
            return_requested=return_requested,
            out_file=str(plan.write_to_file) if plan.write_to_file else None,
        )
        t0 = time.perf_counter()
        try:
            if stream:
                result = self._run_stream(headers, body, aggregator, ctx, cancellation_token)
            else:
                result = self._run_blocking(headers, body, aggregator, resolved)
        except CompletionError as exc:
            log_event(
                self._logger,
                "request.error",
                ctx,
                level=logging.ERROR,
                error_code=exc.code.value,
                status_code=exc.status_code,
                error=exc.message,
            )
            raise
        log_event(
            self._logger,
            "request.end",
            ctx,
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 1),
            returned=result is not None,
        )
        return result

    def describe_image(
        self,
        image_path: Union[str, Path],
        model: Optional[str] = None,
        instruction: str = ALT_TEXT_INSTRUCTION,
        **options: Any,
    ) -> Optional[CompletionResult]:
        """Ask the model for alt text describing the image at ``image_path``.

        ``options`` are forwarded to :meth:`complete` (``stream``,
        ``out_file``, ``return_requested``, ...).
        """
        content = StructuredContent.of(TextPart(instruction), load_image_part(image_path))
        return self.complete(content, model=model, **options)

    def _run_blocking(
        self,
        headers: Dict[str, str],
        body: bytes,
        aggregator: ResponseAggregator,
        model: str,
    ) -> Optional[CompletionResult]:
        try:
            resp = self._client(stream=False).post(self.endpoint, content=body, headers=headers)
        except httpx.HTTPError as exc:
            raise RequestFailed.from_exception(exc, model=model) from exc
        if not resp.is_success:
            raise RequestFailed.from_status(resp.status_code, resp.text, model=model)
        try:
            data = resp.json()
        except ValueError as exc:
            raise RequestFailed(
                code=ErrorCode.DECODE,
                message=f"response body is not JSON: {exc}",
                model=model,
                status_code=resp.status_code,
                raw=exc,
            ) from exc
        return aggregator.consume_response(data if isinstance(data, dict) else {})

    def _run_stream(
        self,
        headers: Dict[str, str],
        body: bytes,
        aggregator: ResponseAggregator,
        ctx: LogContext,
        cancellation_token: Optional[CancellationToken],
    ) -> Optional[CompletionResult]:
        model = ctx.model
        try:
            with self._client(stream=True).stream("POST", self.endpoint, content=body, headers=headers) as resp:
                if not resp.is_success:
                    resp.read()
                    raise RequestFailed.from_status(resp.status_code, resp.text, model=model)
                log_event(self._logger, "stream.start", ctx, status_code=resp.status_code)
                decoder = StreamDecoder(ctx=ctx, cancellation_token=cancellation_token)
                # Leaving the context closes the connection, including after a cancel
                return aggregator.consume_stream(decoder.decode(resp.iter_lines()))
        except httpx.HTTPError as exc:
            raise RequestFailed.from_exception(exc, model=model) from exc


__all__ = ["CompletionClient"]
