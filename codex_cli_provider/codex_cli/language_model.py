"""Codex CLI language model adapter.

Implements the host-facing ``LanguageModel`` contract on top of the optional
Codex CLI SDK:

- ``do_generate``: run one query to completion and return the joined text
  with token usage.
- ``do_stream``: relay text deltas as they arrive, then one terminal chunk
  carrying usage.

Both paths resolve the backend through the memoized loader, convert the host
prompt with the message converter, and route every failure through the
error classifier. Sampling knobs the CLI cannot honor are reported as
warnings rather than rejected.

Cancellation:
    Each call owns a ``CancellationToken`` (a child of the caller's token when
    one is supplied). It is passed to the backend as ``abort_signal``, checked
    between backend records, and tripped when a stream is closed before its
    result event so the CLI process is torn down.
"""

from __future__ import annotations

import inspect
import logging
from contextlib import aclosing
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional
from uuid import uuid4

from pydantic import ValidationError

from ..base.cancellation import CancellationToken
from ..base.errors import ClassifiedError, ErrorKind
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import (
    SAMPLING_FIELDS,
    GenerateRequest,
    GenerateResult,
    TokenUsage,
    UnsupportedWarning,
)
from ..base.streaming import ChatStreamEvent, StreamController, StreamMetrics
from ..config.defaults import CODEX_CLI_PROVIDER_ID
from .backend_events import (
    AssistantTextDelta,
    BackendEvent,
    ErrorSignal,
    ResultEvent,
    parse_backend_event,
)
from .errors import (
    BackendResultError,
    BackendSignalError,
    classify_backend_error,
    create_api_call_error,
    create_invalid_model_error,
)
from .json_extractor import extract_json
from .loader import BackendHandle, BackendLoader, get_backend_loader
from .message_converter import convert_to_codex_cli_messages
from .settings import to_backend_options

# Known short names -> backend-native model names. Anything else passes through.
MODEL_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "opus": "opus",
        "sonnet": "sonnet",
        "codex": "gpt-5-codex",
        "gpt-5": "gpt-5",
        "gpt-5-codex": "gpt-5-codex",
        "mini": "codex-mini-latest",
    }
)

MAX_TURNS_SUBTYPE = "error_max_turns"


@dataclass(frozen=True)
class BackendQuery:
    """Backend-ready request derived from one host call."""

    prompt_text: str
    system_prompt: str
    options: Dict[str, Any]


def _finish_reason(result: ResultEvent) -> str:
    return "length" if result.subtype == MAX_TURNS_SUBTYPE else "stop"


def _check_result(result: ResultEvent) -> None:
    """Raise for a result record the backend flagged as failed.

    A turn-limit stop is a truncated answer, not a failure. The raised error
    goes through the classifier like any other backend failure.
    """
    if result.is_error and result.subtype != MAX_TURNS_SUBTYPE:
        raise BackendResultError(result)


def _provider_metadata(result: ResultEvent) -> Dict[str, Any]:
    meta = {
        "session_id": result.session_id,
        "cost_usd": result.cost_usd,
        "duration_ms": result.duration_ms,
        "subtype": result.subtype,
    }
    return {k: v for k, v in meta.items() if v is not None}


class CodexCliLanguageModel:
    """Language model backed by the Codex CLI SDK.

    Parameters:
        model_id: Non-empty model id or alias (see ``MODEL_ALIASES``).
        settings: Backend settings for this instance; they win over
            ``default_settings`` key by key.
        default_settings: Provider-level backend defaults.
        loader: Backend loader to use; the process-wide loader when omitted.

    Raises:
        ClassifiedError: kind ``INVALID_MODEL`` when ``model_id`` is empty or
            not a string.
    """

    specification_version = "v1"
    default_object_generation_mode = "json"
    supports_image_urls = False
    supports_structured_outputs = False

    def __init__(
        self,
        model_id: str,
        settings: Optional[Mapping[str, Any]] = None,
        *,
        default_settings: Optional[Mapping[str, Any]] = None,
        loader: Optional[BackendLoader] = None,
    ) -> None:
        if not isinstance(model_id, str) or not model_id:
            raise create_invalid_model_error(model_id)
        self._model_id = model_id
        self._settings: Mapping[str, Any] = MappingProxyType(
            {**dict(default_settings or {}), **dict(settings or {})}
        )
        self._loader = loader
        self._logger = get_logger("codex_cli.language_model")

    # Identity ---------------------------------------------------------------
    @property
    def provider(self) -> str:
        return CODEX_CLI_PROVIDER_ID

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def settings(self) -> Mapping[str, Any]:
        return self._settings

    def get_model(self) -> str:
        """Return the backend-native model name for this instance's id."""
        return MODEL_ALIASES.get(self._model_id, self._model_id)

    def generate_unsupported_warnings(self, options: Mapping[str, Any]) -> List[UnsupportedWarning]:
        """One warning per sampling knob in ``options`` that the CLI ignores."""
        return [
            UnsupportedWarning(
                setting=name,
                details=f"Codex CLI does not support the {name} parameter. It will be ignored.",
            )
            for name in SAMPLING_FIELDS
            if options.get(name) is not None
        ]

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CodexCliLanguageModel(model_id={self._model_id!r})"

    # Setup ------------------------------------------------------------------
    def _context(self, operation: str) -> LogContext:
        return LogContext(
            provider=CODEX_CLI_PROVIDER_ID,
            model=self._model_id,
            operation=operation,
            request_id=uuid4().hex[:12],
        )

    def _warnings(self, request: GenerateRequest, ctx: LogContext) -> List[UnsupportedWarning]:
        warnings = self.generate_unsupported_warnings(request.options())
        if warnings:
            log_event(
                self._logger,
                "warnings.unsupported",
                ctx,
                level=logging.DEBUG,
                settings=[w.setting for w in warnings],
            )
        return warnings

    def _resolve_backend(self, operation: str) -> BackendHandle:
        loader = self._loader or get_backend_loader()
        return loader.resolve(model_id=self._model_id, operation=operation)

    def _build_query(
        self,
        request: GenerateRequest,
        token: CancellationToken,
        operation: str,
    ) -> BackendQuery:
        converted = convert_to_codex_cli_messages(request.prompt, json_mode=request.json_mode)
        merged = {**self._settings, **dict(request.settings or {})}
        try:
            options = to_backend_options(merged)
        except ValidationError as exc:
            raise create_api_call_error(
                f"Invalid Codex CLI settings: {exc.error_count()} validation error(s)",
                cause=exc,
                model_id=self._model_id,
                operation=operation,
            ) from exc
        options["model"] = self.get_model()
        if converted.system_prompt:
            options["system_prompt"] = converted.system_prompt
        options["abort_signal"] = token
        return BackendQuery(
            prompt_text=converted.messages_prompt,
            system_prompt=converted.system_prompt,
            options=options,
        )

    @staticmethod
    def _call_token(request: GenerateRequest) -> CancellationToken:
        parent = request.cancellation_token
        return parent.child() if parent is not None else CancellationToken()

    # Backend consumption ----------------------------------------------------
    async def _events(
        self,
        handle: BackendHandle,
        query: BackendQuery,
        token: CancellationToken,
    ) -> AsyncIterator[BackendEvent]:
        """Yield typed backend events; trip ``token`` if closed before the end."""
        token.raise_if_cancelled()
        stream = handle.query(prompt=query.prompt_text, options=query.options)
        if inspect.isawaitable(stream):
            stream = await stream
        terminal_seen = False
        try:
            async for record in stream:
                token.raise_if_cancelled()
                event = parse_backend_event(record)
                if event is None:
                    continue
                if isinstance(event, (ResultEvent, ErrorSignal)):
                    terminal_seen = True
                yield event
        finally:
            if not terminal_seen:
                token.cancel("backend stream closed before its result event")
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()

    def _classify(
        self,
        exc: BaseException,
        *,
        operation: str,
        handle: Optional[BackendHandle],
        query: Optional[BackendQuery],
    ) -> ClassifiedError:
        return classify_backend_error(
            exc,
            model_id=self._model_id,
            operation=operation,
            prompt=query.prompt_text if query is not None else None,
            abort_error=handle.abort_error if handle is not None else None,
        )

    # Operations -------------------------------------------------------------
    async def do_generate(self, request: GenerateRequest) -> GenerateResult:
        """Run one query to completion.

        Raises:
            ClassifiedError: for a missing SDK, invalid settings, any backend
                failure, a cancelled call, or a sequence without a result.
        """
        operation = "do_generate"
        ctx = self._context(operation)
        warnings = self._warnings(request, ctx)
        token = self._call_token(request)
        handle: Optional[BackendHandle] = None
        query: Optional[BackendQuery] = None
        normalized_log_event(self._logger, "generate.start", ctx, phase="start", attempt=1, emitted=False, tokens=None)
        try:
            handle = self._resolve_backend(operation)
            query = self._build_query(request, token, operation)
            chunks: List[str] = []
            result: Optional[ResultEvent] = None
            async with aclosing(self._events(handle, query, token)) as events:
                async for event in events:
                    if isinstance(event, AssistantTextDelta):
                        if result is None:
                            chunks.append(event.text)
                    elif isinstance(event, ResultEvent):
                        if result is None:
                            result = event
                    else:
                        raise BackendSignalError(event)
            if result is None:
                raise create_api_call_error(
                    "Codex CLI response ended without a result event",
                    model_id=self._model_id,
                    operation=operation,
                    prompt=query.prompt_text,
                )
            _check_result(result)
            text = "".join(chunks)
            if not text and result.result_text:
                text = result.result_text
            if request.json_mode:
                text = extract_json(text)
        except Exception as exc:
            err = self._classify(exc, operation=operation, handle=handle, query=query)
            normalized_log_event(
                self._logger,
                "generate.error",
                ctx,
                phase="finalize",
                attempt=1,
                error_code=err.kind.value,
                emitted=False,
                tokens=None,
                error=err.message,
            )
            if err is exc:
                raise
            raise err from exc

        usage = TokenUsage.from_counts(result.input_tokens, result.output_tokens)
        normalized_log_event(
            self._logger,
            "generate.end",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=bool(text),
            tokens=usage,
            finish_reason=_finish_reason(result),
        )
        raw_settings = {k: v for k, v in query.options.items() if k != "abort_signal"}
        return GenerateResult(
            text=text,
            usage=usage,
            warnings=warnings,
            finish_reason=_finish_reason(result),
            provider_metadata=_provider_metadata(result),
            raw_call={"raw_prompt": query.prompt_text, "raw_settings": raw_settings},
        )

    async def do_stream(self, request: GenerateRequest) -> StreamController:
        """Start one query and return a controller relaying its chunks.

        Setup failures (missing SDK, invalid settings) raise here, before any
        chunk is produced; backend failures raise from the controller's
        iteration.
        """
        operation = "do_stream"
        ctx = self._context(operation)
        warnings = self._warnings(request, ctx)
        token = self._call_token(request)
        handle: Optional[BackendHandle] = None
        try:
            handle = self._resolve_backend(operation)
            query = self._build_query(request, token, operation)
        except ClassifiedError as err:
            normalized_log_event(
                self._logger,
                "stream.error",
                ctx,
                phase="start",
                attempt=1,
                error_code=err.kind.value,
                emitted=False,
                tokens=None,
                error=err.message,
            )
            raise
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", attempt=1, emitted=False, tokens=None)
        source = self._relay(handle, query, token, ctx, operation)
        return StreamController(source, token, warnings=warnings)

    async def _relay(
        self,
        handle: BackendHandle,
        query: BackendQuery,
        token: CancellationToken,
        ctx: LogContext,
        operation: str,
    ) -> AsyncIterator[ChatStreamEvent]:
        metrics = StreamMetrics()
        finished = False
        failed = False
        try:
            async with aclosing(self._events(handle, query, token)) as events:
                async for event in events:
                    if finished:
                        continue
                    if isinstance(event, AssistantTextDelta):
                        metrics.record_delta()
                        yield ChatStreamEvent(provider=self.provider, model=self._model_id, delta=event.text)
                    elif isinstance(event, ResultEvent):
                        _check_result(event)
                        usage = TokenUsage.from_counts(event.input_tokens, event.output_tokens)
                        metrics.finish(usage)
                        finished = True
                        normalized_log_event(
                            self._logger,
                            "stream.end",
                            ctx,
                            phase="finalize",
                            attempt=1,
                            emitted=metrics.emitted > 0,
                            tokens=metrics.tokens,
                            chunks=metrics.emitted,
                            time_to_first_token_ms=metrics.time_to_first_token_ms,
                            total_duration_ms=metrics.total_duration_ms,
                        )
                        yield ChatStreamEvent(
                            provider=self.provider,
                            model=self._model_id,
                            delta=None,
                            finish=True,
                            usage=usage,
                            finish_reason=_finish_reason(event),
                        )
                    else:
                        raise BackendSignalError(event)
            if not finished:
                raise create_api_call_error(
                    "Codex CLI stream ended without a result event",
                    model_id=self._model_id,
                    operation=operation,
                    prompt=query.prompt_text,
                )
        except Exception as exc:
            failed = True
            err = self._classify(exc, operation=operation, handle=handle, query=query)
            metrics.finish()
            cancelled = err.kind is ErrorKind.TIMEOUT and token.cancelled
            normalized_log_event(
                self._logger,
                "stream.cancelled" if cancelled else "stream.error",
                ctx,
                phase="mid_stream",
                attempt=1,
                error_code=err.kind.value,
                emitted=metrics.emitted > 0,
                tokens=None,
                chunks=metrics.emitted,
                error=err.message,
            )
            if err is exc:
                raise
            raise err from exc
        finally:
            if not finished and not failed:
                # consumer stopped early; _events already tripped the token
                normalized_log_event(
                    self._logger,
                    "stream.cancelled",
                    ctx,
                    phase="mid_stream",
                    attempt=1,
                    emitted=metrics.emitted > 0,
                    tokens=None,
                    chunks=metrics.emitted,
                    reason=token.reason,
                )


__all__ = ["CodexCliLanguageModel", "BackendQuery", "MODEL_ALIASES"]
