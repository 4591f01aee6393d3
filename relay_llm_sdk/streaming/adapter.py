from __future__ import annotations

import inspect
import time
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, AsyncIterator, List, Optional

from ..errors import MappingError, RelayError
from ..models.events import (
    ErrorEvent,
    FinalResultEvent,
    FinalUsageEvent,
    MessageStartEvent,
    MessageStopEvent,
    StreamEvent,
    ThinkingDeltaEvent,
    ThinkingStartEvent,
    ThinkingStopEvent,
)
from ..models.streaming import DEFAULT_OPTIONS, StreamingOptions
from ..config.constants import FINISH_CONTENT_FILTER
from ..core.normalization.finish_reason import normalize_finish_reason
from ..core.normalization.usage import merge_usage
from ..observability.logging import ProviderLogger
from .citations import apply_citations
from .json_handler import JsonStreamHandler
from .state import StreamAccumulatorState
from .tool_calls import (
    apply_tool_arguments,
    apply_tool_call_fragment,
    finish_all_tool_calls,
    finish_tool_call,
)
from .types import (
    BlockStopped,
    CitationsReported,
    FinishReported,
    MessageStarted,
    StreamSignal,
    TextFragment,
    ThinkingFragment,
    ThinkingStarted,
    ToolArgumentsFragment,
    ToolCallCompleted,
    ToolCallFragment,
    Unrecognized,
    UsageReported,
)

if TYPE_CHECKING:
    from ..providers.base import ProviderStreamAdapter


FIRST_TOKEN_EVENT_TYPES = frozenset({"content_delta", "json_delta", "thinking_delta", "tool_call_start"})


class StreamAdapter:
    """Normalizes one upstream stream into the canonical event sequence.

    The provider adapter decodes native events into signals; this class
    applies them to a StreamAccumulatorState through the shared
    accumulation primitives and yields the resulting canonical events.
    It also tracks streaming metrics.

    Every successful stream is ``message_start``, content events,
    ``message_stop``, ``final_usage`` (only when usage was reported) and
    ``final_result``. Any failure ends the stream with a single ``error``
    event; exceptions never escape the generator.
    """

    def __init__(
        self,
        decoder: "ProviderStreamAdapter",
        model: Optional[str] = None,
        options: Optional[StreamingOptions] = None,
    ):
        """Initialize StreamAdapter with a provider adapter.

        Args:
            decoder: Provider stream adapter for the upstream's wire format
            model: Model requested by the caller, used when the upstream never reports one
            options: Streaming options
        """
        self.decoder = decoder
        self.provider = decoder.get_provider_name()
        self.model = model or ""
        self.options = options or DEFAULT_OPTIONS
        self.logger = ProviderLogger(self.provider)
        self.json_handler = JsonStreamHandler(detect=self.options.detect_json_mode)
        self.state: Optional[StreamAccumulatorState] = None
        self.raw_events: List[Any] = []
        self._request_id: Optional[str] = self.options.request_id
        self._event_count = 0
        self._upstream_count = 0
        self._total_chars = 0
        self._start_time: Optional[float] = None
        self._first_token_time: Optional[float] = None
        self._consumed = False

    def stream(self, upstream: Any) -> AsyncIterator[StreamEvent]:
        """Normalize ``upstream`` into canonical events.

        Args:
            upstream: Async iterable of native events (an awaitable resolving
                to one, or a plain iterable of recorded events, also works)

        Returns:
            Async iterator of canonical events

        Raises:
            MappingError: The adapter was already used for another stream
        """
        if self._consumed:
            raise MappingError(
                "A StreamAdapter normalizes exactly one stream; create a new one per request",
                provider=self.provider,
                context="stream",
            )
        self._consumed = True
        return self._run(upstream)

    async def _run(self, upstream: Any) -> AsyncIterator[StreamEvent]:
        state = StreamAccumulatorState(provider=self.provider, model=self.model)
        self.state = state
        self._start_time = time.time()

        with self.logger.track_stream(self.model, self._request_id) as tracking:
            self._request_id = tracking["request_id"]
            try:
                if self.decoder.announces_start_immediately:
                    for event in self._ensure_started(state):
                        yield self._track(event)

                source = upstream
                if inspect.isawaitable(source):
                    source = await source

                if hasattr(source, "__aiter__"):
                    async for raw_event in source:
                        for event in self._consume(state, raw_event):
                            yield self._track(event)
                elif isinstance(source, Iterable) and not isinstance(source, (str, bytes)):
                    for raw_event in source:
                        for event in self._consume(state, raw_event):
                            yield self._track(event)
                else:
                    raise MappingError(
                        f"Upstream of type {type(source).__name__} is not an event stream",
                        provider=self.provider,
                        context="stream",
                    )

                for event in self._finish(state):
                    yield self._track(event)
            except Exception as e:
                error = self.decoder.wrap_error(e)
                tracking["error"] = error
                tracking["model"] = state.model
                state.close()
                yield self._track(ErrorEvent(error=error))
                return

            tracking["model"] = state.model
            if self.options.log_streaming_metrics:
                self._log_metrics(state)

    def _track(self, event: StreamEvent) -> StreamEvent:
        self._event_count += 1
        if self._first_token_time is None and event.type in FIRST_TOKEN_EVENT_TYPES:
            self._first_token_time = time.time()
        delta = getattr(event, "delta", None)
        if isinstance(delta, str):
            self._total_chars += len(delta)
        return event

    def _consume(self, state: StreamAccumulatorState, raw_event: Any) -> List[StreamEvent]:
        self._upstream_count += 1
        if self.options.capture_raw_events:
            self.raw_events.append(raw_event)

        try:
            signals = self.decoder.decode(raw_event)
        except RelayError:
            raise
        except Exception as e:
            raise MappingError(
                f"Could not interpret upstream event: {e}",
                provider=self.provider,
                context="decode",
                cause=e,
            ) from e

        events: List[StreamEvent] = []
        for signal in signals:
            events.extend(self._apply(state, signal))
        return events

    def _ensure_started(self, state: StreamAccumulatorState, model: Optional[str] = None) -> List[StreamEvent]:
        # A reported model replaces the fallback label; an already sent message_start keeps its label
        if model:
            state.model = model
        if state.started:
            return []
        state.started = True
        return [MessageStartEvent(provider=self.provider, model=state.model)]

    def _apply(self, state: StreamAccumulatorState, signal: StreamSignal) -> List[StreamEvent]:
        """Apply one decoded signal and return the canonical events it produces."""
        state.ensure_open()

        if isinstance(signal, MessageStarted):
            return self._ensure_started(state, signal.model)

        if isinstance(signal, Unrecognized):
            self.logger.debug(
                f"Skipping unrecognized upstream event: {signal.kind}",
                model=state.model,
                request_id=self._request_id,
            )
            return []

        events = self._ensure_started(state)

        if isinstance(signal, TextFragment):
            events.extend(self.json_handler.process_fragment(state, signal.text))
        elif isinstance(signal, ThinkingStarted):
            events.extend(self._open_thinking(state))
        elif isinstance(signal, ThinkingFragment):
            if signal.text:
                events.extend(self._open_thinking(state))
                state.thinking_text = (state.thinking_text or "") + signal.text
                events.append(ThinkingDeltaEvent(delta=signal.text))
        elif isinstance(signal, BlockStopped):
            if signal.index is not None:
                events.extend(finish_tool_call(state, index=signal.index))
            events.extend(self._close_thinking(state))
        elif isinstance(signal, ToolCallFragment):
            events.extend(self._close_thinking(state))
            events.extend(
                apply_tool_call_fragment(
                    state,
                    index=signal.index,
                    call_id=signal.call_id,
                    name=signal.name,
                    arguments=signal.arguments,
                )
            )
        elif isinstance(signal, ToolArgumentsFragment):
            events.extend(apply_tool_arguments(state, signal.index, signal.arguments))
        elif isinstance(signal, ToolCallCompleted):
            events.extend(finish_tool_call(state, index=signal.index))
        elif isinstance(signal, CitationsReported):
            events.extend(apply_citations(state, signal.citations))
        elif isinstance(signal, UsageReported):
            state.usage = merge_usage(state.usage, signal.usage)
        elif isinstance(signal, FinishReported):
            events.extend(self._record_finish(state, signal))
        else:
            raise MappingError(
                f"Unknown stream signal {type(signal).__name__}",
                provider=self.provider,
                context="apply",
            )
        return events

    def _open_thinking(self, state: StreamAccumulatorState) -> List[StreamEvent]:
        if state.thinking_open:
            return []
        state.thinking_open = True
        if state.thinking_text is None:
            state.thinking_text = ""
        return [ThinkingStartEvent()]

    def _close_thinking(self, state: StreamAccumulatorState) -> List[StreamEvent]:
        if not state.thinking_open:
            return []
        state.thinking_open = False
        return [ThinkingStopEvent()]

    def _record_finish(self, state: StreamAccumulatorState, signal: FinishReported) -> List[StreamEvent]:
        reason = signal.canonical or normalize_finish_reason(signal.reason, self.decoder.finish_reasons)
        if reason is None:
            return []
        if reason == FINISH_CONTENT_FILTER:
            state.content_filtered = True
        state.reported_finish_reason = reason
        # The terminal finish signal completes every call still in flight
        return finish_all_tool_calls(state)

    def _finish(self, state: StreamAccumulatorState) -> List[StreamEvent]:
        """Build the terminal sequence once the upstream is exhausted."""
        events = self._ensure_started(state)
        events.extend(finish_all_tool_calls(state))
        events.extend(self._close_thinking(state))
        events.extend(self.json_handler.finalize(state))

        state.finish_reason = state.resolve_finish_reason(self.options.default_finish_reason)
        events.append(MessageStopEvent(finish_reason=state.finish_reason))

        if state.usage_known:
            events.append(FinalUsageEvent(usage=state.usage))
            self.logger.log_usage(state.usage, state.model, self._request_id)

        result = state.to_result(parsed_content=self.json_handler.final_object(state))
        events.append(FinalResultEvent(result=result))
        state.close()
        return events

    def _log_metrics(self, state: StreamAccumulatorState) -> None:
        duration = time.time() - self._start_time if self._start_time else 0.0
        ttft = None
        if self.options.measure_ttft and self._first_token_time is not None and self._start_time:
            ttft = self._first_token_time - self._start_time
        self.logger.log_streaming_metrics(
            events=self._event_count,
            upstream_events=self._upstream_count,
            total_chars=self._total_chars,
            duration=duration,
            model=state.model,
            request_id=self._request_id,
            ttft=ttft,
            tool_calls=len([call for call in state.ordered_tool_calls() if call.started]),
            citations=len(state.citations),
            **self.json_handler.get_statistics(),
        )

    def get_metrics(self) -> dict:
        """Get streaming metrics for the stream normalized so far."""
        duration = time.time() - self._start_time if self._start_time else 0.0
        ttft = None
        if self._first_token_time is not None and self._start_time:
            ttft = self._first_token_time - self._start_time
        return {
            "events": self._event_count,
            "upstream_events": self._upstream_count,
            "total_chars": self._total_chars,
            "duration": duration,
            "ttft": ttft,
            "request_id": self._request_id,
        }
