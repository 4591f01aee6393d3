"""Google Gemini stream adapter (``generate_content_stream`` responses)."""

from __future__ import annotations

import logging
from typing import Any, List, Set

from ...core.normalization.finish_reason import GOOGLE_FINISH_REASONS
from ...core.utils import get_str, is_structured, safe_get
from ...errors import MappingError, RelayError
from ...models.generation import ProviderType
from ...streaming.types import (
    BlockStopped,
    CitationsReported,
    MessageStarted,
    StreamSignal,
    TextFragment,
    ThinkingFragment,
    ToolCallCompleted,
    ToolCallFragment,
    UsageReported,
)
from ..base import ProviderStreamAdapter
from ..errors import ErrorMapper
from . import parsers

logger = logging.getLogger(__name__)


class GoogleStreamAdapter(ProviderStreamAdapter):
    """Decodes ``GenerateContentResponse`` chunks.

    Gemini never opens the response with a dedicated event, so the stream
    starts immediately under the requested model label. Function calls
    arrive complete in a single part and are opened, filled and closed at
    once.
    """

    provider = ProviderType.GOOGLE
    finish_reasons = GOOGLE_FINISH_REASONS
    announces_start_immediately = True

    def __init__(self):
        self._thinking_open = False
        self._tool_call_count = 0
        self._tool_call_ids: Set[str] = set()

    def decode(self, event: Any) -> List[StreamSignal]:
        if not is_structured(event):
            raise MappingError(
                f"Gemini stream chunk is not an object: {type(event).__name__}",
                provider=self.provider.value,
                context="decode",
                cause=event,
            )

        signals: List[StreamSignal] = []
        model = parsers.model_version(event)
        if model:
            signals.append(MessageStarted(model=model))

        signals.extend(parsers.parse_prompt_block(event))

        candidate = parsers.first_candidate(event)
        if candidate is not None:
            for part in parsers.candidate_parts(candidate):
                signals.extend(self._decode_part(part))
            citations = parsers.parse_citations(candidate)
            if citations:
                signals.append(CitationsReported(citations=citations))
            signals.extend(parsers.parse_finish_reason(candidate))

        usage = parsers.parse_usage(event)
        if usage is not None:
            signals.append(UsageReported(usage=usage))
        return signals

    def _close_thinking(self) -> List[StreamSignal]:
        if not self._thinking_open:
            return []
        self._thinking_open = False
        return [BlockStopped(index=None)]

    def _decode_part(self, part: Any) -> List[StreamSignal]:
        signals: List[StreamSignal] = []
        text = get_str(part, "text")
        if text:
            if parsers.is_thought(part):
                self._thinking_open = True
                signals.append(ThinkingFragment(text=text))
            else:
                signals.extend(self._close_thinking())
                signals.append(TextFragment(text=text))

        function_call = parsers.function_call_of(part)
        if function_call is not None:
            signals.extend(self._close_thinking())
            signals.extend(self._decode_function_call(function_call))
        return signals

    def _decode_function_call(self, function_call: Any) -> List[StreamSignal]:
        name = get_str(function_call, "name")
        if not name:
            logger.warning("Skipping Gemini function call without a name")
            return []

        index = self._tool_call_count
        self._tool_call_count += 1
        call_id = get_str(function_call, "id")
        if not call_id or call_id in self._tool_call_ids:
            call_id = f"google_func_{name}_{index}"
        self._tool_call_ids.add(call_id)

        arguments = parsers.encode_function_args(safe_get(function_call, "args"))
        return [
            ToolCallFragment(index=index, call_id=call_id, name=name, arguments=arguments),
            ToolCallCompleted(index=index),
        ]

    def wrap_error(self, error: BaseException) -> RelayError:
        return ErrorMapper.map_google_error(error)
