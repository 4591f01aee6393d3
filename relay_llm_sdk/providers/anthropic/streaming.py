"""Anthropic Messages API stream adapter."""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from ...core.normalization.finish_reason import ANTHROPIC_FINISH_REASONS
from ...core.utils import get_str, is_structured
from ...errors import MappingError, RelayError
from ...models.generation import ProviderType
from ...streaming.types import StreamSignal, Unrecognized
from ..base import ProviderStreamAdapter
from ..errors import ErrorMapper
from . import parsers

EVENT_DECODERS: Dict[str, Callable[[Any], List[StreamSignal]]] = {
    "message_start": parsers.decode_message_start,
    "content_block_start": parsers.decode_content_block_start,
    "content_block_delta": parsers.decode_content_block_delta,
    "content_block_stop": parsers.decode_content_block_stop,
    "message_delta": parsers.decode_message_delta,
    # The stream ends on exhaustion; message_stop carries nothing else
    "message_stop": parsers.ignore,
    "ping": parsers.ignore,
    "error": parsers.raise_stream_error,
}


class AnthropicStreamAdapter(ProviderStreamAdapter):
    """Decodes Anthropic server-sent events (``MessageStreamEvent``)."""

    provider = ProviderType.ANTHROPIC
    finish_reasons = ANTHROPIC_FINISH_REASONS

    def decode(self, event: Any) -> List[StreamSignal]:
        event_type = get_str(event, "type") if is_structured(event) else None
        if event_type is None:
            raise MappingError(
                f"Anthropic stream event without a type: {type(event).__name__}",
                provider=self.provider.value,
                context="decode",
                cause=event,
            )
        decoder = EVENT_DECODERS.get(event_type)
        if decoder is None:
            return [Unrecognized(kind=event_type)]
        return decoder(event)

    def wrap_error(self, error: BaseException) -> RelayError:
        return ErrorMapper.map_anthropic_error(error)
