"""Groq stream adapter (OpenAI-compatible chunks)."""

from __future__ import annotations

from typing import Any, List

from ...core.normalization.finish_reason import GROQ_FINISH_REASONS
from ...errors import RelayError
from ...models.generation import ProviderType
from ...streaming.types import StreamSignal
from ..base import ProviderStreamAdapter
from ..errors import ErrorMapper
from ..openai.parsers import ChunkDecodingState, decode_chat_completion_chunk
from .parsers import decode_x_groq


class GroqStreamAdapter(ProviderStreamAdapter):
    """Decodes Groq chat completion chunks, including the ``x_groq`` block."""

    provider = ProviderType.GROQ
    finish_reasons = GROQ_FINISH_REASONS

    def __init__(self):
        self._chunk_state = ChunkDecodingState()

    def decode(self, event: Any) -> List[StreamSignal]:
        extension = decode_x_groq(event)
        return decode_chat_completion_chunk(event, self.provider, self._chunk_state) + extension

    def wrap_error(self, error: BaseException) -> RelayError:
        return ErrorMapper.map_groq_error(error)
