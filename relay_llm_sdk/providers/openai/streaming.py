"""OpenAI Chat Completions stream adapter (also Azure OpenAI)."""

from __future__ import annotations

from typing import Any, List

from ...core.normalization.finish_reason import OPENAI_FINISH_REASONS
from ...errors import RelayError
from ...models.generation import ProviderType
from ...streaming.types import StreamSignal
from ..base import ProviderStreamAdapter
from ..errors import ErrorMapper
from .parsers import ChunkDecodingState, decode_chat_completion_chunk


class OpenAIStreamAdapter(ProviderStreamAdapter):
    """Decodes ``ChatCompletionChunk`` objects.

    The model arrives on every chunk; a trailing chunk with empty
    ``choices`` carries usage when ``stream_options.include_usage`` is set.
    """

    provider = ProviderType.OPENAI
    finish_reasons = OPENAI_FINISH_REASONS

    def __init__(self):
        self._chunk_state = ChunkDecodingState()

    def decode(self, event: Any) -> List[StreamSignal]:
        return decode_chat_completion_chunk(event, self.provider, self._chunk_state)

    def wrap_error(self, error: BaseException) -> RelayError:
        return ErrorMapper.map_openai_error(error)
