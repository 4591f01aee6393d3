from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from ...core.normalization.usage import extract_token_usage
from ...core.utils import get_int, get_str, is_structured, safe_get
from ...errors import MappingError
from ...models.generation import ProviderType
from ...streaming.types import (
    BlockStopped,
    FinishReported,
    MessageStarted,
    StreamSignal,
    TextFragment,
    ThinkingFragment,
    ToolCallFragment,
    Unrecognized,
    UsageReported,
)
from ..errors import ErrorMapper

# Reasoning text field names used by OpenAI-compatible deployments
REASONING_FIELDS = ("reasoning_content", "reasoning")


@dataclass
class ChunkDecodingState:
    """Per-stream bookkeeping for Chat Completions chunk decoding."""
    reasoning_open: bool = False


def parse_tool_call_deltas(delta: Any) -> List[ToolCallFragment]:
    """Read ``delta.tool_calls``; fragments are addressed by ``index``."""
    fragments: List[ToolCallFragment] = []
    for position, tool_call in enumerate(safe_get(delta, "tool_calls") or []):
        function = safe_get(tool_call, "function")
        index = get_int(tool_call, "index")
        fragments.append(
            ToolCallFragment(
                index=index if index is not None else position,
                call_id=get_str(tool_call, "id") or None,
                name=get_str(function, "name") or None,
                arguments=get_str(function, "arguments") or "",
            )
        )
    return fragments


def decode_choice(choice: Any, chunk_state: ChunkDecodingState) -> List[StreamSignal]:
    """Decode the first choice of a chunk: reasoning, text, tool calls, finish."""
    signals: List[StreamSignal] = []
    delta = safe_get(choice, "delta")

    reasoning = get_str(delta, *REASONING_FIELDS)
    if reasoning:
        chunk_state.reasoning_open = True
        signals.append(ThinkingFragment(text=reasoning))

    content = get_str(delta, "content")
    tool_calls = parse_tool_call_deltas(delta)
    if chunk_state.reasoning_open and (content or tool_calls):
        chunk_state.reasoning_open = False
        signals.append(BlockStopped(index=None))

    if content:
        signals.append(TextFragment(text=content))
    signals.extend(tool_calls)

    finish_reason = safe_get(choice, "finish_reason")
    if finish_reason is not None:
        signals.append(FinishReported(reason=finish_reason))
    return signals


def decode_chat_completion_chunk(
    chunk: Any,
    provider: ProviderType,
    chunk_state: ChunkDecodingState,
) -> List[StreamSignal]:
    """
    Decode one Chat Completions chunk (OpenAI, Azure OpenAI, Groq).

    Args:
        chunk: ``ChatCompletionChunk`` or its JSON dict
        provider: Provider the chunk came from
        chunk_state: Per-stream decoding state

    Returns:
        Signals for this chunk

    Raises:
        MappingError: The chunk is not an object
        ProviderAPIError: The chunk is an error payload
    """
    if not is_structured(chunk):
        raise MappingError(
            f"Chat completion chunk is not an object: {type(chunk).__name__}",
            provider=provider.value,
            context="decode",
            cause=chunk,
        )

    choices = safe_get(chunk, "choices")
    if choices is None and safe_get(chunk, "error") is not None:
        raise ErrorMapper.from_payload(chunk, provider)

    usage_data = safe_get(chunk, "usage")
    model = get_str(chunk, "model")
    if choices is None and usage_data is None and not model:
        return [Unrecognized(kind=get_str(chunk, "object") or type(chunk).__name__)]

    signals: List[StreamSignal] = []
    if model:
        signals.append(MessageStarted(model=model))

    choice = first_choice(choices)
    if choice is not None:
        signals.extend(decode_choice(choice, chunk_state))

    usage = extract_token_usage(usage_data)
    if usage is not None:
        signals.append(UsageReported(usage=usage))
    return signals


def first_choice(choices: Any) -> Optional[Any]:
    """Only the first candidate (index 0) is normalized."""
    for choice in choices or []:
        if get_int(choice, "index") in (None, 0):
            return choice
    return None
