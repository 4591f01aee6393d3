from __future__ import annotations

import logging
from typing import Any, List, Optional

from ...core.normalization.usage import extract_token_usage
from ...core.utils import first_present, get_int, get_str, safe_get
from ...errors import ProviderAPIError
from ...models.generation import Citation, ProviderType
from ..errors import ErrorMapper
from ...streaming.types import (
    BlockStopped,
    CitationsReported,
    FinishReported,
    MessageStarted,
    StreamSignal,
    TextFragment,
    ThinkingFragment,
    ThinkingStarted,
    ToolArgumentsFragment,
    ToolCallFragment,
    Unrecognized,
    UsageReported,
)

logger = logging.getLogger(__name__)

THINKING_BLOCK_TYPES = ("thinking", "redacted_thinking")
TOOL_BLOCK_TYPES = ("tool_use", "server_tool_use")

# HTTP status Anthropic uses for each error type
ERROR_TYPE_STATUS = {
    "invalid_request_error": 400,
    "authentication_error": 401,
    "permission_error": 403,
    "not_found_error": 404,
    "request_too_large": 413,
    "rate_limit_error": 429,
    "api_error": 500,
    "overloaded_error": 529,
}


def parse_citation(raw: Any) -> Optional[Citation]:
    """Read any Anthropic citation location (char, page, block, web search)."""
    if raw is None:
        return None
    source_id = first_present(raw, "url", "document_title", "file_id")
    if source_id is None:
        document_index = get_int(raw, "document_index")
        source_id = f"document_{document_index}" if document_index is not None else None
    if source_id is None:
        return None
    return Citation(
        source_id=str(source_id),
        start_index=get_int(raw, "start_char_index", "start_page_number", "start_block_index"),
        end_index=get_int(raw, "end_char_index", "end_page_number", "end_block_index"),
        text=get_str(raw, "cited_text", "title"),
    )


def decode_message_start(event: Any) -> List[StreamSignal]:
    message = safe_get(event, "message")
    signals: List[StreamSignal] = [MessageStarted(model=get_str(message, "model"))]
    usage = extract_token_usage(safe_get(message, "usage"))
    if usage is not None:
        signals.append(UsageReported(usage=usage))
    return signals


def decode_content_block_start(event: Any) -> List[StreamSignal]:
    index = get_int(event, "index")
    block = safe_get(event, "content_block")
    block_type = get_str(block, "type")

    if block_type in THINKING_BLOCK_TYPES:
        signals: List[StreamSignal] = [ThinkingStarted()]
        thinking = get_str(block, "thinking")
        if thinking:
            signals.append(ThinkingFragment(text=thinking))
        return signals
    if block_type in TOOL_BLOCK_TYPES:
        # Arguments stream as input_json_delta; the initial empty input is not sent
        return [ToolCallFragment(index=index, call_id=get_str(block, "id"), name=get_str(block, "name"))]
    if block_type == "text":
        text = get_str(block, "text")
        return [TextFragment(text=text)] if text else []
    return [Unrecognized(kind=f"content_block_start:{block_type}")]


def decode_content_block_delta(event: Any) -> List[StreamSignal]:
    index = get_int(event, "index")
    delta = safe_get(event, "delta")
    delta_type = get_str(delta, "type")

    if delta_type == "text_delta":
        return [TextFragment(text=get_str(delta, "text") or "")]
    if delta_type == "thinking_delta":
        return [ThinkingFragment(text=get_str(delta, "thinking") or "")]
    if delta_type == "input_json_delta":
        return [ToolArgumentsFragment(index=index, arguments=get_str(delta, "partial_json") or "")]
    if delta_type == "citations_delta":
        citation = parse_citation(safe_get(delta, "citation"))
        if citation is None:
            logger.warning("Skipping Anthropic citation without a source")
            return []
        return [CitationsReported(citations=[citation])]
    if delta_type == "signature_delta":
        return []
    return [Unrecognized(kind=f"content_block_delta:{delta_type}")]


def decode_content_block_stop(event: Any) -> List[StreamSignal]:
    return [BlockStopped(index=get_int(event, "index"))]


def decode_message_delta(event: Any) -> List[StreamSignal]:
    signals: List[StreamSignal] = []
    usage = extract_token_usage(safe_get(event, "usage"))
    if usage is not None:
        signals.append(UsageReported(usage=usage))
    stop_reason = safe_get(event, "delta", "stop_reason")
    if stop_reason is not None:
        signals.append(FinishReported(reason=stop_reason))
    return signals


def raise_stream_error(event: Any) -> List[StreamSignal]:
    """An ``error`` event inside the stream (e.g. overloaded_error) ends it."""
    payload = event if isinstance(event, dict) else {
        "type": "error",
        "error": {
            "type": get_str(safe_get(event, "error"), "type"),
            "message": get_str(safe_get(event, "error"), "message"),
        },
    }
    error_type = get_str(safe_get(payload, "error"), "type")
    error: ProviderAPIError = ErrorMapper.from_payload(
        payload, ProviderType.ANTHROPIC, status_code=ERROR_TYPE_STATUS.get(error_type)
    )
    raise error


def ignore(event: Any) -> List[StreamSignal]:
    return []
