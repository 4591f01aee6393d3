from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from ...core.normalization.finish_reason import GOOGLE_IGNORED_FINISH_REASONS
from ...core.normalization.usage import extract_token_usage
from ...core.utils import enum_value, first_present, get_int, get_str, safe_get
from ...config.constants import FINISH_CONTENT_FILTER, FINISH_ERROR
from ...models.generation import Citation
from ...streaming.types import FinishReported, StreamSignal

logger = logging.getLogger(__name__)

# Prompt block reasons that mean a safety block rather than a generic refusal
SAFETY_BLOCK_REASONS = frozenset({"SAFETY", "BLOCKLIST", "PROHIBITED_CONTENT", "IMAGE_SAFETY"})


def first_candidate(response: Any) -> Optional[Any]:
    return safe_get(response, "candidates", 0)


def candidate_parts(candidate: Any) -> List[Any]:
    return list(safe_get(candidate, "content", "parts") or [])


def is_thought(part: Any) -> bool:
    return safe_get(part, "thought") is True


def function_call_of(part: Any) -> Optional[Any]:
    return first_present(part, "function_call", "functionCall")


def encode_function_args(args: Any) -> str:
    """Gemini delivers complete arguments as a mapping; re-encode them as JSON text."""
    if args is None:
        return "{}"
    try:
        return json.dumps(dict(args))
    except (TypeError, ValueError):
        return json.dumps(args, default=str)


def parse_citations(candidate: Any) -> List[Citation]:
    """Read the citation list Gemini resends with every chunk."""
    metadata = first_present(candidate, "citation_metadata", "citationMetadata")
    sources = first_present(metadata, "citations", "citation_sources", "citationSources") or []
    citations: List[Citation] = []
    for position, source in enumerate(sources):
        uri = get_str(source, "uri")
        citations.append(
            Citation(
                source_id=uri or f"google_cite_idx_{position}",
                start_index=get_int(source, "start_index", "startIndex"),
                end_index=get_int(source, "end_index", "endIndex"),
                text=get_str(source, "title", "license"),
            )
        )
    return citations


def parse_finish_reason(candidate: Any) -> List[StreamSignal]:
    reason = enum_value(first_present(candidate, "finish_reason", "finishReason"))
    if reason is None or reason in GOOGLE_IGNORED_FINISH_REASONS:
        return []
    return [FinishReported(reason=reason)]


def parse_prompt_block(response: Any) -> List[StreamSignal]:
    """A blocked prompt produces no candidates, only ``prompt_feedback.block_reason``."""
    feedback = first_present(response, "prompt_feedback", "promptFeedback")
    reason = enum_value(first_present(feedback, "block_reason", "blockReason"))
    if reason is None or reason == "BLOCKED_REASON_UNSPECIFIED":
        return []
    logger.warning(f"Gemini blocked the prompt: {reason}")
    canonical = FINISH_CONTENT_FILTER if reason in SAFETY_BLOCK_REASONS else FINISH_ERROR
    return [FinishReported(reason=reason, canonical=canonical)]


def parse_usage(response: Any):
    return extract_token_usage(first_present(response, "usage_metadata", "usageMetadata"))


def model_version(response: Any) -> Optional[str]:
    return get_str(response, "model_version", "modelVersion")
