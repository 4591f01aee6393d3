"""
Finish reason normalization.

Each provider supplies a table from its native stop reasons to the
canonical taxonomy. Unmapped values pass through lower-cased so new
upstream reasons stay visible instead of collapsing into 'unknown'.
"""

from typing import Any, Dict, Optional

from ...config.constants import (
    FINISH_CONTENT_FILTER,
    FINISH_ERROR,
    FINISH_LENGTH,
    FINISH_RECITATION_FILTER,
    FINISH_STOP,
    FINISH_TOOL_CALLS,
)
from ..utils import enum_value


ANTHROPIC_FINISH_REASONS: Dict[str, str] = {
    "end_turn": FINISH_STOP,
    "stop_sequence": FINISH_STOP,
    "max_tokens": FINISH_LENGTH,
    "tool_use": FINISH_TOOL_CALLS,
    "refusal": FINISH_CONTENT_FILTER,
}

OPENAI_FINISH_REASONS: Dict[str, str] = {
    "stop": FINISH_STOP,
    "length": FINISH_LENGTH,
    "tool_calls": FINISH_TOOL_CALLS,
    "function_call": FINISH_TOOL_CALLS,
    "content_filter": FINISH_CONTENT_FILTER,
}

GROQ_FINISH_REASONS: Dict[str, str] = dict(OPENAI_FINISH_REASONS)

GOOGLE_FINISH_REASONS: Dict[str, str] = {
    "STOP": FINISH_STOP,
    "MAX_TOKENS": FINISH_LENGTH,
    "SAFETY": FINISH_CONTENT_FILTER,
    "BLOCKLIST": FINISH_CONTENT_FILTER,
    "PROHIBITED_CONTENT": FINISH_CONTENT_FILTER,
    "SPII": FINISH_CONTENT_FILTER,
    "IMAGE_SAFETY": FINISH_CONTENT_FILTER,
    "RECITATION": FINISH_RECITATION_FILTER,
    "MALFORMED_FUNCTION_CALL": FINISH_ERROR,
}

# Reported by Gemini on intermediate chunks; carries no information
GOOGLE_IGNORED_FINISH_REASONS = frozenset({"FINISH_REASON_UNSPECIFIED"})


def normalize_finish_reason(raw: Any, table: Dict[str, str]) -> Optional[str]:
    """
    Map a provider stop reason onto the canonical taxonomy.

    Args:
        raw: Native stop reason (string or enum member)
        table: Provider mapping table

    Returns:
        Canonical reason, the lower-cased raw value when unmapped,
        or None when nothing was reported
    """
    value = enum_value(raw)
    if value is None:
        return None
    if value in table:
        return table[value]
    return value.lower()


def resolve_finish_reason(
    reported: Optional[str],
    tool_calls_started: bool,
    content_filtered: bool,
    default: str = FINISH_STOP,
) -> str:
    """
    Pick the finish reason of a completed stream.

    Content-safety blocks win over everything; once a tool call has
    started the reason is 'tool_calls'; otherwise the last reported
    reason, falling back to ``default``.
    """
    if content_filtered:
        return FINISH_CONTENT_FILTER
    if tool_calls_started:
        return FINISH_TOOL_CALLS
    return reported or default
