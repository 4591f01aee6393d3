"""
Usage normalization module.

Providers report token counts under different field names and at
different points of a stream. This module reads any provider's spelling
into a TokenUsage and merges successive reports into one running total.
"""

from typing import Any, Optional

from ...models.generation import TokenUsage
from ..utils import get_int, safe_get


PROMPT_TOKEN_FIELDS = ("prompt_tokens", "input_tokens", "prompt_token_count", "promptTokenCount")
COMPLETION_TOKEN_FIELDS = (
    "completion_tokens",
    "output_tokens",
    "candidates_token_count",
    "candidatesTokenCount",
)
TOTAL_TOKEN_FIELDS = ("total_tokens", "total_token_count", "totalTokenCount")
CACHED_TOKEN_FIELDS = (
    "cached_content_token_count",
    "cachedContentTokenCount",
    "cache_read_input_tokens",
    "cached_tokens",
)


def extract_token_usage(usage_data: Any) -> Optional[TokenUsage]:
    """
    Read a provider usage payload into a TokenUsage.

    Totals are never synthesized here; merge_usage decides how to fill
    them in.

    Args:
        usage_data: Usage dict or SDK object from any supported provider

    Returns:
        TokenUsage, or None when no count was present
    """
    if usage_data is None:
        return None

    cached = get_int(usage_data, *CACHED_TOKEN_FIELDS)
    if cached is None:
        # OpenAI nests cache hits under prompt_tokens_details
        cached = get_int(safe_get(usage_data, "prompt_tokens_details"), "cached_tokens")

    usage = TokenUsage(
        prompt_tokens=get_int(usage_data, *PROMPT_TOKEN_FIELDS),
        completion_tokens=get_int(usage_data, *COMPLETION_TOKEN_FIELDS),
        total_tokens=get_int(usage_data, *TOTAL_TOKEN_FIELDS),
        cached_content_token_count=cached,
    )
    return None if usage.is_empty() else usage


def _is_derived_total(usage: TokenUsage) -> bool:
    """True when the total is just prompt + completion, i.e. not an independent upstream figure."""
    return (
        usage.prompt_tokens is not None
        and usage.completion_tokens is not None
        and usage.total_tokens == usage.prompt_tokens + usage.completion_tokens
    )


def merge_usage(current: Optional[TokenUsage], update: Optional[TokenUsage]) -> Optional[TokenUsage]:
    """
    Merge a usage report into the running usage of a stream.

    Fields present in ``update`` replace the known values. An explicitly
    reported total wins and is kept until a newer explicit total arrives;
    otherwise the total is recomputed as prompt + completion whenever both
    are known, so a completion-only update keeps the earlier prompt count.
    A total equal to prompt + completion is treated as recomputable.

    Args:
        current: Usage known so far (None if none yet)
        update: Newly reported usage

    Returns:
        The merged usage, or ``current`` when the update carries nothing
    """
    if update is None or update.is_empty():
        return current
    base = current or TokenUsage()

    prompt = update.prompt_tokens if update.prompt_tokens is not None else base.prompt_tokens
    completion = (
        update.completion_tokens if update.completion_tokens is not None else base.completion_tokens
    )
    cached = (
        update.cached_content_token_count
        if update.cached_content_token_count is not None
        else base.cached_content_token_count
    )

    if update.total_tokens is not None:
        total = update.total_tokens
    elif base.total_tokens is not None and not _is_derived_total(base):
        total = base.total_tokens
    elif prompt is not None and completion is not None:
        total = prompt + completion
    else:
        total = base.total_tokens

    return TokenUsage(
        prompt_tokens=prompt,
        completion_tokens=completion,
        total_tokens=total,
        cached_content_token_count=cached,
    )
