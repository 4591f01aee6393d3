"""Normalization layer for standardizing provider stream data.

This layer handles:
- Usage data extraction and merging
- Finish reason mapping and precedence
"""

from .finish_reason import normalize_finish_reason, resolve_finish_reason
from .usage import extract_token_usage, merge_usage

__all__ = [
    "extract_token_usage",
    "merge_usage",
    "normalize_finish_reason",
    "resolve_finish_reason",
]
