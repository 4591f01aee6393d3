"""Configuration module for Relay LLM SDK."""

from .constants import *

__all__ = [
    "CANONICAL_FINISH_REASONS",
    "FINISH_STOP",
    "FINISH_LENGTH",
    "FINISH_TOOL_CALLS",
    "FINISH_CONTENT_FILTER",
    "FINISH_RECITATION_FILTER",
    "FINISH_ERROR",
    "FINISH_UNKNOWN",
]
