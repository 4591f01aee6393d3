"""Streaming layer for canonical event normalization.

This layer handles:
- The per-stream accumulator state
- Tool call, JSON mode and citation accumulation
- The StreamAdapter engine turning decoded signals into canonical events
- Helpers for consuming canonical streams
"""

from .adapter import StreamAdapter
from .helpers import StreamingHelper
from .json_handler import JsonStreamHandler, detect_json_mode, parse_json_best_effort
from .state import StreamAccumulatorState, ToolCallState

__all__ = [
    "StreamAdapter",
    "StreamingHelper",
    "JsonStreamHandler",
    "StreamAccumulatorState",
    "ToolCallState",
    "detect_json_mode",
    "parse_json_best_effort",
]
