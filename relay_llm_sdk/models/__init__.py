from .generation import (
    Citation,
    FunctionCall,
    GenerateResult,
    ProviderType,
    TokenUsage,
    ToolCallRequest,
)
from .events import (
    StreamEvent,
    MessageStartEvent,
    ContentDeltaEvent,
    ThinkingStartEvent,
    ThinkingDeltaEvent,
    ThinkingStopEvent,
    ToolCallStartEvent,
    ToolCallDeltaEvent,
    ToolCallDoneEvent,
    JsonDeltaEvent,
    JsonDoneEvent,
    CitationDeltaEvent,
    CitationDoneEvent,
    MessageStopEvent,
    FinalUsageEvent,
    FinalResultEvent,
    ErrorEvent,
)
from .streaming import StreamingOptions, DEFAULT_OPTIONS, DEBUG_OPTIONS

__all__ = [
    "Citation",
    "FunctionCall",
    "GenerateResult",
    "ProviderType",
    "TokenUsage",
    "ToolCallRequest",
    "StreamEvent",
    "MessageStartEvent",
    "ContentDeltaEvent",
    "ThinkingStartEvent",
    "ThinkingDeltaEvent",
    "ThinkingStopEvent",
    "ToolCallStartEvent",
    "ToolCallDeltaEvent",
    "ToolCallDoneEvent",
    "JsonDeltaEvent",
    "JsonDoneEvent",
    "CitationDeltaEvent",
    "CitationDoneEvent",
    "MessageStopEvent",
    "FinalUsageEvent",
    "FinalResultEvent",
    "ErrorEvent",
    "StreamingOptions",
    "DEFAULT_OPTIONS",
    "DEBUG_OPTIONS",
]
