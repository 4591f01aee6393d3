"""
Relay LLM SDK - Streaming normalization across LLM providers.

This package turns the native streaming formats of several providers
into one canonical event sequence:
- Anthropic (Messages API)
- Google (Gemini)
- Groq
- OpenAI (Chat Completions, also Azure OpenAI)

Features:
- Canonical stream events with a fixed ordering contract
- Tool call argument assembly across fragments
- JSON-mode detection with incremental parsing
- Citation deduplication, usage merging and finish reason mapping
- A single error taxonomy surfaced as a terminal error event
"""

__version__ = "0.1.0"

from .errors import (
    ConfigurationError,
    MappingError,
    ProviderAPIError,
    RelayError,
    UnsupportedFeatureError,
)
from .models.events import StreamEvent
from .models.generation import (
    Citation,
    FunctionCall,
    GenerateResult,
    ProviderType,
    TokenUsage,
    ToolCallRequest,
)
from .models.streaming import DEBUG_OPTIONS, DEFAULT_OPTIONS, StreamingOptions
from .providers import get_stream_adapter, list_stream_providers, normalize_stream
from .streaming import StreamAdapter, StreamingHelper

__all__ = [
    # Entry points
    "normalize_stream",
    "get_stream_adapter",
    "list_stream_providers",
    "StreamAdapter",
    "StreamingHelper",

    # Configuration
    "StreamingOptions",
    "DEFAULT_OPTIONS",
    "DEBUG_OPTIONS",

    # Models
    "StreamEvent",
    "ProviderType",
    "GenerateResult",
    "TokenUsage",
    "ToolCallRequest",
    "FunctionCall",
    "Citation",

    # Errors
    "RelayError",
    "ConfigurationError",
    "MappingError",
    "ProviderAPIError",
    "UnsupportedFeatureError",
]
