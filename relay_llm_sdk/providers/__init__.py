"""
Provider Stream Adapters Layer

This layer contains all provider-specific stream decoding. Each adapter
translates its provider's native stream events into typed signals that
the shared StreamAdapter engine turns into canonical events.
"""

from .base import ProviderStreamAdapter
from .errors import ErrorMapper
from .anthropic.streaming import AnthropicStreamAdapter
from .google.streaming import GoogleStreamAdapter
from .groq.streaming import GroqStreamAdapter
from .openai.streaming import OpenAIStreamAdapter
from .registry import get_stream_adapter, list_stream_providers, normalize_stream

__all__ = [
    "ProviderStreamAdapter",
    "ErrorMapper",
    "AnthropicStreamAdapter",
    "GoogleStreamAdapter",
    "GroqStreamAdapter",
    "OpenAIStreamAdapter",
    "get_stream_adapter",
    "list_stream_providers",
    "normalize_stream",
]
