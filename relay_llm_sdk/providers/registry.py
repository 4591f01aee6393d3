"""
Provider stream adapter registry.

Maps provider names to their stream adapter classes and builds a fresh
StreamAdapter for every stream.
"""

from typing import Any, AsyncIterator, Dict, List, Optional, Type, Union

from ..errors import UnsupportedFeatureError
from ..models.events import StreamEvent
from ..models.generation import ProviderType
from ..models.streaming import StreamingOptions
from ..streaming.adapter import StreamAdapter
from .anthropic.streaming import AnthropicStreamAdapter
from .base import ProviderStreamAdapter
from .google.streaming import GoogleStreamAdapter
from .groq.streaming import GroqStreamAdapter
from .openai.streaming import OpenAIStreamAdapter

STREAM_ADAPTERS: Dict[ProviderType, Type[ProviderStreamAdapter]] = {
    ProviderType.ANTHROPIC: AnthropicStreamAdapter,
    ProviderType.GOOGLE: GoogleStreamAdapter,
    ProviderType.GROQ: GroqStreamAdapter,
    ProviderType.OPENAI: OpenAIStreamAdapter,
}

# Aliases for upstreams that share another provider's wire format
PROVIDER_ALIASES: Dict[str, ProviderType] = {
    "azure": ProviderType.OPENAI,
    "azure_openai": ProviderType.OPENAI,
    "gemini": ProviderType.GOOGLE,
}


def resolve_provider(provider: Union[str, ProviderType]) -> ProviderType:
    """
    Resolve a provider name to a ProviderType.

    Raises:
        UnsupportedFeatureError: No stream adapter exists for the provider
    """
    if isinstance(provider, ProviderType):
        return provider
    name = str(provider).strip().lower()
    if name in PROVIDER_ALIASES:
        return PROVIDER_ALIASES[name]
    try:
        return ProviderType(name)
    except ValueError:
        raise UnsupportedFeatureError(str(provider), "streaming") from None


def list_stream_providers() -> List[str]:
    """Names of all providers with a stream adapter."""
    return sorted(provider.value for provider in STREAM_ADAPTERS)


def get_stream_adapter(
    provider: Union[str, ProviderType],
    model: Optional[str] = None,
    options: Optional[StreamingOptions] = None,
) -> StreamAdapter:
    """
    Build a StreamAdapter for one stream of ``provider``.

    Args:
        provider: Provider name or ProviderType
        model: Requested model, used as fallback label
        options: Streaming options

    Returns:
        A new StreamAdapter; never reuse it for a second stream

    Raises:
        UnsupportedFeatureError: No stream adapter exists for the provider
    """
    provider_type = resolve_provider(provider)
    adapter_class = STREAM_ADAPTERS.get(provider_type)
    if adapter_class is None:
        raise UnsupportedFeatureError(provider_type.value, "streaming")
    return StreamAdapter(adapter_class(), model=model, options=options)


def normalize_stream(
    provider: Union[str, ProviderType],
    upstream: Any,
    model: Optional[str] = None,
    options: Optional[StreamingOptions] = None,
) -> AsyncIterator[StreamEvent]:
    """
    Normalize a native upstream stream into canonical events.

    Unknown providers fail here, before any event is produced.

    Args:
        provider: Provider name or ProviderType
        upstream: Async iterable of the provider's native stream events
        model: Requested model, used when the upstream never reports one
        options: Streaming options

    Returns:
        Async iterator of canonical events
    """
    return get_stream_adapter(provider, model=model, options=options).stream(upstream)
