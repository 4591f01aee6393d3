"""
Base Provider Stream Adapter Interface

This module defines the abstract base class for all provider stream
adapters. An adapter only decodes its upstream's native events into typed
stream signals and wraps its upstream's errors; accumulation and the
canonical event sequence are handled by the shared StreamAdapter engine.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..errors import (
    ConfigurationError,
    MappingError,
    ProviderAPIError,
    RelayError,
    UnsupportedFeatureError,
)
from ..models.generation import ProviderType
from ..streaming.types import StreamSignal


class ProviderStreamAdapter(ABC):
    """
    Abstract base class for provider stream adapters.

    One instance decodes exactly one upstream stream; decoders may keep
    per-stream bookkeeping (open reasoning blocks, tool call counters).

    Provider adapters should NOT contain:
    - Accumulation logic (tool call buffers, JSON mode, usage merging)
    - Canonical event construction
    - Cross-provider logic
    """

    provider: ProviderType
    finish_reasons: Dict[str, str] = {}

    # Upstreams that never announce the response emit message_start before the first pull
    announces_start_immediately: bool = False

    @abstractmethod
    def decode(self, event: Any) -> List[StreamSignal]:
        """
        Decode one native upstream event.

        Every native event kind maps to a list of signals; kinds with no
        meaning for normalization map to ``Unrecognized``.

        Args:
            event: Native event (SDK object or decoded JSON dict)

        Returns:
            Signals in the order they should be applied

        Raises:
            MappingError: The event is structurally unreadable
            ProviderAPIError: The event is an upstream error payload
        """
        pass

    @abstractmethod
    def wrap_error(self, error: BaseException) -> RelayError:
        """
        Convert any failure raised while streaming into the error taxonomy.

        Args:
            error: Exception raised by the upstream or by decoding

        Returns:
            RelayError carrying the original error as its cause
        """
        pass

    def get_provider_name(self) -> str:
        """
        Get the name of this provider.

        Returns:
            str: The provider name (e.g., "openai", "anthropic")
        """
        return self.provider.value


__all__ = [
    "ProviderStreamAdapter",
    "ConfigurationError",
    "MappingError",
    "ProviderAPIError",
    "RelayError",
    "UnsupportedFeatureError",
]
