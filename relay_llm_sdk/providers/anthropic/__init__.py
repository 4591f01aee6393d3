"""Anthropic provider stream adapter."""

from .streaming import AnthropicStreamAdapter

__all__ = ["AnthropicStreamAdapter"]
