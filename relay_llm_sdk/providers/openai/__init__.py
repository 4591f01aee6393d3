"""OpenAI provider stream adapter."""

from .streaming import OpenAIStreamAdapter

__all__ = ["OpenAIStreamAdapter"]
