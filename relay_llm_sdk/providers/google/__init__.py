"""Google Gemini provider stream adapter."""

from .streaming import GoogleStreamAdapter

__all__ = ["GoogleStreamAdapter"]
