"""Groq provider stream adapter."""

from .streaming import GroqStreamAdapter

__all__ = ["GroqStreamAdapter"]
