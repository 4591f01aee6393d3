"""Core provider-agnostic logic for the Relay LLM SDK.

This package contains:
- normalization: Usage merging and finish reason mapping
- utils: Field access into loosely-typed upstream payloads
"""

__all__ = []
