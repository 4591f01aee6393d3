"""Observability layer for stream logging.

This layer handles:
- Structured per-provider logging
- Stream lifecycle tracking
- Usage and streaming metrics logging
"""

from .logging import ProviderLogger

__all__ = ["ProviderLogger"]
