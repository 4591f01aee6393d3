"""
Structured logging utility for provider stream adapters.

This module provides a consistent logging interface for all stream
adapters, ensuring structured logging with standard fields like provider,
model, and request_id.
"""

import asyncio
import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Optional

from ..models.generation import TokenUsage


class ProviderLogger:
    """Structured logger for provider stream adapters."""

    def __init__(self, provider_name: str):
        """
        Initialize logger for a specific provider.

        Args:
            provider_name: Name of the provider (e.g., "openai", "anthropic")
        """
        self.provider = provider_name
        self.logger = logging.getLogger(f"relay_llm_sdk.providers.{provider_name}")

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"provider={self.provider}"]

        for key, value in kwargs.items():
            if value is not None:
                fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def debug(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, **kwargs):
        """Log debug message with structured fields."""
        self.logger.debug(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    def info(self, message: str, model: Optional[str] = None,
             request_id: Optional[str] = None, **kwargs):
        """Log info message with structured fields."""
        self.logger.info(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    def warning(self, message: str, model: Optional[str] = None,
                request_id: Optional[str] = None, **kwargs):
        """Log warning message with structured fields."""
        self.logger.warning(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    def error(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, error: Optional[BaseException] = None, **kwargs):
        """Log error message with structured fields."""
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_msg'] = str(error)

        self.logger.error(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    @contextmanager
    def track_stream(self, model: Optional[str], request_id: Optional[str] = None):
        """
        Context manager to track stream timing and log its outcome.

        The stream body records a failure by setting ``metadata["error"]``
        instead of raising, since normalized streams end with an error
        event rather than an exception.

        Args:
            model: The model being streamed (may be empty until known)
            request_id: Optional request ID (generated if not provided)

        Yields:
            Dict with stream metadata including request_id
        """
        if request_id is None:
            request_id = str(uuid.uuid4())[:8]

        start_time = time.time()
        self.debug("Starting stream", model=model, request_id=request_id)

        metadata: Dict[str, Any] = {
            'request_id': request_id,
            'model': model,
            'start_time': start_time,
            'error': None,
        }

        try:
            yield metadata
        except (GeneratorExit, asyncio.CancelledError):
            self.debug(
                "Stream closed by consumer",
                model=metadata['model'],
                request_id=request_id,
                duration_ms=int((time.time() - start_time) * 1000)
            )
            raise

        duration = time.time() - start_time
        if metadata['error'] is not None:
            self.error(
                "Failed stream",
                model=metadata['model'],
                request_id=request_id,
                duration_ms=int(duration * 1000),
                error=metadata['error']
            )
        else:
            self.info(
                "Completed stream",
                model=metadata['model'],
                request_id=request_id,
                duration_ms=int(duration * 1000)
            )

    def log_usage(self, usage: TokenUsage, model: str, request_id: str):
        """Log token usage information."""
        self.info(
            "Token usage",
            model=model,
            request_id=request_id,
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
            total_tokens=usage.total_tokens,
            cached_tokens=usage.cached_content_token_count or None
        )

    def log_streaming_metrics(self, events: int, upstream_events: int, total_chars: int,
                              duration: float, model: str, request_id: str,
                              ttft: Optional[float] = None, **extra):
        """Log streaming performance metrics."""
        chars_per_second = total_chars / duration if duration > 0 else 0

        self.info(
            "Streaming metrics",
            model=model,
            request_id=request_id,
            events=events,
            upstream_events=upstream_events,
            total_chars=total_chars,
            duration_ms=int(duration * 1000),
            ttft_ms=int(ttft * 1000) if ttft is not None else None,
            chars_per_second=int(chars_per_second),
            **extra
        )
