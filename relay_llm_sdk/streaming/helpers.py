"""Helper utilities for common patterns over canonical event streams."""

from __future__ import annotations

from typing import AsyncIterator, List

from ..errors import MappingError
from ..models.events import ErrorEvent, FinalResultEvent, StreamEvent
from ..models.generation import GenerateResult


class StreamingHelper:
    """Helper for consuming normalized streams."""

    @staticmethod
    async def collect_events(stream: AsyncIterator[StreamEvent]) -> List[StreamEvent]:
        """Drain a canonical stream into a list, terminal event included."""
        return [event async for event in stream]

    @staticmethod
    async def collect(stream: AsyncIterator[StreamEvent]) -> GenerateResult:
        """Drain a canonical stream and return its aggregated result.

        Lets callers treat streaming and non-streaming calls the same way.

        Args:
            stream: Canonical event stream

        Returns:
            The GenerateResult carried by ``final_result``

        Raises:
            RelayError: The error carried by an ``error`` event, or a
                MappingError if the stream ended without a terminal event
        """
        async for event in stream:
            if isinstance(event, ErrorEvent):
                raise event.error
            if isinstance(event, FinalResultEvent):
                return event.result
        raise MappingError("Stream ended without a terminal event", context="collect")

    @staticmethod
    async def stream_text(stream: AsyncIterator[StreamEvent]) -> AsyncIterator[str]:
        """Yield only the text fragments of a canonical stream.

        JSON-mode fragments are yielded as raw text too. An ``error`` event
        is raised as its wrapped error.
        """
        async for event in stream:
            if isinstance(event, ErrorEvent):
                raise event.error
            if event.type in ("content_delta", "json_delta"):
                yield event.delta
