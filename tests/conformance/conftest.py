"""Shared fixtures for conformance tests.

Every recording is a realistic upstream stream for one provider; the
conformance tests check the canonical ordering contract on all of them.
"""

import httpx
import pytest

from tests.helpers.streaming_mocks import (
    anthropic_block_delta,
    anthropic_block_start,
    anthropic_block_stop,
    anthropic_message_delta,
    anthropic_message_start,
    anthropic_text_delta,
    anthropic_text_events,
    anthropic_tool_use_events,
    google_chunk,
    google_usage,
    openai_chunk,
    openai_text_chunks,
    openai_tool_delta,
    openai_usage,
)


class UpstreamFailure:
    """Marker placed in a recording where the upstream raises."""

    def __init__(self, error: Exception):
        self.error = error


async def replay(recording):
    for event in recording:
        if isinstance(event, UpstreamFailure):
            raise event.error
        yield event


RECORDINGS = {
    "openai-text": ("openai", openai_text_chunks(["The capital", " of France", " is Paris."])),
    "openai-tools": ("openai", [
        openai_chunk(role="assistant", content=None),
        openai_chunk(tool_calls=[openai_tool_delta(0, "call_1", "get_weather", '{"city":')]),
        openai_chunk(tool_calls=[openai_tool_delta(1, "call_2", "get_time", "")]),
        openai_chunk(tool_calls=[openai_tool_delta(0, arguments=' "Paris"}')]),
        openai_chunk(tool_calls=[openai_tool_delta(1, arguments='{"tz": "CET"}')]),
        openai_chunk(finish_reason="tool_calls"),
        openai_chunk(usage=openai_usage(40, 18), with_choice=False),
    ]),
    "openai-json": ("openai", [
        openai_chunk(content='{"cities": ['),
        openai_chunk(content='"Paris", '),
        openai_chunk(content='"Lyon"]}'),
        openai_chunk(finish_reason="stop"),
    ]),
    "openai-reasoning": ("openai", [
        openai_chunk(reasoning="Think first."),
        openai_chunk(content="Answer."),
        openai_chunk(finish_reason="length"),
    ]),
    "openai-interrupted": ("openai", [
        openai_chunk(content="Partial"),
        UpstreamFailure(httpx.ReadTimeout("read timed out")),
    ]),
    "groq-text": ("groq", [
        openai_chunk(content="Fast", model="llama-3.3-70b-versatile"),
        dict(
            openai_chunk(finish_reason="stop", model="llama-3.3-70b-versatile"),
            x_groq={"usage": openai_usage(6, 1)},
        ),
    ]),
    "anthropic-text": ("anthropic", anthropic_text_events(["Hello", " there"])),
    "anthropic-tools": ("anthropic", anthropic_tool_use_events()),
    "anthropic-thinking": ("anthropic", [
        anthropic_message_start(),
        anthropic_block_start(0, {"type": "thinking", "thinking": ""}),
        anthropic_block_delta(0, {"type": "thinking_delta", "thinking": "Weighing options."}),
        anthropic_block_stop(0),
        anthropic_block_start(1, {"type": "text", "text": ""}),
        anthropic_text_delta(1, "Go with B."),
        anthropic_block_stop(1),
        anthropic_message_delta("end_turn"),
        {"type": "message_stop"},
    ]),
    "anthropic-citations": ("anthropic", [
        anthropic_message_start(),
        anthropic_block_start(0, {"type": "text", "text": ""}),
        anthropic_block_delta(0, {"type": "citations_delta", "citation": {
            "type": "char_location",
            "cited_text": "Paris is the capital of France.",
            "document_index": 0,
            "document_title": "Atlas",
            "start_char_index": 0,
            "end_char_index": 31,
        }}),
        anthropic_text_delta(0, "Paris."),
        anthropic_block_stop(0),
        anthropic_message_delta("end_turn"),
        {"type": "message_stop"},
    ]),
    "anthropic-overloaded": ("anthropic", [
        anthropic_message_start(),
        {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}},
    ]),
    "google-text": ("google", [
        google_chunk(text="Bonjour"),
        google_chunk(text=" Paris", finish_reason="STOP", usage=google_usage(5, 2)),
    ]),
    "google-tools": ("google", [
        google_chunk(function_call={"name": "get_weather", "args": {"city": "Paris"}}),
        google_chunk(function_call={"name": "get_time", "args": {}}, finish_reason="STOP"),
    ]),
    "google-thought": ("google", [
        google_chunk(text="Reasoning.", thought=True),
        google_chunk(text="Result.", finish_reason="STOP"),
    ]),
    "google-blocked": ("google", [{"promptFeedback": {"blockReason": "SAFETY"}}]),
    "google-empty": ("google", []),
}


@pytest.fixture(params=sorted(RECORDINGS))
def recording(request):
    """(provider, upstream) for every recorded upstream stream."""
    provider, events = RECORDINGS[request.param]
    return provider, replay(events)
