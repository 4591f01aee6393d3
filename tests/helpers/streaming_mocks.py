"""Helper functions for building native provider streams.

Events are plain dicts shaped like each provider's JSON wire format;
the adapters read SDK objects and dicts the same way.
"""

from typing import Any, AsyncGenerator, Dict, Iterable, List, Optional


async def iterate(events: Iterable[Any]) -> AsyncGenerator[Any, None]:
    """Turn recorded events into an async upstream."""
    for event in events:
        yield event


async def create_error_stream(error: Exception) -> AsyncGenerator[Any, None]:
    """Create a stream that raises an error immediately."""
    raise error
    yield  # This will never be reached


# OpenAI / Groq chat completion chunks

def openai_chunk(
    content: Optional[str] = None,
    finish_reason: Optional[str] = None,
    tool_calls: Optional[List[Dict[str, Any]]] = None,
    reasoning: Optional[str] = None,
    usage: Optional[Dict[str, Any]] = None,
    model: str = "gpt-4o-mini",
    role: Optional[str] = None,
    with_choice: bool = True,
) -> Dict[str, Any]:
    """Build one ``chat.completion.chunk`` dict."""
    delta: Dict[str, Any] = {}
    if role is not None:
        delta["role"] = role
    if content is not None:
        delta["content"] = content
    if reasoning is not None:
        delta["reasoning_content"] = reasoning
    if tool_calls is not None:
        delta["tool_calls"] = tool_calls

    chunk: Dict[str, Any] = {
        "id": "chatcmpl-123",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": model,
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}] if with_choice else [],
    }
    if usage is not None:
        chunk["usage"] = usage
    return chunk


def openai_tool_delta(
    index: int,
    call_id: Optional[str] = None,
    name: Optional[str] = None,
    arguments: Optional[str] = None,
) -> Dict[str, Any]:
    """Build one entry of ``delta.tool_calls``."""
    function: Dict[str, Any] = {}
    if name is not None:
        function["name"] = name
    if arguments is not None:
        function["arguments"] = arguments
    tool_call: Dict[str, Any] = {"index": index, "function": function}
    if call_id is not None:
        tool_call["id"] = call_id
        tool_call["type"] = "function"
    return tool_call


def openai_usage(prompt_tokens: int = 10, completion_tokens: int = 5) -> Dict[str, Any]:
    return {
        "prompt_tokens": prompt_tokens,
        "completion_tokens": completion_tokens,
        "total_tokens": prompt_tokens + completion_tokens,
    }


def openai_text_chunks(chunks: List[str], finish_reason: str = "stop", usage: bool = True) -> List[Dict[str, Any]]:
    """A text response as OpenAI streams it with ``include_usage``."""
    events = [openai_chunk(content="", role="assistant")]
    events.extend(openai_chunk(content=chunk) for chunk in chunks)
    events.append(openai_chunk(finish_reason=finish_reason))
    if usage:
        events.append(openai_chunk(usage=openai_usage(10, len(chunks) * 2), with_choice=False))
    return events


async def create_openai_stream(chunks: List[str], usage: bool = True) -> AsyncGenerator[Any, None]:
    """Create a mock OpenAI streaming response."""
    for event in openai_text_chunks(chunks, usage=usage):
        yield event


async def create_interrupted_openai_stream(chunks_before_error: int = 2) -> AsyncGenerator[Any, None]:
    """Create a mock OpenAI streaming response that fails partway through."""
    import httpx

    # Yield a few chunks successfully
    chunks = ["Hello", " world", " how", " are", " you"]
    for i in range(min(chunks_before_error, len(chunks))):
        yield openai_chunk(content=chunks[i])

    # Then raise a connection error
    raise httpx.ConnectError("Connection lost during streaming")


async def create_groq_stream(chunks: List[str]) -> AsyncGenerator[Any, None]:
    """Create a mock Groq streaming response; usage arrives in ``x_groq``."""
    yield dict(openai_chunk(content="", role="assistant", model="llama-3.3-70b-versatile"), x_groq={"id": "req_01"})
    for chunk in chunks:
        yield openai_chunk(content=chunk, model="llama-3.3-70b-versatile")
    final = openai_chunk(finish_reason="stop", model="llama-3.3-70b-versatile")
    final["x_groq"] = {"id": "req_01", "usage": openai_usage(12, len(chunks))}
    yield final


# Anthropic server-sent events

def anthropic_message_start(model: str = "claude-3-5-sonnet-20241022", input_tokens: int = 10) -> Dict[str, Any]:
    return {
        "type": "message_start",
        "message": {
            "id": "msg_01",
            "type": "message",
            "role": "assistant",
            "model": model,
            "content": [],
            "stop_reason": None,
            "usage": {"input_tokens": input_tokens, "output_tokens": 1},
        },
    }


def anthropic_block_start(index: int, block: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "content_block_start", "index": index, "content_block": block}


def anthropic_block_delta(index: int, delta: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "content_block_delta", "index": index, "delta": delta}


def anthropic_text_delta(index: int, text: str) -> Dict[str, Any]:
    return anthropic_block_delta(index, {"type": "text_delta", "text": text})


def anthropic_block_stop(index: int) -> Dict[str, Any]:
    return {"type": "content_block_stop", "index": index}


def anthropic_message_delta(stop_reason: Optional[str] = "end_turn", output_tokens: int = 5) -> Dict[str, Any]:
    return {
        "type": "message_delta",
        "delta": {"stop_reason": stop_reason, "stop_sequence": None},
        "usage": {"output_tokens": output_tokens},
    }


def anthropic_text_events(chunks: List[str], stop_reason: str = "end_turn") -> List[Dict[str, Any]]:
    """A plain text response."""
    events = [
        anthropic_message_start(),
        anthropic_block_start(0, {"type": "text", "text": ""}),
    ]
    events.extend(anthropic_text_delta(0, chunk) for chunk in chunks)
    events.extend([
        anthropic_block_stop(0),
        anthropic_message_delta(stop_reason, output_tokens=len(chunks) * 2),
        {"type": "message_stop"},
    ])
    return events


def anthropic_tool_use_events(
    call_id: str = "toolu_01",
    name: str = "get_weather",
    fragments: Optional[List[str]] = None,
    stop_reason: str = "tool_use",
) -> List[Dict[str, Any]]:
    """Text block at index 0 followed by a tool_use block at index 1."""
    fragments = fragments if fragments is not None else ['{"location": ', '"Paris"}']
    events = [
        anthropic_message_start(),
        anthropic_block_start(0, {"type": "text", "text": ""}),
        anthropic_text_delta(0, "Let me check."),
        anthropic_block_stop(0),
        anthropic_block_start(1, {"type": "tool_use", "id": call_id, "name": name, "input": {}}),
    ]
    events.extend(
        anthropic_block_delta(1, {"type": "input_json_delta", "partial_json": fragment})
        for fragment in fragments
    )
    events.extend([
        anthropic_block_stop(1),
        anthropic_message_delta(stop_reason, output_tokens=20),
        {"type": "message_stop"},
    ])
    return events


async def create_anthropic_stream(chunks: List[str]) -> AsyncGenerator[Any, None]:
    """Create a mock Anthropic streaming response."""
    for event in anthropic_text_events(chunks):
        yield event


async def create_interrupted_anthropic_stream(chunks_before_error: int = 2) -> AsyncGenerator[Any, None]:
    """Create a mock Anthropic streaming response that fails partway through."""
    import httpx

    yield anthropic_message_start()
    yield anthropic_block_start(0, {"type": "text", "text": ""})

    # Yield a few chunks successfully
    chunks = ["Hello", " world", " how", " are", " you"]
    for i in range(min(chunks_before_error, len(chunks))):
        yield anthropic_text_delta(0, chunks[i])

    # Then raise a connection error
    raise httpx.ConnectError("Connection lost during streaming")


# Google Gemini generate_content_stream responses

def google_chunk(
    text: Optional[str] = None,
    thought: bool = False,
    function_call: Optional[Dict[str, Any]] = None,
    finish_reason: Optional[str] = None,
    usage: Optional[Dict[str, Any]] = None,
    citations: Optional[List[Dict[str, Any]]] = None,
    model_version: Optional[str] = "gemini-2.0-flash",
) -> Dict[str, Any]:
    """Build one ``GenerateContentResponse`` dict (REST camelCase spelling)."""
    parts: List[Dict[str, Any]] = []
    if text is not None:
        part: Dict[str, Any] = {"text": text}
        if thought:
            part["thought"] = True
        parts.append(part)
    if function_call is not None:
        parts.append({"functionCall": function_call})

    candidate: Dict[str, Any] = {"index": 0, "content": {"role": "model", "parts": parts}}
    if finish_reason is not None:
        candidate["finishReason"] = finish_reason
    if citations is not None:
        candidate["citationMetadata"] = {"citations": citations}

    chunk: Dict[str, Any] = {"candidates": [candidate]}
    if usage is not None:
        chunk["usageMetadata"] = usage
    if model_version is not None:
        chunk["modelVersion"] = model_version
    return chunk


def google_usage(prompt_tokens: int = 8, candidates_tokens: int = 4) -> Dict[str, Any]:
    return {
        "promptTokenCount": prompt_tokens,
        "candidatesTokenCount": candidates_tokens,
        "totalTokenCount": prompt_tokens + candidates_tokens,
    }


async def create_google_stream(chunks: List[str]) -> AsyncGenerator[Any, None]:
    """Create a mock Gemini streaming response."""
    for chunk in chunks[:-1]:
        yield google_chunk(text=chunk)
    yield google_chunk(text=chunks[-1], finish_reason="STOP", usage=google_usage(8, len(chunks)))
