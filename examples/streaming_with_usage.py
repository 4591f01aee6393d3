"""
Example: Normalized Streaming with Usage Data

This example streams from real provider SDKs and feeds the native
streams through normalize_stream, so every provider produces the same
canonical events, including the final usage and aggregated result.

Requires OPENAI_API_KEY / ANTHROPIC_API_KEY / GOOGLE_API_KEY in the
environment or a .env file.
"""

import asyncio

from anthropic import AsyncAnthropic
from dotenv import load_dotenv
from google import genai
from openai import AsyncOpenAI

from relay_llm_sdk import StreamingHelper, normalize_stream


async def print_events(stream):
    """Print text as it arrives, then the usage and finish reason."""
    async for event in stream:
        if event.type in ("content_delta", "json_delta"):
            print(event.delta, end="", flush=True)
        elif event.type == "tool_call_start":
            print(f"\n[tool call {event.name} ({event.id})]")
        elif event.type == "final_usage":
            print("\n\nUsage information:")
            print(f"  Prompt tokens: {event.usage.prompt_tokens}")
            print(f"  Completion tokens: {event.usage.completion_tokens}")
            print(f"  Total tokens: {event.usage.total_tokens}")
        elif event.type == "final_result":
            print(f"  Finish reason: {event.result.finish_reason}")
            print(f"  Model: {event.result.model}")
        elif event.type == "error":
            print(f"\nStream failed: {event.error}")


async def example_openai_streaming_with_usage():
    """OpenAI reports usage on a trailing chunk when include_usage is set."""
    print("=== OpenAI ===\n")

    client = AsyncOpenAI()
    upstream = await client.chat.completions.create(
        model="gpt-4o-mini",
        messages=[{"role": "user", "content": "Write a haiku about Python programming"}],
        max_tokens=100,
        stream=True,
        stream_options={"include_usage": True},
    )
    await print_events(normalize_stream("openai", upstream, model="gpt-4o-mini"))


async def example_anthropic_streaming_with_usage():
    """Anthropic splits usage between message_start and message_delta."""
    print("\n=== Anthropic ===\n")

    client = AsyncAnthropic()
    upstream = await client.messages.create(
        model="claude-3-5-haiku-latest",
        messages=[{"role": "user", "content": "Count from 1 to 5"}],
        max_tokens=50,
        stream=True,
    )
    await print_events(normalize_stream("anthropic", upstream))


async def example_google_json_mode():
    """A response that starts with '{' is streamed as json_delta events."""
    print("\n=== Google (JSON mode) ===\n")

    client = genai.Client()
    upstream = await client.aio.models.generate_content_stream(
        model="gemini-2.0-flash",
        contents="Return a JSON object with keys 'list' and 'tuple' describing each in one sentence.",
        config={"response_mime_type": "application/json"},
    )
    result = await StreamingHelper.collect(
        normalize_stream("google", upstream, model="gemini-2.0-flash")
    )
    print(f"Parsed content: {result.parsed_content}")
    print(f"Tokens used: {result.usage.total_tokens if result.usage else 'n/a'}")


async def main():
    """Run all examples."""
    examples = [
        example_openai_streaming_with_usage,
        example_anthropic_streaming_with_usage,
        example_google_json_mode,
    ]

    for example in examples:
        await example()
        print("\n" + "="*50 + "\n")


if __name__ == "__main__":
    load_dotenv()
    asyncio.run(main())
