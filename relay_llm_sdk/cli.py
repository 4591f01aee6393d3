"""CLI entry point for Relay LLM SDK."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional

from .errors import RelayError
from .models.streaming import DEBUG_OPTIONS, StreamingOptions
from .providers.registry import list_stream_providers, normalize_stream


def load_recorded_events(path: str) -> List[Any]:
    """Read recorded upstream events, one JSON object per line."""
    events = []
    with open(path, encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise ValueError(f"{path}:{line_number}: invalid JSON ({e.msg})") from e
    return events


async def replay_stream(provider: str, path: str, model: Optional[str] = None,
                        text_only: bool = False, debug: bool = False) -> int:
    """Replay recorded upstream events and print the canonical events."""
    try:
        options = DEBUG_OPTIONS if debug else StreamingOptions.from_env()
        recorded = load_recorded_events(path)
        stream = normalize_stream(provider, recorded, model=model, options=options)
    except (OSError, ValueError, RelayError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        return 1

    exit_code = 0
    async for event in stream:
        if event.type == "error":
            exit_code = 1
            print(f"Error: {event.error}", file=sys.stderr)
            if text_only:
                continue
        if text_only:
            if event.type in ("content_delta", "json_delta"):
                print(event.delta, end="", flush=True)
            elif event.type == "final_result":
                print()
            continue
        print(json.dumps(event.to_dict(), default=str))
    return exit_code


def list_providers() -> int:
    """List providers with a stream adapter."""
    print("Stream adapters:")
    print("-" * 50)
    for provider in list_stream_providers():
        print(f"  {provider}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Relay LLM SDK CLI")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Replay command
    replay_parser = subparsers.add_parser('replay', help='Normalize a recorded provider stream')
    replay_parser.add_argument('provider', help='Provider name (anthropic, google, groq, openai)')
    replay_parser.add_argument('file', help='JSONL file with one upstream event per line')
    replay_parser.add_argument('--model', help='Model label used when the stream reports none')
    replay_parser.add_argument('--text', action='store_true', help='Print only the response text')
    replay_parser.add_argument('--debug', action='store_true', help='Log streaming metrics')

    # List providers command
    subparsers.add_parser('providers', help='List supported providers')

    args = parser.parse_args(argv)

    if args.command == 'replay':
        if args.debug:
            logging.basicConfig(level=logging.DEBUG)
        return asyncio.run(replay_stream(
            args.provider,
            args.file,
            args.model,
            args.text,
            args.debug
        ))
    elif args.command == 'providers':
        return list_providers()
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
