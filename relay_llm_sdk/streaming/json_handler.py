"""
JSON stream handler for processing streaming JSON responses.

A response whose first non-whitespace character is '{' or '[' switches the
stream into JSON mode for its whole lifetime. Every fragment is then
reported with the accumulated snapshot and a best-effort parse of it.
"""

from typing import Any, Dict, List, Optional
import json
import logging

from ..models.events import ContentDeltaEvent, JsonDeltaEvent, JsonDoneEvent, StreamEvent
from .state import StreamAccumulatorState

logger = logging.getLogger(__name__)

JSON_START_CHARS = ("{", "[")


def parse_json_best_effort(text: str) -> Optional[Any]:
    """Parse ``text`` as JSON, returning None instead of raising on failure."""
    if not text:
        return None
    try:
        return json.loads(text)
    except (ValueError, TypeError):
        return None


def detect_json_mode(state: StreamAccumulatorState, fragment: str) -> bool:
    """
    Decide JSON mode on the first non-empty text fragment.

    Evaluated once, while nothing has been accumulated yet; afterwards the
    decision is kept for the rest of the stream.
    """
    if state.json_mode_evaluated or not fragment or state.content_text:
        return state.json_mode_active
    state.json_mode_evaluated = True
    state.json_mode_active = fragment.lstrip().startswith(JSON_START_CHARS)
    if state.json_mode_active:
        logger.debug("JSON mode activated for stream")
    return state.json_mode_active


class JsonStreamHandler:
    """
    Turns text fragments into content_delta or json_delta events.

    One handler is used per stream; it also keeps parse statistics for
    streaming metrics.
    """

    def __init__(self, detect: bool = True):
        """Initialize the JSON stream handler.

        Args:
            detect: Whether JSON mode detection is enabled at all
        """
        self.detect = detect
        self.parse_attempts = 0
        self.parse_failures = 0

    def _parse(self, snapshot: str) -> Optional[Any]:
        self.parse_attempts += 1
        parsed = parse_json_best_effort(snapshot)
        if parsed is None:
            self.parse_failures += 1
        return parsed

    def process_fragment(self, state: StreamAccumulatorState, fragment: str) -> List[StreamEvent]:
        """
        Append a text fragment to the stream content.

        Args:
            state: Stream accumulator
            fragment: Text fragment from the upstream

        Returns:
            A single content_delta or json_delta event, or nothing for empty text
        """
        state.ensure_open()
        if not fragment:
            return []
        if self.detect:
            detect_json_mode(state, fragment)
        state.content_text += fragment

        if not state.json_mode_active:
            return [ContentDeltaEvent(delta=fragment)]
        snapshot = state.content_text
        return [JsonDeltaEvent(delta=fragment, parsed=self._parse(snapshot), snapshot=snapshot)]

    def finalize(self, state: StreamAccumulatorState) -> List[StreamEvent]:
        """Emit json_done when the stream was in JSON mode."""
        if not state.json_mode_active:
            return []
        snapshot = state.content_text
        return [JsonDoneEvent(parsed=self.final_object(state), snapshot=snapshot)]

    def final_object(self, state: StreamAccumulatorState) -> Optional[Any]:
        """Best-effort parse of the full JSON document, None outside JSON mode."""
        if not state.json_mode_active:
            return None
        return parse_json_best_effort(state.content_text)

    def get_statistics(self) -> Dict[str, Any]:
        return {
            "json_parse_attempts": self.parse_attempts,
            "json_parse_failures": self.parse_failures,
        }
