"""Canonical event models for normalized streams.

Every provider stream adapter emits these events and nothing else. The
``type`` field is authoritative and the payload shape is fixed per type.
"""

from typing import Optional, Dict, Any
from dataclasses import dataclass, field, fields
import time

from pydantic import BaseModel

from .generation import Citation, GenerateResult, TokenUsage


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, BaseException):
        return {"type": type(value).__name__, "message": str(value)}
    return value


@dataclass
class StreamEvent:
    """Base class for all canonical events."""
    type: str = ""  # Set by subclasses
    timestamp: float = field(default_factory=time.time, repr=False, compare=False)

    @property
    def data(self) -> Dict[str, Any]:
        """Payload of the event, without the type tag."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("type", "timestamp")
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form: ``{"type": ..., "data": {...}}``."""
        return {
            "type": self.type,
            "data": {key: _dump(value) for key, value in self.data.items()},
        }


@dataclass
class MessageStartEvent(StreamEvent):
    """First event of every successful stream."""
    type: str = field(default="message_start", init=False)
    provider: str = ""
    model: str = ""

    def __post_init__(self):
        self.type = "message_start"


@dataclass
class ContentDeltaEvent(StreamEvent):
    """A plain text fragment."""
    type: str = field(default="content_delta", init=False)
    delta: str = ""

    def __post_init__(self):
        self.type = "content_delta"


@dataclass
class ThinkingStartEvent(StreamEvent):
    type: str = field(default="thinking_start", init=False)

    def __post_init__(self):
        self.type = "thinking_start"


@dataclass
class ThinkingDeltaEvent(StreamEvent):
    type: str = field(default="thinking_delta", init=False)
    delta: str = ""

    def __post_init__(self):
        self.type = "thinking_delta"


@dataclass
class ThinkingStopEvent(StreamEvent):
    type: str = field(default="thinking_stop", init=False)

    def __post_init__(self):
        self.type = "thinking_stop"


@dataclass
class ToolCallStartEvent(StreamEvent):
    """Emitted once per call, when both its id and name are known."""
    type: str = field(default="tool_call_start", init=False)
    index: int = 0
    id: str = ""
    name: str = ""

    def __post_init__(self):
        self.type = "tool_call_start"


@dataclass
class ToolCallDeltaEvent(StreamEvent):
    """A raw argument fragment; may be invalid JSON on its own."""
    type: str = field(default="tool_call_delta", init=False)
    index: int = 0
    id: str = ""
    args_fragment: str = ""

    def __post_init__(self):
        self.type = "tool_call_delta"


@dataclass
class ToolCallDoneEvent(StreamEvent):
    type: str = field(default="tool_call_done", init=False)
    index: int = 0
    id: str = ""

    def __post_init__(self):
        self.type = "tool_call_done"


@dataclass
class JsonDeltaEvent(StreamEvent):
    """A text fragment while JSON mode is active.

    ``parsed`` is None whenever ``snapshot`` does not parse yet.
    """
    type: str = field(default="json_delta", init=False)
    delta: str = ""
    parsed: Optional[Any] = None
    snapshot: str = ""

    def __post_init__(self):
        self.type = "json_delta"


@dataclass
class JsonDoneEvent(StreamEvent):
    type: str = field(default="json_done", init=False)
    parsed: Optional[Any] = None
    snapshot: str = ""

    def __post_init__(self):
        self.type = "json_done"


@dataclass
class CitationDeltaEvent(StreamEvent):
    type: str = field(default="citation_delta", init=False)
    index: int = 0
    citation: Optional[Citation] = None

    def __post_init__(self):
        self.type = "citation_delta"


@dataclass
class CitationDoneEvent(StreamEvent):
    type: str = field(default="citation_done", init=False)
    index: int = 0
    citation: Optional[Citation] = None

    def __post_init__(self):
        self.type = "citation_done"


@dataclass
class MessageStopEvent(StreamEvent):
    type: str = field(default="message_stop", init=False)
    finish_reason: str = "stop"

    def __post_init__(self):
        self.type = "message_stop"


@dataclass
class FinalUsageEvent(StreamEvent):
    """Only emitted when the upstream ever reported token counts."""
    type: str = field(default="final_usage", init=False)
    usage: Optional[TokenUsage] = None

    def __post_init__(self):
        self.type = "final_usage"


@dataclass
class FinalResultEvent(StreamEvent):
    """Last event of every successful stream."""
    type: str = field(default="final_result", init=False)
    result: Optional[GenerateResult] = None

    def __post_init__(self):
        self.type = "final_result"


@dataclass
class ErrorEvent(StreamEvent):
    """Terminal failure event. Nothing is emitted after it."""
    type: str = field(default="error", init=False)
    error: Optional[Exception] = None

    def __post_init__(self):
        self.type = "error"


TERMINAL_EVENT_TYPES = ("final_result", "error")
