"""
Per-stream accumulator state.

One StreamAccumulatorState is created for each normalized stream and is
mutated only by that stream's consumption loop. Once the terminal event
has been produced the state is closed and any further mutation raises
MappingError.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ..config.constants import FINISH_STOP
from ..core.normalization.finish_reason import resolve_finish_reason
from ..errors import MappingError
from ..models.generation import (
    Citation,
    FunctionCall,
    GenerateResult,
    TokenUsage,
    ToolCallRequest,
)


@dataclass
class ToolCallState:
    """A tool call being assembled from fragments."""
    index: int
    id: Optional[str] = None
    name: Optional[str] = None
    arguments: str = ""
    started: bool = False
    done: bool = False
    dropped: bool = False


@dataclass
class StreamAccumulatorState:
    """Everything known about one stream so far."""
    provider: str
    model: str = ""
    started: bool = False
    closed: bool = False

    content_text: str = ""
    json_mode_active: bool = False
    json_mode_evaluated: bool = False

    thinking_text: Optional[str] = None
    thinking_open: bool = False

    tool_calls: Dict[str, ToolCallState] = field(default_factory=dict)
    index_to_id: Dict[int, str] = field(default_factory=dict)
    # Index-addressed calls whose id has not arrived yet
    pending_tool_calls: Dict[int, ToolCallState] = field(default_factory=dict)

    citations_seen: Set[Tuple[str, Optional[int]]] = field(default_factory=set)
    citations: List[Citation] = field(default_factory=list)

    usage: Optional[TokenUsage] = None
    reported_finish_reason: Optional[str] = None
    content_filtered: bool = False
    finish_reason: Optional[str] = None

    def ensure_open(self) -> None:
        """Raise MappingError if the stream already reached its terminal event."""
        if self.closed:
            raise MappingError(
                "Stream state mutated after the terminal event",
                provider=self.provider,
                context="accumulator",
            )

    def close(self) -> None:
        self.closed = True

    @property
    def usage_known(self) -> bool:
        return self.usage is not None and not self.usage.is_empty()

    @property
    def any_tool_call_started(self) -> bool:
        return any(call.started for call in self.tool_calls.values())

    def find_tool_call(self, index: Optional[int] = None, call_id: Optional[str] = None) -> Optional[ToolCallState]:
        """Resolve a call by id first, then by position."""
        if call_id is not None and call_id in self.tool_calls:
            return self.tool_calls[call_id]
        if index is not None:
            if index in self.index_to_id:
                return self.tool_calls[self.index_to_id[index]]
            return self.pending_tool_calls.get(index)
        return None

    def register_tool_call(self, call: ToolCallState) -> None:
        """Track a new call, by id when known, otherwise by position."""
        if call.id is None:
            self.pending_tool_calls[call.index] = call
        else:
            self.tool_calls[call.id] = call
            self.index_to_id[call.index] = call.id

    def assign_tool_call_id(self, call: ToolCallState, call_id: str) -> None:
        """Promote a position-addressed call once its id arrives."""
        self.pending_tool_calls.pop(call.index, None)
        call.id = call_id
        self.tool_calls[call_id] = call
        self.index_to_id[call.index] = call_id

    def next_tool_call_index(self) -> int:
        indexes = list(self.index_to_id) + list(self.pending_tool_calls)
        return max(indexes) + 1 if indexes else 0

    def ordered_tool_calls(self) -> List[ToolCallState]:
        calls = list(self.tool_calls.values()) + list(self.pending_tool_calls.values())
        return sorted(calls, key=lambda call: call.index)

    def resolve_finish_reason(self, default: str = FINISH_STOP) -> str:
        return resolve_finish_reason(
            self.reported_finish_reason,
            tool_calls_started=self.any_tool_call_started,
            content_filtered=self.content_filtered,
            default=default,
        )

    def to_result(self, parsed_content=None) -> GenerateResult:
        """Snapshot the accumulated stream as a GenerateResult."""
        tool_calls = [
            ToolCallRequest(
                id=call.id,
                function=FunctionCall(name=call.name, arguments=call.arguments),
            )
            for call in self.ordered_tool_calls()
            if call.started and not call.dropped
        ]
        content: Optional[str] = self.content_text
        if not content and not self.json_mode_active:
            content = None

        return GenerateResult(
            content=content,
            tool_calls=tool_calls or None,
            finish_reason=self.finish_reason or self.resolve_finish_reason(),
            usage=self.usage if self.usage_known else None,
            citations=list(self.citations) or None,
            thinking_steps=self.thinking_text or None,
            parsed_content=parsed_content if self.json_mode_active else None,
            model=self.model,
            raw_response=None,
        )
