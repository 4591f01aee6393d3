"""
Tool call accumulation.

Each logical call moves unseen -> started -> done. It starts the first
time both its id and its name are known; argument fragments that arrive
earlier are buffered and flushed as a single delta at start, so the
concatenated ``args_fragment`` values of a call always equal its final
arguments. Finishing is idempotent.
"""

import logging
from typing import List, Optional

from ..models.events import StreamEvent, ToolCallDeltaEvent, ToolCallDoneEvent, ToolCallStartEvent
from .state import StreamAccumulatorState, ToolCallState

logger = logging.getLogger(__name__)


def _maybe_start(call: ToolCallState, events: List[StreamEvent]) -> None:
    if call.started or not call.id or not call.name:
        return
    call.started = True
    events.append(ToolCallStartEvent(index=call.index, id=call.id, name=call.name))
    if call.arguments:
        events.append(ToolCallDeltaEvent(index=call.index, id=call.id, args_fragment=call.arguments))


def _append_arguments(call: ToolCallState, arguments: str, events: List[StreamEvent]) -> None:
    if not arguments:
        return
    call.arguments += arguments
    if call.started:
        events.append(ToolCallDeltaEvent(index=call.index, id=call.id, args_fragment=arguments))


def apply_tool_call_fragment(
    state: StreamAccumulatorState,
    index: Optional[int],
    call_id: Optional[str] = None,
    name: Optional[str] = None,
    arguments: Optional[str] = None,
) -> List[StreamEvent]:
    """
    Apply a fragment that may introduce a call, name it, or extend its arguments.

    Args:
        state: Stream accumulator
        index: Position of the call in the response, if the upstream reports one
        call_id: Call id, if carried by this fragment
        name: Function name, if carried by this fragment
        arguments: Raw argument text carried by this fragment

    Returns:
        Canonical events produced by this fragment
    """
    state.ensure_open()
    events: List[StreamEvent] = []

    if index is None and call_id is None:
        logger.warning("Skipping tool call fragment with neither index nor id")
        return events

    call = state.find_tool_call(index=index, call_id=call_id)
    if call is not None and call_id and call.id and call.id != call_id:
        # Same position reused by a different call
        call = None

    if call is None:
        call = ToolCallState(index=index if index is not None else state.next_tool_call_index())
        state.register_tool_call(call)

    if call.done:
        logger.warning(f"Ignoring fragment for finished tool call at index {call.index}")
        return events

    if call_id and call.id is None:
        state.assign_tool_call_id(call, call_id)
    if name and not call.name:
        call.name = name

    if call.started:
        _append_arguments(call, arguments or "", events)
    else:
        call.arguments += arguments or ""
        _maybe_start(call, events)
    return events


def apply_tool_arguments(state: StreamAccumulatorState, index: Optional[int], arguments: str) -> List[StreamEvent]:
    """
    Append an argument fragment to an already known call.

    A fragment addressed to a position that was never opened is logged
    and skipped.
    """
    state.ensure_open()
    events: List[StreamEvent] = []
    call = state.find_tool_call(index=index)
    if call is None:
        logger.warning(f"Skipping argument fragment for unknown tool call index {index}")
        return events
    if call.done:
        logger.warning(f"Ignoring argument fragment for finished tool call at index {index}")
        return events
    if call.started:
        _append_arguments(call, arguments, events)
    else:
        call.arguments += arguments
    return events


def finish_tool_call(
    state: StreamAccumulatorState,
    index: Optional[int] = None,
    call_id: Optional[str] = None,
) -> List[StreamEvent]:
    """Mark one started call done. Calling it again, or for an unknown call, emits nothing."""
    state.ensure_open()
    call = state.find_tool_call(index=index, call_id=call_id)
    if call is None or call.done or not call.started:
        return []
    call.done = True
    return [ToolCallDoneEvent(index=call.index, id=call.id)]


def finish_all_tool_calls(state: StreamAccumulatorState) -> List[StreamEvent]:
    """
    Finalize every call still in flight.

    Started calls are marked done with whatever arguments were buffered.
    Calls that never learned both id and name are dropped from the result.
    """
    state.ensure_open()
    events: List[StreamEvent] = []
    for call in state.ordered_tool_calls():
        if call.done:
            continue
        call.done = True
        if call.started:
            events.append(ToolCallDoneEvent(index=call.index, id=call.id))
        elif not call.dropped:
            call.dropped = True
            logger.warning(
                f"Dropping tool call at index {call.index}: "
                f"{'id' if not call.id else 'name'} never received"
            )
    return events
