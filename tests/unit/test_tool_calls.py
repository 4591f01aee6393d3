"""Unit tests for tool call accumulation and the accumulator state."""

import pytest

from relay_llm_sdk.errors import MappingError
from relay_llm_sdk.models.events import ToolCallDeltaEvent, ToolCallDoneEvent, ToolCallStartEvent
from relay_llm_sdk.streaming.tool_calls import (
    apply_tool_arguments,
    apply_tool_call_fragment,
    finish_all_tool_calls,
    finish_tool_call,
)


def fragments_of(events, call_id):
    return "".join(e.args_fragment for e in events if e.type == "tool_call_delta" and e.id == call_id)


@pytest.mark.unit
class TestToolCallFragments:
    """Test the unseen -> started -> done lifecycle."""

    def test_start_when_id_and_name_arrive_together(self, state):
        events = apply_tool_call_fragment(state, 0, call_id="call_1", name="get_weather")
        assert events == [ToolCallStartEvent(index=0, id="call_1", name="get_weather")]
        assert state.tool_calls["call_1"].started

    def test_start_emitted_once(self, state):
        apply_tool_call_fragment(state, 0, call_id="call_1", name="get_weather")
        events = apply_tool_call_fragment(state, 0, call_id="call_1", name="get_weather", arguments='{"a"')
        assert [e.type for e in events] == ["tool_call_delta"]

    def test_index_only_fragments_resolve_to_same_call(self, state):
        events = apply_tool_call_fragment(state, 0, call_id="call_1", name="lookup", arguments="")
        events += apply_tool_call_fragment(state, 0, arguments='{"q": ')
        events += apply_tool_call_fragment(state, 0, arguments='"x"}')
        assert [e.type for e in events] == ["tool_call_start", "tool_call_delta", "tool_call_delta"]
        assert state.tool_calls["call_1"].arguments == '{"q": "x"}'

    def test_arguments_before_name_are_buffered(self, state):
        events = apply_tool_call_fragment(state, 0, call_id="call_1", arguments='{"city": ')
        assert events == []
        events = apply_tool_call_fragment(state, 0, name="get_weather", arguments='"Oslo"}')
        assert events == [
            ToolCallStartEvent(index=0, id="call_1", name="get_weather"),
            ToolCallDeltaEvent(index=0, id="call_1", args_fragment='{"city": "Oslo"}'),
        ]

    def test_id_arrives_after_position(self, state):
        assert apply_tool_call_fragment(state, 2, name="search", arguments="{") == []
        assert 2 in state.pending_tool_calls
        events = apply_tool_call_fragment(state, 2, call_id="call_9", arguments="}")
        assert [e.type for e in events] == ["tool_call_start", "tool_call_delta"]
        assert state.pending_tool_calls == {}
        assert state.index_to_id[2] == "call_9"
        assert state.tool_calls["call_9"].arguments == "{}"

    def test_empty_fragments_emit_no_delta(self, state):
        apply_tool_call_fragment(state, 0, call_id="call_1", name="f")
        assert apply_tool_call_fragment(state, 0, arguments="") == []

    def test_concatenated_deltas_equal_arguments(self, state):
        events = []
        for fragment in ['{"loc', 'ation": "Pa', 'ris", "unit": "c"}']:
            events += apply_tool_call_fragment(state, 0, call_id="call_1", name="get_weather", arguments=fragment)
        assert fragments_of(events, "call_1") == state.tool_calls["call_1"].arguments

    def test_parallel_calls_interleaved(self, state):
        events = apply_tool_call_fragment(state, 0, call_id="a", name="f", arguments="{")
        events += apply_tool_call_fragment(state, 1, call_id="b", name="g", arguments="[")
        events += apply_tool_call_fragment(state, 0, arguments="}")
        events += apply_tool_call_fragment(state, 1, arguments="]")
        assert fragments_of(events, "a") == "{}"
        assert fragments_of(events, "b") == "[]"

    def test_reused_index_with_new_id_is_a_new_call(self, state):
        apply_tool_call_fragment(state, 0, call_id="a", name="f")
        events = apply_tool_call_fragment(state, 0, call_id="b", name="g")
        assert events == [ToolCallStartEvent(index=0, id="b", name="g")]
        assert set(state.tool_calls) == {"a", "b"}

    def test_fragment_without_address_is_skipped(self, state, sdk_logs):
        assert apply_tool_call_fragment(state, None, arguments="{}") == []
        assert "neither index nor id" in sdk_logs.text

    def test_id_only_addressing(self, state):
        apply_tool_call_fragment(state, None, call_id="call_x", name="f")
        events = apply_tool_call_fragment(state, None, call_id="call_x", arguments="{}")
        assert events == [ToolCallDeltaEvent(index=0, id="call_x", args_fragment="{}")]


@pytest.mark.unit
class TestToolArguments:
    """Test position-addressed argument fragments."""

    def test_unknown_index_is_logged_and_skipped(self, state, sdk_logs):
        assert apply_tool_arguments(state, 7, '{"a": 1}') == []
        assert state.tool_calls == {}
        assert "unknown tool call index 7" in sdk_logs.text

    def test_arguments_for_started_call(self, state):
        apply_tool_call_fragment(state, 1, call_id="toolu_1", name="f")
        assert apply_tool_arguments(state, 1, '{"x": 1}') == [
            ToolCallDeltaEvent(index=1, id="toolu_1", args_fragment='{"x": 1}')
        ]

    def test_arguments_after_done_are_ignored(self, state):
        apply_tool_call_fragment(state, 1, call_id="toolu_1", name="f")
        finish_tool_call(state, index=1)
        assert apply_tool_arguments(state, 1, "{}") == []
        assert state.tool_calls["toolu_1"].arguments == ""


@pytest.mark.unit
class TestFinishToolCalls:
    """Test completion of calls."""

    def test_finish_is_idempotent(self, state):
        apply_tool_call_fragment(state, 0, call_id="a", name="f")
        assert finish_tool_call(state, index=0) == [ToolCallDoneEvent(index=0, id="a")]
        assert finish_tool_call(state, index=0) == []
        assert finish_all_tool_calls(state) == []

    def test_finish_unknown_call_emits_nothing(self, state):
        assert finish_tool_call(state, index=3) == []
        assert finish_tool_call(state, call_id="missing") == []

    def test_finish_all_completes_in_flight_calls_in_order(self, state):
        apply_tool_call_fragment(state, 1, call_id="b", name="g", arguments='{"partial"')
        apply_tool_call_fragment(state, 0, call_id="a", name="f")
        events = finish_all_tool_calls(state)
        assert events == [ToolCallDoneEvent(index=0, id="a"), ToolCallDoneEvent(index=1, id="b")]
        assert state.tool_calls["b"].arguments == '{"partial"'

    def test_never_started_call_is_dropped(self, state, sdk_logs):
        apply_tool_call_fragment(state, 0, call_id="a", arguments="{}")
        assert finish_all_tool_calls(state) == []
        assert state.tool_calls["a"].dropped
        assert "Dropping tool call at index 0" in sdk_logs.text
        assert state.to_result().tool_calls is None


@pytest.mark.unit
class TestAccumulatorState:
    """Test state snapshots and closing."""

    def test_closed_state_rejects_mutation(self, state):
        state.close()
        with pytest.raises(MappingError):
            apply_tool_call_fragment(state, 0, call_id="a", name="f")

    def test_result_contains_started_calls_in_index_order(self, state):
        apply_tool_call_fragment(state, 1, call_id="b", name="g", arguments="{}")
        apply_tool_call_fragment(state, 0, call_id="a", name="f", arguments='{"k": 1}')
        result = state.to_result()
        assert [call.id for call in result.tool_calls] == ["a", "b"]
        assert result.tool_calls[0].type == "function"
        assert result.tool_calls[0].function.arguments == '{"k": 1}'
        assert result.finish_reason == "tool_calls"

    def test_empty_result(self, state):
        result = state.to_result()
        assert result.content is None
        assert result.citations is None
        assert result.thinking_steps is None
        assert result.usage is None
        assert result.model == "gpt-4o-mini"

    def test_next_index_after_known_positions(self, state):
        apply_tool_call_fragment(state, 4, call_id="a", name="f")
        assert state.next_tool_call_index() == 5
