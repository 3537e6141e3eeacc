from __future__ import annotations

import pytest

from frog_jump.engine import run_to_completion, start, step_turn
from frog_jump.event_sink import InMemoryEventSink
from frog_jump.events import EventType
from tests._support.pond_helpers import EXAMPLE_COMMANDS, example_leaves


def test_event_order_on_first_turn():
    """
    Asserts causality ordering (not formatting/visuals):
      - Setup emits RUN_STARTED at turn 0.
      - A resolved turn emits
          TURN_START -> JUMP_RESOLVED -> LEAF_SUNK -> TURN_END
    """
    sink = InMemoryEventSink()
    state = start(example_leaves(), EXAMPLE_COMMANDS, event_sink=sink)
    step_turn(state, event_sink=sink)

    assert [e.type for e in sink.events if e.turn == 0] == [EventType.RUN_STARTED]

    turn1 = [e for e in sink.events if e.turn == 1]
    assert [e.type for e in turn1] == [
        EventType.TURN_START,
        EventType.JUMP_RESOLVED,
        EventType.LEAF_SUNK,
        EventType.TURN_END,
    ]
    assert turn1[0].leaf_id == 0
    assert turn1[0].data["command"] == "A"
    assert turn1[1].leaf_id == 1
    assert turn1[1].data["distance"] == 3
    assert turn1[2].leaf_id == 0
    assert [e.seq for e in turn1] == [1, 2, 3, 4]


def test_last_turn_reports_miss_and_finish():
    sink = InMemoryEventSink()
    run_to_completion(start(example_leaves(), EXAMPLE_COMMANDS, event_sink=sink), event_sink=sink)

    turn5 = [e for e in sink.events if e.turn == 5]
    assert [e.type for e in turn5] == [
        EventType.TURN_START,
        EventType.JUMP_MISSED,
        EventType.LEAF_SUNK,
        EventType.TURN_END,
        EventType.RUN_FINISHED,
    ]
    finished = turn5[-1]
    assert finished.leaf_id == 4
    assert (finished.data["x"], finished.data["y"]) == (7, 4)


def test_engine_runs_without_sink():
    state = run_to_completion(start(example_leaves(), EXAMPLE_COMMANDS))
    assert state.current_leaf_id == 4


def test_restart_clears_previous_events():
    sink = InMemoryEventSink()
    run_to_completion(start(example_leaves(), EXAMPLE_COMMANDS, event_sink=sink), event_sink=sink)
    first = list(sink.events)

    run_to_completion(start(example_leaves(), EXAMPLE_COMMANDS, event_sink=sink), event_sink=sink)
    assert sink.events == first


def test_emit_before_start_run_raises():
    sink = InMemoryEventSink()
    with pytest.raises(RuntimeError):
        sink.emit(EventType.TURN_START)
    with pytest.raises(RuntimeError):
        sink.start_turn()
