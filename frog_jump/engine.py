from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from frog_jump.errors import ValidationError
from frog_jump.event_sink import EventSink
from frog_jump.events import EventType
from frog_jump.models import Direction, Leaf, RunState, RunStatus, TurnRecord
from frog_jump.registry import find_leaf, mark_consumed, reset_registry
from frog_jump.resolver import as_direction, jump_distance, resolve


def _normalize_commands(commands: str | Iterable[Direction | str]) -> tuple[Direction, ...]:
    out: list[Direction] = []
    for i, c in enumerate(commands):
        try:
            out.append(as_direction(c))
        except ValidationError as e:
            raise ValidationError(f"commands[{i}]: {e}") from e
    return tuple(out)


def start(
        leaves: Sequence[Leaf],
        commands: str | Iterable[Direction | str],
        *,
        event_sink: EventSink | None = None,
) -> RunState:
    """
    Begin (or restart) a run on leaves with the given command sequence.

    Validation failures raise ValidationError and produce no state, so the
    caller keeps whatever state it held before (IDLE stays IDLE).
    Calling start() on a RUNNING state's leaves is an explicit restart.
    """
    if len(leaves) < 1:
        raise ValidationError("at least one leaf is required")
    directions = _normalize_commands(commands)
    if len(directions) < 1:
        raise ValidationError("at least one command is required")

    ids = [leaf.id for leaf in leaves]
    if len(set(ids)) != len(ids):
        raise ValidationError("leaf ids must be unique")

    registry = reset_registry(leaves)
    state = RunState(
        registry=registry,
        commands=directions,
        current_leaf_id=registry[0].id,
        next_command_index=0,
        history=(),
        status=RunStatus.RUNNING,
    )

    if event_sink is not None:
        event_sink.start_run()
        event_sink.emit(
            EventType.RUN_STARTED,
            leaf_id=state.current_leaf_id,
            leaf_count=len(registry),
            commands="".join(d.value for d in directions),
        )
    return state


def step_turn(state: RunState, *, event_sink: EventSink | None = None) -> RunState:
    """
    Execute one command and return the next state.

    Order within a turn:
    - resolve the arrival leaf against the registry left by the previous turn
    - sink the departure leaf (even when the jump misses)
    - append the turn record
    - move to the arrival leaf (a miss leaves the frog where it was)

    IDLE and FINISHED states are returned unchanged.
    """
    if state.status != RunStatus.RUNNING:
        return state

    # 1) terminal check
    if state.next_command_index >= len(state.commands):
        return replace(state, status=RunStatus.FINISHED)

    # 2) departure and command
    departure = find_leaf(state.registry, state.current_leaf_id)
    cmd = state.commands[state.next_command_index]

    if event_sink is not None:
        event_sink.start_turn()
        event_sink.emit(
            EventType.TURN_START,
            leaf_id=departure.id,
            command=cmd.value,
            x=departure.x,
            y=departure.y,
        )

    # 3) resolve against the current snapshot
    arrival = resolve(state.registry, departure, cmd)

    if event_sink is not None:
        if arrival is None:
            event_sink.emit(EventType.JUMP_MISSED, leaf_id=departure.id, command=cmd.value)
        else:
            event_sink.emit(
                EventType.JUMP_RESOLVED,
                leaf_id=arrival.id,
                command=cmd.value,
                x=arrival.x,
                y=arrival.y,
                distance=jump_distance(departure, arrival),
            )

    # 4) the departure leaf sinks regardless of the outcome
    registry = mark_consumed(state.registry, departure.id)

    if event_sink is not None:
        event_sink.emit(EventType.LEAF_SUNK, leaf_id=departure.id)

    # 5-7) history, counter, position
    record = TurnRecord(
        departure_leaf=departure,
        command=cmd,
        arrival_leaf_id=arrival.id if arrival is not None else None,
    )
    next_index = state.next_command_index + 1
    current = arrival.id if arrival is not None else state.current_leaf_id

    # 8) finish on the last command
    status = RunStatus.FINISHED if next_index == len(state.commands) else RunStatus.RUNNING

    new_state = replace(
        state,
        registry=registry,
        current_leaf_id=current,
        next_command_index=next_index,
        history=state.history + (record,),
        status=status,
    )

    if event_sink is not None:
        event_sink.emit(EventType.TURN_END, leaf_id=current)
        if status == RunStatus.FINISHED:
            final = find_leaf(registry, current)
            event_sink.emit(EventType.RUN_FINISHED, leaf_id=final.id, x=final.x, y=final.y)

    return new_state


def run_to_completion(state: RunState, *, event_sink: EventSink | None = None) -> RunState:
    """Advance until FINISHED. An IDLE state is returned unchanged."""
    while state.status == RunStatus.RUNNING:
        state = step_turn(state, event_sink=event_sink)
    return state


def final_position(state: RunState) -> tuple[int, int] | None:
    if not state.is_finished:
        return None
    leaf = find_leaf(state.registry, state.current_leaf_id)
    return leaf.position
