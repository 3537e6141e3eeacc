from __future__ import annotations

from typing import Iterable, Sequence

from frog_jump.engine import start, step_turn
from frog_jump.event_sink import EventSink
from frog_jump.models import Direction, Leaf, RunStatus
from frog_jump.snapshots import RunSnapshot, snapshot_run


def run_with_trace(
        leaves: Sequence[Leaf],
        commands: str | Iterable[Direction | str],
        event_sink: EventSink | None = None,
) -> list[RunSnapshot]:
    """
    Run a whole game, returning a snapshot after start and after every turn.

    Notes:
    - Uses engine.start()/step_turn() for behavior (same rules) + observability.
    - The registry is reset at start, so running twice on the same leaves
      yields an identical trace.
    """
    state = start(leaves, commands, event_sink=event_sink)
    log: list[RunSnapshot] = [snapshot_run(state)]
    while state.status == RunStatus.RUNNING:
        state = step_turn(state, event_sink=event_sink)
        log.append(snapshot_run(state))
    return log
