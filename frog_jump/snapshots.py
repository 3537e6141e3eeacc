from __future__ import annotations

from dataclasses import dataclass

from frog_jump.models import Direction, RunState, RunStatus, TurnRecord
from frog_jump.registry import find_leaf


@dataclass(frozen=True)
class RunSnapshot:
    status: RunStatus
    current_leaf_id: int | None
    position: tuple[int, int] | None
    completed_turns: int
    total_turns: int
    remaining_commands: tuple[Direction, ...]
    history: tuple[TurnRecord, ...]


@dataclass(frozen=True)
class FinishNotice:
    leaf_id: int
    x: int
    y: int

    @property
    def message(self) -> str:
        return f"Simulation complete! Frog is at ({self.x}, {self.y})"


def snapshot_run(state: RunState) -> RunSnapshot:
    leaf = state.position
    return RunSnapshot(
        status=state.status,
        current_leaf_id=state.current_leaf_id,
        position=(leaf.position if leaf is not None else None),
        completed_turns=state.next_command_index,
        total_turns=len(state.commands),
        remaining_commands=state.remaining_commands,
        history=state.history,
    )


def finish_notice(state: RunState) -> FinishNotice | None:
    if state.status != RunStatus.FINISHED:
        return None
    leaf = find_leaf(state.registry, state.current_leaf_id)
    return FinishNotice(leaf_id=leaf.id, x=leaf.x, y=leaf.y)
