from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(str, Enum):
    """
    Diagonal jump commands. Each letter selects one quadrant relative to
    the frog's current leaf.
    """

    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @property
    def signs(self) -> tuple[int, int]:
        return _SIGNS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_SIGNS = {
    Direction.A: (1, 1),
    Direction.B: (1, -1),
    Direction.C: (-1, 1),
    Direction.D: (-1, -1),
}

_LABELS = {
    Direction.A: "up-right",
    Direction.B: "down-right",
    Direction.C: "up-left",
    Direction.D: "down-left",
}

COMMAND_ALPHABET = "".join(d.value for d in Direction)


@dataclass(frozen=True)
class Leaf:
    id: int
    x: int
    y: int
    # Set once, when the frog departs from this leaf. Never cleared mid-run.
    consumed: bool = False

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class TurnRecord:
    # Departure leaf as it was before this turn consumed it.
    departure_leaf: Leaf
    command: Direction
    arrival_leaf_id: int | None

    @property
    def missed(self) -> bool:
        return self.arrival_leaf_id is None


class RunStatus(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"


@dataclass(frozen=True)
class RunState:
    """
    One simulation run, threaded through the engine's transition functions.

    Invariants:
    - len(history) == next_command_index
    - current_leaf_id names a leaf in registry (None only while IDLE)
    """

    registry: tuple[Leaf, ...]
    commands: tuple[Direction, ...]
    current_leaf_id: int | None
    next_command_index: int
    history: tuple[TurnRecord, ...]
    status: RunStatus

    @classmethod
    def idle(cls) -> RunState:
        return cls(
            registry=(),
            commands=(),
            current_leaf_id=None,
            next_command_index=0,
            history=(),
            status=RunStatus.IDLE,
        )

    @property
    def position(self) -> Leaf | None:
        if self.current_leaf_id is None:
            return None
        for leaf in self.registry:
            if leaf.id == self.current_leaf_id:
                return leaf
        return None

    @property
    def remaining_commands(self) -> tuple[Direction, ...]:
        return self.commands[self.next_command_index:]

    @property
    def next_command(self) -> Direction | None:
        if self.next_command_index >= len(self.commands):
            return None
        return self.commands[self.next_command_index]

    @property
    def is_finished(self) -> bool:
        return self.status == RunStatus.FINISHED
