from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """
    Event vocabulary emitted by the turn engine.
    Keep this small; add types only when tests require them.
    """

    RUN_STARTED = "RUN_STARTED"
    TURN_START = "TURN_START"
    JUMP_RESOLVED = "JUMP_RESOLVED"
    JUMP_MISSED = "JUMP_MISSED"
    LEAF_SUNK = "LEAF_SUNK"
    TURN_END = "TURN_END"
    RUN_FINISHED = "RUN_FINISHED"


@dataclass(frozen=True, slots=True)
class Event:
    """
    A structured, orderable fact emitted by the engine (optionally).

    turn and seq are owned by the sink (so the engine remains stateless).
    Turn 0 holds run setup events.
    """

    turn: int
    seq: int
    type: EventType
    leaf_id: int | None = None
    data: dict[str, Any] = field(default_factory=dict)
