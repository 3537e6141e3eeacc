from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from frog_jump.events import Event, EventType


class EventSink(ABC):
    """
    Consumer of structured events.
    The engine must be able to run with event_sink=None (no events).
    """

    @abstractmethod
    def start_run(self) -> None: ...

    @abstractmethod
    def start_turn(self) -> int: ...

    @abstractmethod
    def emit(self, event_type: EventType, leaf_id: int | None = None, **data: Any) -> None: ...


@dataclass
class InMemoryEventSink(EventSink):
    """
    Simple sink for tests/demos.
    Owns turn/seq numbering so the engine stays free of global state.

    start_run() clears previously collected events, so a restarted run
    produces a stream identical to the first one.
    """

    events: list[Event] = field(default_factory=list)
    _turn: int = field(default=0, init=False)
    _seq: int = field(default=0, init=False)
    _started: bool = field(default=False, init=False)

    @property
    def current_turn(self) -> int:
        return self._turn

    def start_run(self) -> None:
        self.events.clear()
        self._turn = 0
        self._seq = 0
        self._started = True

    def start_turn(self) -> int:
        if not self._started:
            raise RuntimeError("EventSink.start_run() must be called before start_turn().")
        self._turn += 1
        self._seq = 0
        return self._turn

    def emit(self, event_type: EventType, leaf_id: int | None = None, **data: object) -> None:
        if not self._started:
            raise RuntimeError("EventSink.start_run() must be called before emitting events.")
        self._seq += 1
        self.events.append(
            Event(
                turn=self._turn,
                seq=self._seq,
                type=event_type,
                leaf_id=leaf_id,
                data=dict(data),
            )
        )
