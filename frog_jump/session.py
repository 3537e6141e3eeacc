from __future__ import annotations

from typing import Callable

from frog_jump.engine import start, step_turn
from frog_jump.errors import ValidationError
from frog_jump.event_sink import EventSink
from frog_jump.models import Leaf, RunState, RunStatus, TurnRecord
from frog_jump.registry import create_registry
from frog_jump.snapshots import FinishNotice, RunSnapshot, finish_notice, snapshot_run
from frog_jump.stream_io import (
    GameInput,
    filter_commands,
    parse_game_text,
    parse_leaf_line,
    parse_leaf_lines,
)

EXAMPLE_POINTS: tuple[tuple[int, int], ...] = (
    (5, 6),
    (8, 9),
    (4, 13),
    (1, 10),
    (7, 4),
    (10, 9),
    (3, 7),
)
EXAMPLE_COMMANDS = "ACDBB"


class GameSession:
    """
    Presentation-facing controller for one pond.

    The session owns the current RunState value and replaces it only with the
    result of an engine transition; it never edits state fields in place.
    Setup (leaves and commands) is kept separately so a failed start() leaves
    the run state exactly as it was.
    """

    def __init__(
            self,
            *,
            on_snapshot: Callable[[RunSnapshot], None] | None = None,
            on_finish: Callable[[FinishNotice], None] | None = None,
            on_miss: Callable[[TurnRecord], None] | None = None,
            event_sink: EventSink | None = None,
    ) -> None:
        self.on_snapshot = on_snapshot
        self.on_finish = on_finish
        self.on_miss = on_miss
        self.event_sink = event_sink
        self.state: RunState = RunState.idle()
        self._points: list[tuple[int, int]] = []
        self._commands: str = ""

    @property
    def points(self) -> list[tuple[int, int]]:
        return list(self._points)

    @property
    def commands(self) -> str:
        return self._commands

    # ---- setup ----

    def add_leaf(self, line: str) -> Leaf:
        """Append one leaf from an 'x y' line; ids follow insertion order."""
        point = parse_leaf_line(line)
        self._points.append(point)
        return Leaf(id=len(self._points) - 1, x=point[0], y=point[1])

    def set_leaves_text(self, text: str) -> int:
        """Replace all leaves with a multi-line 'x y' block."""
        self._points = parse_leaf_lines(text)
        return len(self._points)

    def set_commands(self, raw: str) -> str:
        self._commands = filter_commands(raw)
        return self._commands

    def load_text(self, text: str) -> None:
        """Load leaves and commands from the bulk 'N M' format."""
        self.load_game(parse_game_text(text))

    def load_game(self, game: GameInput) -> None:
        self._points = list(game.points)
        self._commands = game.commands

    def load_example(self) -> None:
        self._points = list(EXAMPLE_POINTS)
        self._commands = EXAMPLE_COMMANDS

    def new_game(self) -> None:
        """Forget leaves, commands, and the run; back to IDLE."""
        self._points = []
        self._commands = ""
        self.state = RunState.idle()

    # ---- run control ----

    def start(self) -> RunState:
        """Start (or restart) a run from the current setup."""
        if not self._points:
            raise ValidationError("please add at least one leaf")
        if not self._commands:
            raise ValidationError("please add at least one command")
        registry = create_registry(self._points)
        self.state = start(registry, self._commands, event_sink=self.event_sink)
        self._publish(self.state)
        return self.state

    restart = start

    def advance(self) -> RunState:
        """Execute one turn. Does nothing unless a run is in progress."""
        if self.state.status != RunStatus.RUNNING:
            return self.state
        self.state = step_turn(self.state, event_sink=self.event_sink)

        record = self.state.history[-1]
        if record.missed and self.on_miss is not None:
            self.on_miss(record)
        self._publish(self.state)
        return self.state

    def run_to_end(self) -> RunState:
        while self.state.status == RunStatus.RUNNING:
            self.advance()
        return self.state

    def _publish(self, state: RunState) -> None:
        if self.on_snapshot is not None:
            self.on_snapshot(snapshot_run(state))
        if self.on_finish is not None:
            notice = finish_notice(state)
            if notice is not None:
                self.on_finish(notice)
