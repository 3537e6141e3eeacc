from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from frog_jump.events import Event, EventType
from frog_jump.models import Direction, Leaf, RunState, RunStatus, TurnRecord
from frog_jump.registry import find_leaf

BOUNDS_MIN_PADDING = 5.0
BOUNDS_PADDING_RATIO = 0.2


@dataclass(frozen=True, slots=True)
class PondBounds:
    min_x: float
    min_y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class TurnRow:
    """
    A single turn, represented as a TURN_START → TURN_END span.
    arrival is None when the jump missed.
    """
    turn: int
    command: str
    departure: tuple[int, int]
    departure_leaf_id: int | None
    arrival: tuple[int, int] | None
    arrival_leaf_id: int | None
    events: tuple[Event, ...]


def jump_path(state: RunState) -> list[tuple[int, int]]:
    """
    Points visited by the frog: the start leaf, then one point per turn.
    A missed jump repeats the departure point.
    """
    if not state.registry:
        return []
    path = [state.registry[0].position]
    for record in state.history:
        if record.arrival_leaf_id is None:
            path.append(record.departure_leaf.position)
        else:
            path.append(find_leaf(state.registry, record.arrival_leaf_id).position)
    return path


def command_progress(state: RunState) -> list[tuple[Direction, str]]:
    out: list[tuple[Direction, str]] = []
    for i, cmd in enumerate(state.commands):
        if i < state.next_command_index:
            status = "completed"
        elif i == state.next_command_index:
            status = "current"
        else:
            status = "pending"
        out.append((cmd, status))
    return out


def pond_bounds(leaves: Sequence[Leaf]) -> PondBounds | None:
    """Bounding box around all leaves with padding on every side."""
    if not leaves:
        return None
    xs = [leaf.x for leaf in leaves]
    ys = [leaf.y for leaf in leaves]
    span = max(max(xs) - min(xs), max(ys) - min(ys))
    padding = max(BOUNDS_MIN_PADDING, span * BOUNDS_PADDING_RATIO)
    return PondBounds(
        min_x=min(xs) - padding,
        min_y=min(ys) - padding,
        width=max(xs) - min(xs) + padding * 2,
        height=max(ys) - min(ys) + padding * 2,
    )


def derive_turn_rows(events: Iterable[Event]) -> list[TurnRow]:
    """
    Derive TURN_START → TURN_END rows from an ordered event stream.

    Rule:
      - A row begins at TURN_START (departure position and command)
      - JUMP_RESOLVED supplies the arrival; JUMP_MISSED leaves it None
      - It ends at TURN_END
      - All events between START and END (inclusive) are attached to the row
    """
    rows: list[TurnRow] = []

    buffer: list[Event] = []
    start: Event | None = None
    resolved: Event | None = None

    for e in events:
        if e.type == EventType.TURN_START:
            buffer = [e]
            start = e
            resolved = None
            continue

        if start is None:
            continue

        buffer.append(e)

        if e.type == EventType.JUMP_RESOLVED:
            resolved = e
        elif e.type == EventType.TURN_END:
            rows.append(
                TurnRow(
                    turn=start.turn,
                    command=str(start.data.get("command", "?")),
                    departure=(int(start.data["x"]), int(start.data["y"])),
                    departure_leaf_id=start.leaf_id,
                    arrival=(
                        (int(resolved.data["x"]), int(resolved.data["y"]))
                        if resolved is not None
                        else None
                    ),
                    arrival_leaf_id=resolved.leaf_id if resolved is not None else None,
                    events=tuple(buffer),
                )
            )
            buffer = []
            start = None
            resolved = None

    return rows


def _fmt_point(point: tuple[int, int]) -> str:
    return f"({point[0]}, {point[1]})"


def format_history_line(index: int, record: TurnRecord, registry: Sequence[Leaf]) -> str:
    dep = record.departure_leaf
    line = f"#{index}: Command {record.command.value} from leaf {dep.id} {_fmt_point(dep.position)}"
    if record.arrival_leaf_id is None:
        return line + f" -> no leaf {record.command.label}, stays"
    arrival = find_leaf(registry, record.arrival_leaf_id)
    return line + f" -> leaf {arrival.id} {_fmt_point(arrival.position)}"


def format_turn_row(row: TurnRow) -> str:
    line = f"#{row.turn}: Command {row.command} from {_fmt_point(row.departure)}"
    if row.arrival is None:
        return line + " -> no leaf, stays"
    return line + f" -> leaf {row.arrival_leaf_id} {_fmt_point(row.arrival)}"


def render_text_report(state: RunState) -> str:
    out: list[str] = []
    if not state.history:
        out.append("No jumps yet")
    for i, record in enumerate(state.history, start=1):
        out.append(format_history_line(i, record, state.registry))

    leaf = state.position
    if leaf is not None:
        label = "Final position" if state.status == RunStatus.FINISHED else "Position"
        out.append(f"{label}: leaf {leaf.id} {_fmt_point(leaf.position)}")
    return "\n".join(out) + "\n"
