from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from frog_jump.errors import ValidationError
from frog_jump.events import Event, EventType
from frog_jump.models import COMMAND_ALPHABET, Direction, RunState


@dataclass(frozen=True)
class GameInput:
    points: list[tuple[int, int]]
    commands: str


def filter_commands(raw: str) -> str:
    """Uppercase raw and silently drop every character outside A-D."""
    return "".join(c for c in raw.upper() if c in COMMAND_ALPHABET)


def parse_commands(raw: str, *, line_no: int | None = None) -> tuple[Direction, ...]:
    """Strict command parsing: every character must be one of A-D (any case)."""
    out: list[Direction] = []
    for i, c in enumerate(raw.strip().upper()):
        if c not in COMMAND_ALPHABET:
            raise ValidationError(
                f"command {i + 1} is {c!r}; expected one of {', '.join(COMMAND_ALPHABET)}",
                line=line_no,
            )
        out.append(Direction(c))
    return tuple(out)


def parse_leaf_line(line: str, *, line_no: int | None = None) -> tuple[int, int]:
    """Parse one 'x y' line into integer coordinates."""
    tokens = line.split()
    if len(tokens) != 2:
        raise ValidationError(
            f"expected 'x y' coordinates, got {len(tokens)} value(s)", line=line_no
        )
    try:
        return int(tokens[0]), int(tokens[1])
    except ValueError as e:
        raise ValidationError(f"coordinates must be integers: {line.strip()!r}", line=line_no) from e


def parse_leaf_lines(text: str) -> list[tuple[int, int]]:
    """Parse a block of 'x y' lines (no header). Blank lines are skipped."""
    points: list[tuple[int, int]] = []
    for i, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        points.append(parse_leaf_line(line, line_no=i))
    if not points:
        raise ValidationError("no leaf coordinates given")
    return points


def parse_game_text(text: str) -> GameInput:
    """Parse the bulk game format.

    Layout:
      N M          leaf count, command count
      <M letters>  commands from A-D (case-insensitive)
      x y          N lines of integer coordinates

    Leading blank lines are skipped; error line numbers still count them.
    Lines after the N-th leaf are ignored.
    """
    raw_lines = text.rstrip().splitlines()
    first = next((i for i, line in enumerate(raw_lines) if line.strip()), None)
    if first is None:
        raise ValidationError("input is empty")
    lines = raw_lines[first:]
    # 1-based line numbers of the header and commands lines
    header_no = first + 1
    commands_no = first + 2

    header = lines[0].split()
    if len(header) != 2:
        raise ValidationError("first line must contain two numbers: N and M", line=header_no)
    try:
        n, m = int(header[0]), int(header[1])
    except ValueError as e:
        raise ValidationError(
            "first line must contain two numbers: N and M", line=header_no
        ) from e
    if n < 0 or m < 0:
        raise ValidationError("N and M must be non-negative", line=header_no)

    if len(lines) < 2 + n:
        raise ValidationError(
            f"input should have at least {2 + n} lines (got {len(lines)})",
            line=first + len(lines) + 1,
        )

    commands_line = lines[1].strip()
    if len(commands_line) != m:
        raise ValidationError(
            f"commands should be exactly {m} characters (got {len(commands_line)})",
            line=commands_no,
        )
    directions = parse_commands(commands_line, line_no=commands_no)

    points = [parse_leaf_line(lines[2 + i], line_no=commands_no + 1 + i) for i in range(n)]
    return GameInput(points=points, commands="".join(d.value for d in directions))


def load_game_file(path: Path) -> GameInput:
    """Load and validate a bulk-format game file."""
    if not path.exists():
        raise ValidationError(f"file not found: {path}")
    if not path.is_file():
        raise ValidationError(f"not a file: {path}")
    return parse_game_text(path.read_text(encoding="utf-8"))


def dump_event_stream(events: list[Event]) -> list[dict[str, Any]]:
    """Return a JSON-serializable event stream."""
    out: list[dict[str, Any]] = []
    for e in events:
        d = asdict(e)
        d["type"] = str(e.type.value)
        out.append(d)
    return out


# Payload keys each event type must carry, with the JSON type expected.
_PAYLOAD_KEYS: dict[EventType, dict[str, type]] = {
    EventType.RUN_STARTED: {"leaf_count": int, "commands": str},
    EventType.TURN_START: {"command": str, "x": int, "y": int},
    EventType.JUMP_RESOLVED: {"command": str, "x": int, "y": int, "distance": int},
    EventType.JUMP_MISSED: {"command": str},
    EventType.LEAF_SUNK: {},
    EventType.TURN_END: {},
    EventType.RUN_FINISHED: {"x": int, "y": int},
}


def _check_payload(i: int, event_type: EventType, data: dict[str, Any]) -> None:
    for key, expected in _PAYLOAD_KEYS[event_type].items():
        value = data.get(key)
        if isinstance(value, bool) or not isinstance(value, expected):
            raise ValidationError(
                f"event[{i}] ({event_type.value}).data.{key} must be {expected.__name__}"
            )
    command = data.get("command")
    if isinstance(command, str) and (len(command) != 1 or command not in COMMAND_ALPHABET):
        raise ValidationError(
            f"event[{i}] ({event_type.value}).data.command must be one of {', '.join(COMMAND_ALPHABET)}"
        )


def load_event_stream(path: Path) -> list[Event]:
    """Load and validate an ordered structured event stream from JSON."""

    if not path.exists():
        raise ValidationError(f"file not found: {path}")
    if not path.is_file():
        raise ValidationError(f"not a file: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"invalid JSON: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e

    if not isinstance(raw, list):
        raise ValidationError("root must be a JSON array of events")

    events: list[Event] = []
    last_key: tuple[int, int] | None = None

    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValidationError(f"event[{i}] must be an object")

        turn = item.get("turn")
        seq = item.get("seq")
        etype = item.get("type")
        leaf_id = item.get("leaf_id", None)
        data = item.get("data", {})

        if not isinstance(turn, int) or turn < 0:
            raise ValidationError(f"event[{i}].turn must be an int >= 0")
        if not isinstance(seq, int) or seq < 1:
            raise ValidationError(f"event[{i}].seq must be an int >= 1")
        if not isinstance(etype, str):
            raise ValidationError(f"event[{i}].type must be a string")
        if isinstance(leaf_id, bool) or not isinstance(leaf_id, int):
            raise ValidationError(f"event[{i}].leaf_id must be an int")
        if not isinstance(data, dict):
            raise ValidationError(f"event[{i}].data must be an object")

        try:
            event_type = EventType(etype)
        except ValueError as e:
            raise ValidationError(
                f"event[{i}].type is not a valid EventType: {etype!r}"
            ) from e

        key = (turn, seq)
        if last_key is not None and key <= last_key:
            raise ValidationError(
                "events must be strictly increasing by (turn, seq); "
                f"event[{i}] has (turn, seq)={key} after {last_key}"
            )
        last_key = key

        _check_payload(i, event_type, data)

        events.append(Event(turn=turn, seq=seq, type=event_type, leaf_id=leaf_id, data=data))

    return events


def dump_run_state(state: RunState) -> dict[str, Any]:
    """Return a JSON-serializable view of a run state."""
    return {
        "status": state.status.value,
        "current_leaf_id": state.current_leaf_id,
        "next_command_index": state.next_command_index,
        "commands": "".join(d.value for d in state.commands),
        "leaves": [asdict(leaf) for leaf in state.registry],
        "history": [
            {
                "departure_leaf": asdict(r.departure_leaf),
                "command": r.command.value,
                "arrival_leaf_id": r.arrival_leaf_id,
            }
            for r in state.history
        ],
    }
