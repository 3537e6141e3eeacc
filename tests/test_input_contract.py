from __future__ import annotations

import json
from pathlib import Path

import pytest

from frog_jump.engine import run_to_completion, start
from frog_jump.errors import ValidationError
from frog_jump.event_sink import InMemoryEventSink
from frog_jump.models import Direction
from frog_jump.registry import create_registry
from frog_jump.stream_io import (
    dump_event_stream,
    dump_run_state,
    filter_commands,
    load_event_stream,
    load_game_file,
    parse_commands,
    parse_game_text,
    parse_leaf_line,
    parse_leaf_lines,
)
from tests._support.pond_helpers import EXAMPLE_COMMANDS, example_leaves

SAMPLE = Path(__file__).resolve().parents[1] / "samples" / "example_game.txt"


def test_load_game_file_happy_path_sample_file() -> None:
    game = load_game_file(SAMPLE)
    assert game.commands == "ACDBB"
    assert game.points == [(5, 6), (8, 9), (4, 13), (1, 10), (7, 4), (10, 9), (3, 7)]


def test_parse_game_text_normalizes_lowercase_commands() -> None:
    game = parse_game_text("2 3\nabD\n0 0\n1 1\n")
    assert game.commands == "ABD"


def test_parse_game_text_ignores_extra_lines() -> None:
    game = parse_game_text("1 1\nA\n3 4\n9 9\n")
    assert game.points == [(3, 4)]


@pytest.mark.parametrize(
    "text, line",
    [
        ("7\nACDBB\n", 1),
        ("x 5\nACDBB\n", 1),
        ("1 5\nACDB\n0 0\n", 2),
        ("1 2\nAE\n0 0\n", 2),
        ("2 1\nA\n0 0\n1 one\n", 4),
        ("2 1\nA\n0 0 0\n1 1\n", 3),
        ("\n\n1 1\nE\n0 0\n", 4),
        ("\n\n2 1\nA\n0 0\nx 1\n", 6),
        ("3 1\nA\n0 0\n1 1\n", 5),
        ("\n3 1\nA\n0 0\n", 5),
    ],
)
def test_parse_game_text_names_offending_line(text: str, line: int) -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_game_text(text)
    assert excinfo.value.line == line
    assert str(excinfo.value).startswith(f"line {line}:")


def test_parse_game_text_rejects_too_few_lines() -> None:
    with pytest.raises(ValidationError, match="at least 5 lines"):
        parse_game_text("3 1\nA\n0 0\n1 1\n")


def test_parse_game_text_rejects_empty_input() -> None:
    with pytest.raises(ValidationError):
        parse_game_text("   \n")


def test_load_game_file_missing(tmp_path: Path) -> None:
    with pytest.raises(ValidationError, match="file not found"):
        load_game_file(tmp_path / "nope.txt")
    with pytest.raises(ValidationError, match="not a file"):
        load_game_file(tmp_path)


def test_parse_leaf_line() -> None:
    assert parse_leaf_line("  -3   12 ") == (-3, 12)
    with pytest.raises(ValidationError):
        parse_leaf_line("3")
    with pytest.raises(ValidationError):
        parse_leaf_line("3 4.5")


def test_parse_leaf_lines_skips_blank_lines() -> None:
    assert parse_leaf_lines("1 2\n\n3 4\n") == [(1, 2), (3, 4)]
    with pytest.raises(ValidationError, match="line 2"):
        parse_leaf_lines("1 2\nbad\n")


def test_filter_commands_drops_everything_outside_alphabet() -> None:
    assert filter_commands("a-c d!xb  E") == "ACDB"
    assert filter_commands("") == ""


def test_parse_commands_is_strict() -> None:
    assert parse_commands("dcba") == (Direction.D, Direction.C, Direction.B, Direction.A)
    with pytest.raises(ValidationError):
        parse_commands("AB C")


def test_event_stream_dump_then_load(tmp_path: Path) -> None:
    sink = InMemoryEventSink()
    run_to_completion(start(example_leaves(), EXAMPLE_COMMANDS, event_sink=sink), event_sink=sink)

    path = tmp_path / "events.json"
    path.write_text(json.dumps(dump_event_stream(sink.events)), encoding="utf-8")

    assert load_event_stream(path) == sink.events


def test_load_event_stream_rejects_out_of_order_events(tmp_path: Path) -> None:
    bad = [
        {"turn": 1, "seq": 2, "type": "TURN_START", "leaf_id": 0, "data": {"command": "A", "x": 0, "y": 0}},
        {"turn": 1, "seq": 1, "type": "TURN_END", "leaf_id": 0, "data": {}},
    ]
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(bad), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_event_stream(path)


def test_load_event_stream_rejects_unknown_type(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"turn": 0, "seq": 1, "type": "SPLASH"}]), encoding="utf-8")
    with pytest.raises(ValidationError, match="not a valid EventType"):
        load_event_stream(path)


def test_dump_run_state_is_json_serializable() -> None:
    state = run_to_completion(start(create_registry([(0, 0), (1, 1)]), "AA"))
    payload = json.loads(json.dumps(dump_run_state(state)))

    assert payload["status"] == "FINISHED"
    assert payload["current_leaf_id"] == 1
    assert payload["commands"] == "AA"
    assert [h["arrival_leaf_id"] for h in payload["history"]] == [1, None]
    assert payload["leaves"][0] == {"id": 0, "x": 0, "y": 0, "consumed": True}


@pytest.mark.parametrize(
    "event, message",
    [
        ({"turn": 1, "seq": 1, "type": "TURN_START", "leaf_id": 0, "data": {"command": "A"}}, r"data\.x"),
        ({"turn": 1, "seq": 1, "type": "TURN_START", "leaf_id": 0, "data": {"command": "Q", "x": 0, "y": 0}}, r"data\.command"),
        ({"turn": 1, "seq": 1, "type": "JUMP_RESOLVED", "leaf_id": 2, "data": {"command": "A", "x": 1, "y": 1}}, r"data\.distance"),
        ({"turn": 1, "seq": 1, "type": "TURN_END", "data": {}}, r"leaf_id"),
        ({"turn": 1, "seq": 1, "type": "RUN_FINISHED", "leaf_id": 0, "data": {"x": "7", "y": 4}}, r"data\.x"),
    ],
)
def test_load_event_stream_rejects_incomplete_payloads(tmp_path: Path, event: dict, message: str) -> None:
    path = tmp_path / "sparse.json"
    path.write_text(json.dumps([event]), encoding="utf-8")
    with pytest.raises(ValidationError, match=message):
        load_event_stream(path)
