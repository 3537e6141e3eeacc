from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from frog_jump.errors import ValidationError
from frog_jump.event_sink import InMemoryEventSink
from frog_jump.reporting import derive_turn_rows, format_turn_row, render_text_report
from frog_jump.session import GameSession
from frog_jump.snapshots import FinishNotice, RunSnapshot
from frog_jump.stream_io import dump_event_stream, load_event_stream, load_game_file


def _fmt_trace(snap: RunSnapshot) -> str:
    pos = "--" if snap.position is None else f"({snap.position[0]}, {snap.position[1]})"
    remaining = "".join(d.value for d in snap.remaining_commands) or "Done"
    return (
        f"[{snap.completed_turns}/{snap.total_turns}] {snap.status.value:<8s} "
        f"leaf={snap.current_leaf_id} pos={pos} next={remaining}"
    )


def _setup_session(args: argparse.Namespace, session: GameSession) -> None:
    if args.example:
        session.load_example()
        return

    if args.input:
        session.load_game(load_game_file(Path(str(args.input))))
        return

    for line in args.leaf:
        session.add_leaf(line)
    if not args.commands:
        raise ValidationError("--commands is required with --leaf")
    session.set_commands(str(args.commands))


def _cmd_run(args: argparse.Namespace) -> int:
    chosen = sum(1 for v in [bool(args.example), bool(args.input), bool(args.leaf)] if v)
    if chosen != 1:
        print("ERROR: choose exactly one of --example, --input, or --leaf.", file=sys.stderr)
        return 2
    if args.commands is not None and not args.leaf:
        print("ERROR: --commands only applies to --leaf games.", file=sys.stderr)
        return 2

    sink = InMemoryEventSink()
    notices: list[FinishNotice] = []

    def _on_snapshot(snap: RunSnapshot) -> None:
        if args.trace:
            print(_fmt_trace(snap))

    session = GameSession(on_snapshot=_on_snapshot, on_finish=notices.append, event_sink=sink)

    try:
        _setup_session(args, session)
        session.start()
    except ValidationError as e:
        print(f"ERROR: invalid game: {e}", file=sys.stderr)
        return 2

    state = session.run_to_end()

    sys.stdout.write(render_text_report(state))
    for notice in notices:
        print(notice.message)

    if args.events_out:
        out_path = Path(str(args.events_out))
        out_path.write_text(json.dumps(dump_event_stream(sink.events), indent=2), encoding="utf-8")
    return 0


def _cmd_report(args: argparse.Namespace) -> int:
    try:
        events = load_event_stream(Path(str(args.events)))
    except ValidationError as e:
        print(f"ERROR: invalid event stream: {e}", file=sys.stderr)
        return 2

    rows = derive_turn_rows(events)
    if not rows:
        print("(No complete turns were found in the event stream.)")
        return 0
    for row in rows:
        print(format_turn_row(row))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="frog_jump",
        description=(
            "Frog Jump Simulator: command-line harness.\n"
            "\n"
            "Runs a diagonal jump sequence over a pond of leaves and prints the jump history."
        ),
    )

    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run a game and print the jump history.")
    run.add_argument("--example", action="store_true", help="Run the built-in 7-leaf example game.")
    run.add_argument("--input", type=str, help="Run a game file in 'N M / commands / x y' format.")
    run.add_argument(
        "--leaf",
        type=str,
        action="append",
        default=[],
        help="Add one leaf as 'x y' (repeatable; the first leaf is the start).",
    )
    run.add_argument(
        "--commands",
        type=str,
        default=None,
        help="Command letters for --leaf games; characters other than A-D are dropped.",
    )
    run.add_argument("--trace", action="store_true", help="Print a status line after every turn.")
    run.add_argument("--events-out", type=str, default=None, help="Write the event stream as JSON.")
    run.set_defaults(func=_cmd_run)

    report = sub.add_parser("report", help="Render turn rows from a saved event stream.")
    report.add_argument("--events", type=str, required=True, help="Event stream JSON to render.")
    report.set_defaults(func=_cmd_report)

    return parser


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
