from __future__ import annotations

from frog_jump.registry import create_registry
from frog_jump.session import EXAMPLE_COMMANDS, EXAMPLE_POINTS
from frog_jump.trace import run_with_trace


def main() -> None:
    leaves = create_registry(EXAMPLE_POINTS)
    log = run_with_trace(leaves, EXAMPLE_COMMANDS)

    for snap in log:
        pos = snap.position if snap.position is not None else ("-", "-")
        remaining = "".join(d.value for d in snap.remaining_commands) or "-"
        print(
            f"Turn {snap.completed_turns:2d}/{snap.total_turns} | {snap.status.value:<8s} "
            f"leaf={snap.current_leaf_id} at ({pos[0]}, {pos[1]}) | remaining={remaining}"
        )

    last = log[-1]
    for i, record in enumerate(last.history, start=1):
        # A miss keeps the frog on the departure leaf
        arrival = "-" if record.arrival_leaf_id is None else str(record.arrival_leaf_id)
        print(f"  #{i} {record.command.value} from leaf {record.departure_leaf.id} -> {arrival}")


if __name__ == "__main__":
    main()
