from __future__ import annotations

from typing import Iterable

from frog_jump.errors import ValidationError
from frog_jump.models import Direction, Leaf


def as_direction(direction: Direction | str) -> Direction:
    if isinstance(direction, Direction):
        return direction
    try:
        return Direction(str(direction).strip().upper())
    except ValueError as e:
        raise ValidationError(f"unknown direction {direction!r}") from e


def jump_distance(from_leaf: Leaf, candidate: Leaf) -> int:
    """Diagonal step count k; only meaningful when the candidate qualifies."""
    return abs(candidate.x - from_leaf.x)


def qualifies(from_leaf: Leaf, candidate: Leaf, direction: Direction | str) -> bool:
    """
    True when candidate lies strictly on the diagonal ray for direction.

    A zero delta satisfies |dx| == |dy| but fails every sign test, so a
    coincident leaf never qualifies.
    """
    sx, sy = as_direction(direction).signs
    dx = candidate.x - from_leaf.x
    dy = candidate.y - from_leaf.y
    if abs(dx) != abs(dy):
        return False
    return dx * sx > 0 and dy * sy > 0


def resolve(
        registry: Iterable[Leaf],
        from_leaf: Leaf,
        direction: Direction | str,
) -> Leaf | None:
    """
    Find the nearest unconsumed leaf on the diagonal ray from from_leaf.

    Rules:
    - Candidates are unconsumed leaves other than from_leaf itself.
    - A candidate must sit exactly on the diagonal in the direction's quadrant.
    - Nearest wins (smallest |dx|).

    Tie-break (deterministic):
    - Equal distance resolves to the lowest leaf id.

    Returns None when nothing qualifies; that is a normal outcome, not an error.
    """
    d = as_direction(direction)
    candidates = [
        leaf
        for leaf in registry
        if not leaf.consumed and leaf.id != from_leaf.id and qualifies(from_leaf, leaf, d)
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda leaf: (jump_distance(from_leaf, leaf), leaf.id))
