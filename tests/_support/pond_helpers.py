# tests/_support/pond_helpers.py
from __future__ import annotations

from frog_jump.models import Leaf
from frog_jump.registry import create_registry

EXAMPLE_COMMANDS = "ACDBB"


def example_leaves() -> tuple[Leaf, ...]:
    """The canonical 7-leaf pond, ids 0..6 in listed order."""
    return create_registry(
        [(5, 6), (8, 9), (4, 13), (1, 10), (7, 4), (10, 9), (3, 7)]
    )


def consumed_ids(leaves) -> set[int]:
    return {leaf.id for leaf in leaves if leaf.consumed}
