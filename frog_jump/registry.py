from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from frog_jump.errors import NotFoundError, ValidationError
from frog_jump.models import Leaf


def create_registry(
        points: Iterable[Sequence[int]],
        *,
        allow_coincident: bool = False,
) -> tuple[Leaf, ...]:
    """
    Build a fresh registry from (x, y) points.

    Ids are assigned 0..n-1 in input order and every leaf starts unconsumed.
    Two leaves on the same point are rejected unless allow_coincident is set.
    """
    leaves: list[Leaf] = []
    seen: dict[tuple[int, int], int] = {}

    for i, point in enumerate(points):
        if isinstance(point, (str, bytes)) or not isinstance(point, Sequence) or len(point) != 2:
            raise ValidationError(f"leaf[{i}] must be an (x, y) pair")
        x, y = point
        for axis, value in (("x", x), ("y", y)):
            # bool is an int subclass; reject it explicitly.
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"leaf[{i}].{axis} must be an integer (got {value!r})")

        key = (x, y)
        if not allow_coincident and key in seen:
            raise ValidationError(
                f"leaf[{i}] shares coordinates {key} with leaf[{seen[key]}]"
            )
        seen.setdefault(key, i)
        leaves.append(Leaf(id=i, x=x, y=y))

    return tuple(leaves)


def _index_of(registry: Sequence[Leaf], leaf_id: int) -> int:
    # Ids normally equal positions; fall back to a scan for hand-built registries.
    if 0 <= leaf_id < len(registry) and registry[leaf_id].id == leaf_id:
        return leaf_id
    for i, leaf in enumerate(registry):
        if leaf.id == leaf_id:
            return i
    raise NotFoundError(f"leaf id {leaf_id} is not in the registry")


def find_leaf(registry: Sequence[Leaf], leaf_id: int) -> Leaf:
    return registry[_index_of(registry, leaf_id)]


def mark_consumed(registry: Sequence[Leaf], leaf_id: int) -> tuple[Leaf, ...]:
    """Return a registry with leaf_id flagged consumed (no-op if it already is)."""
    i = _index_of(registry, leaf_id)
    leaf = registry[i]
    if leaf.consumed:
        return tuple(registry)
    out = list(registry)
    out[i] = replace(leaf, consumed=True)
    return tuple(out)


def reset_registry(registry: Iterable[Leaf]) -> tuple[Leaf, ...]:
    return tuple(replace(leaf, consumed=False) if leaf.consumed else leaf for leaf in registry)


def available_leaves(registry: Iterable[Leaf]) -> list[Leaf]:
    return [leaf for leaf in registry if not leaf.consumed]
