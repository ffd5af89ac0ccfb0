"""Merge recorded fragments of live modules into the current fragment list."""

from typing import Callable, Dict, Iterable, List, Optional, Tuple
from dataclasses import dataclass

from .registry import FragmentRegistry


@dataclass(frozen=True)
class KeyCollision:
    """A live module replaced the value another live module recorded for a key."""
    key: str
    previous_module: str
    previous_value: str
    module: str
    value: str


CollisionHandler = Callable[[KeyCollision], None]


def merge_fragments(
    registry: FragmentRegistry,
    live_module_ids: Iterable[str],
    on_collision: Optional[CollisionHandler] = None,
) -> Dict[str, str]:
    """
    Build the ordered key -> value map for the live modules.

    Live modules are visited in the order given. A key keeps the position
    where it was first seen; its value is the one from the last module that
    recorded it. Recorded modules missing from live_module_ids are ignored,
    so fragments of modules dropped from the build never reach the report.

    Args:
        registry: Fragments recorded during the run
        live_module_ids: Modules in the final compilation output
        on_collision: Called when a later module overwrites a key with a
            different value (same text is not a collision)

    Returns:
        Insertion-ordered dict of key -> value
    """
    merged: Dict[str, str] = {}
    owners: Dict[str, str] = {}
    seen = set()

    for module_id in live_module_ids:
        if module_id in seen:
            continue
        seen.add(module_id)

        for entry in registry.entries_for(module_id):
            previous = merged.get(entry.key)
            if (
                on_collision is not None
                and previous is not None
                and previous != entry.value
                and owners[entry.key] != module_id
            ):
                on_collision(KeyCollision(
                    key=entry.key,
                    previous_module=owners[entry.key],
                    previous_value=previous,
                    module=module_id,
                    value=entry.value,
                ))
            merged[entry.key] = entry.value
            owners[entry.key] = module_id

    return merged


def aggregate(
    registry: FragmentRegistry,
    live_module_ids: Iterable[str],
    on_collision: Optional[CollisionHandler] = None,
) -> List[str]:
    """
    Current fragment list: one value per distinct key of the live modules.

    Example:
        >>> registry = FragmentRegistry()
        >>> registry.record('a.js', [('k1', 'x')])
        >>> registry.record('b.js', [('k1', 'y')])
        >>> aggregate(registry, ['a.js'])
        ['x']
        >>> aggregate(registry, ['a.js', 'b.js'])
        ['y']
    """
    return list(merge_fragments(registry, live_module_ids, on_collision).values())


def collect_collisions(
    registry: FragmentRegistry,
    live_module_ids: Iterable[str],
) -> Tuple[List[str], List[KeyCollision]]:
    """aggregate() plus the list of key collisions seen while merging."""
    collisions: List[KeyCollision] = []
    values = aggregate(registry, live_module_ids, on_collision=collisions.append)
    return values, collisions
