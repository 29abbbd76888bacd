"""Lineage recalculation: generation numbers and birth order from the relationship graph.

Produces proposed updates only; writing them is the caller's job
(see `giapha.family.db.apply_lineage_updates`).
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from unidecode import unidecode

from giapha.family.graph import FamilyGraph, Person, Relationship

logger = logging.getLogger("giapha.family.lineage")

_UNKNOWN_RANK = 999


@dataclass(frozen=True)
class LineageUpdate:
    id: str
    full_name: str
    old_generation: int | None
    new_generation: int | None
    old_birth_order: int | None
    new_birth_order: int | None

    @property
    def changed(self) -> bool:
        return (
            self.new_generation != self.old_generation
            or self.new_birth_order != self.old_birth_order
        )


def name_key(name: str) -> tuple[str, str]:
    """Collation key for Vietnamese names: base letters first, diacritics second."""
    return (unidecode(name).casefold(), name)


def compute_generations(graph: FamilyGraph) -> dict[str, int]:
    """Generation 1 for roots, +1 per child edge; in-laws take their spouse's generation."""
    roots = [
        p.id for p in graph.people.values()
        if not graph.parents_of(p.id) and not p.is_in_law
    ]
    generations: dict[str, int] = {}
    queue: deque[tuple[str, int]] = deque((pid, 1) for pid in roots)
    while queue:
        pid, gen = queue.popleft()
        if pid in generations:
            continue
        generations[pid] = gen
        for child_id in graph.children_of(pid):
            if child_id not in generations:
                queue.append((child_id, gen + 1))

    changed = True
    while changed:
        changed = False
        for p in graph.people.values():
            if not p.is_in_law or p.id in generations:
                continue
            for spouse_id in graph.spouses_of(p.id):
                if spouse_id in generations:
                    generations[p.id] = generations[spouse_id]
                    changed = True
                    break

    return generations


def compute_birth_orders(graph: FamilyGraph) -> dict[str, int]:
    """Rank each parent's blood children by birth year then name; keep a child's best rank."""
    orders: dict[str, int] = {}

    def sort_key(child_id: str):
        child = graph.get(child_id)
        year = child.birth_year if child else None
        name = child.full_name if child else ""
        return (year is None, year or 0, name_key(name))

    for child_ids in graph.children.values():
        order = 1
        for child_id in sorted(child_ids, key=sort_key):
            child = graph.get(child_id)
            if child is None or child.is_in_law:
                continue
            if child_id not in orders or orders[child_id] > order:
                orders[child_id] = order
            order += 1

    return orders


def recalculate_lineage(people: list[Person], relationships: list[Relationship]) -> list[LineageUpdate]:
    """Proposed generation/birth-order values for every person.

    Sorted changed-first, then by new generation, then by new birth order.
    """
    graph = FamilyGraph(people, relationships)
    generations = compute_generations(graph)
    orders = compute_birth_orders(graph)

    updates = [
        LineageUpdate(
            id=p.id,
            full_name=p.full_name,
            old_generation=p.generation,
            new_generation=generations.get(p.id),
            old_birth_order=p.birth_order,
            new_birth_order=orders.get(p.id),
        )
        for p in people
    ]
    updates.sort(key=lambda u: (
        not u.changed,
        u.new_generation if u.new_generation is not None else _UNKNOWN_RANK,
        u.new_birth_order if u.new_birth_order is not None else _UNKNOWN_RANK,
    ))

    logger.debug(
        "Lineage recalculated: %d people, %d changed",
        len(updates), sum(1 for u in updates if u.changed),
    )
    return updates
