"""Ancestry walk + lowest-common-ancestor search over the parent graph."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from giapha.family.graph import FamilyGraph, Person


@dataclass(frozen=True)
class AncestorEntry:
    depth: int
    path: tuple[Person, ...]  # from the start person up to, excluding, the ancestor


@dataclass(frozen=True)
class CommonAncestor:
    ancestor: Person
    depth_a: int
    depth_b: int
    path_a: tuple[Person, ...]
    path_b: tuple[Person, ...]

    @property
    def distance(self) -> int:
        return self.depth_a + self.depth_b


def walk_ancestry(graph: FamilyGraph, start_id: str) -> dict[str, AncestorEntry]:
    """Breadth-first walk up through parent links.

    The start person is recorded at depth 0. Each ancestor is recorded once,
    at its first (shallowest) visit; dict order is BFS order. Parents that
    are not in the snapshot are skipped.
    """
    ancestry: dict[str, AncestorEntry] = {}
    if graph.get(start_id) is None:
        return ancestry

    ancestry[start_id] = AncestorEntry(0, ())
    queue: deque[str] = deque([start_id])
    while queue:
        current_id = queue.popleft()
        current = graph.people[current_id]
        entry = ancestry[current_id]
        for parent_id in graph.parents_of(current_id):
            if parent_id in ancestry or graph.get(parent_id) is None:
                continue
            ancestry[parent_id] = AncestorEntry(entry.depth + 1, entry.path + (current,))
            queue.append(parent_id)
    return ancestry


def lowest_common_ancestor(
    ancestry_a: dict[str, AncestorEntry], ancestry_b: dict[str, AncestorEntry],
) -> str | None:
    """Shared ancestor with the smallest depth_a + depth_b.

    Ties go to the first one met while iterating A's ancestry in BFS order.
    """
    best_id: str | None = None
    best_distance = -1
    for ancestor_id, entry_a in ancestry_a.items():
        entry_b = ancestry_b.get(ancestor_id)
        if entry_b is None:
            continue
        distance = entry_a.depth + entry_b.depth
        if best_id is None or distance < best_distance:
            best_id = ancestor_id
            best_distance = distance
    return best_id


def find_common_ancestor(graph: FamilyGraph, a_id: str, b_id: str) -> CommonAncestor | None:
    ancestry_a = walk_ancestry(graph, a_id)
    ancestry_b = walk_ancestry(graph, b_id)
    lca_id = lowest_common_ancestor(ancestry_a, ancestry_b)
    if lca_id is None:
        return None
    entry_a = ancestry_a[lca_id]
    entry_b = ancestry_b[lca_id]
    return CommonAncestor(
        ancestor=graph.people[lca_id],
        depth_a=entry_a.depth,
        depth_b=entry_b.depth,
        path_a=entry_a.path,
        path_b=entry_b.path,
    )
