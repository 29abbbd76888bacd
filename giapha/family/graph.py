"""Family graph: data model + adjacency maps built from typed edges.

Pure functions on in-memory data. Every kinship query and every lineage
recalculation builds its own graph from the caller's snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass

MALE = "male"
FEMALE = "female"
OTHER = "other"
GENDERS = (MALE, FEMALE, OTHER)

MARRIAGE = "marriage"
BIOLOGICAL_CHILD = "biological_child"
ADOPTED_CHILD = "adopted_child"
RELATIONSHIP_TYPES = (MARRIAGE, BIOLOGICAL_CHILD, ADOPTED_CHILD)
CHILD_TYPES = (BIOLOGICAL_CHILD, ADOPTED_CHILD)


@dataclass(frozen=True)
class Person:
    id: str
    full_name: str
    gender: str = MALE
    birth_year: int | None = None
    birth_order: int | None = None
    generation: int | None = None
    is_in_law: bool = False


@dataclass(frozen=True)
class Relationship:
    """A typed edge. For child types, person_a is the parent and person_b the child."""
    type: str
    person_a_id: str
    person_b_id: str
    note: str | None = None


class FamilyGraph:
    """Parent, child and spouse adjacency for one snapshot."""

    def __init__(self, people: list[Person], relationships: list[Relationship]):
        self.people: dict[str, Person] = {p.id: p for p in people}

        self.parents: dict[str, list[str]] = {}  # child_id -> [parent_ids]
        self.children: dict[str, list[str]] = {}  # parent_id -> [child_ids]
        self.spouses: dict[str, list[str]] = {}  # person_id -> [spouse_ids]

        for r in relationships:
            if r.type in CHILD_TYPES:
                self.children.setdefault(r.person_a_id, []).append(r.person_b_id)
                self.parents.setdefault(r.person_b_id, []).append(r.person_a_id)
            elif r.type == MARRIAGE:
                self.spouses.setdefault(r.person_a_id, []).append(r.person_b_id)
                self.spouses.setdefault(r.person_b_id, []).append(r.person_a_id)

    def get(self, pid: str) -> Person | None:
        return self.people.get(pid)

    def parents_of(self, pid: str) -> list[str]:
        return self.parents.get(pid, [])

    def children_of(self, pid: str) -> list[str]:
        return self.children.get(pid, [])

    def spouses_of(self, pid: str) -> list[str]:
        return self.spouses.get(pid, [])

    def are_married(self, a_id: str, b_id: str) -> bool:
        return b_id in self.spouses_of(a_id)
