"""Kinship engine: what does A call B, and B call A?

Takes people + relationships, resolves Vietnamese address terms between two
people: marriage first, then blood kinship through the lowest common
ancestor, then kinship through either person's spouse.

No DB, no I/O. Pure functions on in-memory data.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from giapha.family import terms
from giapha.family.ancestry import find_common_ancestor
from giapha.family.graph import FamilyGraph, Person, Relationship
from giapha.family.inlaw import in_law_term
from giapha.family.terms import KinshipTerm


@dataclass(frozen=True)
class KinshipResult:
    a_term: KinshipTerm  # what A calls B
    b_term: KinshipTerm  # what B calls A
    description: str
    distance: int  # 0 = married, -1 = no relation found
    path_labels: list[str] = field(default_factory=list)

    @property
    def a_calls_b(self) -> str:
        return self.a_term.label

    @property
    def b_calls_a(self) -> str:
        return self.b_term.label

    @property
    def related(self) -> bool:
        return self.distance >= 0

    def to_dict(self) -> dict:
        return {
            "aCallsB": self.a_calls_b,
            "bCallsA": self.b_calls_a,
            "description": self.description,
            "distance": self.distance,
            "pathLabels": list(self.path_labels),
        }


def stranger_result() -> KinshipResult:
    return KinshipResult(
        a_term=terms.stranger(),
        b_term=terms.stranger(),
        description=terms.DESC_STRANGER,
        distance=-1,
    )


def marriage_result(a: Person, b: Person) -> KinshipResult:
    return KinshipResult(
        a_term=terms.spouse(b.gender),
        b_term=terms.spouse(a.gender),
        description=terms.DESC_MARRIAGE,
        distance=0,
        path_labels=[f"{a.full_name} và {b.full_name} là vợ chồng."],
    )


def blood_kinship(graph: FamilyGraph, a: Person, b: Person) -> KinshipResult | None:
    """Resolve kinship through the lowest common ancestor, or None if there is none."""
    common = find_common_ancestor(graph, a.id, b.id)
    if common is None:
        return None

    a_term, b_term, description = terms.resolve_blood_terms(
        common.depth_a, common.depth_b, a, b, common.path_a, common.path_b,
    )
    lca_name = common.ancestor.full_name
    return KinshipResult(
        a_term=a_term,
        b_term=b_term,
        description=f"{description} (Tổ tiên chung: {lca_name})",
        distance=common.distance,
        path_labels=[
            f"{a.full_name} cách {lca_name} {common.depth_a} đời.",
            f"{b.full_name} cách {lca_name} {common.depth_b} đời.",
        ],
    )


def _via_spouse(res: KinshipResult, in_law: Person, spouse: Person, in_law_is_a: bool) -> KinshipResult:
    """Rebase a blood result onto the person who married into it.

    The in-law keeps addressing the relative the way their spouse does; the
    relative's term for the spouse is rewritten into its in-law form.
    """
    link = f"{in_law.full_name} là vợ/chồng của {spouse.full_name}"
    if in_law_is_a:
        a_term, b_term = res.a_term, in_law_term(res.b_term, in_law)
        path_labels = [link, *res.path_labels]
    else:
        a_term, b_term = in_law_term(res.a_term, in_law), res.b_term
        path_labels = [*res.path_labels, link]
    return KinshipResult(
        a_term=a_term,
        b_term=b_term,
        description=f"Thông qua hôn nhân của {spouse.full_name}",
        distance=res.distance,
        path_labels=path_labels,
    )


def compute_kinship(
    person_a: Person,
    person_b: Person,
    people: list[Person],
    relationships: list[Relationship],
) -> KinshipResult | None:
    """Kinship between two people in a snapshot. None when A and B are the same person.

    A's spouses are tried before B's, so when both sides marry into each
    other's family the two directions may link through different marriages.
    """
    if person_a.id == person_b.id:
        return None

    graph = FamilyGraph(people, relationships)

    if graph.are_married(person_a.id, person_b.id):
        return marriage_result(person_a, person_b)

    blood = blood_kinship(graph, person_a, person_b)
    if blood is not None:
        return blood

    for spouse_id in graph.spouses_of(person_a.id):
        spouse = graph.get(spouse_id)
        if spouse_id == person_b.id or spouse is None:
            continue
        res = blood_kinship(graph, spouse, person_b)
        if res is not None:
            return _via_spouse(res, person_a, spouse, in_law_is_a=True)

    for spouse_id in graph.spouses_of(person_b.id):
        spouse = graph.get(spouse_id)
        if spouse is None:
            continue
        res = blood_kinship(graph, person_a, spouse)
        if res is not None:
            return _via_spouse(res, person_b, spouse, in_law_is_a=False)

    return stranger_result()
