"""Family API endpoints: people, relationships, kinship lookup, lineage recalculation."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query

from giapha.family import db as fdb
from giapha.family.engine import KinshipResult, compute_kinship
from giapha.family.graph import GENDERS, RELATIONSHIP_TYPES, Person, Relationship
from giapha.family.lineage import recalculate_lineage
from giapha.family.models import (
    ApplyLineageIn,
    ApplyLineageOut,
    CreatePersonIn,
    CreateRelationshipIn,
    KinshipOut,
    KinshipTermOut,
    LineageUpdateOut,
    PersonOut,
    RelationshipOut,
    UpdatePersonIn,
)
from giapha.family.terms import KinshipTerm

logger = logging.getLogger("giapha.family.routes")

router = APIRouter(prefix="/api/v1/family", tags=["family"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _person_out(row) -> PersonOut:
    return PersonOut(
        id=row["id"],
        full_name=row["full_name"],
        gender=row["gender"],
        birth_year=row["birth_year"],
        birth_order=row["birth_order"],
        generation=row["generation"],
        is_in_law=row["is_in_law"],
        note=row["note"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _rel_out(row) -> RelationshipOut:
    return RelationshipOut(
        id=row["id"],
        type=row["type"],
        person_a_id=row["person_a_id"],
        person_b_id=row["person_b_id"],
        note=row["note"],
        created_at=row["created_at"],
    )


def _person_node(row) -> Person:
    return Person(
        id=str(row["id"]),
        full_name=row["full_name"],
        gender=row["gender"],
        birth_year=row["birth_year"],
        birth_order=row["birth_order"],
        generation=row["generation"],
        is_in_law=row["is_in_law"],
    )


def _rel_edge(row) -> Relationship:
    return Relationship(
        type=row["type"],
        person_a_id=str(row["person_a_id"]),
        person_b_id=str(row["person_b_id"]),
        note=row["note"],
    )


def _term_out(term: KinshipTerm) -> KinshipTermOut:
    return KinshipTermOut(
        role=term.role.value,
        label=term.label,
        gender=term.gender,
        depth=term.depth,
        side=term.side.value if term.side else None,
        senior=term.senior,
        title=term.title.value if term.title else None,
        extended=term.extended,
        in_law=term.in_law,
    )


def _kinship_out(result: KinshipResult) -> KinshipOut:
    return KinshipOut(
        a_calls_b=result.a_calls_b,
        b_calls_a=result.b_calls_a,
        description=result.description,
        distance=result.distance,
        path_labels=result.path_labels,
        a_term=_term_out(result.a_term),
        b_term=_term_out(result.b_term),
    )


async def _snapshot() -> tuple[list[Person], list[Relationship]]:
    """Load the full people + relationships snapshot the engine works on."""
    people = await fdb.list_people()
    rels = await fdb.list_relationships()
    return [_person_node(p) for p in people], [_rel_edge(r) for r in rels]


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------

@router.get("/people")
async def list_people() -> list[PersonOut]:
    """List everyone in the family register."""
    rows = await fdb.list_people()
    return [_person_out(r) for r in rows]


@router.post("/people", status_code=201)
async def create_person(body: CreatePersonIn) -> PersonOut:
    """Add a person."""
    if body.gender not in GENDERS:
        raise HTTPException(400, f"Invalid gender: {body.gender}")
    row = await fdb.create_person(
        full_name=body.full_name,
        gender=body.gender,
        birth_year=body.birth_year,
        birth_order=body.birth_order,
        generation=body.generation,
        is_in_law=body.is_in_law,
        note=body.note,
    )
    return _person_out(row)


@router.get("/people/{person_id}")
async def get_person(person_id: UUID) -> PersonOut:
    """Fetch one person."""
    row = await fdb.get_person(str(person_id))
    if row is None:
        raise HTTPException(404, "Person not found")
    return _person_out(row)


@router.patch("/people/{person_id}")
async def update_person(person_id: UUID, body: UpdatePersonIn) -> PersonOut:
    """Update a person's details. Relationships are left untouched."""
    fields = body.model_dump(exclude_unset=True)
    for required in ("full_name", "gender", "is_in_law"):
        if required in fields and fields[required] is None:
            raise HTTPException(400, f"{required} cannot be null")
    if "gender" in fields and fields["gender"] not in GENDERS:
        raise HTTPException(400, f"Invalid gender: {fields['gender']}")
    row = await fdb.update_person(str(person_id), **fields)
    if row is None:
        raise HTTPException(404, "Person not found")
    return _person_out(row)


@router.get("/people/{person_id}/relationships")
async def list_person_relationships(person_id: UUID) -> list[RelationshipOut]:
    """Every edge that touches this person, oldest first."""
    pid = str(person_id)
    if await fdb.get_person(pid) is None:
        raise HTTPException(404, "Person not found")
    rows = await fdb.list_relationships_for_person(pid)
    return [_rel_out(r) for r in rows]


@router.delete("/people/{person_id}")
async def delete_person(person_id: UUID) -> dict:
    """Delete a person and their relationships."""
    deleted = await fdb.delete_person(str(person_id))
    if not deleted:
        raise HTTPException(404, "Person not found")
    return {"deleted": True}


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------

@router.get("/relationships")
async def list_relationships() -> list[RelationshipOut]:
    """List all relationship edges, oldest first."""
    rows = await fdb.list_relationships()
    return [_rel_out(r) for r in rows]


@router.post("/relationships", status_code=201)
async def create_relationship(body: CreateRelationshipIn) -> RelationshipOut:
    """Add a relationship. For child types, person A is the parent."""
    if body.type not in RELATIONSHIP_TYPES:
        raise HTTPException(400, f"Invalid relationship type: {body.type}")
    a_id, b_id = str(body.person_a_id), str(body.person_b_id)
    if a_id == b_id:
        raise HTTPException(400, "Cannot relate a person to themselves")
    for pid in (a_id, b_id):
        if await fdb.get_person(pid) is None:
            raise HTTPException(404, f"Person {pid} not found")
    existing = await fdb.find_relationship(body.type, a_id, b_id)
    if existing is not None:
        logger.warning("Duplicate %s relationship rejected: %s <-> %s", body.type, a_id, b_id)
        raise HTTPException(409, "Relationship already exists")
    row = await fdb.create_relationship(body.type, a_id, b_id, note=body.note)
    return _rel_out(row)


@router.delete("/relationships/{rel_id}")
async def delete_relationship(rel_id: UUID) -> dict:
    """Delete a relationship."""
    deleted = await fdb.delete_relationship(str(rel_id))
    if not deleted:
        raise HTTPException(404, "Relationship not found")
    return {"deleted": True}


# ---------------------------------------------------------------------------
# Kinship
# ---------------------------------------------------------------------------

@router.get("/kinship")
async def get_kinship(
    a: UUID = Query(..., description="Person doing the addressing"),
    b: UUID = Query(..., description="Person being addressed"),
) -> KinshipOut:
    """What A calls B and B calls A, with the path that explains it."""
    people, rels = await _snapshot()
    by_id = {p.id: p for p in people}
    person_a = by_id.get(str(a))
    person_b = by_id.get(str(b))
    if person_a is None or person_b is None:
        raise HTTPException(404, "Person not found")

    result = compute_kinship(person_a, person_b, people, rels)
    if result is None:
        raise HTTPException(400, "Choose two different people")
    return _kinship_out(result)


# ---------------------------------------------------------------------------
# Lineage
# ---------------------------------------------------------------------------

@router.get("/lineage")
async def preview_lineage() -> list[LineageUpdateOut]:
    """Recompute generation and birth order for everyone without writing anything."""
    people, rels = await _snapshot()
    return [
        LineageUpdateOut(
            id=u.id,
            full_name=u.full_name,
            old_generation=u.old_generation,
            new_generation=u.new_generation,
            old_birth_order=u.old_birth_order,
            new_birth_order=u.new_birth_order,
            changed=u.changed,
        )
        for u in recalculate_lineage(people, rels)
    ]


@router.post("/lineage/apply")
async def apply_lineage(body: ApplyLineageIn) -> ApplyLineageOut:
    """Write a batch of generation / birth-order values in one transaction."""
    updated = await fdb.apply_lineage_updates(
        [(str(u.id), u.generation, u.birth_order) for u in body.updates]
    )
    logger.info("Applied lineage updates to %d people", updated)
    return ApplyLineageOut(updated=updated)
