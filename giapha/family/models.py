"""Pydantic models for the family API.

Fields are snake_case in Python and camelCase on the wire
(`personAId`, `aCallsB`, ...); input accepts either spelling.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------

class CreatePersonIn(CamelModel):
    full_name: str
    gender: str = "male"
    birth_year: int | None = None
    birth_order: int | None = None
    generation: int | None = None
    is_in_law: bool = False
    note: str | None = None


class UpdatePersonIn(CamelModel):
    """Partial update. Only fields present in the request body are written."""
    full_name: str | None = None
    gender: str | None = None
    birth_year: int | None = None
    birth_order: int | None = None
    generation: int | None = None
    is_in_law: bool | None = None
    note: str | None = None


class PersonOut(CamelModel):
    id: UUID
    full_name: str
    gender: str
    birth_year: int | None = None
    birth_order: int | None = None
    generation: int | None = None
    is_in_law: bool
    note: str | None = None
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------

class CreateRelationshipIn(CamelModel):
    type: str  # marriage, biological_child, adopted_child
    person_a_id: UUID
    person_b_id: UUID
    note: str | None = None


class RelationshipOut(CamelModel):
    id: UUID
    type: str
    person_a_id: UUID
    person_b_id: UUID
    note: str | None = None
    created_at: datetime


# ---------------------------------------------------------------------------
# Kinship
# ---------------------------------------------------------------------------

class KinshipTermOut(CamelModel):
    role: str
    label: str
    gender: str | None = None
    depth: int = 0
    side: str | None = None
    senior: bool | None = None
    title: str | None = None
    extended: bool = False
    in_law: bool = False


class KinshipOut(CamelModel):
    a_calls_b: str
    b_calls_a: str
    description: str
    distance: int
    path_labels: list[str]
    a_term: KinshipTermOut
    b_term: KinshipTermOut


# ---------------------------------------------------------------------------
# Lineage
# ---------------------------------------------------------------------------

class LineageUpdateOut(CamelModel):
    id: UUID
    full_name: str
    old_generation: int | None = None
    new_generation: int | None = None
    old_birth_order: int | None = None
    new_birth_order: int | None = None
    changed: bool


class LineageUpdateIn(CamelModel):
    id: UUID
    generation: int | None = None
    birth_order: int | None = None


class ApplyLineageIn(CamelModel):
    updates: list[LineageUpdateIn]


class ApplyLineageOut(CamelModel):
    success: bool = True
    updated: int
