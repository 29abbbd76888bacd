"""Database query helpers for people and relationship tables."""

from __future__ import annotations

import uuid

import asyncpg

from giapha.db import get_pool

_PERSON_COLUMNS = (
    "id, full_name, gender, birth_year, birth_order, generation, is_in_law, note, "
    "created_at, updated_at"
)
_REL_COLUMNS = "id, type, person_a_id, person_b_id, note, created_at"


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------

async def list_people() -> list[asyncpg.Record]:
    p = get_pool()
    return await p.fetch(
        f"SELECT {_PERSON_COLUMNS} FROM people ORDER BY generation NULLS LAST, birth_order NULLS LAST, full_name"
    )


async def get_person(person_id: str) -> asyncpg.Record | None:
    p = get_pool()
    return await p.fetchrow(f"SELECT {_PERSON_COLUMNS} FROM people WHERE id = $1", person_id)


async def create_person(
    full_name: str,
    gender: str = "male",
    birth_year: int | None = None,
    birth_order: int | None = None,
    generation: int | None = None,
    is_in_law: bool = False,
    note: str | None = None,
) -> asyncpg.Record:
    p = get_pool()
    pid = uuid.uuid4()
    return await p.fetchrow(
        "INSERT INTO people "
        "(id, full_name, gender, birth_year, birth_order, generation, is_in_law, note) "
        "VALUES ($1, $2, $3, $4, $5, $6, $7, $8) "
        f"RETURNING {_PERSON_COLUMNS}",
        pid, full_name, gender, birth_year, birth_order, generation, is_in_law, note,
    )


_PERSON_UPDATABLE = {"full_name", "gender", "birth_year", "birth_order", "generation", "is_in_law", "note"}


async def update_person(person_id: str, **kwargs) -> asyncpg.Record | None:
    """Set the given columns. A None value clears the column; unknown keys are ignored."""
    p = get_pool()
    sets: list[str] = []
    params: list = []
    idx = 1

    for key, val in kwargs.items():
        if key not in _PERSON_UPDATABLE:
            continue
        sets.append(f"{key} = ${idx}")
        params.append(val)
        idx += 1

    if not sets:
        return await get_person(person_id)

    params.append(person_id)
    sql = (
        f"UPDATE people SET {', '.join(sets)}, updated_at = now() "
        f"WHERE id = ${idx} "
        f"RETURNING {_PERSON_COLUMNS}"
    )
    return await p.fetchrow(sql, *params)


async def delete_person(person_id: str) -> bool:
    p = get_pool()
    result = await p.execute("DELETE FROM people WHERE id = $1", person_id)
    return result == "DELETE 1"


async def apply_lineage_updates(updates: list[tuple[str, int | None, int | None]]) -> int:
    """Write (id, generation, birth_order) rows in one transaction. Returns rows updated."""
    if not updates:
        return 0
    p = get_pool()
    async with p.acquire() as conn:
        async with conn.transaction():
            await conn.executemany(
                "UPDATE people SET generation = $2, birth_order = $3, updated_at = now() "
                "WHERE id = $1",
                updates,
            )
    return len(updates)


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------

async def list_relationships() -> list[asyncpg.Record]:
    p = get_pool()
    return await p.fetch(f"SELECT {_REL_COLUMNS} FROM relationships ORDER BY created_at")


async def list_relationships_for_person(person_id: str) -> list[asyncpg.Record]:
    """Edges where the person is on either side, oldest first."""
    p = get_pool()
    return await p.fetch(
        f"SELECT {_REL_COLUMNS} FROM relationships "
        "WHERE person_a_id = $1 OR person_b_id = $1 ORDER BY created_at",
        person_id,
    )


async def find_relationship(rel_type: str, a_id: str, b_id: str) -> asyncpg.Record | None:
    """Existing relationship of this type between the pair, in either direction."""
    p = get_pool()
    return await p.fetchrow(
        f"SELECT {_REL_COLUMNS} FROM relationships "
        "WHERE type = $1 AND ((person_a_id = $2 AND person_b_id = $3) "
        "OR (person_a_id = $3 AND person_b_id = $2)) LIMIT 1",
        rel_type, a_id, b_id,
    )


async def create_relationship(
    rel_type: str,
    person_a_id: str,
    person_b_id: str,
    note: str | None = None,
) -> asyncpg.Record:
    p = get_pool()
    rid = uuid.uuid4()
    return await p.fetchrow(
        "INSERT INTO relationships (id, type, person_a_id, person_b_id, note) "
        "VALUES ($1, $2, $3, $4, $5) "
        f"RETURNING {_REL_COLUMNS}",
        rid, rel_type, person_a_id, person_b_id, note,
    )


async def delete_relationship(rel_id: str) -> bool:
    p = get_pool()
    result = await p.execute("DELETE FROM relationships WHERE id = $1", rel_id)
    return result == "DELETE 1"
