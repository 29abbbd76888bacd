"""Database pool management, schema bootstrap and stats queries for giapha."""

from __future__ import annotations

import os

import asyncpg

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

_DB_HOST = os.environ.get("GP_DB_HOST", "localhost")
_DB_PORT = os.environ.get("GP_DB_PORT", "5432")
_DB_USER = os.environ.get("GP_DB_USER", "postgres")
_DB_PASSWORD = os.environ.get("GP_DB_PASSWORD", "postgres")
_DB_NAME = os.environ.get("GP_DB_NAME", "giapha")

DATABASE_URL = os.environ.get(
    "GP_DATABASE_URL",
    f"postgresql://{_DB_USER}:{_DB_PASSWORD}@{_DB_HOST}:{_DB_PORT}/{_DB_NAME}",
)

SCHEMA = """
CREATE TABLE IF NOT EXISTS people (
    id          UUID PRIMARY KEY,
    full_name   TEXT NOT NULL,
    gender      TEXT NOT NULL DEFAULT 'male'
                CHECK (gender IN ('male', 'female', 'other')),
    birth_year  INTEGER,
    birth_order INTEGER,
    generation  INTEGER,
    is_in_law   BOOLEAN NOT NULL DEFAULT FALSE,
    note        TEXT,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT now(),
    updated_at  TIMESTAMPTZ NOT NULL DEFAULT now()
);

CREATE TABLE IF NOT EXISTS relationships (
    id          UUID PRIMARY KEY,
    type        TEXT NOT NULL
                CHECK (type IN ('marriage', 'biological_child', 'adopted_child')),
    person_a_id UUID NOT NULL REFERENCES people(id) ON DELETE CASCADE,
    person_b_id UUID NOT NULL REFERENCES people(id) ON DELETE CASCADE,
    note        TEXT,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT now(),
    CHECK (person_a_id <> person_b_id)
);

CREATE INDEX IF NOT EXISTS relationships_person_a_idx ON relationships (person_a_id);
CREATE INDEX IF NOT EXISTS relationships_person_b_idx ON relationships (person_b_id);
"""

# ---------------------------------------------------------------------------
# Pool
# ---------------------------------------------------------------------------

_pool: asyncpg.Pool | None = None


async def init_pool() -> asyncpg.Pool:
    """Create the global asyncpg connection pool."""
    global _pool
    _pool = await asyncpg.create_pool(DATABASE_URL, min_size=2, max_size=10)
    return _pool


async def close_pool() -> None:
    """Gracefully close the connection pool."""
    global _pool
    if _pool:
        await _pool.close()
        _pool = None


def get_pool() -> asyncpg.Pool:
    """Return the pool, raising if not initialized."""
    if _pool is None:
        raise RuntimeError("Database pool not initialized")
    return _pool


async def init_schema() -> None:
    """Create tables and indexes that do not exist yet."""
    p = get_pool()
    await p.execute(SCHEMA)


# ---------------------------------------------------------------------------
# Query helpers
# ---------------------------------------------------------------------------

async def get_stats() -> dict:
    """Aggregate stats for the metrics endpoint."""
    p = get_pool()
    total_people = await p.fetchval("SELECT COUNT(*) FROM people")
    total_in_laws = await p.fetchval("SELECT COUNT(*) FROM people WHERE is_in_law")
    type_counts = await p.fetch(
        "SELECT type, COUNT(*) AS cnt FROM relationships GROUP BY type ORDER BY type"
    )
    max_generation = await p.fetchval("SELECT MAX(generation) FROM people")

    return {
        "total_people": total_people,
        "total_in_laws": total_in_laws,
        "relationships_by_type": {r["type"]: r["cnt"] for r in type_counts},
        "max_generation": max_generation,
    }
