"""giapha — family register backend with Vietnamese kinship resolution."""

from __future__ import annotations

import logging
import os
import time
from collections import deque
from contextlib import asynccontextmanager

import psutil
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from giapha.db import close_pool, get_pool, get_stats, init_pool, init_schema

logger = logging.getLogger("giapha")

PORT = int(os.environ.get("GP_PORT", "9820"))
CORS_ORIGINS = [o.strip() for o in os.environ.get("GP_CORS_ORIGINS", "*").split(",") if o.strip()]


# ---------------------------------------------------------------------------
# Request rate
# ---------------------------------------------------------------------------

class RateCounter:
    """Requests seen in the last `window` seconds."""

    def __init__(self, window: float = 60.0) -> None:
        self._window = window
        self._hits: deque[float] = deque()

    def record(self, now: float | None = None) -> None:
        self._hits.append(time.monotonic() if now is None else now)

    def rate(self, now: float | None = None) -> float:
        """Hits per second over the window."""
        cutoff = (time.monotonic() if now is None else now) - self._window
        while self._hits and self._hits[0] < cutoff:
            self._hits.popleft()
        return len(self._hits) / self._window


request_counter = RateCounter(window=60.0)
_start_time: float = 0.0


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    global _start_time
    _start_time = time.time()

    await init_pool()
    logger.info("Database pool initialized")
    await init_schema()
    logger.info("Database schema ready")

    yield

    await close_pool()
    logger.info("Database pool closed")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="giapha",
    version="0.1.0",
    description="Family register with Vietnamese kinship terms and lineage recalculation",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def count_requests(request: Request, call_next):
    request_counter.record()
    return await call_next(request)


from giapha.family.routes import router as family_router  # noqa: E402

app.include_router(family_router)


# ---------------------------------------------------------------------------
# Core routes
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    """Health check with DB connectivity status."""
    result: dict = {"status": "ok", "service": "giapha"}
    try:
        p = get_pool()
        db_ok = await p.fetchval("SELECT 1")
        result["database"] = "connected" if db_ok == 1 else "unexpected"
    except RuntimeError:
        result["database"] = "pool_not_initialized"
    except Exception as exc:
        result["status"] = "degraded"
        result["database"] = f"error: {exc}"
    return result


@app.get("/metrics")
async def metrics():
    """Stats endpoint for the monitoring dashboard."""
    try:
        p = get_pool()
        process = psutil.Process(os.getpid())
        mem = process.memory_info()

        uptime = time.time() - _start_time if _start_time else 0.0

        result: list[dict] = [
            {"key": "uptime", "label": "Uptime", "value": round(uptime), "unit": "seconds"},
            {
                "key": "rps",
                "label": "Requests / sec",
                "value": round(request_counter.rate(), 2),
                "unit": "req/s",
                "warn_above": 200,
            },
            {
                "key": "memory_rss",
                "label": "Memory (RSS)",
                "value": round(mem.rss / 1_048_576, 1),
                "unit": "MB",
                "warn_above": 512,
            },
            {
                "key": "cpu_percent",
                "label": "CPU usage",
                "value": process.cpu_percent(interval=0),
                "unit": "%",
                "warn_above": 90,
            },
        ]

        # -- Family metrics ---------------------------------------------------

        stats = await get_stats()
        result.extend([
            {"key": "total_people", "label": "People", "value": stats["total_people"], "unit": "people"},
            {"key": "total_in_laws", "label": "In-laws", "value": stats["total_in_laws"], "unit": "people"},
            {
                "key": "max_generation",
                "label": "Deepest generation",
                "value": stats["max_generation"] or 0,
                "unit": "generations",
            },
        ])
        for rel_type, count in stats["relationships_by_type"].items():
            result.append({
                "key": f"relationships_{rel_type}",
                "label": f"Relationships ({rel_type})",
                "value": count,
                "unit": "edges",
            })

        # -- Database health --------------------------------------------------

        db_size = await p.fetchval("SELECT pg_database_size(current_database())")
        result.append({
            "key": "db_size",
            "label": "Database size",
            "value": round(db_size / 1_048_576, 1) if db_size else 0,
            "unit": "MB",
        })

        return {"metrics": result}

    except Exception as exc:
        logger.exception("Error fetching metrics")
        return JSONResponse(
            status_code=500,
            content={"metrics": [], "error": f"Database error: {exc}"},
        )


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("giapha.app:app", host="127.0.0.1", port=PORT, reload=False)


if __name__ == "__main__":
    run()
