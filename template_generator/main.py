"""FastAPI application entrypoint."""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from template_generator.config import settings
from template_generator.database import async_session, get_db, init_db, ping
from template_generator.routers import templates
from template_generator.services.template_service import sync_templates_from_disk
from template_generator.services.usage_recorder import UsageRecorder

# ── Logging setup ────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await init_db()

    # ── Sync bundled templates into DB ───────────────────────────
    if settings.sync_templates_on_startup:
        try:
            async with async_session() as session:
                result = await sync_templates_from_disk(session)
            if result["created"] or result["updated"]:
                logger.info("Template sync: %d created, %d updated",
                            len(result["created"]), len(result["updated"]))
        except (OSError, SQLAlchemyError) as exc:
            logger.warning("Template disk sync failed (non-fatal): %s", exc)

    yield

    # Shutdown: let in-flight usage updates finish
    pending = app.state.usage_recorder.pending
    if pending:
        logger.info("Waiting for %d pending usage updates …", pending)
    await app.state.usage_recorder.drain()


app = FastAPI(
    title="Template Generator",
    description="Generate Docker Compose files from parameterized templates",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.usage_recorder = UsageRecorder()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "%s %s → %d (%.1f ms) [%s]",
        request.method, request.url.path, response.status_code, elapsed_ms, request_id,
    )
    return response


# Mount routers
app.include_router(templates.router, prefix="/api/templates", tags=["templates"])


@app.get("/health")
async def health(db: AsyncSession = Depends(get_db)):
    try:
        db_ok = await ping(db)
    except SQLAlchemyError as exc:
        logger.warning("Health check database ping failed: %s", exc)
        db_ok = False
    return {
        "status": "ok" if db_ok else "degraded",
        "service": "template-generator",
        "database": "ok" if db_ok else "unavailable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
