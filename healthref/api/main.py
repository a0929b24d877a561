from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from healthref.api.dependencies import get_db
from healthref.api.exception_handlers import (
    http_exception_handler,
    referral_api_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from healthref.api.middleware import RequestLoggingMiddleware
from healthref.api.routes.kpi import router as kpi_router
from healthref.api.routes.referral import router as referral_router
from healthref.api.schemas import HealthResponse
from healthref.config import settings
from healthref.db.session import engine
from healthref.logging_config import setup_logging
from healthref.services.errors import ReferralAPIError
from healthref.services.metrics import metrics

logger = logging.getLogger("healthref")

LIVENESS_MESSAGE = "Healthcare Referral API is running!"

_DESCRIPTION = """\
Read-only API over a healthcare facility and district KPI dataset.

### Referral

Pick a facility through the cascading state, district and subdistrict
lists, then `POST /api/referral` to find the nearest facilities of a
strictly higher care level in the same district, ranked by great-circle
distance.

### KPI dashboard

Browse district key performance indicators by state, district, data
source and year under `/api/kpi`.

### Errors

Every error response is a JSON object with an `error` message. KPI
endpoints add a `details` field on database failures.
"""

_OPENAPI_TAGS = [
    {"name": "system", "description": "Liveness, health and metrics."},
    {
        "name": "referral",
        "description": (
            "Facility pickers (state, district, subdistrict, facility) and "
            "the nearest higher-level facility referral."
        ),
    },
    {
        "name": "kpi",
        "description": "District KPI values and their definitions.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_format)

    if settings.run_migrations:
        from alembic import command
        from alembic.config import Config

        command.upgrade(Config("alembic.ini"), "head")

    logger.info("Healthcare Referral API starting (referral limit=%d)", settings.referral_max_results)
    yield
    await engine.dispose()


app = FastAPI(
    title="Healthcare Referral API",
    version="0.1.0",
    summary="Facility referral and district KPI lookups",
    description=_DESCRIPTION,
    openapi_tags=_OPENAPI_TAGS,
    lifespan=lifespan,
)

app.add_exception_handler(ReferralAPIError, referral_api_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

origins = [o.strip() for o in settings.cors_origins.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(referral_router)
app.include_router(kpi_router)


@app.get(
    "/",
    tags=["system"],
    summary="Liveness",
    response_class=PlainTextResponse,
)
async def root():
    return LIVENESS_MESSAGE


@app.get(
    "/health",
    tags=["system"],
    summary="Health check",
    description="Returns 200 when the database answers `SELECT 1`, 503 otherwise.",
    response_model=HealthResponse,
)
async def health(session: AsyncSession = Depends(get_db)):
    try:
        await session.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("Health check failed: %s", exc)
        return JSONResponse(
            status_code=503,
            content={
                "status": "degraded",
                "database": "unreachable",
                "detail": str(exc),
            },
        )
    return {
        "status": "ok",
        "database": "connected",
        "uptime_seconds": metrics.uptime_seconds(),
    }


@app.get(
    "/metrics",
    tags=["system"],
    summary="Application metrics",
    description="Request counters by status, latency percentiles and referral outcomes.",
)
async def get_metrics():
    return metrics.snapshot()
