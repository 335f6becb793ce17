"""FastAPI application entry point: logging setup, lifespan and routes.

Usage:
    python -m src.main

Serves the entitlement engine over HTTP: a health check and a single
resolution endpoint returning the bundle as JSON.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel, Field

from src.bundle.builder import resolve_entitlements
from src.catalogue.loader import get_catalogue
from src.catalogue.rates import get_rates
from src.config import settings
from src.schemas.entitlements import EntitlementBundle
from src.schemas.person import PersonData

# ── Logging setup ────────────────────────────────────────────────────

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    stream=sys.stdout,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = logging.getLogger(__name__)

# ── FastAPI lifespan ─────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the static data up front so a bad deployment fails at startup."""
    logger.info("Starting entitlement engine (env=%s)", settings.environment)

    catalogue = get_catalogue()
    rates = get_rates()
    logger.info("Catalogue ready: %d schemes, rates for %s", len(catalogue.entitlements), rates.tax_year)

    yield

    logger.info("Entitlement engine shutdown complete")


# ── FastAPI app ──────────────────────────────────────────────────────

app = FastAPI(
    title="Entitlement Engine API",
    description="Resolves UK benefits and support schemes for a household",
    version="0.1.0",
    lifespan=lifespan,
)


class EntitlementRequest(BaseModel):
    person: PersonData
    situations: list[str] = Field(default_factory=list)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "rates_tax_year": get_rates().tax_year,
    }


@app.post("/entitlements")
async def entitlements(request: EntitlementRequest) -> EntitlementBundle:
    """Resolve the full entitlement bundle for one person."""
    return await resolve_entitlements(request.person, request.situations)


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
