"""
zkredit gateway - Main Application Entry Point

Remittance ledger and privacy-preserving microloan service: settles
worker remittances, summarizes them into bucketed attributes, and
decides loans from zero-knowledge proofs plus those attributes.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from zkredit import __version__
from zkredit.core.config import settings
from zkredit.core.logging import setup_logging
from zkredit.core.metrics import get_metrics, get_metrics_content_type
from zkredit.infrastructure.database import db_manager
from zkredit.presentation.api import api_router
from zkredit.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Sets up logging, and the database when the SQL event store is
    selected; disposes of the engine on shutdown.
    """
    setup_logging()
    logger = structlog.get_logger(__name__)

    if settings.event_store_backend == "sql":
        db_manager.init()
        await db_manager.create_tables()

    logger.info(
        "application_started",
        version=__version__,
        network=settings.ledger_network,
        event_store=settings.event_store_backend,
    )

    yield

    await db_manager.close()
    logger.info("application_stopped")


app = FastAPI(
    title="zkredit gateway",
    description="Remittance ledger and zero-knowledge microloan service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""
    return RedirectResponse(url="/docs")
