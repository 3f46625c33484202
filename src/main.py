"""
Credits Gateway - Main Application Entry Point

A credit-ledger gateway that normalizes access to the parent accounting
service for generated client applications.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from src import __version__
from src.core.config import get_gateway_config, settings
from src.core.logging import setup_logging
from src.core.metrics import get_metrics, get_metrics_content_type
from src.presentation.api import api_router
from src.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Set up logging
    - Resolve the parent service address, warning once if defaulted
    """
    setup_logging()
    config = get_gateway_config()

    logger = structlog.get_logger(__name__)
    if not config.base_url_configured:
        logger.warning(
            "parent_base_url_defaulted",
            base_url=config.base_url,
            hint="set PARENT_API_BASE, NEXT_PUBLIC_PARENT_API_BASE or PARENT_BASE_URL",
        )
    logger.info(
        "application_started",
        version=__version__,
        parent_base_url=config.base_url,
        upstream_timeout_seconds=config.timeout_seconds,
    )

    yield

    logger.info("application_stopped")


app = FastAPI(
    title="Credits Gateway",
    description="Credit-Ledger Gateway for the parent accounting service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    # Browser clients read the balance shape and correlation ID
    expose_headers=["X-Balance-Shape", "X-Request-ID"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.metrics_enabled:
        return JSONResponse(status_code=404, content={"error": "Metrics disabled"})
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")
