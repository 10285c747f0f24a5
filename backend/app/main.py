"""Weaviate dashboard FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import collections, dashboard, health, metrics
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.core.metrics import app_info
from app.core.middleware import ObservabilityMiddleware
from app.core.weaviate import get_weaviate_client

configure_logging()

logger = structlog.stdlib.get_logger("weaviate_dashboard.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle events."""
    app_info.info({"version": "0.1.0", "env": settings.app_env})

    # Raises ConfigurationError when WEAVIATE_URL is unset, aborting startup
    client = get_weaviate_client()
    app.state.weaviate_client = client
    logger.info("weaviate_client_ready", url=client.base_url)

    yield

    await client.close()


app = FastAPI(
    title="Weaviate Dashboard",
    description="Browse, inspect and delete Weaviate collections",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(ObservabilityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["health"])
app.include_router(collections.router, prefix="/api", tags=["collections"])
app.include_router(dashboard.router, tags=["dashboard"])
if settings.metrics_enabled:
    app.include_router(metrics.router, tags=["metrics"])
