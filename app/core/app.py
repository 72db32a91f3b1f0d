"""
FastAPI Application Factory
Creates and configures the FastAPI app instance
"""
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.endpoints import catalog, health, resources
from app.api.endpoints import manifest as manifest_endpoint
from app.core.config import settings
from app.core.errors import AddonError, addon_error_handler
from app.models.stremio import Manifest
from app.services.dispatcher import ResourceDispatcher
from app.services.manifest import get_manifest
from app.services.resolvers import (
    CatalogResolver,
    FixtureCatalogResolver,
    FixtureStreamResolver,
    StreamResolver,
)
import logging

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def build_catalog_resolver() -> CatalogResolver:
    """Pick the catalog resolver configured by CATALOG_BACKEND"""
    if settings.CATALOG_BACKEND == "cinemeta":
        from app.services.cinemeta import CinemetaCatalogResolver
        return CinemetaCatalogResolver()
    return FixtureCatalogResolver()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    dispatcher: ResourceDispatcher = app.state.dispatcher

    # Startup
    logger.info(f"Starting {dispatcher.manifest.name} addon ({dispatcher.manifest.id})")
    logger.info(
        f"Catalog resolver: {type(dispatcher.catalog_resolver).__name__}, "
        f"stream resolver: {type(dispatcher.stream_resolver).__name__}"
    )

    yield

    # Shutdown
    logger.info(f"Shutting down {dispatcher.manifest.name} addon")
    await dispatcher.catalog_resolver.close()
    await dispatcher.stream_resolver.close()


def create_app(
    manifest: Optional[Manifest] = None,
    catalog_resolver: Optional[CatalogResolver] = None,
    stream_resolver: Optional[StreamResolver] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application

    The manifest is built here, so an inconsistent manifest fails at
    startup rather than on a request.
    """
    resolved_manifest = manifest if manifest is not None else get_manifest()
    dispatcher = ResourceDispatcher(
        manifest=resolved_manifest,
        catalog_resolver=catalog_resolver or build_catalog_resolver(),
        stream_resolver=stream_resolver or FixtureStreamResolver(),
        timeout=settings.RESOLVER_TIMEOUT_SECONDS,
    )

    app = FastAPI(
        title=resolved_manifest.name,
        description=resolved_manifest.description,
        version=resolved_manifest.version,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher

    # Stremio clients fetch from any origin, read-only
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AddonError, addon_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(manifest_endpoint.router)
    app.include_router(catalog.router)
    app.include_router(resources.router)

    return app
