"""
FastAPI application for the Book Catalog API.

Serves the GraphQL endpoint plus service info and health routes. The
database is created (and seeded when enabled) during startup.

Responsibility: Main API application setup and configuration
"""

# Load .env BEFORE importing settings (critical for pydantic-settings)
from dotenv import load_dotenv
load_dotenv('.env', override=False)

import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from strawberry.fastapi import GraphQLRouter

from catalog.config import Settings, settings as default_settings
from catalog.seed import CatalogSeeder
from api.graphql import schema
from api.graphql.context import CatalogServices, build_services, get_context

logger = logging.getLogger(__name__)


async def prepare_database(services: CatalogServices) -> None:
    """Create tables and load sample data when configured."""
    await services.database.initialize()
    await services.database.create_tables()

    seed = services.settings.seed
    if not seed.enabled:
        logger.info("Sample data disabled")
        return

    async with services.database.session() as session:
        seeder = CatalogSeeder(session, random.Random(seed.random_seed))
        await seeder.seed(authors=seed.authors, books=seed.books)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application around one set of services."""
    settings = settings or default_settings

    logging.basicConfig(
        level=settings.app.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    services = build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app.app_name}...")
        logger.info(f"Environment: {settings.app.environment.value}")
        logger.info(f"Debug mode: {settings.app.debug}")
        await prepare_database(services)
        yield
        logger.info(f"Shutting down {settings.app.app_name}...")
        await services.database.close()

    app = FastAPI(
        title=settings.app.app_name,
        description="GraphQL API over a book and author catalog with offset and keyset pagination",
        version=settings.app.app_version,
        lifespan=lifespan,
    )
    app.state.services = services

    logger.info(f"CORS Origins configured: {settings.app.cors_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,  # Cache preflight for 1 hour
    )

    @app.get("/")
    async def root():
        """Root endpoint - API information."""
        return {
            "name": settings.app.app_name,
            "version": settings.app.app_version,
            "status": "operational",
            "endpoints": {
                "graphql": "/graphql",
                "health": "/health",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "service": "book-catalog-api",
            "database": "ready" if services.database.initialized else "unavailable",
        }

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if settings.app.debug else "An unexpected error occurred"
            }
        )

    graphql_app = GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.app.debug else None,
    )
    app.include_router(graphql_app, prefix="/graphql")
    logger.info("GraphQL endpoint mounted at /graphql")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=default_settings.app.api_host,
        port=default_settings.app.api_port,
        reload=True
    )
