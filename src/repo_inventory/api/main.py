"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from repo_inventory import __version__
from repo_inventory.api.routers import health, repos
from repo_inventory.config import get_settings
from repo_inventory.config.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.is_production,
    )

    # The inventory service is lazily initialized on first request

    yield

    # Cleanup
    if hasattr(app.state, "inventory_service"):
        await app.state.inventory_service.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="repo-inventory",
        description="Bitbucket Cloud repository inventory",
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(repos.router, prefix="/api/v1", tags=["Repositories"])

    return app


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "repo_inventory.api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        workers=settings.api_workers,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
