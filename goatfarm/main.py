"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from goatfarm.config import get_settings
from goatfarm.infrastructure.dependencies import DashboardContainer, build_container
from goatfarm.infrastructure.logging.log_config import setup_logging
from goatfarm.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


def _install_container(app: FastAPI, container: DashboardContainer | None) -> DashboardContainer:
    """Attach the dashboard container and resume any persisted session."""
    if container is None:
        container = build_container(get_settings())
    app.state.container = container
    if container.session.restore():
        logger.info("Resumed session of '%s'", container.session.actor.username)
    return container


def create_app(container: DashboardContainer | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    A prebuilt container (fake gateway, in-memory session) may be passed in;
    otherwise one is built from settings at startup.
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging()
        if getattr(app.state, "container", None) is None:
            _install_container(app, container)
        logger.info(
            "%s %s started (farm API: %s)",
            settings.app_title,
            settings.app_version,
            "demo" if settings.demo_mode else settings.farm_api_base_url,
        )
        yield

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.container = None
    if container is not None:
        _install_container(app, container)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "goatfarm.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
