"""FastAPI application factory and shared HTTP clients."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fandash import __version__
from fandash.config import DashboardConfig
from fandash.core.management import ManagementClient
from fandash.core.poller import StatusPoller
from fandash.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

# Process-wide; every dashboard session polls through the same clients.
_config: DashboardConfig | None = None
_poller: StatusPoller | None = None
_management: ManagementClient | None = None


def get_config() -> DashboardConfig:
    global _config
    if _config is None:
        _config = DashboardConfig.from_env()
    return _config


def get_poller() -> StatusPoller:
    global _poller
    if _poller is None:
        _poller = StatusPoller(timeout_s=get_config().request_timeout_s)
    return _poller


def get_management_client() -> ManagementClient:
    global _management
    if _management is None:
        _management = ManagementClient(get_config().manager_url)
    return _management


async def close_clients() -> None:
    """Close and forget the shared HTTP clients."""
    global _poller, _management
    if _poller is not None:
        await _poller.aclose()
        _poller = None
    if _management is not None:
        await _management.aclose()
        _management = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info("fandash_starting", manager_url=get_config().manager_url)
    yield
    await close_clients()
    logger.info("fandash_stopped")


def create_app(
    config: DashboardConfig | None = None,
    enable_ui: bool = True,
    configure_logging: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Settings to use; read from the environment when omitted.
        enable_ui: Whether to mount the NiceGUI web dashboard.
        configure_logging: Install the default structlog configuration.

    Returns:
        Configured FastAPI application instance.
    """
    global _config
    _config = config or DashboardConfig.from_env()
    if configure_logging:
        setup_logging()

    app = FastAPI(
        title="fandash",
        description="Live temperature and fan speed dashboard for a device fleet",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from fandash.api.routes import health
    app.include_router(health.router, prefix="/api")

    if enable_ui:
        from fandash.ui.main import setup_ui
        setup_ui(app, _config)

    return app
