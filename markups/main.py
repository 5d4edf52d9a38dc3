#!/usr/bin/env python3
"""
Markups - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Runs the diagnostics API

All business logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from typing import Mapping, Optional

import httpx
import uvicorn
from fastapi import FastAPI

from markups import __version__
from markups.config.provider import ConfigProvider, EnvConfigProvider
from markups.logging_config import configure_logging, get_logging_config
from markups.modules.api import create_capability_router
from markups.modules.capabilities import build_registry
from markups.modules.loader import CapabilityLoader, LoaderFactory
from markups.modules.middleware import create_activity_middleware
from markups.modules.scheduler import IdleScheduler, RequestActivityMonitor

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - initialize and cleanup resources.
    """
    loader_config = app.state.loader_config

    # Startup
    logger.info("Starting Markups capability loader...")

    http_client = httpx.AsyncClient(timeout=loader_config.fetch_timeout, follow_redirects=True)
    registry = app.state.registry
    if registry is None:
        registry = build_registry(http_client, loader_config.cdn_base_url)

    # One loader per process, shared by every consumer
    loader = CapabilityLoader(registry)
    activity_monitor = RequestActivityMonitor(loader_config.idle_quiet_period)
    scheduler = IdleScheduler(
        loader,
        idle_signal=activity_monitor,
        idle_timeout=loader_config.preload_idle_timeout,
    )
    app.state.http_client = http_client
    app.state.activity_monitor = activity_monitor
    app.state.loader = loader
    app.state.scheduler = scheduler

    if loader_config.preload_enabled:
        scheduler.schedule_preload(loader_config.preload_capabilities)
    else:
        logger.info("Idle preloading disabled")

    logger.info(f"Markups started with capabilities: {', '.join(loader.capabilities)}")

    yield

    # Shutdown
    logger.info("Shutting down Markups capability loader...")
    await scheduler.shutdown()
    # Let started loads finish before their HTTP client goes away
    await loader.drain()
    await http_client.aclose()
    logger.info("Markups shutdown complete")


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    registry: Optional[Mapping[str, LoaderFactory]] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config_provider: Configuration source (default: environment)
        registry: Capability factories; built from the CDN config when None

    Returns:
        Configured FastAPI application
    """
    config_provider = config_provider or EnvConfigProvider()
    loader_config = config_provider.get_loader_config()

    app = FastAPI(
        title="Markups Capability Loader",
        description="Lazy loading of optional rendering and export capabilities",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.loader_config = loader_config
    app.state.registry = registry
    app.middleware("http")(create_activity_middleware())
    app.include_router(create_capability_router())
    return app


def main():
    """Run the diagnostics API server."""
    config_provider = EnvConfigProvider()
    api_config = config_provider.get_api_config()
    configure_logging(api_config.log_level)

    uvicorn.run(
        create_app(config_provider),
        host=api_config.host,
        port=api_config.port,
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    main()
