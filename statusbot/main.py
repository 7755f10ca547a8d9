# statusbot/main.py
"""
Airport Status Bot - Main Application

Polls the FAA NAS status feed on a background thread and serves a small
status API for monitoring.
"""

import threading
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from .api import status_router
from .cycle import StatusCycle
from .ingestion.faa_nasstatus import FAANASStatusClient
from .logging import configure_logging, get_logger
from .reference.airports import AirportsDataDirectory
from .reference.naturalearth import NaturalEarthDataManager
from .settings import VERSION, settings
from .status.posts import PostGenerator

logger = get_logger(__name__)


def build_cycle() -> StatusCycle:
    """Wire the default collaborators from settings."""
    regions = NaturalEarthDataManager(
        settings.natural_earth_dir,
        user_agent=settings.user_agent,
        timeout=settings.ingestion_timeout_seconds,
    )

    client = FAANASStatusClient(
        url=settings.faa_status_url,
        timeout=settings.ingestion_timeout_seconds,
        user_agent=settings.user_agent,
    )
    generator = PostGenerator(AirportsDataDirectory(), regions)
    return StatusCycle(
        generator,
        client.fetch_xml,
        snapshot_path=settings.snapshot_path,
        post_on_first_run=settings.post_on_first_run,
        # Runs on the poller thread; a no-op while the cache is fresh
        refresh_reference=regions.update_cache,
    )


def create_app(cycle: Optional[StatusCycle] = None, start_polling: bool = True) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        cycle: Poll cycle to serve; built from settings at startup when None
        start_polling: Run the cycle on a background thread during the app's lifespan
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("starting", version=VERSION)
        if app.state.cycle is None:
            app.state.cycle = build_cycle()

        if start_polling:
            poller = threading.Thread(
                target=app.state.cycle.run_forever,
                args=(settings.refresh_interval_seconds,),
                name="status-poller",
                daemon=True,
            )
            poller.start()
            logger.info("poller_started", interval_seconds=settings.refresh_interval_seconds)

        yield

        logger.info("shutting_down")

    app = FastAPI(
        title="Airport Status Bot",
        description="FAA airport status monitoring and post generation.",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.cycle = cycle
    app.include_router(status_router)
    return app


def run():
    """Run the server (entry point for CLI)."""
    import uvicorn

    configure_logging(level=settings.log_level, json_output=settings.log_json)
    uvicorn.run(
        create_app(),
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    run()
