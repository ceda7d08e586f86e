"""FastAPI server exposing the monitor snapshot."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import router
from src.config import settings
from src.monitor import Manager, build_manager, load_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the manager from config and run the probe loop in the background."""
    manager: Manager | None = getattr(app.state, "manager", None)
    if manager is None:
        manager = build_manager(load_config(settings.board_config_file))
        app.state.manager = manager

    stop = asyncio.Event()
    loop_task = asyncio.create_task(
        manager.run_loop(settings.probe_interval_seconds, stop), name="probe-loop",
    )
    app.state.probe_stop = stop
    logger.info("Monitor started (interval=%.1fs)", settings.probe_interval_seconds)

    yield

    # Shutdown
    stop.set()
    await loop_task
    await manager.close()


def create_app(manager: Manager | None = None) -> FastAPI:
    app = FastAPI(
        title="Board - Service Health Monitor",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    if manager is not None:
        app.state.manager = manager

    app.include_router(router, prefix="/api")
    return app


app = create_app()
