"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skirmish import __version__
from skirmish.api.dependencies import set_encounter_manager
from skirmish.api.encounter_manager import EncounterManager
from skirmish.api.routes import api_router
from skirmish.config import EncounterConfig
from skirmish.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: EncounterConfig | None = None, configure_logging: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = EncounterConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if configure_logging:
            setup_logging(_config.log_level, _config.log_dir)
        manager = EncounterManager(_config)
        set_encounter_manager(manager)
        logger.info("API server started, encounter ready (%dx%d).", _config.max_x, _config.max_y)
        yield
        set_encounter_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Skirmish Encounter Engine",
        description=(
            "Turn-based grid combat encounters.\n\n"
            "## API Groups\n\n"
            "- **State** — Encounter state: creatures, objects, turn order, events\n"
            "- **Actions** — The current creature attacks, picks up, moves or ends its turn\n"
            "- **Control** — Reset the encounter, sort by initiative\n"
            "- **Config** — Read-only encounter configuration\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live encounter state polled by clients."},
            {"name": "Actions", "description": "Actions performed by the creature whose turn it is."},
            {"name": "Control", "description": "Encounter lifecycle controls."},
            {"name": "Config", "description": "Read-only encounter configuration (world size, difficulty, combat tuning)."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
