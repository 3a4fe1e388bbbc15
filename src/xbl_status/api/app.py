"""FastAPI application factory for xbl-status."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from xbl_status import __version__
from xbl_status.api.routes import status
from xbl_status.config.loader import load_config
from xbl_status.config.models import XblStatusConfig

logger = logging.getLogger(__name__)


def create_app(config: XblStatusConfig | None = None) -> FastAPI:
    app = FastAPI(title="xbl-status", version=__version__, description="Xbox LIVE service status")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    if config is None:
        try:
            config = load_config(required=False)
        except (FileNotFoundError, ValueError):
            logger.exception("Falling back to default configuration")
            config = XblStatusConfig()
    app.state.config = config

    @app.get("/health", tags=["meta"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(status.router, prefix="/api")

    return app


app = create_app()
