"""
Web server bootstrap for the ReviewMate API.
"""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from reviewmate.config import get_settings
from reviewmate.logging import get_logger, is_configured, setup_logging

from .api import create_app

logger = get_logger(__name__)


def create_server_app() -> FastAPI:
    settings = get_settings()
    if not is_configured():
        setup_logging(settings.log_level)
    logger.info("Starting ReviewMate API server", environment=settings.environment)
    return create_app()


def run_server(host: str | None = None, port: int | None = None) -> None:
    settings = get_settings()
    uvicorn.run(
        "reviewmate.web.server:create_server_app",
        host=host or settings.server.host,
        port=port or settings.server.port,
        log_level=settings.log_level.lower(),
        factory=True,
    )
