#!/usr/bin/env python3
"""
Entry point for the Lockbox server.

Loads settings once, configures logging and starts uvicorn on HOST:PORT.
"""

import logging

import uvicorn

from lockbox.config import get_settings
from lockbox_api.main import setup_logging

logger = logging.getLogger("run_server")

if __name__ == "__main__":
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    logger.info(f"Starting Lockbox server at http://{settings.HOST}:{settings.PORT}")
    logger.info("Press Ctrl+C to stop the server")

    # create_app loads settings again inside the server process
    uvicorn.run(
        "lockbox_api.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )
