"""Tierlearn main entrypoint.

- Loads `.env` files, configures JSON logging and serves the portal app with uvicorn.
"""
from __future__ import annotations

import logging
import os

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from packages.common.config import get_settings
from packages.common.logging import configure_logging
from services.portal.app import create_app

load_dotenv(".env.production")
load_dotenv(".env", override=True)

logger = configure_logging(get_settings().LOG_LEVEL)

# Export ASGI for uvicorn/gunicorn
app: FastAPI = create_app()


def main() -> None:
    """Run the portal with uvicorn on HOST/PORT (default 0.0.0.0:8000)."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info("starting %s on %s:%d", get_settings().SERVICE_NAME, host, port)
    uvicorn.run(app, host=host, port=port, log_level=logging.getLevelName(logger.getEffectiveLevel()).lower())


if __name__ == "__main__":
    main()
