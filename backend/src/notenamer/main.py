"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

# Logging constants defined here (not in constants/) because logging.basicConfig()
# must run before any module imports that might create loggers.
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    format=LOG_FORMAT,
    datefmt=DATE_FORMAT,
    level=logging.INFO,
)

# Unify uvicorn loggers with app format
for uvicorn_logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
    uvicorn_logger = logging.getLogger(uvicorn_logger_name)
    uvicorn_logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    uvicorn_logger.addHandler(handler)

# httpx logs every request URL at INFO, and Gemini URLs carry the API key
logging.getLogger("httpx").setLevel(logging.WARNING)

from notenamer import __version__  # noqa: E402
from notenamer.api.deps import get_settings_store, get_vault  # noqa: E402
from notenamer.api.routers import commands, notes, settings  # noqa: E402
from notenamer.config import ConfigError  # noqa: E402
from notenamer.validation import validate_api_key  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load settings and report the vault on startup."""
    try:
        loaded = get_settings_store().load()
        if not validate_api_key(loaded.api_key):
            logger.warning("No valid Gemini API key configured; title and tag actions will fail")
    except ConfigError as e:
        logger.error(f"Settings could not be loaded: {e}")
        raise

    logger.info(f"Vault: {get_vault().root}")
    logger.info("notenamer started")

    yield


app = FastAPI(
    title="notenamer",
    description="AI-generated titles and tags for Markdown notes",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(notes.router)
app.include_router(commands.router)
app.include_router(settings.router)
