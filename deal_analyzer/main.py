"""
Main FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from deal_analyzer.api import router as api_router
from deal_analyzer.config import get_settings
from deal_analyzer.db.database import init_db

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{settings.app_name} started ({settings.app_env})")
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Rental property deal analysis for single-family and multi-family investments",
    version=VERSION,
    debug=settings.debug,
    lifespan=lifespan,
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": VERSION}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("deal_analyzer.main:app", host=settings.host, port=settings.port)
