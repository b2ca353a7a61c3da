"""FastAPI application entry point for the feed endpoints."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.routers import feeds
from db.session import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - release database connections on shutdown."""
    yield
    logger.info("Shutting down, disposing database engine")
    await dispose_engine()


app = FastAPI(
    title="Movie Magnet Feeds",
    description="Private RSS feeds of the torrents each bot user downloaded.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(feeds.router)
