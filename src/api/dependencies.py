"""FastAPI dependencies for injection."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db.session import get_async_session
from services.feed_service import FeedAssembler
from services.store import FeedStore, SqlAlchemyFeedStore
from services.user_service import UserService


def get_feed_store(db: AsyncSession = Depends(get_async_session)) -> FeedStore:
    """Storage bound to the request's session."""
    return SqlAlchemyFeedStore(db)


def get_user_service(
    store: FeedStore = Depends(get_feed_store),
    settings: Settings = Depends(get_settings),
) -> UserService:
    """User service configured with the feed salt and activity threshold."""
    return UserService(
        store,
        salt=settings.feed_salt,
        feed_check_threshold=settings.feed_check_threshold,
    )


def get_feed_assembler(
    store: FeedStore = Depends(get_feed_store),
    settings: Settings = Depends(get_settings),
) -> FeedAssembler:
    """Feed assembler configured from settings."""
    return FeedAssembler(
        store,
        feed_url=settings.feed_url,
        title=settings.feed_title,
        page_size=settings.items_per_feed,
    )


__all__ = [
    "get_async_session",
    "get_feed_assembler",
    "get_feed_store",
    "get_settings",
    "get_user_service",
]
