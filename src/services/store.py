"""
Persistence interface for the feed services.

Services depend on the FeedStore protocol rather than on a session, so tests can
swap in an in-memory implementation. SqlAlchemyFeedStore is the production
implementation.

Every write is a single conditional statement (INSERT ... ON CONFLICT DO NOTHING or
a plain UPDATE). There are no multi-statement transactions here: the session owner
commits at the end of the request.
"""
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.dml import Insert

from models.torrent import Torrent
from models.user import User
from models.user_torrent import UserTorrent
from services.exceptions import PersistenceError


class FeedStore(Protocol):
    """Storage operations used by the user, download and feed services."""

    async def insert_user_if_absent(self, user: User) -> bool:
        """Insert user unless one with the same telegram_id exists. True if inserted."""
        ...

    async def find_user(
        self,
        *,
        telegram_id: int | None = None,
        feed_id: str | None = None,
    ) -> User | None:
        """Find a user by telegram_id or feed_id (exactly one must be given)."""
        ...

    async def update_user(self, user: User) -> None:
        """Persist changes to an existing user."""
        ...

    async def insert_download_or_ignore(self, link: UserTorrent) -> None:
        """Insert a user/torrent association; an existing pair is left untouched."""
        ...

    async def find_recent_torrents(self, user_id: int, limit: int) -> list[Torrent]:
        """Torrents for a user, most recently downloaded first, at most `limit`."""
        ...


_INSERT_BY_DIALECT: dict[str, Callable[..., Insert]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@contextmanager
def _storage_errors() -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        raise PersistenceError(f"Storage operation failed: {e}") from e


class SqlAlchemyFeedStore:
    """
    FeedStore backed by an async SQLAlchemy session.

    Uses flush(), never commit(). The session generator commits at request end.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _insert(self, model: type) -> Insert:
        dialect = self._session.get_bind().dialect.name
        try:
            insert = _INSERT_BY_DIALECT[dialect]
        except KeyError as e:
            raise PersistenceError(f"Unsupported database dialect: {dialect}") from e
        return insert(model)

    async def insert_user_if_absent(self, user: User) -> bool:
        """
        Insert a user row keyed on telegram_id.

        Concurrent calls for the same telegram_id are resolved by the unique constraint:
        exactly one insert wins, the rest return False.
        """
        stmt = (
            self._insert(User)
            .values(
                telegram_id=user.telegram_id,
                telegram_name=user.telegram_name,
                feed_id=user.feed_id,
                feed_checked_at=user.feed_checked_at,
                created_at=user.created_at,
                updated_at=user.updated_at,
            )
            .on_conflict_do_nothing(index_elements=["telegram_id"])
            .returning(User.id)
        )
        with _storage_errors():
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none() is not None

    async def find_user(
        self,
        *,
        telegram_id: int | None = None,
        feed_id: str | None = None,
    ) -> User | None:
        if (telegram_id is None) == (feed_id is None):
            raise ValueError("Exactly one of telegram_id or feed_id must be provided")
        query = select(User)
        if telegram_id is not None:
            query = query.where(User.telegram_id == telegram_id)
        else:
            query = query.where(User.feed_id == feed_id)
        with _storage_errors():
            result = await self._session.execute(query)
            return result.scalar_one_or_none()

    async def update_user(self, user: User) -> None:
        with _storage_errors():
            self._session.add(user)
            await self._session.flush()

    async def insert_download_or_ignore(self, link: UserTorrent) -> None:
        stmt = (
            self._insert(UserTorrent)
            .values(
                user_id=link.user_id,
                torrent_id=link.torrent_id,
                downloaded_at=link.downloaded_at,
            )
            .on_conflict_do_nothing(index_elements=["user_id", "torrent_id"])
        )
        with _storage_errors():
            await self._session.execute(stmt)

    async def find_recent_torrents(self, user_id: int, limit: int) -> list[Torrent]:
        """
        Torrents joined through user_torrents.

        Ordered by association time (newest first); ties keep insertion order.
        """
        query = (
            select(Torrent)
            .join(UserTorrent, UserTorrent.torrent_id == Torrent.id)
            .where(UserTorrent.user_id == user_id)
            .order_by(UserTorrent.downloaded_at.desc(), UserTorrent.id.asc())
            .limit(limit)
        )
        with _storage_errors():
            result = await self._session.execute(query)
            return list(result.scalars().all())
