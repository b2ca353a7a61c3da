"""Service layer for recording which torrents a user downloaded."""
import logging

from models.torrent import Torrent
from models.user_torrent import UserTorrent
from services.store import FeedStore
from services.user_service import UserService
from services.utils import Clock, utc_now

logger = logging.getLogger(__name__)


class DownloadTracker:
    """Records user/torrent associations."""

    def __init__(
        self,
        store: FeedStore,
        users: UserService,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._users = users
        self._clock = clock

    async def record(self, telegram_id: int, torrent: Torrent) -> None:
        """
        Record that a registered user obtained a torrent.

        Recording the same (user, torrent) pair again is a no-op; the first
        timestamp is kept.

        Raises:
            NotFoundError: If the account is not registered. Callers must register
                the user first.
        """
        user = await self._users.get_by_account_id(telegram_id)
        await self._store.insert_download_or_ignore(
            UserTorrent(
                user_id=user.id,
                torrent_id=torrent.id,
                downloaded_at=self._clock(),
            ),
        )
        logger.debug("Recorded torrent %s for user %s", torrent.id, user.id)
