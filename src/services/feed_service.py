"""Service layer for assembling a user's feed of recent downloads."""
import logging

from models.torrent import Torrent
from models.user import User
from schemas.feed import FeedDocument, FeedEntry
from services.feed_encoder import encode_rss
from services.store import FeedStore
from services.utils import Clock, utc_now

logger = logging.getLogger(__name__)


class FeedAssembler:
    """
    Builds feed documents from a user's most recent downloads.

    Args:
        store: Storage backend.
        feed_url: Self link template; its `{}` placeholder is replaced with the feed token.
            Other braces are kept literally.
        title: Feed title.
        page_size: Number of entries per feed.
        clock: Source of "now" for the feed creation time.
    """

    def __init__(
        self,
        store: FeedStore,
        feed_url: str,
        title: str,
        page_size: int,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._feed_url = feed_url
        self._title = title
        self._page_size = page_size
        self._clock = clock

    async def recent_torrents(self, user: User, limit: int) -> list[Torrent]:
        """Up to `limit` torrents the user downloaded, newest first."""
        if limit <= 0:
            return []
        return await self._store.find_recent_torrents(user.id, limit)

    async def build(self, user: User) -> FeedDocument:
        """Build the feed document for a user."""
        torrents = await self.recent_torrents(user, self._page_size)
        logger.debug("Building feed for user %s with %d entries", user.id, len(torrents))
        return FeedDocument(
            title=self._title,
            link=self._feed_url.replace("{}", user.feed_id, 1),
            created=self._clock(),
            entries=[
                FeedEntry(
                    title=torrent.title,
                    link=torrent.magnet,
                    created=torrent.downloaded_at,
                )
                for torrent in torrents
            ],
        )

    async def render(self, user: User) -> str:
        """Build the user's feed and encode it as RSS."""
        return encode_rss(await self.build(user))
