"""Service layer for user registration, lookup and feed activity."""
import logging
from datetime import timedelta

from models.user import User
from services.exceptions import EncodingError, NotFoundError
from services.feed_token import generate_feed_token, is_well_formed_token
from services.store import FeedStore
from services.utils import Clock, ensure_utc, utc_now

logger = logging.getLogger(__name__)

# Shared by every feed token miss so responses don't reveal which tokens exist.
FEED_NOT_FOUND_MESSAGE = "Feed not found"

DEFAULT_FEED_CHECK_THRESHOLD = timedelta(hours=24)


class UserService:
    """
    Owns the User lifecycle: registration, feed token assignment and feed_checked_at.

    All timestamps are set here, explicitly, before each write.

    Raises:
        EncodingError: If salt is empty. Checked here so that lookups can only ever
            fail with NotFoundError.
    """

    def __init__(
        self,
        store: FeedStore,
        salt: str,
        clock: Clock = utc_now,
        feed_check_threshold: timedelta = DEFAULT_FEED_CHECK_THRESHOLD,
    ) -> None:
        if not salt:
            raise EncodingError("Feed token salt is not configured")
        self._store = store
        self._salt = salt
        self._clock = clock
        self._feed_check_threshold = feed_check_threshold

    async def register_or_get(self, telegram_id: int, telegram_name: str) -> User:
        """
        Get the user for a Telegram account, creating it if needed.

        Existing users are returned unchanged (telegram_name is not overwritten).
        New users are inserted with an atomic insert-if-absent, then given their feed
        token. Concurrent calls for the same account end up with one row and one
        token: the insert is conditional and the token is a pure function of
        (telegram_id, salt), so computing it twice writes the same value.

        Raises:
            EncodingError: If no feed token can be generated for telegram_id. Raised
                before anything is written.
        """
        feed_id = generate_feed_token(telegram_id, self._salt)

        now = self._clock()
        inserted = await self._store.insert_user_if_absent(
            User(
                telegram_id=telegram_id,
                telegram_name=telegram_name,
                created_at=now,
                updated_at=now,
            ),
        )
        user = await self.get_by_account_id(telegram_id)
        if inserted:
            logger.info("Registered user %s for telegram id %s", user.id, telegram_id)

        if user.feed_id is None:
            user.feed_id = feed_id
            user.updated_at = self._clock()
            await self._store.update_user(user)
        return user

    async def get_by_account_id(self, telegram_id: int) -> User:
        """
        Get a registered user by Telegram id.

        Raises:
            NotFoundError: If the account has not been registered.
        """
        user = await self._store.find_user(telegram_id=telegram_id)
        if user is None:
            raise NotFoundError(f"User with telegram id {telegram_id} not found")
        return user

    async def get_by_feed_token(self, feed_id: str) -> User:
        """
        Resolve a feed token to its user.

        Malformed tokens are rejected without a storage round trip. Malformed and
        unassigned tokens raise the same NotFoundError.
        """
        if not is_well_formed_token(feed_id, self._salt):
            raise NotFoundError(FEED_NOT_FOUND_MESSAGE)
        user = await self._store.find_user(feed_id=feed_id)
        if user is None:
            raise NotFoundError(FEED_NOT_FOUND_MESSAGE)
        return user

    async def touch_feed_checked(self, user: User) -> None:
        """Record that the user's feed was just served."""
        now = self._clock()
        user.feed_checked_at = now
        user.updated_at = now
        await self._store.update_user(user)

    def is_feed_active(self, user: User, threshold: timedelta | None = None) -> bool:
        """
        Whether the user polled their feed within `threshold`.

        Without an explicit threshold the one configured on the service is used.

        Evaluated on demand from feed_checked_at; users who never polled are inactive.
        """
        if user.feed_checked_at is None:
            return False
        if threshold is None:
            threshold = self._feed_check_threshold
        return self._clock() - ensure_utc(user.feed_checked_at) < threshold
