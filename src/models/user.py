"""User model - a Telegram account that downloads torrents through the bot."""
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """
    User model - one row per Telegram account.

    feed_id is derived from telegram_id and never changes once assigned. It is the
    only thing a user needs to subscribe to their private RSS feed.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    telegram_id: Mapped[int] = mapped_column(
        BigInteger,
        unique=True,
        index=True,
        comment="Telegram user id - stable external identity",
    )
    telegram_name: Mapped[str] = mapped_column(String(255), default="")
    feed_id: Mapped[str | None] = mapped_column(
        String(64),
        unique=True,
        index=True,
        nullable=True,
        comment="Obfuscated feed token (hashids of telegram_id)",
    )
    feed_checked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Last time the feed endpoint was served; NULL if never polled",
    )
