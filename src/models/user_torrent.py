"""Association between users and the torrents they downloaded."""
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class UserTorrent(Base):
    """
    Records that a user obtained a torrent at a given time.

    (user_id, torrent_id) is unique; re-recording the same pair is ignored at insert
    time, so the first downloaded_at wins. The surrogate id preserves insertion order.
    """

    __tablename__ = "user_torrents"
    __table_args__ = (
        UniqueConstraint("user_id", "torrent_id", name="uq_user_torrents_user_id_torrent_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    torrent_id: Mapped[int] = mapped_column(
        ForeignKey("torrents.id", ondelete="CASCADE"),
        index=True,
    )
    downloaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        comment="When the user obtained the torrent",
    )
