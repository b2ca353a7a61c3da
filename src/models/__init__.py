"""SQLAlchemy models."""
from models.base import Base, TimestampMixin
from models.torrent import Torrent
from models.user import User
from models.user_torrent import UserTorrent

__all__ = ["Base", "TimestampMixin", "Torrent", "User", "UserTorrent"]
