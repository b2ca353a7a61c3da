"""Shared exceptions for service layer operations."""


class FeedError(Exception):
    """Base class for errors raised by the feed services."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class NotFoundError(FeedError):
    """
    Raised when a lookup misses (unknown account, unknown or malformed feed token).

    Feed token misses always carry the same message so callers cannot tell an
    unassigned token from a malformed one.
    """


class EncodingError(FeedError):
    """Raised when a feed token cannot be generated (negative id, missing salt)."""


class SerializationError(FeedError):
    """Raised when a feed document cannot be encoded."""


class PersistenceError(FeedError):
    """
    Raised when the storage layer fails.

    Wraps the underlying driver/ORM exception (available as __cause__). Idempotent
    conflicts (duplicate user, duplicate download) never surface as this error.
    """
