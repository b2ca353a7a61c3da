"""Pydantic schemas for feed documents."""
from datetime import datetime

from pydantic import BaseModel, Field


class FeedEntry(BaseModel):
    """One item in a user's feed."""

    title: str
    link: str = Field(..., description="Magnet URI of the torrent")
    created: datetime


class FeedDocument(BaseModel):
    """Format-independent feed; encoded to RSS by services.feed_encoder."""

    title: str
    link: str = Field(..., description="Self link of the feed")
    created: datetime
    entries: list[FeedEntry] = Field(default_factory=list)
