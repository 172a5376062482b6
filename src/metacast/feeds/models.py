"""Data models for feed synthesis."""

from pydantic import BaseModel, Field


class FeedOptions(BaseModel):
    """Channel-level settings of one feed document."""

    title: str
    description: str
    image: str
    link: str = ""
    feed_path: str = Field(..., description="Path of the feed relative to base_url")
    base_url: str
    author: str = ""
    copyright: str = ""
    owner_email: str = "no-reply@example.com"
    category: str = "Religion & Spirituality"

    @property
    def self_url(self) -> str:
        """Absolute URL the feed is published at."""
        return f"{self.base_url.rstrip('/')}/{self.feed_path.lstrip('/')}"


class FeedItem(BaseModel):
    """One entry of a feed, fully formatted."""

    id: str
    title: str
    description: str
    pub_date: str
    author: str
    image: str | None = None
    duration: int | None = None
    enclosure_url: str | None = None
    season: int | str | None = None
