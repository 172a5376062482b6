"""Data models for records kept in the store.

This module defines Pydantic models for:
- Talks (one archived speech, one YAML file each)
- Speakers (canonical people, enriched by external tools)
- Scoped metadata overlays (artist, album, season)

All models accept unknown keys so that fields written by other tools
survive a load/save cycle.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def iso_date(value: Any) -> Any:
    """Render YAML-parsed dates as ``YYYY-MM-DD``; leave anything else alone."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


class StoreModel(BaseModel):
    """Base for documents persisted as YAML."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        """Serialize to a plain dict suitable for YAML, dropping empty optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SpeakerTitle(StoreModel):
    """Title lines captured from the talk page at ingestion time."""

    full: str | None = None  # e.g. "Of the Quorum of the Twelve Apostles"
    short: str | None = None  # e.g. "Elder"


class SpeakerRef(StoreModel):
    """Reference from a talk to its speaker."""

    id: str
    title: SpeakerTitle = Field(default_factory=SpeakerTitle)


class Links(StoreModel):
    """Media links for a talk."""

    mp3: str | None = None


class Artist(StoreModel):
    """Artist scope: who publishes the collection."""

    name: str | None = None
    logo: str | None = None
    website: str | None = None
    copyright: str | None = None


class Album(StoreModel):
    """Album scope: the series label."""

    label: str | None = None


class Season(StoreModel):
    """Season scope: one conference."""

    season: int | str | None = None
    label: str | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    sessions: dict[int, str] = Field(default_factory=dict)
    icon: str | None = None
    description: str | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def dates_as_text(cls, v: Any) -> Any:
        """Accept unquoted YAML dates."""
        return iso_date(v)

    def session_label(self, session: int) -> str:
        """Label for a session number, falling back to ``Session N``."""
        return self.sessions.get(session) or f"Session {session}"


class ScopedMetadata(BaseModel):
    """Effective artist/album/season for one talk."""

    artist: Artist = Field(default_factory=Artist)
    album: Album = Field(default_factory=Album)
    season: Season = Field(default_factory=Season)


class Talk(StoreModel):
    """One talk in a conference.

    ``source``, ``period`` and ``metadata`` describe where the talk was
    loaded from and are never written back to disk.
    """

    id: str
    title: str
    date: str  # YYYY-MM-DD
    session: int = Field(..., ge=0)
    sequence: int = Field(..., ge=1)
    links: Links = Field(default_factory=Links)
    speaker: SpeakerRef | None = None
    summary: str | None = None
    topics: list[str] = Field(default_factory=list)
    duration: int | None = Field(default=None, ge=0)

    source: str | None = Field(default=None, exclude=True)
    period: str | None = Field(default=None, exclude=True)
    metadata: ScopedMetadata = Field(default_factory=ScopedMetadata, exclude=True)

    @field_validator("date", mode="before")
    @classmethod
    def date_as_text(cls, v: Any) -> Any:
        return iso_date(v)


class Speaker(StoreModel):
    """A canonical person.

    Example:
        >>> Speaker(id="jeffrey-r-holland", name="Jeffrey R. Holland")
    """

    id: str
    name: str | None = None
    aliases: list[str] | None = None
    titles: dict[str, str] | None = None  # e.g. {"2025": "President"}
    photo: str | None = None
    bio: str | None = None
    website: str | None = None
    tags: list[str] | None = None
