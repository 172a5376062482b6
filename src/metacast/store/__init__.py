"""Record store for talks, speakers and scoped metadata."""

from metacast.store.metadata import MetadataResolver
from metacast.store.models import (
    Album,
    Artist,
    Links,
    ScopedMetadata,
    Season,
    Speaker,
    SpeakerRef,
    SpeakerTitle,
    Talk,
)
from metacast.store.records import RecordStore, talk_key

__all__ = [
    "RecordStore",
    "MetadataResolver",
    "talk_key",
    "Talk",
    "Speaker",
    "SpeakerRef",
    "SpeakerTitle",
    "Links",
    "Artist",
    "Album",
    "Season",
    "ScopedMetadata",
]
