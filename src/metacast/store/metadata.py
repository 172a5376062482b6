"""Inherited artist/album/season metadata for talks."""

from posixpath import dirname
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from metacast.store.models import Album, Artist, ScopedMetadata, Season
from metacast.utils.errors import StoreError

if TYPE_CHECKING:
    from metacast.store.records import RecordStore


def overlay(*documents: dict[str, Any]) -> dict[str, Any]:
    """Shallow key-by-key merge; later documents win."""
    merged: dict[str, Any] = {}
    for document in documents:
        merged.update(document)
    return merged


class MetadataResolver:
    """Compute the effective scopes of a talk from its storage location.

    Artist and album come from the collection folder overlaid by the
    period folder (period keys win, one key at a time). Season is read
    from the period folder only.
    """

    def __init__(self, store: "RecordStore"):
        self.store = store

    def resolve(self, talk_key: str) -> ScopedMetadata:
        """Resolve metadata for the talk stored under ``talk_key``.

        Args:
            talk_key: Key such as ``general-conference/2025-april/gc-2025-04-...``

        Returns:
            ScopedMetadata; scopes without override files are empty
        """
        return self.resolve_folder(dirname(talk_key))

    def resolve_folder(self, period_folder: str) -> ScopedMetadata:
        """Resolve metadata for everything stored directly in ``period_folder``.

        Raises:
            StoreError: If an override file does not fit its scope model
        """
        collection_folder = dirname(period_folder)

        artist = overlay(
            self.store.load_scope(collection_folder, "artist"),
            self.store.load_scope(period_folder, "artist"),
        )
        album = overlay(
            self.store.load_scope(collection_folder, "album"),
            self.store.load_scope(period_folder, "album"),
        )
        season = self.store.load_scope(period_folder, "season")

        try:
            return ScopedMetadata(
                artist=Artist.model_validate(artist),
                album=Album.model_validate(album),
                season=Season.model_validate(season),
            )
        except ValidationError as e:
            raise StoreError(f"Invalid scope overrides in {period_folder}: {e}") from e
