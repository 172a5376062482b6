"""Per-conference and aggregate feeds for a collection."""

import logging
from pathlib import Path

from metacast.config.schema import FeedSettings
from metacast.feeds.builder import build_rss_feed, write_feed
from metacast.feeds.formatting import talk_image, talk_to_item
from metacast.feeds.models import FeedOptions
from metacast.store.models import Album, Artist, Speaker, Talk
from metacast.store.records import RecordStore
from metacast.utils.text import humanize_slug

logger = logging.getLogger(__name__)

AGGREGATE_NAME = "all"


def group_by_period(talks: list[Talk]) -> dict[str, list[Talk]]:
    """Group talks by their period folder, keeping order within each group."""
    groups: dict[str, list[Talk]] = {}
    for talk in talks:
        if talk.period is None:
            continue
        groups.setdefault(talk.period, []).append(talk)
    return groups


class ConferenceFeedBuilder:
    """Build one feed per period folder plus an aggregate feed.

    Example:
        >>> builder = ConferenceFeedBuilder(store, FeedSettings(), Path("out"))
        >>> paths = builder.build("general-conference")
    """

    def __init__(self, store: RecordStore, settings: FeedSettings, out_dir: Path):
        self.store = store
        self.settings = settings
        self.out_dir = out_dir

    def build(
        self,
        collection: str,
        speakers: dict[str, Speaker] | None = None,
        talks: list[Talk] | None = None,
    ) -> list[Path]:
        """Write every feed of a collection.

        Args:
            collection: Collection folder name
            speakers: Speakers by id (loaded from the store if None)
            talks: Talks of the collection with metadata (loaded if None)

        Returns:
            Paths of the written feeds, aggregate last
        """
        if speakers is None:
            speakers = {s.id: s for s in self.store.iter_speakers()}
        if talks is None:
            talks = list(self.store.iter_talks(collection))

        artist = Artist.model_validate(self.store.load_scope(collection, "artist"))
        album = Album.model_validate(self.store.load_scope(collection, "album"))
        collection_label = album.label or humanize_slug(collection).title()

        groups = group_by_period(talks)
        folders = list(self.store.period_folders(collection))
        folders += [p for p in groups if p not in folders]

        paths = []
        for folder in folders:
            paths.append(
                self._build_period(collection, folder, groups.get(folder, []), speakers, collection_label)
            )

        items = [talk_to_item(t, speakers, self.settings, collection_label) for t in talks]
        options = FeedOptions(
            title=collection_label,
            description=collection_label,
            image=artist.logo or self.settings.default_image_url,
            link=artist.website or "",
            feed_path=f"{collection}/{AGGREGATE_NAME}.rss",
            base_url=self.settings.base_url,
            author=artist.name or "",
            copyright=artist.copyright or "",
            owner_email=self.settings.owner_email,
            category=self.settings.category,
        )
        paths.append(write_feed(self.out_dir, options.feed_path, build_rss_feed(items, options)))
        logger.info(f"Generated aggregate feed with {len(items)} items")
        return paths

    def _build_period(
        self,
        collection: str,
        folder: str,
        talks: list[Talk],
        speakers: dict[str, Speaker],
        collection_label: str,
    ) -> Path:
        metadata = self.store.resolver.resolve_folder(f"{collection}/{folder}")
        title = metadata.season.label or folder

        items = [talk_to_item(t, speakers, self.settings, collection_label) for t in talks]
        options = FeedOptions(
            title=title,
            description=metadata.season.description or title,
            image=talk_image(metadata, self.settings.default_image_url),
            link=metadata.artist.website or "",
            feed_path=f"{collection}/{folder}.rss",
            base_url=self.settings.base_url,
            author=metadata.artist.name or "",
            copyright=metadata.artist.copyright or "",
            owner_email=self.settings.owner_email,
            category=self.settings.category,
        )
        return write_feed(self.out_dir, options.feed_path, build_rss_feed(items, options))
