"""Per-speaker feeds."""

import logging
from pathlib import Path

from metacast.config.schema import FeedSettings
from metacast.feeds.builder import build_rss_feed, write_feed
from metacast.feeds.formatting import talk_to_item
from metacast.feeds.models import FeedOptions
from metacast.store.models import Speaker, Talk
from metacast.store.records import RecordStore
from metacast.utils.text import humanize_slug

logger = logging.getLogger(__name__)

PEOPLE_DIR = "people"


def build_people_feeds(
    store: RecordStore,
    settings: FeedSettings,
    out_dir: Path,
    talks: list[Talk] | None = None,
) -> list[Path]:
    """Write ``people/{id}.rss`` for every speaker with at least one talk.

    Args:
        store: Record store
        settings: Feed settings
        out_dir: Output root
        talks: Talks with metadata (all talks in the store if None)

    Returns:
        Paths of the written feeds
    """
    if talks is None:
        talks = list(store.iter_talks())

    speakers: dict[str, Speaker] = {s.id: s for s in store.iter_speakers()}
    by_speaker: dict[str, list[Talk]] = {}
    for talk in talks:
        if talk.speaker is not None and talk.speaker.id in speakers:
            by_speaker.setdefault(talk.speaker.id, []).append(talk)

    paths = []
    for speaker_id, speaker_talks in by_speaker.items():
        speaker = speakers[speaker_id]
        name = speaker.name or humanize_slug(speaker_id)

        items = [
            talk_to_item(t, speakers, settings, humanize_slug(t.source or "").title())
            for t in speaker_talks
        ]
        options = FeedOptions(
            title=f"Talks by {name}",
            description=f"Talks and messages by {name}",
            image=speaker.photo or settings.default_image_url,
            link=speaker.website or settings.people_link,
            feed_path=f"{PEOPLE_DIR}/{speaker_id}.rss",
            base_url=settings.base_url,
            author=name,
            copyright=settings.people_copyright,
            owner_email=settings.owner_email,
            category=settings.category,
        )
        paths.append(write_feed(out_dir, options.feed_path, build_rss_feed(items, options)))

    logger.info(f"Generated {len(paths)} speaker feeds")
    return paths
