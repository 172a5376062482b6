"""Turn stored talks into formatted feed items."""

from collections.abc import Mapping
from datetime import date

from jinja2 import Template

from metacast.config.schema import FeedSettings
from metacast.feeds.dates import generate_pub_date
from metacast.feeds.models import FeedItem
from metacast.store.models import ScopedMetadata, Speaker, Talk
from metacast.utils.text import humanize_slug

UNKNOWN_SPEAKER = "Unknown Speaker"

HEADING_TEMPLATE = Template(
    "{{ title }} by {{ author }}\n"
    "given in {{ session_label }} of {{ label }} on {{ date }}"
)


def speaker_name(talk: Talk, speakers: Mapping[str, Speaker]) -> str:
    """Canonical name of a talk's speaker.

    Falls back to the speaker id with hyphens as spaces when the speaker
    record is missing, and to "Unknown Speaker" when the talk has no id.
    """
    if talk.speaker is None or not talk.speaker.id:
        return UNKNOWN_SPEAKER

    speaker = speakers.get(talk.speaker.id)
    if speaker is not None and speaker.name:
        return speaker.name
    return humanize_slug(talk.speaker.id)


def display_author(talk: Talk, speakers: Mapping[str, Speaker]) -> str:
    """``"{short} {name}, {full}"`` with absent parts dropped.

    Example:
        "Elder Jeffrey R. Holland, Of the Quorum of the Twelve Apostles"
    """
    title = talk.speaker.title if talk.speaker is not None else None
    short = title.short if title else None
    full = title.full if title else None

    head = " ".join(part for part in (short, speaker_name(talk, speakers)) if part)
    return f"{head}, {full}".strip() if full else head.strip()


def human_date(value: str) -> str:
    """``2025-04-05`` -> ``Sat Apr 05 2025``; other strings are returned as-is."""
    try:
        return date.fromisoformat(value).strftime("%a %b %d %Y")
    except ValueError:
        return value


def talk_image(metadata: ScopedMetadata, default_image: str) -> str:
    """Artwork for a talk: season icon, else artist logo, else the default."""
    return metadata.season.icon or metadata.artist.logo or default_image


def describe_talk(talk: Talk, author: str, settings: FeedSettings, collection_label: str) -> str:
    """Item description: who/when line, long-form text, disclaimer."""
    season = talk.metadata.season
    label = season.label or collection_label
    heading = HEADING_TEMPLATE.render(
        title=talk.title,
        author=author,
        session_label=season.session_label(talk.session),
        label=label,
        date=human_date(talk.date),
    )
    long_form = talk.summary or season.description
    return "\n\n".join(part for part in (heading, long_form, settings.disclaimer) if part)


def talk_to_item(
    talk: Talk,
    speakers: Mapping[str, Speaker],
    settings: FeedSettings,
    collection_label: str,
) -> FeedItem:
    """Build the feed item for one talk.

    Args:
        talk: Talk with resolved metadata
        speakers: Speakers by id
        settings: Feed settings (disclaimer, default image)
        collection_label: Label used when the talk's season has none

    Returns:
        FeedItem
    """
    author = display_author(talk, speakers)
    return FeedItem(
        id=talk.id,
        title=talk.title,
        description=describe_talk(talk, author, settings, collection_label),
        pub_date=generate_pub_date(talk.date, talk.session, talk.sequence),
        author=author,
        image=talk_image(talk.metadata, settings.default_image_url),
        duration=talk.duration,
        enclosure_url=talk.links.mp3,
        season=talk.metadata.season.season,
    )
