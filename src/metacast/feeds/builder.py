"""RSS 2.0 podcast document builder."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from metacast.feeds.dates import validate_date
from metacast.feeds.models import FeedItem, FeedOptions
from metacast.utils.errors import FeedError

ITUNES_NS = "http://www.itunes.com/dtds/podcast-1.0.dtd"
ATOM_NS = "http://www.w3.org/2005/Atom"

logger = logging.getLogger(__name__)


def _text(parent: ET.Element, tag: str, value: str | None) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = value or ""
    return element


def build_rss_feed(items: list[FeedItem], options: FeedOptions) -> str:
    """Build an RSS document with iTunes podcast tags.

    Items are emitted in the order given. An item without an enclosure URL
    is still emitted, just without an ``<enclosure>``; an item without a
    duration gets an empty ``<itunes:duration/>``.

    Args:
        items: Formatted feed items
        options: Channel settings

    Returns:
        Pretty-printed UTF-8 XML document
    """
    rss = ET.Element("rss")
    rss.set("version", "2.0")
    rss.set("xmlns:itunes", ITUNES_NS)
    rss.set("xmlns:atom", ATOM_NS)

    channel = ET.SubElement(rss, "channel")
    _text(channel, "title", options.title)
    ET.SubElement(channel, "itunes:image", {"href": options.image})
    _text(channel, "description", options.description)
    _text(channel, "link", options.link)
    ET.SubElement(
        channel,
        "atom:link",
        {"href": options.self_url, "rel": "self", "type": "application/rss+xml"},
    )

    owner = ET.SubElement(channel, "itunes:owner")
    _text(owner, "itunes:name", options.author)
    _text(owner, "itunes:email", options.owner_email)

    ET.SubElement(channel, "itunes:category", {"text": options.category})
    _text(channel, "itunes:explicit", "false")
    _text(channel, "language", "en")
    _text(channel, "itunes:author", options.author)
    _text(channel, "copyright", options.copyright)

    for entry in items:
        item = ET.SubElement(channel, "item")
        _text(item, "title", entry.title)
        ET.SubElement(item, "itunes:image", {"href": entry.image or options.image})
        _text(item, "itunes:duration", str(entry.duration) if entry.duration is not None else "")
        _text(item, "description", entry.description)
        _text(item, "pubDate", validate_date(entry.pub_date))
        _text(item, "guid", entry.id).set("isPermaLink", "false")
        _text(item, "itunes:author", entry.author)

        if entry.season is not None and entry.season != "":
            _text(item, "itunes:season", str(entry.season))

        if entry.enclosure_url:
            ET.SubElement(
                item,
                "enclosure",
                {"url": entry.enclosure_url, "type": "audio/mpeg", "length": "0"},
            )

    ET.indent(rss, space="  ")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(rss, encoding="unicode")


def write_feed(out_dir: Path, feed_path: str, document: str) -> Path:
    """Write a feed document under ``out_dir`` and return its path.

    Raises:
        FeedError: If the file cannot be written
    """
    path = out_dir / feed_path
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document, encoding="utf-8")
    except OSError as e:
        raise FeedError(f"Cannot write feed {path}: {e}") from e
    logger.info(f"Generated {path}")
    return path
