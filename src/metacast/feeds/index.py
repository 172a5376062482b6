"""Discovery index of generated feeds for the front-end."""

import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from pydantic import BaseModel

from metacast.feeds.builder import ITUNES_NS

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.json"


class IndexEntry(BaseModel):
    """One available feed."""

    path: str  # relative to the output root, e.g. "general-conference/all.rss"
    type: str  # collection kind, e.g. "general-conference" or "people"
    name: str | None  # collection instance, e.g. "2025-april"
    image: str | None


def read_feed_image(path: Path) -> str | None:
    """Channel artwork (``itunes:image@href``) of a feed file."""
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        logger.warning(f"Cannot parse {path}: {e}")
        return None

    image = root.find(f"channel/{{{ITUNES_NS}}}image")
    return image.get("href") if image is not None else None


def scan_feeds(out_dir: Path) -> list[IndexEntry]:
    """Describe every ``*.rss`` file under ``out_dir``, sorted by path."""
    entries = []
    for path in sorted(out_dir.rglob("*.rss")):
        rel = path.relative_to(out_dir).as_posix()
        type_, _, name = rel.removesuffix(".rss").partition("/")
        entries.append(
            IndexEntry(path=rel, type=type_, name=name or None, image=read_feed_image(path))
        )
    return entries


def update_available_feeds(out_dir: Path) -> list[IndexEntry]:
    """Rebuild ``index.json`` from the feeds currently on disk.

    Safe to run any number of times; the result depends only on the files
    present.

    Args:
        out_dir: Output root holding the feeds

    Returns:
        The written entries
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    entries = scan_feeds(out_dir)
    document = {"availableFeeds": [e.model_dump() for e in entries]}
    (out_dir / INDEX_FILENAME).write_text(
        json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    logger.info(f"{len(entries)} available feeds")
    return entries
