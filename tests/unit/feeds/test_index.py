"""Tests for the discovery index."""

import json
from pathlib import Path

from metacast.feeds.builder import build_rss_feed, write_feed
from metacast.feeds.index import INDEX_FILENAME, read_feed_image, update_available_feeds
from metacast.feeds.models import FeedOptions


def write(out: Path, feed_path: str, image: str) -> None:
    options = FeedOptions(
        title="t", description="d", image=image, feed_path=feed_path, base_url="https://example.com"
    )
    write_feed(out, feed_path, build_rss_feed([], options))


class TestUpdateAvailableFeeds:
    """Tests for update_available_feeds()."""

    def test_index_contents(self, tmp_path: Path) -> None:
        """Test every feed is listed with type, name and image, sorted by path."""
        write(tmp_path, "people/jane-doe.rss", "https://img/jd.jpg")
        write(tmp_path, "general-conference/all.rss", "https://img/gc.png")
        write(tmp_path, "general-conference/2025-april.rss", "https://img/apr.png")

        update_available_feeds(tmp_path)

        data = json.loads((tmp_path / INDEX_FILENAME).read_text())
        assert data == {
            "availableFeeds": [
                {
                    "path": "general-conference/2025-april.rss",
                    "type": "general-conference",
                    "name": "2025-april",
                    "image": "https://img/apr.png",
                },
                {
                    "path": "general-conference/all.rss",
                    "type": "general-conference",
                    "name": "all",
                    "image": "https://img/gc.png",
                },
                {
                    "path": "people/jane-doe.rss",
                    "type": "people",
                    "name": "jane-doe",
                    "image": "https://img/jd.jpg",
                },
            ]
        }

    def test_idempotent(self, tmp_path: Path) -> None:
        """Test rebuilding without changes gives identical output."""
        write(tmp_path, "people/jane-doe.rss", "https://img/jd.jpg")

        update_available_feeds(tmp_path)
        first = (tmp_path / INDEX_FILENAME).read_text()
        update_available_feeds(tmp_path)

        assert (tmp_path / INDEX_FILENAME).read_text() == first

    def test_empty_output(self, tmp_path: Path) -> None:
        """Test an empty output folder gives an empty list."""
        entries = update_available_feeds(tmp_path / "out")

        assert entries == []
        assert json.loads((tmp_path / "out" / INDEX_FILENAME).read_text()) == {"availableFeeds": []}

    def test_root_level_feed(self, tmp_path: Path) -> None:
        """Test a feed at the output root has no name."""
        write(tmp_path, "misc.rss", "https://img/x.png")

        [entry] = update_available_feeds(tmp_path)
        assert (entry.type, entry.name) == ("misc", None)


def test_unparseable_feed_has_no_image(tmp_path: Path) -> None:
    """Test broken feed files are indexed without artwork."""
    path = tmp_path / "people" / "broken.rss"
    path.parent.mkdir()
    path.write_text("<rss><channel>")

    assert read_feed_image(path) is None
    [entry] = update_available_feeds(tmp_path)
    assert entry.path == "people/broken.rss"
    assert entry.image is None
