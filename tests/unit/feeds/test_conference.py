"""Tests for per-conference and aggregate feeds."""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from metacast.config.schema import FeedSettings
from metacast.feeds.builder import ITUNES_NS
from metacast.feeds.conference import ConferenceFeedBuilder, group_by_period
from metacast.store.models import Links, Speaker, SpeakerRef, Talk
from metacast.store.records import RecordStore

IT = f"{{{ITUNES_NS}}}"
SETTINGS = FeedSettings(base_url="https://example.com/feeds")


def add_talk(store: RecordStore, period: str, talk_id: str, session: int, sequence: int, **extra) -> None:
    store.put_talk(
        "general-conference",
        period,
        Talk(
            id=talk_id,
            title=talk_id.title(),
            date="2025-04-05",
            session=session,
            sequence=sequence,
            links=Links(mp3=f"https://media.example.com/{talk_id}.mp3"),
            speaker=SpeakerRef(id="jane-doe"),
            **extra,
        ),
    )


@pytest.fixture
def populated(store: RecordStore) -> RecordStore:
    store.put_speaker(Speaker(id="jane-doe", name="Jane Doe"))
    store.put_scope(
        "general-conference",
        "artist",
        {"name": "The Church", "logo": "https://img/church.png", "website": "https://church.org"},
    )
    store.put_scope("general-conference", "album", {"label": "General Conference"})
    store.put_scope(
        "general-conference/2025-april",
        "season",
        {"season": 202504, "label": "April 2025 General Conference", "icon": "https://img/apr.png"},
    )
    add_talk(store, "2025-april", "b-talk", 1, 2)
    add_talk(store, "2025-april", "a-talk", 1, 1)
    add_talk(store, "2024-october", "c-talk", 1, 1, duration=300)
    return store


def channel(path: Path) -> ET.Element:
    return ET.parse(path).getroot().find("channel")


class TestConferenceFeedBuilder:
    """Tests for ConferenceFeedBuilder.build()."""

    def test_one_feed_per_period_plus_aggregate(self, populated: RecordStore, tmp_path: Path) -> None:
        """Test period feeds are written in folder order with the aggregate last."""
        out = tmp_path / "out"
        paths = ConferenceFeedBuilder(populated, SETTINGS, out).build("general-conference")

        assert [p.relative_to(out).as_posix() for p in paths] == [
            "general-conference/2024-october.rss",
            "general-conference/2025-april.rss",
            "general-conference/all.rss",
        ]

    def test_period_channel_uses_season(self, populated: RecordStore, tmp_path: Path) -> None:
        """Test season label and icon, inherited artist."""
        ConferenceFeedBuilder(populated, SETTINGS, tmp_path).build("general-conference")
        april = channel(tmp_path / "general-conference" / "2025-april.rss")

        assert april.findtext("title") == "April 2025 General Conference"
        assert april.find(f"{IT}image").get("href") == "https://img/apr.png"
        assert april.findtext("link") == "https://church.org"
        assert april.findtext(f"{IT}author") == "The Church"
        assert [i.findtext("guid") for i in april.findall("item")] == ["a-talk", "b-talk"]

    def test_period_without_season(self, populated: RecordStore, tmp_path: Path) -> None:
        """Test a period without a season record falls back to folder name and artist logo."""
        ConferenceFeedBuilder(populated, SETTINGS, tmp_path).build("general-conference")
        october = channel(tmp_path / "general-conference" / "2024-october.rss")

        assert october.findtext("title") == "2024-october"
        assert october.find(f"{IT}image").get("href") == "https://img/church.png"
        [item] = october.findall("item")
        assert item.findtext(f"{IT}duration") == "300"
        assert item.findtext(f"{IT}author") == "Jane Doe"

    def test_aggregate(self, populated: RecordStore, tmp_path: Path) -> None:
        """Test the aggregate feed holds every talk under the album label."""
        ConferenceFeedBuilder(populated, SETTINGS, tmp_path).build("general-conference")
        aggregate = channel(tmp_path / "general-conference" / "all.rss")

        assert aggregate.findtext("title") == "General Conference"
        assert aggregate.find(f"{IT}image").get("href") == "https://img/church.png"
        assert len(aggregate.findall("item")) == 3

    def test_empty_collection(self, store: RecordStore, tmp_path: Path) -> None:
        """Test an empty collection still yields a valid aggregate with defaults."""
        paths = ConferenceFeedBuilder(store, SETTINGS, tmp_path).build("general-conference")

        assert paths == [tmp_path / "general-conference" / "all.rss"]
        aggregate = channel(paths[0])
        assert aggregate.findtext("title") == "General Conference"
        assert aggregate.find(f"{IT}image").get("href") == "https://example.com/feeds/assets/logo.png"
        assert aggregate.findall("item") == []

    def test_talk_without_audio_kept(self, store: RecordStore, tmp_path: Path) -> None:
        """Test talks missing an audio link are listed without an enclosure."""
        store.put_talk(
            "general-conference",
            "2025-april",
            Talk(id="silent", title="Silent", date="2025-04-05", session=1, sequence=1),
        )

        ConferenceFeedBuilder(store, SETTINGS, tmp_path).build("general-conference")
        [item] = channel(tmp_path / "general-conference" / "2025-april.rss").findall("item")

        assert item.findtext(f"{IT}author") == "Unknown Speaker"
        assert item.find("enclosure") is None


def test_group_by_period() -> None:
    """Test talks are grouped by folder, ignoring talks without one."""
    talks = [
        Talk(id="a", title="A", date="", session=1, sequence=1, period="2025-april"),
        Talk(id="b", title="B", date="", session=1, sequence=1, period="2024-october"),
        Talk(id="c", title="C", date="", session=1, sequence=2, period="2025-april"),
        Talk(id="d", title="D", date="", session=1, sequence=1),
    ]

    groups = group_by_period(talks)

    assert {k: [t.id for t in v] for k, v in groups.items()} == {
        "2025-april": ["a", "c"],
        "2024-october": ["b"],
    }
