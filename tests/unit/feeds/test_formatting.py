"""Tests for talk to feed item formatting."""

from metacast.config.schema import FeedSettings
from metacast.feeds.formatting import (
    UNKNOWN_SPEAKER,
    describe_talk,
    display_author,
    human_date,
    talk_image,
    talk_to_item,
)
from metacast.store.models import (
    Artist,
    Links,
    ScopedMetadata,
    Season,
    Speaker,
    SpeakerRef,
    SpeakerTitle,
    Talk,
)

SETTINGS = FeedSettings(base_url="https://example.com", disclaimer="Unofficial.")


def make_talk(**overrides) -> Talk:
    fields = {
        "id": "gc-2025-04-01-02-jeffrey-r-holland-our-savior",
        "title": "Our Savior",
        "date": "2025-04-05",
        "session": 1,
        "sequence": 2,
        "links": Links(mp3="https://media.example.com/holland.mp3"),
        "speaker": SpeakerRef(
            id="jeffrey-r-holland",
            title=SpeakerTitle(short="Elder", full="Of the Quorum of the Twelve Apostles"),
        ),
        "metadata": ScopedMetadata(
            season=Season(season=202504, label="April 2025 General Conference", sessions={1: "Saturday Morning Session"})
        ),
    }
    fields.update(overrides)
    return Talk(**fields)


SPEAKERS = {"jeffrey-r-holland": Speaker(id="jeffrey-r-holland", name="Jeffrey R. Holland")}


class TestDisplayAuthor:
    """Tests for display_author()."""

    def test_full(self) -> None:
        """Test short title, name and full title."""
        assert display_author(make_talk(), SPEAKERS) == (
            "Elder Jeffrey R. Holland, Of the Quorum of the Twelve Apostles"
        )

    def test_no_titles(self) -> None:
        """Test absent titles are dropped cleanly."""
        talk = make_talk(speaker=SpeakerRef(id="jeffrey-r-holland"))
        assert display_author(talk, SPEAKERS) == "Jeffrey R. Holland"

    def test_unknown_speaker_record(self) -> None:
        """Test a missing speaker record falls back to the humanized id."""
        talk = make_talk(speaker=SpeakerRef(id="jane-doe", title=SpeakerTitle(short="Sister")))
        assert display_author(talk, SPEAKERS) == "Sister jane doe"

    def test_no_speaker(self) -> None:
        """Test a talk without a speaker."""
        assert display_author(make_talk(speaker=None), SPEAKERS) == UNKNOWN_SPEAKER


def test_human_date() -> None:
    """Test ISO dates are shown in long form."""
    assert human_date("2025-04-05") == "Sat Apr 05 2025"
    assert human_date("sometime") == "sometime"


def test_talk_image_chain() -> None:
    """Test season icon, then artist logo, then the default."""
    assert talk_image(ScopedMetadata(season=Season(icon="s.png"), artist=Artist(logo="a.png")), "d.png") == "s.png"
    assert talk_image(ScopedMetadata(artist=Artist(logo="a.png")), "d.png") == "a.png"
    assert talk_image(ScopedMetadata(), "d.png") == "d.png"


class TestDescribeTalk:
    """Tests for describe_talk()."""

    def test_heading_summary_disclaimer(self) -> None:
        """Test the description blocks are joined by blank lines."""
        talk = make_talk(summary="He lives.")
        text = describe_talk(talk, "Elder Jeffrey R. Holland", SETTINGS, "General Conference")

        assert text == (
            "Our Savior by Elder Jeffrey R. Holland\n"
            "given in Saturday Morning Session of April 2025 General Conference on Sat Apr 05 2025"
            "\n\nHe lives.\n\nUnofficial."
        )

    def test_falls_back_to_season_description(self) -> None:
        """Test season description is used when the talk has no summary."""
        talk = make_talk(metadata=ScopedMetadata(season=Season(description="The 195th Annual")))
        text = describe_talk(talk, "A", SETTINGS, "General Conference")

        assert "given in Session 1 of General Conference" in text
        assert "\n\nThe 195th Annual\n\n" in text


def test_talk_to_item() -> None:
    """Test a talk becomes a complete feed item."""
    feed_item = talk_to_item(make_talk(duration=600), SPEAKERS, SETTINGS, "General Conference")

    assert feed_item.id == "gc-2025-04-01-02-jeffrey-r-holland-our-savior"
    assert feed_item.author == "Elder Jeffrey R. Holland, Of the Quorum of the Twelve Apostles"
    assert feed_item.pub_date == "Sat, 05 Apr 2025 16:10:00 GMT"
    assert feed_item.image == "https://example.com/assets/logo.png"
    assert feed_item.duration == 600
    assert feed_item.enclosure_url == "https://media.example.com/holland.mp3"
    assert feed_item.season == 202504
