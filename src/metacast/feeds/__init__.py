"""Feed synthesis: RSS documents and the discovery index."""

from metacast.feeds.builder import build_rss_feed, write_feed
from metacast.feeds.conference import ConferenceFeedBuilder
from metacast.feeds.dates import generate_pub_date, validate_date
from metacast.feeds.index import IndexEntry, update_available_feeds
from metacast.feeds.models import FeedItem, FeedOptions
from metacast.feeds.people import build_people_feeds

__all__ = [
    "ConferenceFeedBuilder",
    "FeedItem",
    "FeedOptions",
    "IndexEntry",
    "build_people_feeds",
    "build_rss_feed",
    "generate_pub_date",
    "update_available_feeds",
    "validate_date",
    "write_feed",
]
