"""Utility functions and helpers for Metacast."""

from metacast.utils.errors import (
    ConfigError,
    FeedError,
    FetchError,
    IngestError,
    InvalidConfigError,
    MetacastError,
    MissingContentError,
    StoreError,
)
from metacast.utils.text import normalize_title, slugify

__all__ = [
    # Errors
    "MetacastError",
    "ConfigError",
    "InvalidConfigError",
    "StoreError",
    "IngestError",
    "FetchError",
    "MissingContentError",
    "FeedError",
    # Text
    "slugify",
    "normalize_title",
]
