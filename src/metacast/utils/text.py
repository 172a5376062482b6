"""Identifier and text normalization helpers."""

import re

_NON_WORD = re.compile(r"\W+", re.ASCII)


def slugify(text: str) -> str:
    """Turn a display string into a record identifier.

    Lower-cases the text and collapses every run of non-word characters
    into a single hyphen. Leading and trailing hyphens are kept so that
    identifiers stay stable across runs against already-written records.

    Args:
        text: Display string, e.g. a speaker name

    Returns:
        Slug such as ``jeffrey-r-holland``

    Example:
        >>> slugify("Jeffrey R. Holland")
        'jeffrey-r-holland'
    """
    return _NON_WORD.sub("-", text.strip().lower())


def normalize_title(title: str) -> str:
    """Slug form of a talk title used in talk identifiers."""
    return _NON_WORD.sub("-", title.lower())


def humanize_slug(slug: str) -> str:
    """Best-effort display name from a slug (``a-b`` -> ``a b``)."""
    return slug.replace("-", " ")
