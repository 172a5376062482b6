"""Speaker identity: author-line parsing and non-destructive merges."""

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from metacast.store.models import Speaker
from metacast.store.records import RecordStore
from metacast.utils.text import slugify

logger = logging.getLogger(__name__)

BYLINE_PREFIX = re.compile(r"^(Presented )?By ", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedAuthor:
    """Speaker fields read from a talk's author block."""

    id: str
    name: str
    short_title: str | None = None
    full_title: str | None = None


def parse_author(lines: Sequence[str], honorifics: Iterable[str]) -> ParsedAuthor | None:
    """Parse an author block (``[rawName, titleLine]``).

    A leading "By " or "Presented By " is dropped. When the first word is a
    known honorific it becomes the short title and the rest is the name;
    otherwise the whole remainder is the name.

    Args:
        lines: Author lines in page order
        honorifics: Words treated as short titles (matched case-insensitively)

    Returns:
        ParsedAuthor, or None when there is no author line (a session marker)

    Example:
        >>> parse_author(["By Elder Jeffrey R. Holland", "Of the Quorum"], ["Elder"])
        ParsedAuthor(id='jeffrey-r-holland', name='Jeffrey R. Holland', short_title='Elder', full_title='Of the Quorum')
    """
    if not lines:
        return None

    raw = BYLINE_PREFIX.sub("", lines[0].strip()).strip()
    tokens = raw.split()
    if not tokens:
        return None

    known = {h.casefold() for h in honorifics}
    short_title = None
    if len(tokens) > 1 and tokens[0].casefold() in known:
        short_title = tokens[0]
        tokens = tokens[1:]

    name = " ".join(tokens)
    full_title = lines[1].strip() if len(lines) > 1 and lines[1].strip() else None

    return ParsedAuthor(
        id=slugify(name),
        name=name,
        short_title=short_title,
        full_title=full_title,
    )


class SpeakerResolver:
    """Merge observed speakers into the store without losing enrichment."""

    def __init__(self, store: RecordStore):
        self.store = store

    def merge(self, speaker_id: str, name: str) -> Speaker:
        """Overlay ``{id, name}`` on the stored speaker and persist.

        Every other key already on disk (photo, website, bio, ...) is kept
        verbatim. Calling this repeatedly with the same input is a no-op
        after the first call.

        Args:
            speaker_id: Canonical speaker id
            name: Canonical display name

        Returns:
            The merged speaker
        """
        existing = self.store.get(speaker_id, namespace="people") or {}
        merged = {**existing, "id": speaker_id, "name": name}

        if merged != existing:
            self.store.put(speaker_id, merged, namespace="people")
            logger.debug(f"Saved speaker {speaker_id}")

        return Speaker.model_validate(merged)
