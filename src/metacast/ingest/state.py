"""Session/sequence state machine for walking a conference's talk pages.

Talk pages arrive in navigation order. A page without an author block is a
session marker (an opening hymn, a session intro): it starts the next
session and produces no record. Every other page becomes a talk numbered
with the current ``(session, sequence)``.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from metacast.config.schema import FailedTalkPolicy
from metacast.ingest.extract import TalkPage
from metacast.ingest.speakers import ParsedAuthor, parse_author


@dataclass(frozen=True)
class IngestState:
    """Position within a conference; session 0 means no marker seen yet."""

    session_index: int = 0
    sequence: int = 1


@dataclass(frozen=True)
class TalkDraft:
    """A talk page that yielded a speaker, with its assigned position."""

    session: int
    sequence: int
    page: TalkPage
    author: ParsedAuthor


def advance(
    state: IngestState,
    page: TalkPage,
    honorifics: Iterable[str],
) -> tuple[IngestState, TalkDraft | None]:
    """Apply one talk page to the state.

    Args:
        state: Current position
        page: Extracted talk page
        honorifics: Words treated as short titles when parsing the author

    Returns:
        ``(new_state, draft)``; draft is None for a session marker
    """
    author = parse_author(page.author_lines, honorifics)
    if author is None:
        return IngestState(session_index=state.session_index + 1, sequence=1), None

    draft = TalkDraft(
        session=state.session_index,
        sequence=state.sequence,
        page=page,
        author=author,
    )
    return IngestState(session_index=state.session_index, sequence=state.sequence + 1), draft


def skip(state: IngestState, policy: FailedTalkPolicy) -> IngestState:
    """State after a talk page could not be fetched.

    With ``compact`` the next talk takes the failed talk's sequence number.
    With ``reserve`` the number is consumed and left unused, so later ids
    match what a successful run would have produced (unless the failed
    page was a session marker, which cannot be known).
    """
    if policy == "reserve":
        return IngestState(session_index=state.session_index, sequence=state.sequence + 1)
    return state
