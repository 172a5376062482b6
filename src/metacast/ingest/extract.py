"""Field extraction from content API payloads.

Every lookup returns either ``Found(value)`` or ``Missing(path)`` so that
callers handle absent fields as an explicit branch. Which absences are
expected (a session marker has no author block) and which are data-quality
problems (a talk without a title) is decided by the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    """A field that was present."""

    value: T


@dataclass(frozen=True)
class Missing:
    """A field that was absent; ``path`` names where it was looked for."""

    path: str


def json_field(data: Any, *path: str | int) -> Found[Any] | Missing:
    """Walk nested dicts/lists along ``path``.

    Example:
        >>> json_field({"meta": {"audio": [{"mediaUrl": "u"}]}}, "meta", "audio", 0, "mediaUrl")
        Found(value='u')
    """
    current = data
    walked: list[str] = []
    for step in path:
        walked.append(str(step))
        try:
            current = current[step]
        except (KeyError, IndexError, TypeError):
            return Missing(".".join(walked))
        if current is None:
            return Missing(".".join(walked))
    return Found(current)


def parse_html(body: str) -> BeautifulSoup:
    """Parse an HTML fragment."""
    return BeautifulSoup(body, "html.parser")


def element_text(element: Tag) -> str:
    """Visible text of an element with whitespace collapsed."""
    return " ".join(element.get_text(" ").split())


def clean_link(href: str) -> str:
    """Turn a navigation href into a content API uri.

    Drops the query string and the ``/study`` prefix.

    Example:
        >>> clean_link("/study/general-conference/2025/04/11holland?lang=eng")
        '/general-conference/2025/04/11holland'
    """
    return href.split("?")[0].replace("/study", "", 1)


def extract_talk_links(body: str) -> list[str]:
    """Flatten the conference navigation into talk uris, in document order.

    The navigation is a two-level list: outer items are sessions, inner
    items are talks. Outer items without an inner list are not talks and
    are skipped.

    Args:
        body: HTML body of the conference landing page

    Returns:
        Cleaned talk uris (may be empty)
    """
    soup = parse_html(body)
    nav = soup.find("nav")
    if nav is None:
        logger.warning("Landing page has no <nav>; no talks found")
        return []

    outer = nav.find("ul", recursive=False)
    if outer is None:
        logger.warning("Landing page <nav> has no list; no talks found")
        return []

    links = []
    for session_item in outer.find_all("li", recursive=False):
        inner = session_item.find("ul", recursive=False)
        if inner is None:
            continue
        for talk_item in inner.find_all("li", recursive=False):
            anchor = talk_item.find("a", href=True)
            if anchor is None:
                continue
            links.append(clean_link(anchor["href"]))
    return links


@dataclass
class TalkPage:
    """Fields extracted from one talk page."""

    uri: str
    title: Found[str] | Missing
    author_lines: list[str] = field(default_factory=list)
    summary: Found[str] | Missing = Missing("header.p")
    audio_url: Found[str] | Missing = Missing("meta.audio.0.mediaUrl")


def parse_talk_page(uri: str, payload: dict[str, Any]) -> TalkPage:
    """Extract title, author block, summary and audio URL from a talk payload.

    Args:
        uri: Content uri the payload was fetched from
        payload: Decoded JSON from the content API

    Returns:
        TalkPage; ``author_lines`` is empty for session markers
    """
    audio = json_field(payload, "meta", "audio", 0, "mediaUrl")
    body = json_field(payload, "content", "body")
    if isinstance(body, Missing):
        return TalkPage(uri=uri, title=Missing(body.path), audio_url=audio)

    header = parse_html(body.value).find("header")
    if header is None:
        return TalkPage(uri=uri, title=Missing("header"), audio_url=audio)

    h1 = header.find("h1")
    heading = element_text(h1) if h1 else ""
    title: Found[str] | Missing = Found(heading) if heading else Missing("header.h1")

    author_lines = []
    byline = header.find("div", recursive=False)
    if byline is not None:
        author_lines = [element_text(p) for p in byline.find_all("p", recursive=False)]

    kicker = header.find("p", recursive=False)
    summary: Found[str] | Missing = (
        Found(element_text(kicker)) if kicker else Missing("header.p")
    )

    return TalkPage(
        uri=uri,
        title=title,
        author_lines=author_lines,
        summary=summary,
        audio_url=audio,
    )
