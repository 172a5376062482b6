"""Shared fixtures: a temporary record store and content API payloads."""

from pathlib import Path
from typing import Any

import pytest

from metacast.store.records import RecordStore


@pytest.fixture
def store(tmp_path: Path) -> RecordStore:
    """Empty record store under a temporary directory."""
    return RecordStore.open(tmp_path / "data")


def landing_payload(sessions: list[list[str]]) -> dict[str, Any]:
    """Conference landing page whose nav lists ``sessions`` of talk hrefs."""
    items = []
    for i, hrefs in enumerate(sessions, start=1):
        inner = "".join(f'<li><a href="{href}?lang=eng">Talk</a></li>' for href in hrefs)
        items.append(f"<li><p>Session {i}</p><ul>{inner}</ul></li>")
    body = f"<nav><ul>{''.join(items)}</ul></nav>"
    return {"content": {"body": body}}


def talk_payload(
    title: str = "Sample Talk",
    author: list[str] | None = None,
    summary: str | None = None,
    audio: str | None = None,
) -> dict[str, Any]:
    """Talk page payload; ``author=None`` makes a session marker."""
    byline = ""
    if author:
        byline = "<div>" + "".join(f"<p>{line}</p>" for line in author) + "</div>"
    kicker = f"<p>{summary}</p>" if summary else ""
    payload: dict[str, Any] = {
        "content": {"body": f"<header><h1>{title}</h1>{byline}{kicker}</header><div>text</div>"}
    }
    if audio:
        payload["meta"] = {"audio": [{"mediaUrl": audio}]}
    return payload


@pytest.fixture
def make_landing():
    """Factory for landing page payloads."""
    return landing_payload


@pytest.fixture
def make_talk():
    """Factory for talk page payloads."""
    return talk_payload
