"""Configuration schema models using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
FailedTalkPolicy = Literal["compact", "reserve"]

DEFAULT_SESSION_LABELS = {
    1: "Saturday Morning Session",
    2: "Saturday Afternoon Session",
    3: "Saturday Evening Session",
    4: "Sunday Morning Session",
    5: "Sunday Afternoon Session",
}

DEFAULT_DISCLAIMER = (
    "This meta-podcast is not published, maintained, or endorsed by The Church of "
    "Jesus Christ of Latter-Day Saints, but instead by a faithful member of the Church "
    "who is seeking ways to make consuming Gospel content easier for everyone. If there "
    "are any mistakes, please report them on GitHub and we'll try to get them fixed."
)


class IngestConfig(BaseModel):
    """Content ingestion configuration."""

    base_url: str = (
        "https://www.churchofjesuschrist.org/study/api/v3/language-pages/type/content"
        "?lang=eng&uri="
    )
    collection: str = "general-conference"
    id_prefix: str = "gc"
    request_delay_seconds: float = Field(default=1.0, ge=0)
    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = "metacast/0.1 (+https://github.com/joeskeen/gospel-metacasts)"

    # What a failed talk fetch does to the sequence counter:
    # compact = next talk takes the slot, reserve = slot stays empty
    failed_talk_policy: FailedTalkPolicy = "compact"

    honorifics: list[str] = Field(
        default_factory=lambda: ["Sister", "Elder", "President", "Bishop", "Brother"]
    )
    session_labels: dict[int, str] = Field(
        default_factory=lambda: dict(DEFAULT_SESSION_LABELS)
    )


class FeedSettings(BaseModel):
    """Feed synthesis configuration."""

    base_url: str = "https://joeskeen.github.io/gospel-metacasts"
    default_image: str = "assets/logo.png"
    owner_email: str = "no-reply@example.com"
    category: str = "Religion & Spirituality"
    disclaimer: str = DEFAULT_DISCLAIMER

    # Used by per-speaker feeds, which have no artist scope
    people_link: str = "https://www.churchofjesuschrist.org"
    people_copyright: str = "© 2024 Intellectual Reserve, Inc. All rights reserved."

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Store base URL without trailing slash."""
        return v.rstrip("/")

    @property
    def default_image_url(self) -> str:
        """Absolute URL of the fallback artwork."""
        return f"{self.base_url}/{self.default_image.lstrip('/')}"


class ProbeConfig(BaseModel):
    """Audio duration probing configuration."""

    timeout_seconds: float = Field(default=60.0, gt=0)
    max_attempts: int = Field(default=2, ge=1)


class GlobalConfig(BaseModel):
    """Global Metacast configuration."""

    version: str = "1"
    log_level: LogLevel = "INFO"
    data_dir: Path = Field(default=Path("data"))
    out_dir: Path = Field(default=Path("out"))

    ingest: IngestConfig = Field(default_factory=IngestConfig)
    feeds: FeedSettings = Field(default_factory=FeedSettings)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
