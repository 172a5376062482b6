"""Conference ingestion pipeline.

Fetches a conference landing page, persists its season record, then walks
the talk pages strictly one at a time in navigation order, writing a talk
record (and merging its speaker) for every page that names a speaker.
"""

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from pydantic import ValidationError

from metacast.config.schema import IngestConfig
from metacast.ingest.client import ContentClient
from metacast.ingest.extract import Found, Missing, extract_talk_links, json_field, parse_talk_page
from metacast.ingest.speakers import SpeakerResolver
from metacast.ingest.state import IngestState, TalkDraft, advance, skip
from metacast.store.metadata import overlay
from metacast.store.models import Links, Season, SpeakerRef, SpeakerTitle, Talk
from metacast.store.records import RecordStore
from metacast.utils.errors import FetchError, MissingContentError, StoreError
from metacast.utils.text import normalize_title
from metacast.utils.throttle import Throttle

logger = logging.getLogger(__name__)


def period_folder(year: int, month: int) -> str:
    """Folder name of a conference, e.g. ``2025-april``."""
    return f"{year}-{calendar.month_name[month].lower()}"


def first_saturday(year: int, month: int) -> date:
    """First Saturday of a month (the usual opening day of a conference)."""
    first = date(year, month, 1)
    return first + timedelta(days=(calendar.SATURDAY - first.weekday()) % 7)


def build_season(
    year: int,
    month: int,
    collection: str,
    session_labels: dict[int, str],
    start_date: date | None = None,
) -> Season:
    """Season record for one conference.

    Args:
        year: Conference year
        month: Conference month (4 or 10 in practice)
        collection: Collection slug, used for the label
        session_labels: Session number to display label
        start_date: Opening day (defaults to the first Saturday of the month)

    Returns:
        Season with ordinal ``YYYYMM``, label, two-day date range and sessions
    """
    start = start_date or first_saturday(year, month)
    label = f"{calendar.month_name[month]} {year} {collection.replace('-', ' ').title()}"
    return Season(
        season=int(f"{year}{month:02d}"),
        label=label,
        start_date=start.isoformat(),
        end_date=(start + timedelta(days=1)).isoformat(),
        sessions=dict(session_labels),
    )


@dataclass
class IngestReport:
    """Outcome of ingesting one conference."""

    period: str
    talks: list[Talk] = field(default_factory=list)
    written: int = 0
    markers: int = 0
    skipped: list[str] = field(default_factory=list)

    @property
    def unchanged(self) -> int:
        """Talks already on disk with nothing to update."""
        return len(self.talks) - self.written


class ConferencePipeline:
    """Ingest conferences from the content API into a record store.

    Example:
        >>> pipeline = ConferencePipeline(store, client, IngestConfig())
        >>> report = pipeline.run(2025, 4)
        >>> report.written
        34
    """

    def __init__(
        self,
        store: RecordStore,
        client: ContentClient,
        config: IngestConfig,
        throttle: Throttle | None = None,
    ):
        """Initialize pipeline.

        Args:
            store: Record store to write into
            client: Content API client
            config: Ingestion settings
            throttle: Spacing between talk page requests
                (default: config.request_delay_seconds)
        """
        self.store = store
        self.client = client
        self.config = config
        self.throttle = throttle or Throttle(config.request_delay_seconds)
        self.speakers = SpeakerResolver(store)

    def conference_uri(self, year: int, month: int) -> str:
        """Content uri of a conference landing page."""
        return f"/{self.config.collection}/{year}/{month:02d}"

    def run(self, year: int, month: int, start_date: date | None = None) -> IngestReport:
        """Ingest one conference.

        Args:
            year: Conference year
            month: Conference month
            start_date: Opening day override

        Returns:
            IngestReport for the period

        Raises:
            FetchError: If the landing page cannot be fetched
            MissingContentError: If the landing page has no body
        """
        period = period_folder(year, month)
        folder = f"{self.config.collection}/{period}"
        report = IngestReport(period=period)

        landing = self.client.fetch(self.conference_uri(year, month))
        body = json_field(landing, "content", "body")
        if isinstance(body, Missing):
            raise MissingContentError(
                f"Landing page for {period} has no {body.path}"
            )

        links = extract_talk_links(body.value)
        logger.info(f"{period}: {len(links)} talk pages")

        season = build_season(
            year, month, self.config.collection, self.config.session_labels, start_date
        )
        season = self._save_season(folder, season, keep_dates=start_date is None)

        state = IngestState()
        for uri in links:
            self.throttle.wait()

            try:
                payload = self.client.fetch(uri)
            except FetchError as e:
                logger.warning(f"Skipping {uri}: {e}")
                report.skipped.append(uri)
                state = skip(state, self.config.failed_talk_policy)
                continue

            page = parse_talk_page(uri, payload)
            state, draft = advance(state, page, self.config.honorifics)

            if draft is None:
                report.markers += 1
                logger.debug(f"Session marker at {uri}; now session {state.session_index}")
                continue

            talk = self._build_talk(draft, year, month, season)
            self.speakers.merge(draft.author.id, draft.author.name)

            if self.store.upsert_talk(self.config.collection, period, talk):
                report.written += 1
                logger.info(f"wrote {folder}/{talk.id}")
            report.talks.append(talk)

        return report

    def _save_season(self, folder: str, season: Season, keep_dates: bool) -> Season:
        """Merge the computed season into the stored one and return the result.

        Populated keys on disk win, so curated labels, sessions and dates
        survive a re-run. An explicit start date replaces the stored range.
        """
        existing = {k: v for k, v in self.store.load_scope(folder, "season").items() if v is not None}
        if not keep_dates:
            existing.pop("startDate", None)
            existing.pop("endDate", None)

        document = overlay(season.to_document(), existing)
        try:
            merged = Season.model_validate(document)
        except ValidationError as e:
            raise StoreError(f"Invalid season record in {folder}: {e}") from e

        self.store.put_scope(folder, "season", document)
        return merged

    def _build_talk(self, draft: TalkDraft, year: int, month: int, season: Season) -> Talk:
        page = draft.page
        author = draft.author

        if isinstance(page.title, Found):
            title = page.title.value
        else:
            logger.warning(f"Talk page {page.uri} has no title ({page.title.path})")
            title = ""

        talk_id = "-".join(
            [
                self.config.id_prefix,
                str(year),
                f"{month:02d}",
                f"{draft.session:02d}",
                f"{draft.sequence:02d}",
                author.id,
                normalize_title(title),
            ]
        )

        return Talk(
            id=talk_id,
            title=title,
            date=season.start_date,
            session=draft.session,
            sequence=draft.sequence,
            links=Links(
                mp3=page.audio_url.value if isinstance(page.audio_url, Found) else None
            ),
            speaker=SpeakerRef(
                id=author.id,
                title=SpeakerTitle(full=author.full_title, short=author.short_title),
            ),
            summary=page.summary.value if isinstance(page.summary, Found) else None,
            topics=[],
        )
