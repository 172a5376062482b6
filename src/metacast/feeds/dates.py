"""Publish-date derivation and normalization for feed items."""

import logging
import re
from datetime import date, datetime, time, timedelta, timezone
from email.utils import format_datetime

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

# Local start hour of each session; talks within a session are 5 minutes apart
SESSION_START_HOURS = {1: 10, 2: 12, 3: 14, 4: 16, 5: 18}
DEFAULT_START_HOUR = 10
CONFERENCE_TZ = timezone(timedelta(hours=-6))

RFC822_PATTERN = re.compile(
    r"^[A-Z][a-z]{2}, \d{1,2} [A-Z][a-z]{2} \d{4} \d{2}:\d{2}:\d{2} [A-Z]{3,4}$"
)


def to_http_date(value: datetime) -> str:
    """Render an aware datetime as an HTTP-date (``Sat, 05 Apr 2025 20:10:00 GMT``)."""
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def local_talk_time(talk_date: date, session: int, sequence: int) -> datetime:
    """Approximate local start time of a talk.

    Example:
        >>> local_talk_time(date(2025, 4, 5), 3, 2).isoformat()
        '2025-04-05T14:10:00-06:00'
    """
    hour = SESSION_START_HOURS.get(session, DEFAULT_START_HOUR)
    start = datetime.combine(talk_date, time(hour=hour), tzinfo=CONFERENCE_TZ)
    return start + timedelta(minutes=sequence * 5)


def generate_pub_date(talk_date: str, session: int, sequence: int) -> str:
    """Derived publish date of a talk as an HTTP-date.

    Args:
        talk_date: ISO calendar date of the talk
        session: Session number
        sequence: Position within the session

    Returns:
        HTTP-date string; the raw ``talk_date`` if it is not an ISO date
        (left for :func:`validate_date` to deal with)
    """
    try:
        parsed = date.fromisoformat(str(talk_date))
    except ValueError:
        return str(talk_date)
    return to_http_date(local_talk_time(parsed, session, sequence))


def validate_date(value: str) -> str:
    """Normalize a date string to an HTTP-date.

    Already-formatted RFC 822 strings pass through unchanged. Anything else
    that parses is converted (naive values are taken as UTC); anything that
    does not parse becomes the current time.
    """
    if RFC822_PATTERN.match(value):
        return value

    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Unparseable date {value!r}, using now: {e}")
        return to_http_date(datetime.now(timezone.utc))

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return to_http_date(parsed)
