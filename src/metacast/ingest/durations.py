"""Audio duration probing for talk enclosures."""

import logging
import math
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import mutagen
import requests
from mutagen import MutagenError

from metacast.store.records import RecordStore
from metacast.utils.errors import FetchError
from metacast.utils.retry import TransientFetchError, http_error, with_retry

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def _download(session: requests.Session, url: str, dest: Path, timeout: float) -> None:
    """Stream ``url`` into ``dest``, translating failures for the retry layer."""
    try:
        with session.get(url, stream=True, timeout=timeout) as response:
            if not response.ok:
                raise http_error(url, response.status_code, response.reason or "")
            with open(dest, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
    except (requests.Timeout, requests.ConnectionError) as e:
        raise TransientFetchError(str(e), url=url) from e


def probe_duration(
    url: str,
    timeout: float = 60.0,
    max_attempts: int = 2,
    session: requests.Session | None = None,
) -> int | None:
    """Playback length of a remote audio file in whole seconds.

    Downloads the file to a temporary location and reads its length with
    mutagen. Network errors are retried up to ``max_attempts`` times.

    Args:
        url: Audio URL
        timeout: Per-request timeout in seconds
        max_attempts: Attempts for transient network failures
        session: Shared requests session; a private one is opened and
            closed when omitted

    Returns:
        Duration in seconds, or None if the file could not be fetched or decoded
    """
    if session is None:
        with requests.Session() as own_session:
            return probe_duration(url, timeout, max_attempts, session=own_session)

    download = with_retry(max_attempts=max_attempts)(_download)

    with tempfile.TemporaryDirectory(prefix="metacast-probe-") as tmp:
        dest = Path(tmp) / "audio"
        try:
            download(session, url, dest, timeout)
            audio = mutagen.File(dest)
        except (FetchError, requests.RequestException) as e:
            logger.warning(f"Could not download {url}: {e}")
            return None
        except (MutagenError, OSError) as e:
            logger.warning(f"Could not decode {url}: {e}")
            return None

        if audio is None or getattr(audio, "info", None) is None:
            logger.warning(f"Unrecognized audio format at {url}")
            return None

        length = getattr(audio.info, "length", None)
        if not length or math.isnan(length):
            logger.warning(f"No playback length reported for {url}")
            return None
        return math.floor(length)


@dataclass
class DurationReport:
    """Outcome of a duration-filling pass."""

    filled: int = 0
    failed: int = 0
    already_set: int = 0
    no_audio: int = 0


def fill_durations(
    store: RecordStore,
    probe: Callable[[str], int | None] = probe_duration,
    collection: str | None = None,
) -> DurationReport:
    """Probe and store ``duration`` for every talk that lacks one.

    Talks that already have a duration are never touched. A failed probe
    leaves the field absent so the next pass tries again.

    Args:
        store: Record store
        probe: Duration probe (url -> seconds or None)
        collection: Limit to one collection

    Returns:
        DurationReport
    """
    report = DurationReport()

    for key in store.talk_keys(collection):
        document = store.get(key) or {}
        if document.get("duration") is not None:
            report.already_set += 1
            logger.debug(f"-skipped- {key}")
            continue

        url = (document.get("links") or {}).get("mp3")
        if not url:
            report.no_audio += 1
            continue

        duration = probe(url)
        if duration is None:
            report.failed += 1
            continue

        document["duration"] = duration
        store.put(key, document)
        report.filled += 1
        logger.info(f"[SUCCESS] {key}: {duration}s")

    return report
