"""Backoff for media downloads.

Page fetches during ingestion are never retried. Audio probing is, since a
dropped connection halfway through an MP3 is common and cheap to repeat.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from functools import wraps

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from metacast.utils.errors import FetchError

logger = logging.getLogger(__name__)

# Client errors that still deserve another attempt
TRANSIENT_STATUS_CODES = frozenset({408, 429})


class TransientFetchError(FetchError):
    """A download failure that may succeed on the next attempt."""

    pass


@dataclass(frozen=True)
class RetryConfig:
    """Attempt count and backoff bounds."""

    max_attempts: int = 3
    min_wait_seconds: float = 1
    max_wait_seconds: float = 30
    jitter: bool = True


DEFAULT_RETRY_CONFIG = RetryConfig()

# Fast configuration for testing (minimal delays)
TEST_RETRY_CONFIG = RetryConfig(
    max_attempts=3,
    min_wait_seconds=0.001,
    max_wait_seconds=0.01,
    jitter=False,
)


def http_error(url: str, status_code: int, reason: str = "") -> FetchError:
    """Exception for a non-success response.

    5xx, 408 and 429 give a TransientFetchError; anything else is final.
    """
    message = f"HTTP {status_code} {reason}".rstrip() + f" for {url}"
    if status_code >= 500 or status_code in TRANSIENT_STATUS_CODES:
        return TransientFetchError(message, url=url, status_code=status_code)
    return FetchError(message, url=url, status_code=status_code)


def _log_retry(retry_state: RetryCallState) -> None:
    if retry_state.outcome and retry_state.outcome.failed:
        exception = retry_state.outcome.exception()
        logger.warning(f"Attempt {retry_state.attempt_number} failed: {exception}")


def with_retry(
    config: RetryConfig | None = None,
    max_attempts: int | None = None,
) -> Callable:
    """Decorator retrying TransientFetchError with exponential backoff.

    Args:
        config: Backoff settings (DEFAULT_RETRY_CONFIG if None)
        max_attempts: Overrides the configured attempt count

    Returns:
        Decorator; the last error is re-raised once attempts run out
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            # Resolved per call so tests can swap DEFAULT_RETRY_CONFIG
            active = config or DEFAULT_RETRY_CONFIG
            if max_attempts is not None:
                active = replace(active, max_attempts=max_attempts)

            retrying = retry(
                stop=stop_after_attempt(active.max_attempts),
                wait=wait_exponential_jitter(
                    initial=active.min_wait_seconds,
                    max=active.max_wait_seconds,
                    jitter=active.max_wait_seconds if active.jitter else 0,
                ),
                retry=retry_if_exception_type(TransientFetchError),
                before_sleep=_log_retry,
                reraise=True,
            )
            return retrying(func)(*args, **kwargs)

        return wrapper

    return decorator
