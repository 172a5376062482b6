"""HTTP client for the content API."""

import logging
from typing import Any

import requests

from metacast.utils.errors import FetchError

logger = logging.getLogger(__name__)


class ContentClient:
    """Fetch JSON pages from the content API.

    Pages are addressed by uri (``/general-conference/2025/04``) which is
    appended to ``base_url`` as-is. Failed requests raise
    :class:`FetchError` and are never retried.

    Example:
        >>> with ContentClient(base_url) as client:
        ...     page = client.fetch("/general-conference/2025/04")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        user_agent: str | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize client.

        Args:
            base_url: API prefix the uri is appended to
            timeout: Per-request timeout in seconds
            user_agent: Optional User-Agent header
            session: Existing requests session (one is created if None)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        if user_agent:
            self.session.headers.update({"User-Agent": user_agent})

    def url_for(self, uri: str) -> str:
        """Full request URL for a content uri."""
        return f"{self.base_url}{uri}"

    def fetch(self, uri: str) -> dict[str, Any]:
        """Fetch and decode one page.

        Args:
            uri: Content uri

        Returns:
            Decoded JSON object

        Raises:
            FetchError: On network failure, non-2xx status, or a non-JSON body
        """
        url = self.url_for(uri)
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {url}: {e}", url=url) from e

        if not response.ok:
            raise FetchError(
                f"Failed to fetch {url}: HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(f"Response from {url} is not JSON: {e}", url=url) from e

        if not isinstance(data, dict):
            raise FetchError(f"Response from {url} is not a JSON object", url=url)
        return data

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self) -> "ContentClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
