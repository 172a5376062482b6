"""Custom exceptions for Metacast."""


class MetacastError(Exception):
    """Base exception for all Metacast errors."""

    pass


class ConfigError(MetacastError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class StoreError(MetacastError):
    """Record store read/write errors."""

    pass


class IngestError(MetacastError):
    """Errors raised while ingesting a conference."""

    pass


class FetchError(IngestError):
    """Network failure or non-success response while fetching a page."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MissingContentError(IngestError):
    """A fetched page lacks content that the pipeline cannot do without."""

    pass


class FeedError(MetacastError):
    """Feed synthesis errors."""

    pass
