"""Exceptions raised by the release cache."""


class CacheError(Exception):
    """Base class for release cache errors."""


class CacheRefreshError(CacheError):
    """A refresh could not fetch its source; the cache was left unchanged."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Failed to refresh {source} releases: {message}")
