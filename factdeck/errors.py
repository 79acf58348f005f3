"""
Error taxonomy for factdeck.

All of these are recovered inside the content queue; nothing above it
ever observes them.
"""


class FactDeckError(Exception):
    """Base class for factdeck errors."""

    pass


class ProviderFailure(FactDeckError):
    """A content source failed: network error, bad status or malformed payload."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class TimeoutExceeded(ProviderFailure):
    """A content source did not settle within its time budget."""

    def __init__(self, timeout: float, source: str | None = None):
        super().__init__(f"timed out after {timeout:.1f}s", source=source)
        self.timeout = timeout


class CacheUnavailable(FactDeckError):
    """Persistent cache could not be read or written."""

    pass
