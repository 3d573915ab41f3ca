from typing import Optional


class FeedFetchError(Exception):
    """Raised when an RSS/Atom feed cannot be fetched or parsed."""

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class ParseError(Exception):
    """Raised when a feed entry lacks the fields a candidate needs."""


class ConfigError(Exception):
    """Raised when the digest configuration is missing or invalid."""
