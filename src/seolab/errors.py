"""Exception types shared across seolab."""


class SeoLabError(Exception):
    """Base class for all seolab errors."""


class InvalidTimestamp(SeoLabError, ValueError):
    """A value could not be parsed as a date for a sitemap ``lastmod``."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid timestamp: {value}")


class ContentFetchError(SeoLabError):
    """A content fetcher failed to retrieve or decode records."""


class InvalidSlugError(SeoLabError, ValueError):
    """A slug could not be normalised into a valid URL segment."""
