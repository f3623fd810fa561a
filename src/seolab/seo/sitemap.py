"""Sitemap XML rendering and URL normalisation.

Everything here is pure and synchronous. The only error raised is
``InvalidTimestamp``: a bad ``lastmod`` must stop the caller rather than
end up in a document crawlers consume.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from email.utils import parsedate_to_datetime
from enum import StrEnum
from typing import TYPE_CHECKING
from urllib.parse import urlparse
from xml.sax.saxutils import escape

from pydantic import BaseModel, Field

from seolab.errors import InvalidTimestamp

if TYPE_CHECKING:
    from seolab.config import SeoLabConfig

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
DEFAULT_SITE_URL = "http://localhost:4321"
EXCLUDE_PATTERNS = ("/preview/", "/search", "/api/", "/_", "/admin")

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


class ChangeFrequency(StrEnum):
    """Allowed values of the sitemap ``<changefreq>`` element."""

    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


class SitemapEntry(BaseModel):
    """One ``<url>`` of a urlset."""

    model_config = {"frozen": True}

    url: str
    lastmod: str | None = None
    changefreq: ChangeFrequency | None = None
    priority: float | None = Field(None, ge=0.0, le=1.0)


class SitemapIndexEntry(BaseModel):
    """One ``<sitemap>`` of a sitemap index."""

    model_config = {"frozen": True}

    sitemap: str
    lastmod: str | None = None


def escape_xml(text: str) -> str:
    """Escape ``& < > " '`` for XML text content."""
    return escape(text, _XML_ENTITIES)


def format_url(url: str, base_url: str) -> str:
    """Make ``url`` absolute against ``base_url``.

    Absolute http(s) URLs are returned unchanged. Otherwise one leading
    slash is dropped from ``url`` and one trailing slash from
    ``base_url`` before joining with a single ``/``.
    """
    if url.startswith(("http://", "https://")):
        return url
    clean_url = url[1:] if url.startswith("/") else url
    clean_base = base_url[:-1] if base_url.endswith("/") else base_url
    return f"{clean_base}/{clean_url}"


def validate_url(url: str) -> bool:
    """Return True if ``url`` parses with an http(s) scheme and a host."""
    if not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url)
        if any(ch.isspace() or not ch.isprintable() for ch in parsed.netloc):
            return False
        return parsed.scheme in ("http", "https") and bool(parsed.hostname)
    except ValueError:
        return False


def _parse_timestamp(value: str) -> datetime:
    text = value.strip()
    if not text:
        raise ValueError("empty timestamp")
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        # RFC 2822, e.g. "Mon, 15 Jan 2024 10:00:00 GMT"
        return parsedate_to_datetime(text)


def format_timestamp(value: str | datetime | date) -> str:
    """Format a date as a W3C datetime: ``YYYY-MM-DDTHH:MM:SS.sssZ`` in UTC.

    Accepts ISO-8601 or RFC 2822 strings, ``datetime`` and ``date``
    objects. Values without a timezone are taken as UTC.

    Raises:
        InvalidTimestamp: If the value cannot be parsed or falls outside
            years 1 to 9999 once converted to UTC.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            dt = _parse_timestamp(value)
        except (ValueError, TypeError) as exc:
            raise InvalidTimestamp(value) from exc
    else:
        raise InvalidTimestamp(value)

    try:
        dt = dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)
    except OverflowError as exc:
        raise InvalidTimestamp(value) from exc
    # strftime does not zero-pad years below 1000 on every platform
    return dt.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def render_sitemap_entry(entry: SitemapEntry) -> str:
    """Render a ``<url>`` element, omitting absent optional children."""
    lines = ["  <url>", f"    <loc>{escape_xml(entry.url)}</loc>"]
    if entry.lastmod:
        lines.append(f"    <lastmod>{escape_xml(entry.lastmod)}</lastmod>")
    if entry.changefreq:
        lines.append(f"    <changefreq>{escape_xml(entry.changefreq.value)}</changefreq>")
    if entry.priority is not None:
        lines.append(f"    <priority>{entry.priority:.1f}</priority>")
    lines.append("  </url>")
    return "\n".join(lines) + "\n"


def render_sitemap_index_entry(entry: SitemapIndexEntry) -> str:
    """Render a ``<sitemap>`` element of a sitemap index."""
    lines = ["  <sitemap>", f"    <loc>{escape_xml(entry.sitemap)}</loc>"]
    if entry.lastmod:
        lines.append(f"    <lastmod>{escape_xml(entry.lastmod)}</lastmod>")
    lines.append("  </sitemap>")
    return "\n".join(lines) + "\n"


def render_sitemap(entries: list[SitemapEntry]) -> str:
    """Render a complete urlset document. An empty list yields an empty urlset."""
    body = "".join(render_sitemap_entry(e) for e in entries)
    return f'{XML_DECLARATION}<urlset xmlns="{SITEMAP_NS}">\n{body}</urlset>\n'


def render_sitemap_index(entries: list[SitemapIndexEntry]) -> str:
    """Render a complete sitemapindex document."""
    body = "".join(render_sitemap_index_entry(e) for e in entries)
    return f'{XML_DECLARATION}<sitemapindex xmlns="{SITEMAP_NS}">\n{body}</sitemapindex>\n'


def get_base_url(config: SeoLabConfig) -> str:
    """Return the configured site origin, or the local dev server origin."""
    return config.site.url or DEFAULT_SITE_URL


def is_sitemap_eligible(url: str) -> bool:
    """Return False for preview, search, API, internal and admin routes.

    This is a plain substring test on the whole URL, so a slug such as
    ``/blog/admin-tips`` is excluded as well.
    """
    return not any(pattern in url for pattern in EXCLUDE_PATTERNS)
