"""Route patterns for every content type.

One place decides what a blog post, guide or category URL looks like,
so canonical links, breadcrumbs and sitemaps never disagree.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import StrEnum
from urllib.parse import quote

from seolab.content.models import BlogPost, Category, Guide
from seolab.errors import InvalidSlugError
from seolab.seo.schemas import BreadcrumbItem

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
PATH_RE = re.compile(r"^/[a-z0-9\-/]*$")
SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 100

_SLUG_PATHS = {
    "blog": re.compile(r"^/blog/([^/?]+)"),
    "guide": re.compile(r"^/guides/([^/?]+)"),
    "category": re.compile(r"^/category/([^/?]+)"),
    "preview": re.compile(r"^/preview/[^/]+/([^/?]+)"),
}


class PageType(StrEnum):
    """Kinds of page the site serves."""

    BLOG = "blog"
    GUIDE = "guide"
    CATEGORY = "category"
    FAQ = "faq"
    HOMEPAGE = "homepage"
    SEARCH = "search"
    PREVIEW = "preview"
    API = "api"


def format_slug(slug: str) -> str:
    """Normalise a slug to lowercase hyphenated form.

    Spaces and underscores become hyphens, other invalid characters are
    dropped, runs of hyphens collapse. Slugs longer than 100 characters
    are truncated.

    Raises:
        InvalidSlugError: If the slug is empty or too short after cleaning.
    """
    if not slug:
        raise InvalidSlugError("Slug cannot be empty")

    cleaned = slug.lower()
    cleaned = re.sub(r"[\s_]+", "-", cleaned)
    cleaned = re.sub(r"[^a-z0-9\-]", "", cleaned)
    cleaned = cleaned.strip("-")
    cleaned = re.sub(r"-+", "-", cleaned)

    if len(cleaned) < SLUG_MIN_LENGTH:
        raise InvalidSlugError(f"Slug must be at least {SLUG_MIN_LENGTH} characters long")
    if len(cleaned) > SLUG_MAX_LENGTH:
        cleaned = cleaned[:SLUG_MAX_LENGTH].rstrip("-")

    if not SLUG_RE.match(cleaned):
        raise InvalidSlugError(f"Invalid slug format: {cleaned}")
    return cleaned


def validate_path(path: str) -> bool:
    """True for lowercase absolute paths made of ``a-z 0-9 - /``."""
    return bool(path) and bool(PATH_RE.match(path))


def page_type_from_path(path: str) -> PageType | None:
    """Infer the page type from a site path, or None if unknown."""
    if path in ("", "/"):
        return PageType.HOMEPAGE
    prefixes = [
        ("/blog/", PageType.BLOG),
        ("/guides/", PageType.GUIDE),
        ("/category/", PageType.CATEGORY),
        ("/faq", PageType.FAQ),
        ("/search", PageType.SEARCH),
        ("/preview/", PageType.PREVIEW),
        ("/api/", PageType.API),
    ]
    for prefix, page_type in prefixes:
        if path.startswith(prefix):
            return page_type
    return None


def slug_from_path(path: str, page_type: PageType) -> str | None:
    """Extract the slug segment of a dynamic route."""
    pattern = _SLUG_PATHS.get(page_type.value)
    if pattern is None:
        return None
    match = pattern.match(path)
    return match.group(1) if match else None


class UrlPatternManager:
    """Generates site paths and absolute URLs for content."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def _finish(self, path: str, absolute: bool) -> str:
        return f"{self.base_url}{path}" if absolute else path

    def blog_post_url(self, post: BlogPost, absolute: bool = False) -> str:
        return self._finish(f"/blog/{format_slug(post.slug)}", absolute)

    def guide_url(self, guide: Guide, absolute: bool = False) -> str:
        return self._finish(f"/guides/{format_slug(guide.slug)}", absolute)

    def category_url(self, category: Category, absolute: bool = False) -> str:
        return self._finish(f"/category/{format_slug(category.slug)}", absolute)

    def faq_url(self, absolute: bool = False) -> str:
        return self._finish("/faq", absolute)

    def homepage_url(self, absolute: bool = False) -> str:
        return self._finish("/", absolute)

    def search_url(self, query: str | None = None, absolute: bool = False) -> str:
        path = f"/search?q={quote(query, safe='')}" if query else "/search"
        return self._finish(path, absolute)

    def preview_url(self, kind: str, slug: str, absolute: bool = False) -> str:
        if kind not in ("blog", "guide"):
            raise ValueError(f"Unknown preview kind: {kind!r}")
        return self._finish(f"/preview/{kind}/{format_slug(slug)}", absolute)

    def api_url(self, endpoint: str, absolute: bool = False) -> str:
        return self._finish(f"/api/{format_slug(endpoint)}", absolute)

    def canonical_url(
        self,
        page_type: PageType,
        content: BlogPost | Guide | Category | None = None,
        query: str | None = None,
    ) -> str:
        """Absolute canonical URL; falls back to the homepage on a type mismatch."""
        if page_type == PageType.BLOG and isinstance(content, BlogPost):
            return self.blog_post_url(content, absolute=True)
        if page_type == PageType.GUIDE and isinstance(content, Guide):
            return self.guide_url(content, absolute=True)
        if page_type == PageType.CATEGORY and isinstance(content, Category):
            return self.category_url(content, absolute=True)
        if page_type == PageType.FAQ:
            return self.faq_url(absolute=True)
        if page_type == PageType.SEARCH:
            return self.search_url(query, absolute=True)
        return self.homepage_url(absolute=True)

    def breadcrumbs(
        self,
        page_type: PageType,
        content: BlogPost | Guide | Category | None = None,
    ) -> list[BreadcrumbItem]:
        """Breadcrumb trail from the homepage down to the page, as site paths."""
        crumbs = [BreadcrumbItem(name="Home", url=self.homepage_url())]

        if page_type == PageType.BLOG:
            crumbs.append(BreadcrumbItem(name="Blog", url="/blog"))
            if isinstance(content, BlogPost):
                crumbs.append(BreadcrumbItem(name=content.title, url=self.blog_post_url(content)))
        elif page_type == PageType.GUIDE:
            crumbs.append(BreadcrumbItem(name="Guides", url="/guides"))
            if isinstance(content, Guide):
                crumbs.append(BreadcrumbItem(name=content.title, url=self.guide_url(content)))
        elif page_type == PageType.CATEGORY:
            crumbs.append(BreadcrumbItem(name="Categories", url="/categories"))
            if isinstance(content, Category):
                crumbs.append(BreadcrumbItem(name=content.name, url=self.category_url(content)))
        elif page_type == PageType.FAQ:
            crumbs.append(BreadcrumbItem(name="FAQ", url=self.faq_url()))
        elif page_type == PageType.SEARCH:
            crumbs.append(BreadcrumbItem(name="Search", url=self.search_url()))

        return crumbs

    def sitemap_urls(self, records: Sequence[BlogPost | Guide | Category]) -> list[str]:
        """Absolute URLs for a list of posts, guides or categories."""
        urls: list[str] = []
        for record in records:
            if isinstance(record, BlogPost):
                urls.append(self.blog_post_url(record, absolute=True))
            elif isinstance(record, Guide):
                urls.append(self.guide_url(record, absolute=True))
            elif isinstance(record, Category):
                urls.append(self.category_url(record, absolute=True))
        return urls
