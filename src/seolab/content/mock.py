"""Fixture-backed content service for development and tests."""

from __future__ import annotations

from datetime import UTC, datetime

from seolab.content import fixtures
from seolab.content.base import ContentFetcher
from seolab.content.models import BlogPost, Category, FaqEntry, Guide
from seolab.errors import ContentFetchError

_OLDEST = datetime.min.replace(tzinfo=UTC)


def _published(value: str | None) -> datetime:
    if not value:
        return _OLDEST
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise ContentFetchError(f"Invalid publish date: {value!r}") from exc
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


class MockContentService(ContentFetcher):
    """Serves records from in-memory lists instead of a CMS.

    Ordering matches the Contentful queries: posts and guides newest
    first, categories by name, FAQ entries by ``order``. The ``preview``
    flag is accepted and ignored.
    """

    def __init__(
        self,
        *,
        blog_posts: list[BlogPost] | None = None,
        guides: list[Guide] | None = None,
        categories: list[Category] | None = None,
        faq_entries: list[FaqEntry] | None = None,
    ) -> None:
        self._blog_posts = list(fixtures.BLOG_POSTS if blog_posts is None else blog_posts)
        self._guides = list(fixtures.GUIDES if guides is None else guides)
        self._categories = list(fixtures.CATEGORIES if categories is None else categories)
        self._faq_entries = list(fixtures.FAQ_ENTRIES if faq_entries is None else faq_entries)

    async def get_blog_post(self, slug: str, preview: bool = False) -> BlogPost | None:
        return next((p for p in self._blog_posts if p.slug == slug), None)

    async def get_blog_posts(self, limit: int = 10, preview: bool = False) -> list[BlogPost]:
        posts = sorted(self._blog_posts, key=lambda p: _published(p.published_at), reverse=True)
        return posts[:limit]

    async def get_guide(self, slug: str, preview: bool = False) -> Guide | None:
        return next((g for g in self._guides if g.slug == slug), None)

    async def get_guides(self, limit: int = 10, preview: bool = False) -> list[Guide]:
        guides = sorted(self._guides, key=lambda g: _published(g.published_at), reverse=True)
        return guides[:limit]

    async def get_category(self, slug: str, preview: bool = False) -> Category | None:
        return next((c for c in self._categories if c.slug == slug), None)

    async def get_categories(self, preview: bool = False) -> list[Category]:
        return sorted(self._categories, key=lambda c: c.name)

    async def get_faq_entries(self, preview: bool = False) -> list[FaqEntry]:
        return sorted(self._faq_entries, key=lambda e: e.order)
