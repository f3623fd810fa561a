"""Base class for content sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from seolab.content.models import BlogPost, Category, FaqEntry, Guide


class ContentFetcher(ABC):
    """Contract every content source implements.

    All methods are coroutines. ``preview`` selects draft content where
    the source distinguishes it. Implementations raise
    ``ContentFetchError`` on any retrieval failure; a missing slug is
    not a failure and yields ``None``.
    """

    @abstractmethod
    async def get_blog_post(self, slug: str, preview: bool = False) -> BlogPost | None:
        """Return one blog post by slug."""

    @abstractmethod
    async def get_blog_posts(self, limit: int = 10, preview: bool = False) -> list[BlogPost]:
        """Return the newest blog posts, most recently published first."""

    @abstractmethod
    async def get_guide(self, slug: str, preview: bool = False) -> Guide | None:
        """Return one guide by slug."""

    @abstractmethod
    async def get_guides(self, limit: int = 10, preview: bool = False) -> list[Guide]:
        """Return the newest guides, most recently published first."""

    @abstractmethod
    async def get_category(self, slug: str, preview: bool = False) -> Category | None:
        """Return one category by slug."""

    @abstractmethod
    async def get_categories(self, preview: bool = False) -> list[Category]:
        """Return all categories sorted by name."""

    @abstractmethod
    async def get_faq_entries(self, preview: bool = False) -> list[FaqEntry]:
        """Return all FAQ entries sorted by their ``order`` field."""
