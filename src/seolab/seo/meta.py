"""Per-page ``<head>`` metadata: title, description, canonical and Open Graph."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel

from seolab.content.models import BlogPost, Category, FaqEntry, Guide
from seolab.seo.sitemap import get_base_url
from seolab.seo.structured_data import ContentCounts
from seolab.seo.urls import PageType

if TYPE_CHECKING:
    from seolab.config import SeoLabConfig

HOMEPAGE_TAGLINE = "Advanced Technical SEO and Core Web Vitals"
HOMEPAGE_DESCRIPTION = (
    "Master technical SEO and Core Web Vitals optimization with comprehensive guides, "
    "articles, and best practices for modern web development."
)

# Paths that detect_page_type recognises; anything else is the homepage.
_PAGE_PREFIXES = (
    ("/blog/", PageType.BLOG),
    ("/guides/", PageType.GUIDE),
    ("/category/", PageType.CATEGORY),
    ("/faq", PageType.FAQ),
    ("/search", PageType.SEARCH),
)


class SeoConfig(BaseModel):
    model_config = {"frozen": True}

    site_name: str
    site_url: str
    default_og_image: str


class SeoHead(BaseModel):
    """Everything a page template needs to render its SEO head tags."""

    model_config = {"frozen": True}

    title: str
    description: str
    canonical: str
    og_image: str
    og_type: Literal["website", "article"] = "website"
    noindex: bool = False
    nofollow: bool = False

    @property
    def robots(self) -> str:
        """Value of the ``robots`` meta tag."""
        index = "noindex" if self.noindex else "index"
        follow = "nofollow" if self.nofollow else "follow"
        return f"{index}, {follow}"


class MetaTagGenerator:
    """Builds ``SeoHead`` values for each page type.

    Canonical paths may be site-relative or absolute; the result is
    always absolute. The Open Graph image is the first image set on the
    content, falling back to the site default.
    """

    def __init__(self, config: SeoConfig) -> None:
        self.config = config

    def blog_post(self, post: BlogPost, canonical_path: str) -> SeoHead:
        seo = post.seo
        return SeoHead(
            title=(seo.title if seo and seo.title else None) or f"{post.title} - {self.config.site_name}",
            description=(seo.description if seo and seo.description else None) or post.excerpt,
            canonical=self._canonical(canonical_path),
            og_type="article",
            og_image=self._og_image(
                seo.og_image.url if seo and seo.og_image else None,
                post.featured_image.url if post.featured_image else None,
            ),
        )

    def guide(self, guide: Guide, canonical_path: str) -> SeoHead:
        return SeoHead(
            title=f"{guide.title} - {self.config.site_name}",
            description=(
                f"{guide.description} {guide.difficulty.value} level guide, "
                f"estimated {guide.estimated_time} minutes."
            ),
            canonical=self._canonical(canonical_path),
            og_type="article",
            og_image=self._og_image(guide.featured_image.url if guide.featured_image else None),
        )

    def category(
        self,
        category: Category,
        canonical_path: str,
        counts: ContentCounts | None = None,
    ) -> SeoHead:
        description = f"Explore {category.name.lower()} articles and guides. {category.description}"
        if counts is not None:
            description += f" {counts.blog_posts} articles and {counts.guides} guides available."
        return SeoHead(
            title=f"{category.name} - {self.config.site_name}",
            description=description,
            canonical=self._canonical(canonical_path),
            og_image=self._og_image(
                category.featured_image.url if category.featured_image else None
            ),
        )

    def faq(
        self,
        entries: Sequence[FaqEntry],
        canonical_path: str = "/faq",
        title: str | None = None,
        description: str | None = None,
    ) -> SeoHead:
        return SeoHead(
            title=title or f"Frequently Asked Questions - {self.config.site_name}",
            description=description or (
                f"Find answers to common questions. {len(entries)} frequently asked "
                "questions about technical SEO and Core Web Vitals."
            ),
            canonical=self._canonical(canonical_path),
            og_image=self._og_image(),
        )

    def homepage(
        self,
        canonical_path: str = "/",
        title: str | None = None,
        description: str | None = None,
    ) -> SeoHead:
        return SeoHead(
            title=title or f"{self.config.site_name} - {HOMEPAGE_TAGLINE}",
            description=description or HOMEPAGE_DESCRIPTION,
            canonical=self._canonical(canonical_path),
            og_image=self._og_image(),
        )

    def search(self, canonical_path: str = "/search", query: str | None = None) -> SeoHead:
        """Search pages are never indexed or followed."""
        if query:
            title = f'Search results for "{query}" - {self.config.site_name}'
            description = f'Search results for "{query}". Find relevant articles and guides.'
        else:
            title = f"Search - {self.config.site_name}"
            description = "Search our comprehensive collection of technical SEO articles and guides."
        return SeoHead(
            title=title,
            description=description,
            canonical=self._canonical(canonical_path),
            og_image=self._og_image(),
            noindex=True,
            nofollow=True,
        )

    def fallback(
        self,
        page_type: PageType,
        canonical_path: str,
        title: str | None = None,
        description: str | None = None,
    ) -> SeoHead:
        return SeoHead(
            title=title or f"{page_type.value.capitalize()} - {self.config.site_name}",
            description=description or (
                f"Explore {page_type.value} content on {self.config.site_name}. "
                "Technical SEO and Core Web Vitals optimization resources."
            ),
            canonical=self._canonical(canonical_path),
            og_image=self._og_image(),
        )

    def _absolute(self, url: str) -> str:
        return url if url.startswith("http") else f"{self.config.site_url}{url}"

    def _canonical(self, path: str) -> str:
        if path.startswith("http"):
            return path
        return self._absolute(path if path.startswith("/") else f"/{path}")

    def _og_image(self, *candidates: str | None) -> str:
        for url in candidates:
            if url:
                return self._absolute(url)
        return self._absolute(self.config.default_og_image)


def create_meta_tag_generator(config: SeoLabConfig) -> MetaTagGenerator:
    return MetaTagGenerator(
        SeoConfig(
            site_name=config.site.name,
            site_url=get_base_url(config),
            default_og_image=config.site.default_og_image,
        )
    )


def detect_page_type(path: str) -> PageType:
    """Page type for a site path; unknown paths count as the homepage."""
    for prefix, page_type in _PAGE_PREFIXES:
        if path.startswith(prefix):
            return page_type
    return PageType.HOMEPAGE
