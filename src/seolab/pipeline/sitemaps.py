"""Sitemap pipeline — content fetcher → sitemap documents.

Each routine fetches what it needs, renders a complete document and
wraps it in a ``SitemapResponse`` carrying the HTTP headers it should
be served with. A failed fetch or a bad timestamp never propagates: the
routine logs it and serves a minimal fallback document with a shorter
cache lifetime, so one broken CMS record cannot take the build down.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel

from seolab.seo.sitemap import (
    ChangeFrequency,
    SitemapEntry,
    SitemapIndexEntry,
    format_timestamp,
    format_url,
    get_base_url,
    is_sitemap_eligible,
    render_sitemap,
    render_sitemap_index,
)

if TYPE_CHECKING:
    from seolab.config import SeoLabConfig
    from seolab.content import ContentFetcher

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/xml; charset=utf-8"
CACHE_CONTROL = "public, max-age=3600"
FALLBACK_CACHE_CONTROL = "public, max-age=300"

PAGES_SITEMAP = "sitemap-pages.xml"
BLOG_SITEMAP = "sitemap-blog.xml"
GUIDES_SITEMAP = "sitemap-guides.xml"
INDEX_SITEMAP = "sitemap-index.xml"
CHILD_SITEMAPS = (PAGES_SITEMAP, BLOG_SITEMAP, GUIDES_SITEMAP)


class SitemapResponse(BaseModel):
    """A rendered sitemap document and the headers to serve it with."""

    model_config = {"frozen": True}

    body: str
    headers: dict[str, str]
    fallback: bool = False


def _response(body: str, *, fallback: bool = False) -> SitemapResponse:
    return SitemapResponse(
        body=body,
        headers={
            "Content-Type": CONTENT_TYPE,
            "Cache-Control": FALLBACK_CACHE_CONTROL if fallback else CACHE_CONTROL,
        },
        fallback=fallback,
    )


def _eligible(entries: list[SitemapEntry]) -> list[SitemapEntry]:
    return [entry for entry in entries if is_sitemap_eligible(entry.url)]


async def pages_sitemap(fetcher: ContentFetcher, config: SeoLabConfig) -> SitemapResponse:
    """Homepage, FAQ and one entry per category.

    Falls back to a homepage-only urlset if categories cannot be fetched.
    """
    base_url = get_base_url(config)
    try:
        categories = await fetcher.get_categories(preview=False)
        entries = [
            SitemapEntry(url=format_url("/", base_url), changefreq=ChangeFrequency.DAILY, priority=1.0),
            SitemapEntry(url=format_url("/faq", base_url), changefreq=ChangeFrequency.MONTHLY, priority=0.7),
        ]
        entries.extend(
            SitemapEntry(
                url=format_url(f"/category/{category.slug}", base_url),
                changefreq=ChangeFrequency.WEEKLY,
                priority=0.6,
            )
            for category in categories
        )
        return _response(render_sitemap(_eligible(entries)))
    except Exception:
        logger.warning("Error generating pages sitemap, serving homepage only", exc_info=True)
        homepage = SitemapEntry(
            url=format_url("/", base_url), changefreq=ChangeFrequency.DAILY, priority=1.0
        )
        return _response(render_sitemap([homepage]), fallback=True)


async def blog_sitemap(fetcher: ContentFetcher, config: SeoLabConfig) -> SitemapResponse:
    """One entry per published blog post, ``lastmod`` from its last update."""
    base_url = get_base_url(config)
    try:
        posts = await fetcher.get_blog_posts(limit=config.build.blog_limit, preview=False)
        entries = [
            SitemapEntry(
                url=format_url(f"/blog/{post.slug}", base_url),
                lastmod=format_timestamp(post.updated_at),
                changefreq=ChangeFrequency.WEEKLY,
                priority=0.8,
            )
            for post in posts
        ]
        return _response(render_sitemap(_eligible(entries)))
    except Exception:
        logger.warning("Error generating blog sitemap, serving empty urlset", exc_info=True)
        return _response(render_sitemap([]), fallback=True)


async def guides_sitemap(fetcher: ContentFetcher, config: SeoLabConfig) -> SitemapResponse:
    """One entry per published guide, ``lastmod`` from its last update."""
    base_url = get_base_url(config)
    try:
        guides = await fetcher.get_guides(limit=config.build.guide_limit, preview=False)
        entries = [
            SitemapEntry(
                url=format_url(f"/guides/{guide.slug}", base_url),
                lastmod=format_timestamp(guide.updated_at),
                changefreq=ChangeFrequency.MONTHLY,
                priority=0.9,
            )
            for guide in guides
        ]
        return _response(render_sitemap(_eligible(entries)))
    except Exception:
        logger.warning("Error generating guides sitemap, serving empty urlset", exc_info=True)
        return _response(render_sitemap([]), fallback=True)


def sitemap_index(config: SeoLabConfig) -> SitemapResponse:
    """Index referencing the pages, blog and guides sitemaps."""
    base_url = get_base_url(config)
    entries = [SitemapIndexEntry(sitemap=format_url(f"/{name}", base_url)) for name in CHILD_SITEMAPS]
    return _response(render_sitemap_index(entries))


async def render_all_sitemaps(
    fetcher: ContentFetcher, config: SeoLabConfig
) -> dict[str, SitemapResponse]:
    """Render every sitemap document, keyed by file name."""
    return {
        INDEX_SITEMAP: sitemap_index(config),
        PAGES_SITEMAP: await pages_sitemap(fetcher, config),
        BLOG_SITEMAP: await blog_sitemap(fetcher, config),
        GUIDES_SITEMAP: await guides_sitemap(fetcher, config),
    }
