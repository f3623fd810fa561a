"""Tests for the sitemap pipeline: documents, headers and fallbacks."""

import asyncio
import logging
import xml.etree.ElementTree as ET
from unittest.mock import AsyncMock, MagicMock

import pytest

from seolab.config import BuildSectionConfig, SeoLabConfig, SiteSectionConfig
from seolab.content.fixtures import BLOG_POSTS, GUIDES
from seolab.content.mock import MockContentService
from seolab.errors import ContentFetchError
from seolab.pipeline.sitemaps import (
    BLOG_SITEMAP,
    GUIDES_SITEMAP,
    INDEX_SITEMAP,
    PAGES_SITEMAP,
    blog_sitemap,
    guides_sitemap,
    pages_sitemap,
    render_all_sitemaps,
    sitemap_index,
)
from seolab.seo.sitemap import SITEMAP_NS

NS = {"sm": SITEMAP_NS}


@pytest.fixture
def config() -> SeoLabConfig:
    return SeoLabConfig(site=SiteSectionConfig(url="https://example.com"))


def _urls(body: str) -> list[ET.Element]:
    return ET.fromstring(body.encode("utf-8")).findall("sm:url", NS)


def _locs(body: str) -> list[str]:
    return [u.find("sm:loc", NS).text for u in _urls(body)]


def _failing_fetcher(method: str) -> MagicMock:
    fetcher = MagicMock()
    setattr(fetcher, method, AsyncMock(side_effect=ContentFetchError("CMS down")))
    return fetcher


class TestPagesSitemap:
    def test_static_pages_and_categories(self, config):
        response = asyncio.run(pages_sitemap(MockContentService(), config))
        assert _locs(response.body) == [
            "https://example.com/",
            "https://example.com/faq",
            "https://example.com/category/astro-framework",
            "https://example.com/category/performance",
            "https://example.com/category/technical-seo",
        ]
        assert response.fallback is False

    def test_priorities_and_frequencies(self, config):
        response = asyncio.run(pages_sitemap(MockContentService(), config))
        urls = _urls(response.body)
        assert urls[0].find("sm:priority", NS).text == "1.0"
        assert urls[0].find("sm:changefreq", NS).text == "daily"
        assert urls[1].find("sm:priority", NS).text == "0.7"
        assert urls[1].find("sm:changefreq", NS).text == "monthly"
        assert urls[2].find("sm:priority", NS).text == "0.6"
        assert urls[2].find("sm:changefreq", NS).text == "weekly"
        assert all(u.find("sm:lastmod", NS) is None for u in urls)

    def test_headers(self, config):
        response = asyncio.run(pages_sitemap(MockContentService(), config))
        assert response.headers == {
            "Content-Type": "application/xml; charset=utf-8",
            "Cache-Control": "public, max-age=3600",
        }

    def test_fallback_to_homepage(self, config, caplog):
        with caplog.at_level(logging.WARNING, logger="seolab.pipeline.sitemaps"):
            response = asyncio.run(pages_sitemap(_failing_fetcher("get_categories"), config))
        assert _locs(response.body) == ["https://example.com/"]
        assert response.fallback is True
        assert response.headers["Cache-Control"] == "public, max-age=300"
        assert "pages sitemap" in caplog.text

    def test_default_base_url(self):
        response = asyncio.run(pages_sitemap(MockContentService(categories=[]), SeoLabConfig()))
        assert _locs(response.body) == ["http://localhost:4321/", "http://localhost:4321/faq"]


class TestBlogSitemap:
    def test_entries(self, config):
        response = asyncio.run(blog_sitemap(MockContentService(), config))
        urls = _urls(response.body)
        assert len(urls) == 3
        newest = urls[0]
        assert newest.find("sm:loc", NS).text == (
            "https://example.com/blog/building-seo-first-applications-astro-contentful"
        )
        assert newest.find("sm:lastmod", NS).text == "2024-01-25T00:00:00.000Z"
        assert newest.find("sm:changefreq", NS).text == "weekly"
        assert newest.find("sm:priority", NS).text == "0.8"

    def test_respects_blog_limit(self):
        config = SeoLabConfig(
            site=SiteSectionConfig(url="https://example.com"),
            build=BuildSectionConfig(blog_limit=1),
        )
        response = asyncio.run(blog_sitemap(MockContentService(), config))
        assert len(_urls(response.body)) == 1

    def test_ineligible_slug_filtered(self, config):
        post = BLOG_POSTS[0].model_copy(update={"slug": "admin-tips"})
        response = asyncio.run(blog_sitemap(MockContentService(blog_posts=[post]), config))
        assert _urls(response.body) == []
        assert response.fallback is False

    def test_bad_timestamp_serves_empty_urlset(self, config):
        post = BLOG_POSTS[0].model_copy(update={"updated_at": "not-a-date"})
        response = asyncio.run(blog_sitemap(MockContentService(blog_posts=[post]), config))
        assert _urls(response.body) == []
        assert response.fallback is True
        assert response.headers["Cache-Control"] == "public, max-age=300"

    def test_fetch_error_serves_empty_urlset(self, config):
        response = asyncio.run(blog_sitemap(_failing_fetcher("get_blog_posts"), config))
        assert _urls(response.body) == []
        assert response.fallback is True


class TestGuidesSitemap:
    def test_entries(self, config):
        response = asyncio.run(guides_sitemap(MockContentService(), config))
        urls = _urls(response.body)
        assert [u.find("sm:loc", NS).text for u in urls] == [
            f"https://example.com/guides/{GUIDES[1].slug}",
            f"https://example.com/guides/{GUIDES[0].slug}",
        ]
        assert urls[0].find("sm:lastmod", NS).text == "2024-01-12T00:00:00.000Z"
        assert urls[0].find("sm:changefreq", NS).text == "monthly"
        assert urls[0].find("sm:priority", NS).text == "0.9"

    def test_fetch_error_serves_empty_urlset(self, config):
        response = asyncio.run(guides_sitemap(_failing_fetcher("get_guides"), config))
        assert _urls(response.body) == []
        assert response.fallback is True


class TestSitemapIndex:
    def test_references_child_sitemaps(self, config):
        response = sitemap_index(config)
        root = ET.fromstring(response.body.encode("utf-8"))
        assert root.tag == f"{{{SITEMAP_NS}}}sitemapindex"
        assert [s.find("sm:loc", NS).text for s in root.findall("sm:sitemap", NS)] == [
            "https://example.com/sitemap-pages.xml",
            "https://example.com/sitemap-blog.xml",
            "https://example.com/sitemap-guides.xml",
        ]
        assert response.headers["Cache-Control"] == "public, max-age=3600"


class TestRenderAllSitemaps:
    def test_keys(self, config):
        responses = asyncio.run(render_all_sitemaps(MockContentService(), config))
        assert set(responses) == {INDEX_SITEMAP, PAGES_SITEMAP, BLOG_SITEMAP, GUIDES_SITEMAP}
        assert not any(r.fallback for r in responses.values())

    def test_one_failure_does_not_affect_others(self, config):
        fetcher = MockContentService()
        fetcher.get_guides = AsyncMock(side_effect=ContentFetchError("down"))
        responses = asyncio.run(render_all_sitemaps(fetcher, config))
        assert responses[GUIDES_SITEMAP].fallback is True
        assert responses[BLOG_SITEMAP].fallback is False
        assert len(_urls(responses[BLOG_SITEMAP].body)) == 3
