"""Tests for URL patterns, slugs and breadcrumbs."""

import pytest

from seolab.content.fixtures import BLOG_POSTS, CATEGORIES, GUIDES
from seolab.errors import InvalidSlugError
from seolab.seo.urls import (
    PageType,
    UrlPatternManager,
    format_slug,
    page_type_from_path,
    slug_from_path,
    validate_path,
)


@pytest.fixture
def urls() -> UrlPatternManager:
    return UrlPatternManager("https://example.com/")


class TestFormatSlug:
    def test_spaces_and_underscores(self):
        assert format_slug("Hello World_Test") == "hello-world-test"

    def test_strips_invalid_characters(self):
        assert format_slug("  --Astro!! SEO--  ") == "astro-seo"

    def test_collapses_hyphens(self):
        assert format_slug("a--b---c") == "a-b-c"

    def test_valid_slug_unchanged(self):
        assert format_slug("core-web-vitals") == "core-web-vitals"

    def test_truncates_long_slug(self):
        assert len(format_slug("a" * 150)) == 100

    @pytest.mark.parametrize("slug", ["", "ab", "!!!", "a_"])
    def test_rejects_short_or_empty(self, slug):
        with pytest.raises(InvalidSlugError):
            format_slug(slug)


class TestPaths:
    @pytest.mark.parametrize("path", ["/", "/blog/post-1", "/category/technical-seo"])
    def test_valid_paths(self, path):
        assert validate_path(path) is True

    @pytest.mark.parametrize("path", ["", "blog", "/Blog", "/blog/post?x=1", "/blog post"])
    def test_invalid_paths(self, path):
        assert validate_path(path) is False

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/", PageType.HOMEPAGE),
            ("/blog/x", PageType.BLOG),
            ("/guides/x", PageType.GUIDE),
            ("/category/x", PageType.CATEGORY),
            ("/faq", PageType.FAQ),
            ("/search", PageType.SEARCH),
            ("/preview/blog/x", PageType.PREVIEW),
            ("/api/preview", PageType.API),
            ("/unknown", None),
        ],
    )
    def test_page_type_from_path(self, path, expected):
        assert page_type_from_path(path) == expected

    def test_slug_from_path(self):
        assert slug_from_path("/blog/my-post?ref=x", PageType.BLOG) == "my-post"
        assert slug_from_path("/guides/my-guide", PageType.GUIDE) == "my-guide"
        assert slug_from_path("/preview/blog/draft-post", PageType.PREVIEW) == "draft-post"

    def test_slug_from_path_no_match(self):
        assert slug_from_path("/faq", PageType.FAQ) is None
        assert slug_from_path("/guides/x", PageType.BLOG) is None


class TestUrlPatternManager:
    def test_base_url_trailing_slash_removed(self, urls):
        assert urls.base_url == "https://example.com"

    def test_content_urls(self, urls):
        post, guide, category = BLOG_POSTS[0], GUIDES[0], CATEGORIES[0]
        assert urls.blog_post_url(post) == f"/blog/{post.slug}"
        assert urls.guide_url(guide) == f"/guides/{guide.slug}"
        assert urls.category_url(category) == "/category/performance"
        assert urls.category_url(category, absolute=True) == (
            "https://example.com/category/performance"
        )

    def test_static_urls(self, urls):
        assert urls.faq_url() == "/faq"
        assert urls.homepage_url(absolute=True) == "https://example.com/"

    def test_search_url_encodes_query(self, urls):
        assert urls.search_url() == "/search"
        assert urls.search_url("a b&c") == "/search?q=a%20b%26c"

    def test_preview_url(self, urls):
        assert urls.preview_url("blog", "Draft Post") == "/preview/blog/draft-post"
        with pytest.raises(ValueError):
            urls.preview_url("page", "draft-post")

    def test_api_url(self, urls):
        assert urls.api_url("Preview") == "/api/preview"

    def test_canonical_url(self, urls):
        assert urls.canonical_url(PageType.BLOG, BLOG_POSTS[0]) == (
            f"https://example.com/blog/{BLOG_POSTS[0].slug}"
        )
        assert urls.canonical_url(PageType.FAQ) == "https://example.com/faq"
        assert urls.canonical_url(PageType.SEARCH, query="seo") == "https://example.com/search?q=seo"

    def test_canonical_url_mismatch_is_homepage(self, urls):
        assert urls.canonical_url(PageType.BLOG, GUIDES[0]) == "https://example.com/"

    def test_breadcrumbs_blog(self, urls):
        post = BLOG_POSTS[0]
        crumbs = urls.breadcrumbs(PageType.BLOG, post)
        assert [c.name for c in crumbs] == ["Home", "Blog", post.title]
        assert [c.url for c in crumbs] == ["/", "/blog", f"/blog/{post.slug}"]

    def test_breadcrumbs_category_listing(self, urls):
        crumbs = urls.breadcrumbs(PageType.CATEGORY)
        assert [c.name for c in crumbs] == ["Home", "Categories"]

    def test_breadcrumbs_homepage(self, urls):
        assert [c.name for c in urls.breadcrumbs(PageType.HOMEPAGE)] == ["Home"]

    def test_sitemap_urls(self, urls):
        records = [BLOG_POSTS[0], GUIDES[0], CATEGORIES[0]]
        assert urls.sitemap_urls(records) == [
            f"https://example.com/blog/{BLOG_POSTS[0].slug}",
            f"https://example.com/guides/{GUIDES[0].slug}",
            "https://example.com/category/performance",
        ]
