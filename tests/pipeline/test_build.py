"""Tests for writing and validating a build directory."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from seolab.config import SeoLabConfig, SiteSectionConfig
from seolab.content.mock import MockContentService
from seolab.errors import ContentFetchError
from seolab.pipeline.build import (
    OPTIONAL_VARS,
    REQUIRED_PRODUCTION_VARS,
    build_site,
    validate_build,
    validate_environment,
)
from seolab.pipeline.sitemaps import BLOG_SITEMAP, INDEX_SITEMAP, PAGES_SITEMAP

_GOOD_ENV = {
    "CONTENTFUL_SPACE_ID": "abcdefghij12",
    "CONTENTFUL_DELIVERY_TOKEN": "d" * 43,
    "CONTENTFUL_PREVIEW_TOKEN": "p" * 43,
    "SITE_URL": "https://example.com",
}


@pytest.fixture
def config() -> SeoLabConfig:
    return SeoLabConfig(site=SiteSectionConfig(url="https://example.com"))


class TestBuildSite:
    def test_writes_all_sitemaps(self, tmp_path, config):
        out = tmp_path / "dist"
        result = asyncio.run(build_site(out, MockContentService(), config))

        names = sorted(p.name for p in result.written)
        assert names == [
            "sitemap-blog.xml",
            "sitemap-guides.xml",
            "sitemap-index.xml",
            "sitemap-pages.xml",
        ]
        assert all(p.read_text(encoding="utf-8").startswith("<?xml") for p in result.written)
        assert result.fallbacks == []
        assert result.degraded is False

    def test_no_temp_files_left(self, tmp_path, config):
        asyncio.run(build_site(tmp_path, MockContentService(), config))
        assert not list(tmp_path.glob("*.tmp"))
        assert not list(tmp_path.glob(".*.tmp"))

    def test_output_validates(self, tmp_path, config):
        asyncio.run(build_site(tmp_path, MockContentService(), config))
        assert validate_build(tmp_path) == []

    def test_overwrites_existing_files(self, tmp_path, config):
        (tmp_path / BLOG_SITEMAP).write_text("stale")
        asyncio.run(build_site(tmp_path, MockContentService(), config))
        assert "stale" not in (tmp_path / BLOG_SITEMAP).read_text()

    def test_fallbacks_reported(self, tmp_path, config):
        fetcher = MockContentService()
        fetcher.get_blog_posts = AsyncMock(side_effect=ContentFetchError("down"))
        result = asyncio.run(build_site(tmp_path, fetcher, config))
        assert result.fallbacks == [BLOG_SITEMAP]
        assert result.degraded is True
        # Fallback documents are still valid sitemaps.
        assert validate_build(tmp_path) == []


class TestValidateBuild:
    @pytest.fixture
    def built(self, tmp_path, config):
        asyncio.run(build_site(tmp_path, MockContentService(), config))
        return tmp_path

    def test_missing_directory(self, tmp_path):
        problems = validate_build(tmp_path / "nope")
        assert len(problems) == 1
        assert "not found" in problems[0]

    def test_missing_file(self, built):
        (built / PAGES_SITEMAP).unlink()
        assert validate_build(built) == [f"{PAGES_SITEMAP} not found"]

    def test_empty_file(self, built):
        (built / PAGES_SITEMAP).write_text("")
        assert validate_build(built) == [f"{PAGES_SITEMAP} is empty"]

    def test_malformed_xml(self, built):
        (built / BLOG_SITEMAP).write_text("<urlset><url></urlset>")
        [problem] = validate_build(built)
        assert problem.startswith(f"{BLOG_SITEMAP} is not well-formed XML")

    def test_wrong_root(self, built):
        urlset = (built / PAGES_SITEMAP).read_text()
        (built / INDEX_SITEMAP).write_text(urlset)
        [problem] = validate_build(built)
        assert "unexpected root element" in problem


class TestValidateEnvironment:
    def test_development_always_valid(self):
        report = validate_environment({}, production=False)
        assert report.mode == "development"
        assert report.missing_required == list(REQUIRED_PRODUCTION_VARS)
        assert report.is_valid is True

    def test_production_requires_all(self):
        report = validate_environment({"SITE_URL": "https://example.com"}, production=True)
        assert report.mode == "production"
        assert "SITE_URL" not in report.missing_required
        assert report.is_valid is False

    def test_production_complete(self):
        report = validate_environment(_GOOD_ENV, production=True)
        assert report.missing_required == []
        assert report.is_valid is True
        assert report.site_url_valid is True
        assert report.contentful_configured is True
        assert report.contentful_problems == []

    def test_empty_value_counts_as_missing(self):
        report = validate_environment({**_GOOD_ENV, "SITE_URL": ""}, production=True)
        assert report.missing_required == ["SITE_URL"]

    def test_optional_vars(self):
        env = {**_GOOD_ENV, "CONTENTFUL_ENVIRONMENT": "staging"}
        report = validate_environment(env)
        assert report.present_optional == ["CONTENTFUL_ENVIRONMENT"]
        assert set(report.present_optional) <= set(OPTIONAL_VARS)

    def test_invalid_site_url(self):
        report = validate_environment({"SITE_URL": "example.com"})
        assert report.site_url_valid is False

    def test_short_credentials_flagged(self):
        env = {
            "CONTENTFUL_SPACE_ID": "short",
            "CONTENTFUL_DELIVERY_TOKEN": "tok",
            "CONTENTFUL_PREVIEW_TOKEN": "tok",
        }
        report = validate_environment(env)
        assert report.contentful_configured is True
        assert len(report.contentful_problems) == 3

    def test_reads_process_environment(self, monkeypatch):
        for name in (*REQUIRED_PRODUCTION_VARS, *OPTIONAL_VARS):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("SITE_URL", "https://example.com")
        report = validate_environment()
        assert report.site_url_valid is True
        assert report.contentful_configured is False
