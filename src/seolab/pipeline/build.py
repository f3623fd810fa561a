"""Build pipeline — sitemap documents → files, plus output/env validation."""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field

from seolab.pipeline.sitemaps import (
    BLOG_SITEMAP,
    GUIDES_SITEMAP,
    INDEX_SITEMAP,
    PAGES_SITEMAP,
    render_all_sitemaps,
)
from seolab.seo.sitemap import SITEMAP_NS, validate_url

if TYPE_CHECKING:
    from seolab.config import SeoLabConfig
    from seolab.content import ContentFetcher

logger = logging.getLogger(__name__)

# File name -> expected (namespaced) root element
REQUIRED_FILES = {
    INDEX_SITEMAP: f"{{{SITEMAP_NS}}}sitemapindex",
    PAGES_SITEMAP: f"{{{SITEMAP_NS}}}urlset",
    BLOG_SITEMAP: f"{{{SITEMAP_NS}}}urlset",
    GUIDES_SITEMAP: f"{{{SITEMAP_NS}}}urlset",
}

REQUIRED_PRODUCTION_VARS = (
    "CONTENTFUL_SPACE_ID",
    "CONTENTFUL_DELIVERY_TOKEN",
    "CONTENTFUL_PREVIEW_TOKEN",
    "SITE_URL",
)
OPTIONAL_VARS = ("CONTENTFUL_PREVIEW_SECRET", "CONTENTFUL_ENVIRONMENT")
MIN_SPACE_ID_LENGTH = 10
MIN_TOKEN_LENGTH = 40


class BuildResult(BaseModel):
    """Files written by a build and which of them are fallbacks."""

    output_dir: Path
    written: list[Path] = Field(default_factory=list)
    fallbacks: list[str] = Field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.fallbacks)


class EnvironmentReport(BaseModel):
    """Result of checking the process environment before a build."""

    mode: Literal["production", "development"]
    missing_required: list[str] = Field(default_factory=list)
    present_optional: list[str] = Field(default_factory=list)
    site_url_valid: bool = False
    contentful_configured: bool = False
    contentful_problems: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Development builds are always valid; production needs every required var."""
        if self.mode == "production":
            return not self.missing_required
        return True


def _atomic_write(path: Path, content: str) -> None:
    """Write via a sibling temp file so readers never see a partial document."""
    tmp = path.with_name(f".{path.name}.tmp")
    tmp.write_text(content, encoding="utf-8")
    os.replace(tmp, path)


async def build_site(
    output_dir: Path,
    fetcher: ContentFetcher,
    config: SeoLabConfig,
) -> BuildResult:
    """Render every sitemap and write it under ``output_dir``.

    Args:
        output_dir: Directory to write into; created if missing.
        fetcher: Content source for posts, guides and categories.
        config: Site configuration (base URL, fetch limits).

    Returns:
        BuildResult listing written paths and fallback documents.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    responses = await render_all_sitemaps(fetcher, config)

    result = BuildResult(output_dir=output_dir)
    for name, response in responses.items():
        path = output_dir / name
        _atomic_write(path, response.body)
        result.written.append(path)
        if response.fallback:
            result.fallbacks.append(name)
        logger.info("Wrote %s (%d bytes)", path, len(response.body.encode("utf-8")))

    if result.fallbacks:
        logger.warning("Build used fallback sitemaps: %s", ", ".join(result.fallbacks))
    return result


def validate_build(output_dir: Path) -> list[str]:
    """Check a build directory; returns a list of problems, empty if valid."""
    if not output_dir.is_dir():
        return [f"Build directory not found: {output_dir}"]

    problems: list[str] = []
    for name, expected_root in REQUIRED_FILES.items():
        path = output_dir / name
        if not path.exists():
            problems.append(f"{name} not found")
            continue
        if path.stat().st_size == 0:
            problems.append(f"{name} is empty")
            continue
        try:
            root = ET.parse(path).getroot()
        except ET.ParseError as exc:
            problems.append(f"{name} is not well-formed XML: {exc}")
            continue
        if root.tag != expected_root:
            problems.append(f"{name} has unexpected root element {root.tag}")
    return problems


def validate_environment(
    environ: Mapping[str, str] | None = None,
    *,
    production: bool = False,
) -> EnvironmentReport:
    """Check required and optional build variables.

    Missing variables only fail the report in production; development
    builds fall back to mock content.
    """
    env = os.environ if environ is None else environ
    report = EnvironmentReport(mode="production" if production else "development")

    report.missing_required = [name for name in REQUIRED_PRODUCTION_VARS if not env.get(name)]
    report.present_optional = [name for name in OPTIONAL_VARS if env.get(name)]

    site_url = env.get("SITE_URL", "")
    report.site_url_valid = bool(site_url) and validate_url(site_url)

    space_id = env.get("CONTENTFUL_SPACE_ID", "")
    delivery_token = env.get("CONTENTFUL_DELIVERY_TOKEN", "")
    preview_token = env.get("CONTENTFUL_PREVIEW_TOKEN", "")
    report.contentful_configured = bool(space_id and delivery_token and preview_token)
    if report.contentful_configured:
        if len(space_id) < MIN_SPACE_ID_LENGTH:
            report.contentful_problems.append("CONTENTFUL_SPACE_ID appears to be invalid (too short)")
        if len(delivery_token) < MIN_TOKEN_LENGTH:
            report.contentful_problems.append(
                "CONTENTFUL_DELIVERY_TOKEN appears to be invalid (too short)"
            )
        if len(preview_token) < MIN_TOKEN_LENGTH:
            report.contentful_problems.append(
                "CONTENTFUL_PREVIEW_TOKEN appears to be invalid (too short)"
            )

    if report.missing_required:
        level = logging.ERROR if production else logging.INFO
        logger.log(level, "Missing environment variables: %s", ", ".join(report.missing_required))
    return report
