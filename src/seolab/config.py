"""Unified configuration loaded from .seolab.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".seolab.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "seolab" / "config.toml"


class SiteSectionConfig(BaseModel):
    """[site] section — identity injected into every generated artifact."""

    url: str = ""
    name: str = "Technical SEO CWV Astro Lab"
    organization_name: str = "Technical SEO Lab"
    logo_url: str = ""
    social_links: list[str] = Field(
        default_factory=lambda: [
            "https://github.com/technical-seo-lab",
            "https://twitter.com/techseolab",
            "https://linkedin.com/company/technical-seo-lab",
        ]
    )
    default_og_image: str = "/images/default-og.jpg"


class ContentfulSectionConfig(BaseModel):
    """[contentful] section."""

    space_id: str = ""
    environment: str = "master"
    delivery_token: str = ""
    preview_token: str = ""
    host: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.space_id and self.delivery_token and self.preview_token)


class BuildSectionConfig(BaseModel):
    """[build] section."""

    output_dir: str = "./dist"
    blog_limit: int = 1000
    guide_limit: int = 1000


class SeoLabConfig(BaseModel):
    """Top-level configuration model."""

    site: SiteSectionConfig = Field(default_factory=SiteSectionConfig)
    contentful: ContentfulSectionConfig = Field(default_factory=ContentfulSectionConfig)
    build: BuildSectionConfig = Field(default_factory=BuildSectionConfig)


def load_config(path: str | Path | None = None) -> SeoLabConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .seolab.toml in CWD
    3. ~/.config/seolab/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged SeoLabConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = SeoLabConfig.model_validate(data) if data else SeoLabConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: SeoLabConfig, **cli_kwargs: object) -> SeoLabConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).

    Args:
        config: Base config.
        **cli_kwargs: CLI flag values keyed by flattened name
            (e.g., ``site_url``, ``output_dir``).

    Returns:
        Updated config with CLI overrides applied.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "site_url": ("site", "url"),
        "site_name": ("site", "name"),
        "output_dir": ("build", "output_dir"),
        "blog_limit": ("build", "blog_limit"),
        "guide_limit": ("build", "guide_limit"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value

    return SeoLabConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: SeoLabConfig) -> SeoLabConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "SITE_URL": ("site", "url"),
        "CONTENTFUL_SPACE_ID": ("contentful", "space_id"),
        "CONTENTFUL_ENVIRONMENT": ("contentful", "environment"),
        "CONTENTFUL_DELIVERY_TOKEN": ("contentful", "delivery_token"),
        "CONTENTFUL_PREVIEW_TOKEN": ("contentful", "preview_token"),
        "CONTENTFUL_HOST": ("contentful", "host"),
        "SEOLAB_OUTPUT_DIR": ("build", "output_dir"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value:
            data[section][field] = value

    return SeoLabConfig.model_validate(data)
