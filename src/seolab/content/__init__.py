"""Content domain — typed CMS records and the sources that produce them.

Records are fetched per build from Contentful, or from an in-memory
fixture set when no credentials are configured.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from seolab.content.base import ContentFetcher
from seolab.content.models import (
    Asset,
    AssetDetails,
    AssetFile,
    Author,
    BlogPost,
    Category,
    ContentRecord,
    Difficulty,
    FaqEntry,
    Guide,
    GuideStep,
    ImageDetails,
    SeoFields,
)

if TYPE_CHECKING:
    from seolab.config import SeoLabConfig

logger = logging.getLogger(__name__)


def create_content_service(config: SeoLabConfig) -> ContentFetcher:
    """Create the content source for this configuration.

    Returns a Contentful-backed service when space ID and both tokens
    are set, otherwise the fixture-backed mock service.
    """
    from seolab.content.contentful import ContentfulService
    from seolab.content.mock import MockContentService

    if config.contentful.is_configured:
        return ContentfulService.from_config(config.contentful)

    logger.info("Using mock data - Contentful credentials not found")
    return MockContentService()


__all__ = [
    "Asset",
    "AssetDetails",
    "AssetFile",
    "Author",
    "BlogPost",
    "Category",
    "ContentFetcher",
    "ContentRecord",
    "Difficulty",
    "FaqEntry",
    "Guide",
    "GuideStep",
    "ImageDetails",
    "SeoFields",
    "create_content_service",
]
