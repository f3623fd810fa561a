"""SEO core: sitemap XML, Schema.org JSON-LD, URL patterns and head metadata."""

from seolab.seo.meta import MetaTagGenerator, SeoConfig, SeoHead, create_meta_tag_generator, detect_page_type
from seolab.seo.schemas import (
    BreadcrumbItem,
    JsonLd,
    SchemaConfig,
    SchemaGenerator,
    create_schema_generator,
)
from seolab.seo.sitemap import (
    ChangeFrequency,
    SitemapEntry,
    SitemapIndexEntry,
    escape_xml,
    format_timestamp,
    format_url,
    get_base_url,
    is_sitemap_eligible,
    render_sitemap,
    render_sitemap_entry,
    render_sitemap_index,
    render_sitemap_index_entry,
    validate_url,
)
from seolab.seo.structured_data import (
    ContentCounts,
    StructuredDataBuilder,
    render_json_ld,
    structured_data_for,
)
from seolab.seo.urls import PageType, UrlPatternManager, format_slug

__all__ = [
    "BreadcrumbItem",
    "ChangeFrequency",
    "ContentCounts",
    "JsonLd",
    "MetaTagGenerator",
    "PageType",
    "SchemaConfig",
    "SchemaGenerator",
    "SeoConfig",
    "SeoHead",
    "SitemapEntry",
    "SitemapIndexEntry",
    "StructuredDataBuilder",
    "UrlPatternManager",
    "create_meta_tag_generator",
    "create_schema_generator",
    "detect_page_type",
    "escape_xml",
    "format_slug",
    "format_timestamp",
    "format_url",
    "get_base_url",
    "is_sitemap_eligible",
    "render_json_ld",
    "render_sitemap",
    "render_sitemap_entry",
    "render_sitemap_index",
    "render_sitemap_index_entry",
    "structured_data_for",
    "validate_url",
]
