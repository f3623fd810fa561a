"""Schema.org structured data generators.

Builds Organization, WebSite, BlogPosting, HowTo, BreadcrumbList and
FAQPage JSON-LD objects from content records.  Rich-result validators
reject some types when a property is present but empty, so optional
properties are omitted entirely rather than emitted as ``null`` or
``""``: every object is assembled through ``schema_object``/``schema_node``,
and empty values are mapped to ``None`` before they get there.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from seolab.content.models import Asset, BlogPost, FaqEntry, Guide
from seolab.seo.sitemap import get_base_url

if TYPE_CHECKING:
    from seolab.config import SeoLabConfig

SCHEMA_CONTEXT = "https://schema.org"

JsonLd = dict[str, Any]


class SchemaConfig(BaseModel):
    """Site-wide identity injected into every schema."""

    model_config = {"frozen": True}

    site_url: str
    site_name: str
    organization_name: str
    logo_url: str | None = None
    social_links: list[str] = Field(default_factory=list)


class BreadcrumbItem(BaseModel):
    model_config = {"frozen": True}

    name: str
    url: str


def _omit_absent(**fields: Any) -> JsonLd:
    """Build a dict from keyword fields, dropping those that are None."""
    return {key: value for key, value in fields.items() if value is not None}


def schema_object(schema_type: str, **fields: Any) -> JsonLd:
    """Top-level JSON-LD object with ``@context`` and ``@type``."""
    return {"@context": SCHEMA_CONTEXT, "@type": schema_type, **_omit_absent(**fields)}


def schema_node(schema_type: str, **fields: Any) -> JsonLd:
    """Nested JSON-LD node (no ``@context``)."""
    return {"@type": schema_type, **_omit_absent(**fields)}


class SchemaGenerator:
    """Maps content records to Schema.org objects.

    Holds only its immutable config, so one instance can be shared by
    any number of page builds.
    """

    def __init__(self, config: SchemaConfig) -> None:
        self.config = config

    def absolute_url(self, url: str) -> str:
        """Prefix site-relative URLs with the site URL."""
        return url if url.startswith("http") else f"{self.config.site_url}{url}"

    def image_object(self, asset: Asset | None, *, with_dimensions: bool = False) -> JsonLd | None:
        if asset is None:
            return None
        dimensions = asset.file.details.image if with_dimensions else None
        return schema_node(
            "ImageObject",
            url=self.absolute_url(asset.file.url),
            width=dimensions.width if dimensions else None,
            height=dimensions.height if dimensions else None,
        )

    def organization(self) -> JsonLd:
        """Organization schema establishing the site's publisher identity."""
        logo = (
            schema_node("ImageObject", url=self.config.logo_url) if self.config.logo_url else None
        )
        return schema_object(
            "Organization",
            name=self.config.organization_name,
            url=self.config.site_url,
            logo=logo,
            sameAs=list(self.config.social_links) or None,
        )

    def website(self) -> JsonLd:
        """WebSite schema with the sitelinks search box action."""
        return schema_object(
            "WebSite",
            name=self.config.site_name,
            url=self.config.site_url,
            potentialAction={
                "@type": "SearchAction",
                "target": {
                    "@type": "EntryPoint",
                    "urlTemplate": f"{self.config.site_url}/search?q={{search_term_string}}",
                },
                "query-input": "required name=search_term_string",
            },
        )

    def blog_posting(self, post: BlogPost, canonical_url: str) -> JsonLd:
        """BlogPosting schema for an article page."""
        author = post.author
        return schema_object(
            "BlogPosting",
            headline=post.title,
            description=post.excerpt,
            author=schema_node(
                "Person",
                name=author.name,
                url=f"{self.config.site_url}/author/{author.slug}" if author.slug else None,
            ),
            publisher=self.organization(),
            datePublished=post.published_at,
            dateModified=post.updated_at,
            mainEntityOfPage={"@type": "WebPage", "@id": canonical_url},
            image=self.image_object(post.featured_image, with_dimensions=True),
            articleSection=post.category.name if post.category else None,
            keywords=list(post.tags) or None,
        )

    def how_to(self, guide: Guide) -> JsonLd:
        """HowTo schema with one HowToStep per guide step, in order.

        ``totalTime`` is omitted when ``estimated_time`` is 0.
        """
        steps = [
            schema_node(
                "HowToStep",
                name=step.title,
                text=step.content,
                image=self.image_object(step.image),
            )
            for step in guide.steps
        ]
        return schema_object(
            "HowTo",
            name=guide.title,
            description=guide.description,
            image=self.image_object(guide.featured_image),
            totalTime=f"PT{guide.estimated_time}M" if guide.estimated_time else None,
            step=steps,
            tool=list(guide.tools) or None,
        )

    def breadcrumb_list(
        self, items: Sequence[BreadcrumbItem | Mapping[str, str]]
    ) -> JsonLd:
        """BreadcrumbList schema; positions are 1-based in input order."""
        crumbs = [
            item if isinstance(item, BreadcrumbItem) else BreadcrumbItem.model_validate(item)
            for item in items
        ]
        return schema_object(
            "BreadcrumbList",
            itemListElement=[
                schema_node(
                    "ListItem",
                    position=index,
                    name=crumb.name,
                    item=self.absolute_url(crumb.url),
                )
                for index, crumb in enumerate(crumbs, start=1)
            ],
        )

    def faq_page(self, entries: Sequence[FaqEntry]) -> JsonLd:
        """FAQPage schema. Entries are emitted in the order given."""
        return schema_object(
            "FAQPage",
            mainEntity=[
                schema_node(
                    "Question",
                    name=entry.question,
                    acceptedAnswer=schema_node("Answer", text=entry.answer),
                )
                for entry in entries
            ],
        )


def create_schema_generator(config: SeoLabConfig) -> SchemaGenerator:
    """Build a SchemaGenerator from the site configuration."""
    site_url = get_base_url(config)
    return SchemaGenerator(
        SchemaConfig(
            site_url=site_url,
            site_name=config.site.name,
            organization_name=config.site.organization_name,
            logo_url=config.site.logo_url or f"{site_url}/images/logo.png",
            social_links=list(config.site.social_links),
        )
    )
