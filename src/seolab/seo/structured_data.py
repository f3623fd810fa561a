"""Page-level structured data: the full JSON-LD set for each page type.

``SchemaGenerator`` produces single Schema.org objects; this module
decides which of them a given page embeds and adds the page-only types
(Course, CollectionPage, SearchResultsPage, WebPage).
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from urllib.parse import quote

from pydantic import BaseModel

from seolab.content.models import BlogPost, Category, FaqEntry, Guide
from seolab.seo.schemas import (
    BreadcrumbItem,
    JsonLd,
    SchemaConfig,
    SchemaGenerator,
    schema_node,
    schema_object,
)
from seolab.seo.urls import PageType


class ContentCounts(BaseModel):
    """Number of posts and guides filed under a category."""

    blog_posts: int = 0
    guides: int = 0

    @property
    def total(self) -> int:
        return self.blog_posts + self.guides


class StructuredDataBuilder:
    """Assembles the list of JSON-LD objects embedded in each page."""

    def __init__(self, generator: SchemaGenerator) -> None:
        self.generator = generator

    @property
    def _config(self) -> SchemaConfig:
        return self.generator.config

    def blog_post(
        self, post: BlogPost, canonical_url: str, include_organization: bool = True
    ) -> list[JsonLd]:
        schemas = [
            self.generator.blog_posting(post, canonical_url),
            self.generator.breadcrumb_list([
                BreadcrumbItem(name="Home", url="/"),
                BreadcrumbItem(name="Blog", url="/blog"),
                BreadcrumbItem(name=post.title, url=f"/blog/{post.slug}"),
            ]),
        ]
        if include_organization:
            schemas.append(self.generator.organization())
        return schemas

    def guide(
        self, guide: Guide, canonical_url: str, include_organization: bool = True
    ) -> list[JsonLd]:
        schemas = [
            self.generator.how_to(guide),
            self.generator.breadcrumb_list([
                BreadcrumbItem(name="Home", url="/"),
                BreadcrumbItem(name="Guides", url="/guides"),
                BreadcrumbItem(name=guide.title, url=f"/guides/{guide.slug}"),
            ]),
        ]
        if include_organization:
            schemas.append(self.generator.organization())
        if guide.difficulty and guide.estimated_time:
            schemas.append(self._course(guide, canonical_url))
        return schemas

    def category(
        self,
        category: Category,
        canonical_url: str,
        counts: ContentCounts | None = None,
    ) -> list[JsonLd]:
        return [
            self._collection_page(category, canonical_url, counts),
            self.generator.breadcrumb_list([
                BreadcrumbItem(name="Home", url="/"),
                BreadcrumbItem(name="Categories", url="/categories"),
                BreadcrumbItem(name=category.name, url=f"/category/{category.slug}"),
            ]),
            self.generator.organization(),
        ]

    def faq(self, entries: Sequence[FaqEntry], canonical_url: str) -> list[JsonLd]:
        return [
            self.generator.faq_page(entries),
            self.generator.breadcrumb_list([
                BreadcrumbItem(name="Home", url="/"),
                BreadcrumbItem(name="FAQ", url="/faq"),
            ]),
            self.generator.organization(),
        ]

    def homepage(self) -> list[JsonLd]:
        return [self.generator.organization(), self.generator.website()]

    def search(self, query: str | None = None, result_count: int | None = None) -> list[JsonLd]:
        return [self._search_results_page(query, result_count), self.generator.organization()]

    def fallback(
        self,
        canonical_url: str,
        title: str | None = None,
        description: str | None = None,
    ) -> list[JsonLd]:
        return [self._web_page(canonical_url, title, description), self.generator.organization()]

    # ── Page-only schema types ───────────────────────────────────

    def _publisher(self) -> JsonLd:
        return schema_node("Organization", name=self._config.organization_name, url=self._config.site_url)

    def _course(self, guide: Guide, canonical_url: str) -> JsonLd:
        return schema_object(
            "Course",
            name=guide.title,
            description=guide.description,
            provider=self._publisher(),
            educationalLevel=guide.difficulty.value,
            timeRequired=f"PT{guide.estimated_time}M",
            courseCode=guide.slug,
            url=canonical_url,
            image=self.generator.image_object(guide.featured_image),
        )

    def _collection_page(
        self, category: Category, canonical_url: str, counts: ContentCounts | None
    ) -> JsonLd:
        return schema_object(
            "CollectionPage",
            name=category.name,
            description=category.description,
            url=canonical_url,
            mainEntity=schema_node(
                "ItemList",
                name=f"{category.name} Content",
                description=f"Collection of articles and guides about {category.name.lower()}",
                numberOfItems=counts.total if counts else None,
            ),
            image=self.generator.image_object(category.featured_image),
        )

    def _search_results_page(self, query: str | None, result_count: int | None) -> JsonLd:
        site_name = self._config.site_name
        suffix = f"?q={quote(query, safe='')}" if query else ""
        return schema_object(
            "SearchResultsPage",
            name=f'Search results for "{query}"' if query else "Search",
            description=(
                f'Search results for "{query}" on {site_name}'
                if query
                else f"Search {site_name} for articles and guides"
            ),
            url=f"{self._config.site_url}/search{suffix}",
            mainEntity=(
                schema_node("SearchAction", query=query, resultCount=result_count) if query else None
            ),
        )

    def _web_page(self, canonical_url: str, title: str | None, description: str | None) -> JsonLd:
        return schema_object(
            "WebPage",
            name=title or self._config.site_name,
            description=description or f"Content from {self._config.site_name}",
            url=canonical_url,
            publisher=self._publisher(),
        )


def structured_data_for(
    builder: StructuredDataBuilder,
    page_type: PageType,
    content: BlogPost | Guide | Category | Sequence[FaqEntry] | None,
    canonical_url: str,
    *,
    counts: ContentCounts | None = None,
    query: str | None = None,
    result_count: int | None = None,
) -> list[JsonLd]:
    """Pick the structured data for a page; mismatched content gets the fallback."""
    if page_type == PageType.BLOG and isinstance(content, BlogPost):
        return builder.blog_post(content, canonical_url)
    if page_type == PageType.GUIDE and isinstance(content, Guide):
        return builder.guide(content, canonical_url)
    if page_type == PageType.CATEGORY and isinstance(content, Category):
        return builder.category(content, canonical_url, counts)
    if page_type == PageType.FAQ and isinstance(content, Sequence):
        return builder.faq(list(content), canonical_url)
    if page_type == PageType.HOMEPAGE:
        return builder.homepage()
    if page_type == PageType.SEARCH:
        return builder.search(query, result_count)
    return builder.fallback(canonical_url)


def render_json_ld(schemas: JsonLd | Sequence[JsonLd]) -> str:
    """Serialize for a ``<script type="application/ld+json">`` block.

    ``</`` is escaped so CMS strings cannot close the script element.
    """
    payload = schemas if isinstance(schemas, dict) else list(schemas)
    return json.dumps(payload, ensure_ascii=False, indent=2).replace("</", "<\\/")
