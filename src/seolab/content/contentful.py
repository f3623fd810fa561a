"""Contentful CMS integration — REST client, link resolution and transformers.

Talks to the Content Delivery API (published content) and the Content
Preview API (drafts).  Raw entries are untyped JSON; they are resolved
against the response ``includes`` and converted into the typed records
of ``seolab.content.models`` before leaving this module.
"""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.parse
import urllib.request
from collections.abc import Callable
from typing import Any, TypeVar

from seolab.config import ContentfulSectionConfig
from seolab.content.base import ContentFetcher
from seolab.content.models import (
    Asset,
    AssetDetails,
    AssetFile,
    Author,
    BlogPost,
    Category,
    FaqEntry,
    Guide,
    GuideStep,
    ImageDetails,
    SeoFields,
)
from seolab.errors import ContentFetchError

logger = logging.getLogger(__name__)

DELIVERY_HOST = "cdn.contentful.com"
PREVIEW_HOST = "preview.contentful.com"
MAX_LINK_DEPTH = 10

T = TypeVar("T")


class ContentfulAPIClient:
    """Client for one Contentful API host (delivery or preview).

    Authenticates with a bearer token and issues GET requests via urllib.
    """

    def __init__(
        self,
        config: ContentfulSectionConfig,
        *,
        preview: bool = False,
        timeout: float = 30.0,
    ) -> None:
        self.config = config
        self.preview = preview
        self.timeout = timeout
        host = PREVIEW_HOST if preview else (config.host or DELIVERY_HOST)
        self._token = config.preview_token if preview else config.delivery_token
        self.base_url = (
            f"https://{host}/spaces/{config.space_id}/environments/{config.environment}"
        )

    def _request(self, path: str, params: dict[str, Any]) -> dict:
        """Make an authenticated GET request and decode the JSON body."""
        query = urllib.parse.urlencode({k: v for k, v in params.items() if v is not None})
        url = f"{self.base_url}{path}?{query}" if query else f"{self.base_url}{path}"
        req = urllib.request.Request(
            url,
            method="GET",
            headers={
                "Authorization": f"Bearer {self._token}",
                "Accept": "application/json",
            },
        )
        with urllib.request.urlopen(req, timeout=self.timeout) as resp:
            return json.loads(resp.read().decode("utf-8"))

    def get_entries(self, **params: Any) -> dict:
        """Query ``/entries``. Dotted parameters are passed as ``fields__slug``."""
        return self._request("/entries", {k.replace("__", "."): v for k, v in params.items()})


def resolve_links(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Inline ``Link`` references in each item from the response includes.

    Unresolvable links become ``None`` (and are dropped from lists).
    Resolution stops at ``MAX_LINK_DEPTH`` to break reference cycles.
    """
    items = payload.get("items", [])
    includes = payload.get("includes", {})
    index: dict[tuple[str, str], dict[str, Any]] = {}
    for entry in [*items, *includes.get("Entry", [])]:
        index[("Entry", entry["sys"]["id"])] = entry
    for asset in includes.get("Asset", []):
        index[("Asset", asset["sys"]["id"])] = asset

    def resolve(value: Any, depth: int) -> Any:
        if isinstance(value, dict):
            sys = value.get("sys")
            if isinstance(sys, dict) and sys.get("type") == "Link":
                target = index.get((sys.get("linkType", ""), sys.get("id", "")))
                if target is None or depth >= MAX_LINK_DEPTH:
                    return None
                return resolve(target, depth + 1)
            return {k: resolve(v, depth) for k, v in value.items()}
        if isinstance(value, list):
            resolved = (resolve(v, depth) for v in value)
            return [v for v in resolved if v is not None]
        return value

    return [resolve(item, 0) for item in items]


# ── Transformers ─────────────────────────────────────────────────────


def _sys_fields(entry: dict[str, Any]) -> dict[str, str]:
    sys = entry["sys"]
    return {
        "id": str(sys["id"]),
        "created_at": str(sys.get("createdAt", "")),
        "updated_at": str(sys.get("updatedAt", "")),
    }


def _optional_str(value: Any) -> str | None:
    return str(value) if value else None


def _asset_url(url: str) -> str:
    # Contentful serves protocol-relative asset URLs.
    return f"https:{url}" if url.startswith("//") else url


def transform_asset(asset: dict[str, Any] | None) -> Asset | None:
    """Convert a raw asset, or return None if it has no usable file."""
    if not asset or not asset.get("fields"):
        return None
    fields = asset["fields"]
    file = fields.get("file") or {}
    if not file.get("url"):
        return None
    details = file.get("details") or {}
    image = details.get("image")
    return Asset(
        **_sys_fields(asset),
        title=str(fields.get("title") or ""),
        description=_optional_str(fields.get("description")),
        file=AssetFile(
            url=_asset_url(str(file["url"])),
            file_name=str(file.get("fileName", "")),
            content_type=str(file.get("contentType", "")),
            details=AssetDetails(
                size=int(details.get("size", 0)),
                image=(
                    ImageDetails(width=int(image["width"]), height=int(image["height"]))
                    if image
                    else None
                ),
            ),
        ),
    )


def transform_author(entry: dict[str, Any] | None) -> Author:
    if not entry or not entry.get("fields"):
        raise ValueError("Invalid author entry")
    fields = entry["fields"]
    return Author(
        **_sys_fields(entry),
        name=str(fields["name"]),
        slug=_optional_str(fields.get("slug")),
        bio=_optional_str(fields.get("bio")),
        avatar=transform_asset(fields.get("avatar")),
        social_links=dict(fields.get("socialLinks") or {}),
    )


def transform_category(entry: dict[str, Any] | None) -> Category:
    if not entry or not entry.get("fields"):
        raise ValueError("Invalid category entry")
    fields = entry["fields"]
    return Category(
        **_sys_fields(entry),
        name=str(fields["name"]),
        slug=str(fields["slug"]),
        description=str(fields.get("description") or ""),
        color=str(fields.get("color") or "#000000"),
        featured_image=transform_asset(fields.get("featuredImage")),
    )


def transform_blog_post(entry: dict[str, Any]) -> BlogPost:
    fields = entry["fields"]
    seo = None
    if fields.get("seoTitle") or fields.get("seoDescription") or fields.get("seoImage"):
        seo = SeoFields(
            title=_optional_str(fields.get("seoTitle")),
            description=_optional_str(fields.get("seoDescription")),
            og_image=transform_asset(fields.get("seoImage")),
        )
    return BlogPost(
        **_sys_fields(entry),
        title=str(fields["title"]),
        slug=str(fields["slug"]),
        excerpt=str(fields.get("excerpt") or ""),
        content=str(fields.get("content") or ""),
        featured_image=transform_asset(fields.get("featuredImage")),
        author=transform_author(fields.get("author")),
        category=transform_category(fields["category"]) if fields.get("category") else None,
        tags=[str(t) for t in fields.get("tags") or []],
        published_at=str(fields["publishedAt"]),
        seo=seo,
    )


def _transform_step(step: dict[str, Any]) -> GuideStep:
    # Steps are stored either as inline JSON objects or as linked entries.
    data = step.get("fields", step)
    return GuideStep(
        title=str(data["title"]),
        content=str(data.get("content") or ""),
        image=transform_asset(data.get("image")),
    )


def transform_guide(entry: dict[str, Any]) -> Guide:
    fields = entry["fields"]
    return Guide(
        **_sys_fields(entry),
        title=str(fields["title"]),
        slug=str(fields["slug"]),
        description=str(fields.get("description") or ""),
        content=str(fields.get("content") or ""),
        difficulty=fields["difficulty"],
        estimated_time=int(fields.get("estimatedTime") or 0),
        steps=[_transform_step(s) for s in fields.get("steps") or [] if isinstance(s, dict)],
        featured_image=transform_asset(fields.get("featuredImage")),
        category=transform_category(fields.get("category")),
        tools=[str(t) for t in fields.get("tools") or []],
        published_at=_optional_str(fields.get("publishedAt")),
    )


def transform_faq_entry(entry: dict[str, Any]) -> FaqEntry:
    fields = entry["fields"]
    return FaqEntry(
        **_sys_fields(entry),
        question=str(fields["question"]),
        answer=str(fields["answer"]),
        category=str(fields.get("category") or ""),
        order=int(fields.get("order") or 0),
    )


# ── Service ──────────────────────────────────────────────────────────


class ContentfulService(ContentFetcher):
    """Content fetcher backed by the Contentful delivery and preview APIs.

    HTTP calls are blocking, so each query runs in a worker thread.
    """

    def __init__(
        self,
        delivery_client: ContentfulAPIClient,
        preview_client: ContentfulAPIClient,
    ) -> None:
        self._delivery = delivery_client
        self._preview = preview_client

    @classmethod
    def from_config(cls, config: ContentfulSectionConfig) -> ContentfulService:
        return cls(
            ContentfulAPIClient(config),
            ContentfulAPIClient(config, preview=True),
        )

    def _client(self, preview: bool) -> ContentfulAPIClient:
        return self._preview if preview else self._delivery

    async def _fetch(
        self,
        what: str,
        transform: Callable[[dict[str, Any]], T],
        preview: bool,
        **params: Any,
    ) -> list[T]:
        """Run one entries query and transform every resolved item.

        Raises:
            ContentFetchError: On network, HTTP, decoding, or shape errors.
        """
        client = self._client(preview)
        try:
            payload = await asyncio.to_thread(client.get_entries, **params)
            return [transform(item) for item in resolve_links(payload)]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.error("Error fetching %s: %s", what, exc, exc_info=True)
            raise ContentFetchError(f"Failed to fetch {what}") from exc

    async def get_blog_post(self, slug: str, preview: bool = False) -> BlogPost | None:
        posts = await self._fetch(
            f"blog post: {slug}", transform_blog_post, preview,
            content_type="blogPost", fields__slug=slug, limit=1, include=2,
        )
        return posts[0] if posts else None

    async def get_blog_posts(self, limit: int = 10, preview: bool = False) -> list[BlogPost]:
        return await self._fetch(
            "blog posts", transform_blog_post, preview,
            content_type="blogPost", limit=limit, order="-fields.publishedAt", include=2,
        )

    async def get_guide(self, slug: str, preview: bool = False) -> Guide | None:
        guides = await self._fetch(
            f"guide: {slug}", transform_guide, preview,
            content_type="guide", fields__slug=slug, limit=1, include=2,
        )
        return guides[0] if guides else None

    async def get_guides(self, limit: int = 10, preview: bool = False) -> list[Guide]:
        return await self._fetch(
            "guides", transform_guide, preview,
            content_type="guide", limit=limit, order="-fields.publishedAt", include=2,
        )

    async def get_category(self, slug: str, preview: bool = False) -> Category | None:
        categories = await self._fetch(
            f"category: {slug}", transform_category, preview,
            content_type="category", fields__slug=slug, limit=1, include=1,
        )
        return categories[0] if categories else None

    async def get_categories(self, preview: bool = False) -> list[Category]:
        return await self._fetch(
            "categories", transform_category, preview,
            content_type="category", order="fields.name", include=1,
        )

    async def get_faq_entries(self, preview: bool = False) -> list[FaqEntry]:
        return await self._fetch(
            "FAQ entries", transform_faq_entry, preview,
            content_type="faqEntry", order="fields.order",
        )
