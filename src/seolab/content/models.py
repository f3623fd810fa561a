"""Content domain models — pure Pydantic v2 data types.

These are the typed records a content fetcher hands to the SEO layer.
Every record is frozen: the sitemap and structured-data generators only
read and reshape them.  Untyped CMS payloads are converted into these
models at the fetcher boundary and never travel further.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class Difficulty(StrEnum):
    """Skill level of a guide."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ContentRecord(BaseModel):
    """System identity shared by every CMS entity.

    Timestamps are kept as the ISO-8601 strings the CMS returns so they
    can be copied verbatim into structured data.
    """

    model_config = {"frozen": True}

    id: str
    created_at: str
    updated_at: str


class ImageDetails(BaseModel):
    """Pixel dimensions of an image asset."""

    model_config = {"frozen": True}

    width: int
    height: int


class AssetDetails(BaseModel):
    model_config = {"frozen": True}

    size: int = 0
    image: ImageDetails | None = None


class AssetFile(BaseModel):
    """The binary behind an asset, as served by the CMS CDN."""

    model_config = {"frozen": True}

    url: str
    file_name: str = ""
    content_type: str = ""
    details: AssetDetails = Field(default_factory=AssetDetails)


class Asset(ContentRecord):
    """A media asset (usually an image)."""

    title: str = ""
    description: str | None = None
    file: AssetFile

    @property
    def url(self) -> str:
        return self.file.url


class Author(ContentRecord):
    name: str
    slug: str | None = None
    bio: str | None = None
    avatar: Asset | None = None
    social_links: dict[str, str] = Field(default_factory=dict)


class Category(ContentRecord):
    """A topical grouping of posts and guides."""

    name: str
    slug: str
    description: str = ""
    color: str = "#000000"
    featured_image: Asset | None = None

    @field_validator("color")
    @classmethod
    def _check_color(cls, value: str) -> str:
        if not HEX_COLOR_RE.match(value):
            raise ValueError(f"color must be #RRGGBB, got {value!r}")
        return value


class SeoFields(BaseModel):
    """Per-post overrides for meta tags."""

    model_config = {"frozen": True}

    title: str | None = None
    description: str | None = None
    og_image: Asset | None = None


class BlogPost(ContentRecord):
    """A published article."""

    title: str
    slug: str
    excerpt: str
    content: str = ""
    author: Author
    category: Category | None = None
    tags: list[str] = Field(default_factory=list)
    published_at: str
    featured_image: Asset | None = None
    seo: SeoFields | None = None


class GuideStep(BaseModel):
    """One step of a guide; its number is its list position + 1."""

    model_config = {"frozen": True}

    title: str
    content: str
    image: Asset | None = None


class Guide(ContentRecord):
    """A step-by-step how-to article."""

    title: str
    slug: str
    description: str
    content: str = ""
    difficulty: Difficulty
    estimated_time: int = Field(0, ge=0)  # minutes
    steps: list[GuideStep] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    category: Category
    featured_image: Asset | None = None
    published_at: str | None = None


class FaqEntry(ContentRecord):
    """A question/answer pair; ``order`` is the display sort key."""

    question: str
    answer: str
    category: str = ""
    order: int = 0
