from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from seokit.domain.schema import CONTENT_PAGE, DEFAULT_LANGUAGE, STATUS_PUBLISHED


# -------------------------
# Language table
# -------------------------

class LanguageRecord(BaseModel):
    """
    One row of the language table.

    iso_code is the key used everywhere else (content records, URLs);
    hreflang and og_locale are the spellings search engines and social
    networks expect.
    """
    model_config = ConfigDict(frozen=True)

    iso_code: str
    iso639_3: Optional[str] = None
    hreflang: str
    og_locale: str
    name: str
    native_name: str
    region: Optional[str] = None
    rtl: bool = False
    enabled: bool = True
    priority: int = 999


# -------------------------
# Content records
# -------------------------

@dataclass(frozen=True, slots=True)
class Author:
    name: str = ""


@dataclass(frozen=True, slots=True)
class AlternateLanguage:
    language: str
    slug: str


@dataclass(frozen=True, slots=True)
class ImageRef:
    url: str
    title: str = ""
    caption: str = ""


@dataclass(frozen=True, slots=True)
class Pricing:
    amount: str
    currency: str


@dataclass(frozen=True, slots=True)
class ContentRecord:
    """
    A published (or draft) unit of site content.

    (slug, language) is the natural key. alternate_languages point at the
    translations of this record; nothing checks that they point back.
    """
    id: str
    slug: str
    language: str = DEFAULT_LANGUAGE
    content_type: str = CONTENT_PAGE
    title: str = ""
    excerpt: str = ""
    body: str = ""
    category: Optional[str] = None
    tags: Sequence[str] = field(default_factory=tuple)
    author: Author = field(default_factory=Author)
    featured_image: Optional[str] = None
    published_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    status: str = STATUS_PUBLISHED
    alternate_languages: Sequence[AlternateLanguage] = field(default_factory=tuple)
    images: Sequence[ImageRef] = field(default_factory=tuple)
    pricing: Optional[Pricing] = None

    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    noindex: bool = False
    source_path: Optional[Path] = None


# -------------------------
# Meta tags (derived, never persisted)
# -------------------------

@dataclass(frozen=True, slots=True)
class HreflangLink:
    lang: str
    url: str


@dataclass(frozen=True, slots=True)
class OpenGraph:
    type: str
    title: str
    description: str
    image: str
    url: str
    locale: str
    alternate_locales: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class TwitterCard:
    card: str
    title: str
    description: str
    image: str


@dataclass(frozen=True, slots=True)
class MetaTagResult:
    title: str
    description: str
    canonical: str
    hreflang: Sequence[HreflangLink]
    open_graph: OpenGraph
    twitter: TwitterCard
    schema: Mapping[str, Any]
    robots: str

    def to_dict(self) -> dict[str, Any]:
        og = self.open_graph
        return {
            "title": self.title,
            "description": self.description,
            "canonical": self.canonical,
            "hreflang": [{"lang": h.lang, "url": h.url} for h in self.hreflang],
            "openGraph": {
                "type": og.type,
                "title": og.title,
                "description": og.description,
                "image": og.image,
                "url": og.url,
                "locale": og.locale,
                "alternateLocales": list(og.alternate_locales),
            },
            "twitter": {
                "card": self.twitter.card,
                "title": self.twitter.title,
                "description": self.twitter.description,
                "image": self.twitter.image,
            },
            "schema": dict(self.schema),
            "robots": self.robots,
        }


# -------------------------
# Sitemap output
# -------------------------

@dataclass(frozen=True, slots=True)
class SitemapFile:
    language: str
    path: Path
    url: str
    lastmod: str


@dataclass(frozen=True, slots=True)
class GenerationResult:
    success: bool
    sitemaps: Sequence[SitemapFile] = field(default_factory=tuple)
    index: Optional[Path] = None


# -------------------------
# Validation
# -------------------------

@dataclass(frozen=True, slots=True)
class ValidationReport:
    checked: int
    errors: Sequence[str] = field(default_factory=tuple)
    warnings: Sequence[str] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors
