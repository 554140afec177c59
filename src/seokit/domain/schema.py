from __future__ import annotations

from typing import Final

# Content types and statuses understood across the system
CONTENT_BLOG: Final[str] = "blog"
CONTENT_PRODUCT: Final[str] = "product"
CONTENT_DOCS: Final[str] = "docs"
CONTENT_LANDING: Final[str] = "landing"
CONTENT_PAGE: Final[str] = "page"

CONTENT_TYPES: Final[tuple[str, ...]] = (
    CONTENT_BLOG,
    CONTENT_PRODUCT,
    CONTENT_DOCS,
    CONTENT_LANDING,
    CONTENT_PAGE,
)

STATUS_DRAFT: Final[str] = "draft"
STATUS_PUBLISHED: Final[str] = "published"

DEFAULT_LANGUAGE: Final[str] = "en"
X_DEFAULT: Final[str] = "x-default"

# Languages whose glyphs carry more information per character
CJK_LANGUAGES: Final[frozenset[str]] = frozenset({"zh", "zh-tw", "ja", "ko"})

# Sitemap protocol cap per file
MAX_URLS_PER_SITEMAP: Final[int] = 50_000
