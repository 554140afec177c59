from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

from seokit.adapters.caching.ttl_cache import TTLCache
from seokit.adapters.parsing.markdown_parser import MarkdownParser
from seokit.domain.models import ContentRecord
from seokit.domain.schema import DEFAULT_LANGUAGE, STATUS_PUBLISHED

logger = logging.getLogger(__name__)

ALL_PUBLISHED_KEY = "all_published"


@dataclass(slots=True)
class MarkdownContentSource:
    """
    Content source backed by a directory of Markdown files.

    The published set is parsed once and cached for cache.ttl_seconds; every
    lookup and filter is computed from that cached set.
    """
    parser: MarkdownParser
    cache: TTLCache[list[ContentRecord]] = field(default_factory=TTLCache)

    async def get_all_published(self) -> list[ContentRecord]:
        cached = self.cache.get(ALL_PUBLISHED_KEY)
        if cached is not None:
            return list(cached)

        content_dir = self.parser.base_dir
        if not content_dir.is_dir():
            logger.warning("Content directory %s does not exist; no content", content_dir)
            return []

        # parsing is blocking file I/O
        all_content = await asyncio.to_thread(self.parser.parse_directory)
        published = [item for item in all_content if item.status == STATUS_PUBLISHED]

        self.cache.set(ALL_PUBLISHED_KEY, published)
        logger.info("Loaded %d published items from %s", len(published), content_dir)
        return list(published)

    async def get_by_slug(self, slug: str, language: str = DEFAULT_LANGUAGE) -> Optional[ContentRecord]:
        items = await self.get_all_published()
        return next((i for i in items if i.slug == slug and i.language == language), None)

    async def get_by_id(self, content_id: str) -> Optional[ContentRecord]:
        items = await self.get_all_published()
        return next((i for i in items if i.id == content_id), None)

    async def get_by_category(self, category: str) -> list[ContentRecord]:
        items = await self.get_all_published()
        return [i for i in items if i.category == category]

    async def get_by_tag(self, tag: str) -> list[ContentRecord]:
        items = await self.get_all_published()
        return [i for i in items if tag in i.tags]

    async def get_by_language(self, language: str) -> list[ContentRecord]:
        items = await self.get_all_published()
        return [i for i in items if i.language == language]

    async def get_by_content_type(self, content_type: str) -> list[ContentRecord]:
        items = await self.get_all_published()
        return [i for i in items if i.content_type == content_type]

    def clear_cache(self) -> None:
        self.cache.invalidate(ALL_PUBLISHED_KEY)
