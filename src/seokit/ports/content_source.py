from __future__ import annotations

from typing import Optional, Protocol

from seokit.domain.models import ContentRecord
from seokit.domain.schema import DEFAULT_LANGUAGE


class ContentSource(Protocol):
    """
    Query-only provider of content records.

    Not-found is never an error: lookups return None, listings return [].
    """

    async def get_all_published(self) -> list[ContentRecord]:
        ...

    async def get_by_slug(self, slug: str, language: str = DEFAULT_LANGUAGE) -> Optional[ContentRecord]:
        ...

    async def get_by_id(self, content_id: str) -> Optional[ContentRecord]:
        ...
