from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from seokit.domain.models import ContentRecord
from seokit.domain.schema import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GitContentSource:
    """
    Placeholder for content read from a versioned repository.
    Returns no content until a fetch strategy is implemented.
    """
    content_dir: Path
    ref: str = "HEAD"

    async def get_all_published(self) -> list[ContentRecord]:
        logger.info("GitContentSource: no fetch strategy for %s@%s, returning no content", self.content_dir, self.ref)
        return []

    async def get_by_slug(self, slug: str, language: str = DEFAULT_LANGUAGE) -> Optional[ContentRecord]:
        return None

    async def get_by_id(self, content_id: str) -> Optional[ContentRecord]:
        return None
