from __future__ import annotations

from typing import Protocol


class SearchEngineNotifier(Protocol):
    """
    Tells search engines that the sitemap index changed. Fire-and-forget.
    """

    async def notify(self, sitemap_url: str) -> None:
        ...
