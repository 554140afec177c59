from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence
from urllib.parse import quote

logger = logging.getLogger(__name__)

DEFAULT_PING_ENDPOINTS = (
    "https://www.google.com/ping?sitemap={sitemap}",
    "https://www.bing.com/ping?sitemap={sitemap}",
)


def build_ping_urls(sitemap_url: str, endpoints: Sequence[str] = DEFAULT_PING_ENDPOINTS) -> list[str]:
    encoded = quote(sitemap_url, safe="")
    return [e.format(sitemap=encoded) for e in endpoints]


@dataclass(frozen=True, slots=True)
class LoggingSearchEngineNotifier:
    """
    Logs the ping URLs search engines would receive. Makes no network calls.
    """
    endpoints: Sequence[str] = DEFAULT_PING_ENDPOINTS

    async def notify(self, sitemap_url: str) -> None:
        for url in build_ping_urls(sitemap_url, self.endpoints):
            logger.info("Would ping: %s", url)
