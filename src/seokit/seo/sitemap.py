"""Per-language XML sitemaps plus a sitemap index."""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, TypeVar

from seokit.domain.errors import SitemapWriteError
from seokit.domain.models import ContentRecord, GenerationResult, SitemapFile
from seokit.domain.schema import (
    CONTENT_BLOG,
    CONTENT_DOCS,
    CONTENT_LANDING,
    CONTENT_PRODUCT,
    DEFAULT_LANGUAGE,
    MAX_URLS_PER_SITEMAP,
)
from seokit.ports import ContentSource, MetricsSink, SearchEngineNotifier
from seokit.seo.hreflang import build_hreflang_links, build_localized_url
from seokit.seo.language_mapper import LanguageMapper
from seokit.seo.sitemap_xml import IndexEntry, UrlEntry, build_index_xml, build_urlset_xml
from seokit.utils.dates import coerce_datetime, to_iso8601, utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")

SITEMAPS_SUBDIR = "sitemaps"
INDEX_FILENAME = "sitemap.xml"

_TYPE_PRIORITY = {
    CONTENT_LANDING: 1.0,
    CONTENT_PRODUCT: 0.9,
    CONTENT_BLOG: 0.7,
    CONTENT_DOCS: 0.6,
}
_BASE_PRIORITY = 0.5
_PRIORITY_FLOOR = 0.3

_TYPE_CHANGEFREQ = {
    CONTENT_LANDING: "weekly",
    CONTENT_PRODUCT: "weekly",
    CONTENT_DOCS: "weekly",
    CONTENT_BLOG: "monthly",
}
_DEFAULT_CHANGEFREQ = "monthly"


def chunk_array(items: Sequence[T], size: int) -> list[list[T]]:
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise SitemapWriteError(f"Cannot write {path}: {e}") from e


class SitemapGenerator:
    """
    Builds output_dir/sitemaps/sitemap-<id>.xml for every language (split at
    max_urls_per_sitemap) and output_dir/sitemap.xml indexing them.

    Holds no content between runs; every generate_all() starts from the
    content source.
    """

    def __init__(
        self,
        content_source: ContentSource,
        language_mapper: Optional[LanguageMapper] = None,
        *,
        base_url: str,
        output_dir: str | Path,
        max_urls_per_sitemap: int = MAX_URLS_PER_SITEMAP,
        notifier: Optional[SearchEngineNotifier] = None,
        clock: Callable[[], datetime] = utcnow,
        default_language: str = DEFAULT_LANGUAGE,
    ):
        self.content_source = content_source
        self.language_mapper = language_mapper or LanguageMapper()
        self.base_url = base_url.rstrip("/")
        self.output_dir = Path(output_dir)
        self.max_urls_per_sitemap = max_urls_per_sitemap
        self.notifier = notifier
        self.clock = clock
        self.default_language = default_language

    async def generate_all(self) -> GenerationResult:
        logger.info("Starting sitemap generation into %s", self.output_dir)

        all_content = await self.content_source.get_all_published()
        if not all_content:
            logger.warning("No content found, skipping sitemap generation")
            return GenerationResult(success=True, sitemaps=(), index=None)

        by_language = self.group_by_language(all_content)

        # Files are independent; the index waits for all of them.
        per_language = await asyncio.gather(
            *(self.generate_for_language(lang, items) for lang, items in by_language.items())
        )

        generated_at = self.format_date(self.clock())
        sitemaps: list[SitemapFile] = []
        for language, paths in zip(by_language, per_language):
            for path in paths:
                sitemaps.append(
                    SitemapFile(
                        language=language,
                        path=path,
                        url=f"{self.base_url}/{SITEMAPS_SUBDIR}/{path.name}",
                        lastmod=generated_at,
                    )
                )

        index_path = await asyncio.to_thread(self.generate_index, sitemaps)
        await self.ping_search_engines(f"{self.base_url}/{INDEX_FILENAME}")

        logger.info("Generated %d sitemaps", len(sitemaps))
        return GenerationResult(success=True, sitemaps=tuple(sitemaps), index=index_path)

    def group_by_language(self, content: Sequence[ContentRecord]) -> dict[str, list[ContentRecord]]:
        groups: dict[str, list[ContentRecord]] = {}
        for item in content:
            groups.setdefault(item.language or self.default_language, []).append(item)
        return groups

    def chunk_array(self, items: Sequence[T], size: int) -> list[list[T]]:
        return chunk_array(items, size)

    async def generate_for_language(self, language: str, content: Sequence[ContentRecord]) -> list[Path]:
        chunks = self.chunk_array(content, self.max_urls_per_sitemap)
        if len(chunks) == 1:
            identifiers = [language]
        else:
            identifiers = [f"{language}-{i}" for i in range(1, len(chunks) + 1)]

        return list(
            await asyncio.gather(
                *(asyncio.to_thread(self.write_sitemap, ident, chunk) for ident, chunk in zip(identifiers, chunks))
            )
        )

    def build_entry(self, item: ContentRecord) -> UrlEntry:
        alternates = ()
        if item.alternate_languages:
            alternates = tuple(
                build_hreflang_links(
                    item,
                    self.language_mapper,
                    self.base_url,
                    default_language=self.default_language,
                )
            )
        return UrlEntry(
            loc=self.build_url(item.slug, item.language),
            lastmod=self.format_date(item.updated_at),
            changefreq=self.calculate_change_freq(item),
            priority=self.calculate_priority(item),
            alternates=alternates,
            images=tuple(item.images),
        )

    def write_sitemap(self, identifier: str, content: Sequence[ContentRecord]) -> Path:
        xml = build_urlset_xml([self.build_entry(item) for item in content])
        path = self.output_dir / SITEMAPS_SUBDIR / f"sitemap-{identifier}.xml"
        _write_text(path, xml)
        logger.debug("Wrote %s (%d urls)", path, len(content))
        return path

    def generate_index(self, sitemaps: Sequence[SitemapFile]) -> Path:
        xml = build_index_xml([IndexEntry(loc=s.url, lastmod=s.lastmod) for s in sitemaps])
        path = self.output_dir / INDEX_FILENAME
        _write_text(path, xml)
        return path

    def build_url(self, slug: str, language: str | None) -> str:
        return build_localized_url(self.base_url, slug, language, self.default_language)

    def calculate_priority(self, content: ContentRecord) -> float:
        priority = _TYPE_PRIORITY.get(content.content_type, _BASE_PRIORITY)

        published = coerce_datetime(content.published_at)
        if published is not None:
            days_old = (self.clock() - published).total_seconds() / 86400
            if days_old < 7:
                priority += 0.2
            elif days_old < 30:
                priority += 0.1
            elif days_old > 365:
                priority = max(_PRIORITY_FLOOR, priority - 0.1)

        return round(min(1.0, max(0.0, priority)), 1)

    def calculate_change_freq(self, content: ContentRecord) -> str:
        return _TYPE_CHANGEFREQ.get(content.content_type, _DEFAULT_CHANGEFREQ)

    def format_date(self, value: Any) -> str:
        """ISO-8601 UTC; missing dates become 'now', hand-written strings pass through."""
        formatted = to_iso8601(value)
        if formatted is None:
            formatted = to_iso8601(self.clock())
        return formatted

    async def ping_search_engines(self, sitemap_url: str) -> None:
        if self.notifier is None:
            return
        try:
            await self.notifier.notify(sitemap_url)
        except Exception:
            logger.exception("Search engine notification failed for %s", sitemap_url)


class MonitoredSitemapGenerator(SitemapGenerator):
    """
    SitemapGenerator that reports success, duration and file count (or the
    failure) to a MetricsSink. Errors still propagate.
    """

    def __init__(self, *args: Any, metrics: MetricsSink, timer: Callable[[], float] = time.perf_counter, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.metrics = metrics
        self.timer = timer

    async def generate_all(self) -> GenerationResult:
        start = self.timer()
        try:
            result = await super().generate_all()
        except Exception as e:
            self.metrics.record("sitemap.generation.error", 1)
            self.metrics.error(
                "sitemap.generation.failed",
                e,
                context={"output_dir": str(self.output_dir), "base_url": self.base_url},
            )
            raise

        self.metrics.record("sitemap.generation.success", 1)
        self.metrics.record("sitemap.generation.duration", (self.timer() - start) * 1000.0)
        self.metrics.record("sitemap.files.count", len(result.sitemaps))
        return result
