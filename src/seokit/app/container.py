from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from seokit.adapters.caching.ttl_cache import TTLCache
from seokit.adapters.content.git_source import GitContentSource
from seokit.adapters.content.in_memory_source import InMemoryContentSource
from seokit.adapters.content.markdown_source import MarkdownContentSource
from seokit.adapters.metrics.logging_metrics import LoggingMetricsSink
from seokit.adapters.notify.search_engines import LoggingSearchEngineNotifier
from seokit.adapters.parsing.markdown_parser import MarkdownParser
from seokit.domain.errors import ConfigError
from seokit.ports import ContentSource, MetricsSink
from seokit.seo.language_mapper import LanguageMapper, load_languages
from seokit.seo.meta_tags import MetaTagEngine
from seokit.seo.sitemap import MonitoredSitemapGenerator, SitemapGenerator
from seokit.seo.templates import load_templates
from seokit.settings import Settings

SOURCE_MOCK = "mock"
SOURCE_MARKDOWN = "markdown"
SOURCE_GIT = "git"
SOURCES = (SOURCE_MOCK, SOURCE_MARKDOWN, SOURCE_GIT)


@dataclass(frozen=True, slots=True)
class Container:
    """
    Lightweight dependency container.
    Holds the configured content source and the SEO components built on it.
    """
    settings: Settings
    language_mapper: LanguageMapper
    content_source: ContentSource
    parser: MarkdownParser
    meta_engine: MetaTagEngine
    sitemap_generator: SitemapGenerator


def build_parser(settings: Settings) -> MarkdownParser:
    return MarkdownParser(
        base_dir=settings.content.content_dir,
        default_language=settings.site.default_language,
        default_author=settings.content.default_author,
        excerpt_length=settings.content.excerpt_length,
    )


def build_content_source(settings: Settings, source: str, parser: MarkdownParser) -> ContentSource:
    if source == SOURCE_MOCK:
        return InMemoryContentSource()
    if source == SOURCE_MARKDOWN:
        return MarkdownContentSource(parser=parser, cache=TTLCache(ttl_seconds=settings.content.cache_ttl_seconds))
    if source == SOURCE_GIT:
        return GitContentSource(content_dir=settings.content.content_dir)
    raise ConfigError(f"Unknown content source {source!r}; expected one of {', '.join(SOURCES)}")


def build_container(
    settings: Settings,
    *,
    source: str = SOURCE_MARKDOWN,
    monitored: bool = False,
    metrics: Optional[MetricsSink] = None,
) -> Container:
    language_mapper = LanguageMapper(load_languages(settings.seo.languages_file))
    templates = load_templates(settings.seo.templates_file)

    parser = build_parser(settings)
    content_source = build_content_source(settings, source, parser)

    meta_engine = MetaTagEngine(
        base_url=settings.site.base_url,
        site_name=settings.site.site_name,
        language_mapper=language_mapper,
        templates=templates,
        default_image=settings.site.default_image,
        default_language=settings.site.default_language,
    )

    generator_kwargs = dict(
        base_url=settings.site.base_url,
        output_dir=settings.sitemap.output_dir,
        max_urls_per_sitemap=settings.sitemap.max_urls_per_sitemap,
        notifier=LoggingSearchEngineNotifier() if settings.sitemap.notify else None,
        default_language=settings.site.default_language,
    )
    if monitored:
        sitemap_generator: SitemapGenerator = MonitoredSitemapGenerator(
            content_source,
            language_mapper,
            metrics=metrics or LoggingMetricsSink(),
            **generator_kwargs,
        )
    else:
        sitemap_generator = SitemapGenerator(content_source, language_mapper, **generator_kwargs)

    return Container(
        settings=settings,
        language_mapper=language_mapper,
        content_source=content_source,
        parser=parser,
        meta_engine=meta_engine,
        sitemap_generator=sitemap_generator,
    )
