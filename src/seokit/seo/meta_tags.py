"""Per-page SEO: title, description, canonical, hreflang, OG, Twitter, JSON-LD, robots."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from seokit.domain.models import ContentRecord, HreflangLink, MetaTagResult, OpenGraph, TwitterCard
from seokit.domain.schema import (
    CONTENT_BLOG,
    CONTENT_DOCS,
    CONTENT_PAGE,
    CONTENT_PRODUCT,
    DEFAULT_LANGUAGE,
    STATUS_DRAFT,
)
from seokit.seo.hreflang import build_hreflang_links, build_localized_url
from seokit.seo.language_mapper import LanguageMapper
from seokit.seo.templates import (
    CharacterLimits,
    ResolvedTemplate,
    SeoTemplates,
    apply_template,
    character_limits,
    load_templates,
    resolve_template,
    truncate,
)
from seokit.utils.dates import to_iso8601
from seokit.utils.text import make_excerpt

_OG_TYPES = {
    CONTENT_BLOG: "article",
    CONTENT_PRODUCT: "product",
}

_SCHEMA_TYPES = {
    CONTENT_BLOG: "BlogPosting",
    CONTENT_PRODUCT: "Product",
    CONTENT_DOCS: "TechArticle",
}


def _drop_empty(d: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None and v != ""}


class MetaTagEngine:
    """
    Stateless generator of MetaTagResult objects.

    Each call resolves the template for (content_type, language), fills it
    from the record plus caller context and trims the result to the
    language's character budget.
    """

    def __init__(
        self,
        *,
        base_url: str,
        site_name: str,
        language_mapper: Optional[LanguageMapper] = None,
        templates: Optional[SeoTemplates] = None,
        default_image: Optional[str] = None,
        default_language: str = DEFAULT_LANGUAGE,
    ):
        self.base_url = base_url.rstrip("/")
        self.site_name = site_name
        self.language_mapper = language_mapper or LanguageMapper()
        self.templates = templates or load_templates()
        self.default_image = default_image or f"{self.base_url}/og-image.jpg"
        self.default_language = default_language

    def generate(self, content: ContentRecord, context: Optional[Mapping[str, Any]] = None) -> MetaTagResult:
        language = content.language or self.default_language
        content_type = content.content_type or CONTENT_PAGE

        template = self.get_template(content_type, language)
        variables = self.build_variables(content, context)

        # hand-written SEO fields replace the rendered template
        title = content.seo_title or apply_template(template.title, variables)
        description = content.seo_description or apply_template(template.description, variables)
        canonical = self.build_canonical_url(content)
        hreflang = self.generate_hreflang(content)
        image = content.featured_image or self.default_image

        open_graph = OpenGraph(
            type=self.get_og_type(content_type),
            title=apply_template(template.og_title, variables),
            description=apply_template(template.og_description, variables),
            image=image,
            url=canonical,
            locale=self.language_mapper.get_og_locale(language),
            alternate_locales=tuple(
                self.language_mapper.get_og_locale(alt.language)
                for alt in content.alternate_languages
                if alt.language != language
            ),
        )

        twitter = TwitterCard(
            card="summary_large_image" if content.featured_image else "summary",
            title=apply_template(template.twitter_title, variables),
            description=apply_template(template.twitter_description, variables),
            image=image,
        )

        return MetaTagResult(
            title=truncate(title, template.limits.title_max, language),
            description=truncate(description, template.limits.description_max, language),
            canonical=canonical,
            hreflang=tuple(hreflang),
            open_graph=open_graph,
            twitter=twitter,
            schema=self.generate_schema(content, variables),
            robots=self.get_robots_directive(content),
        )

    def get_template(self, content_type: str, language: str) -> ResolvedTemplate:
        return resolve_template(self.templates, content_type, language)

    def get_character_limits(self, language: str) -> CharacterLimits:
        return character_limits(language)

    def build_variables(self, content: ContentRecord, context: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        # caller context wins over record-derived values
        return {
            "title": content.title,
            "excerpt": content.excerpt or make_excerpt(content.body),
            "category": content.category,
            "author": content.author.name if content.author else None,
            "siteName": self.site_name,
            **(dict(context) if context else {}),
        }

    def apply_template(self, template: Optional[str], variables: Mapping[str, Any]) -> str:
        return apply_template(template, variables)

    def truncate(self, text: Optional[str], max_length: int, language: Optional[str]) -> str:
        return truncate(text, max_length, language)

    def build_canonical_url(self, content: ContentRecord) -> str:
        return build_localized_url(self.base_url, content.slug, content.language, self.default_language)

    def generate_hreflang(self, content: ContentRecord) -> list[HreflangLink]:
        return build_hreflang_links(
            content, self.language_mapper, self.base_url, default_language=self.default_language
        )

    def generate_schema(self, content: ContentRecord, variables: Mapping[str, Any]) -> dict[str, Any]:
        """
        Schema.org JSON-LD for the record. Keys with no value are left out,
        as a JSON serializer would drop them anyway.
        """
        base = {
            "@context": "https://schema.org",
            "@type": self.get_schema_type(content.content_type),
            "headline": variables.get("title"),
            "description": variables.get("excerpt"),
            "url": self.build_canonical_url(content),
            "datePublished": to_iso8601(content.published_at),
            "dateModified": to_iso8601(content.updated_at),
        }

        if content.content_type == CONTENT_BLOG:
            author_name = content.author.name if content.author and content.author.name else f"{self.site_name} Team"
            return _drop_empty({
                **base,
                "author": {"@type": "Person", "name": author_name},
                "publisher": {
                    "@type": "Organization",
                    "name": self.site_name,
                    "logo": {"@type": "ImageObject", "url": f"{self.base_url}/logo.png"},
                },
                "image": content.featured_image,
                "articleSection": content.category,
            })

        if content.content_type == CONTENT_PRODUCT:
            offers = None
            if content.pricing is not None:
                offers = {
                    "@type": "Offer",
                    "price": content.pricing.amount,
                    "priceCurrency": content.pricing.currency,
                }
            return _drop_empty({
                **base,
                "name": variables.get("title"),
                "image": content.featured_image,
                "brand": {"@type": "Brand", "name": self.site_name},
                "offers": offers,
            })

        return _drop_empty(base)

    def get_og_type(self, content_type: str) -> str:
        return _OG_TYPES.get(content_type, "website")

    def get_schema_type(self, content_type: str) -> str:
        return _SCHEMA_TYPES.get(content_type, "WebPage")

    def get_robots_directive(self, content: ContentRecord) -> str:
        if content.status == STATUS_DRAFT or content.noindex:
            return "noindex, nofollow"
        return "index, follow"
