from __future__ import annotations

from typing import Optional, Sequence

from seokit.domain.models import ContentRecord, GenerationResult, ValidationReport
from seokit.seo.meta_tags import MetaTagEngine
from seokit.seo.sitemap import SitemapGenerator
from seokit.seo.templates import cjk_weight, is_cjk_language


async def generate_sitemaps(generator: SitemapGenerator) -> GenerationResult:
    return await generator.generate_all()


def display_length(text: str, language: Optional[str]) -> int:
    """Length as counted by truncate(): CJK characters count double in CJK languages."""
    if is_cjk_language(language):
        return sum(cjk_weight(ch) for ch in text)
    return len(text)


def validate_content(records: Sequence[ContentRecord], engine: MetaTagEngine) -> ValidationReport:
    """
    Generate meta tags for every record and check them.

    Missing title, description or canonical URL are errors. Over-long
    title/description, no hreflang links, missing OG title/image and missing
    structured data are warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    for content in records:
        meta = engine.generate(content)
        label = f"{content.slug} ({content.language})"
        limits = engine.get_character_limits(content.language)

        if not meta.title:
            errors.append(f"{label}: Missing title")
        elif (n := display_length(meta.title, content.language)) > limits.title_max:
            warnings.append(f"{label}: Title too long ({n} chars)")

        if not meta.description:
            errors.append(f"{label}: Missing description")
        elif (n := display_length(meta.description, content.language)) > limits.description_max:
            warnings.append(f"{label}: Description too long ({n} chars)")

        if not meta.canonical:
            errors.append(f"{label}: Missing canonical URL")

        if not meta.hreflang:
            warnings.append(f"{label}: No hreflang tags")

        if not meta.open_graph.title:
            warnings.append(f"{label}: Missing OG title")
        if not meta.open_graph.image:
            warnings.append(f"{label}: Missing OG image")

        if not meta.schema:
            warnings.append(f"{label}: Missing structured data")

    return ValidationReport(checked=len(records), errors=tuple(errors), warnings=tuple(warnings))
