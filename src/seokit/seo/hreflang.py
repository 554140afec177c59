from __future__ import annotations

from seokit.domain.models import ContentRecord, HreflangLink
from seokit.domain.schema import DEFAULT_LANGUAGE, X_DEFAULT
from seokit.seo.language_mapper import LanguageMapper


def build_localized_url(base_url: str, slug: str, language: str | None, default_language: str = DEFAULT_LANGUAGE) -> str:
    """
    Public URL of a page: the default language lives at the site root,
    every other language under a /<language>/ prefix.
    """
    base = base_url.rstrip("/")
    path = slug.strip("/")
    lang = language or default_language
    if lang.lower() == default_language.lower():
        return f"{base}/{path}"
    return f"{base}/{lang}/{path}"


def build_hreflang_links(
    content: ContentRecord,
    mapper: LanguageMapper,
    base_url: str,
    *,
    default_language: str = DEFAULT_LANGUAGE,
) -> list[HreflangLink]:
    """
    Self entry first, then one entry per alternate, then exactly one
    x-default pointing at the default-language entry (or self when there
    is none).
    """
    own_language = content.language or default_language
    self_url = build_localized_url(base_url, content.slug, own_language, default_language)

    # (language code, link) so x-default can be picked by code, not tag
    entries: list[tuple[str, HreflangLink]] = [
        (own_language, HreflangLink(lang=mapper.get_hreflang(own_language), url=self_url)),
    ]
    for alt in content.alternate_languages:
        url = build_localized_url(base_url, alt.slug, alt.language, default_language)
        entries.append((alt.language, HreflangLink(lang=mapper.get_hreflang(alt.language), url=url)))

    x_default_url = next(
        (link.url for code, link in entries if code.lower() == default_language.lower()),
        self_url,
    )

    links = [link for _, link in entries]
    links.append(HreflangLink(lang=X_DEFAULT, url=x_default_url))
    return links
