from __future__ import annotations

from seokit.domain.models import AlternateLanguage, ContentRecord
from seokit.seo.hreflang import build_hreflang_links, build_localized_url

BASE = "https://example.com"


def test_localized_url():
    assert build_localized_url(BASE, "blog/test", "en") == "https://example.com/blog/test"
    assert build_localized_url(BASE, "blog/test", "zh") == "https://example.com/zh/blog/test"
    assert build_localized_url(BASE + "/", "/blog/test/", None) == "https://example.com/blog/test"


def test_default_language_match_ignores_case(mapper):
    assert build_localized_url(BASE, "blog/test", "EN") == "https://example.com/blog/test"
    assert build_localized_url(BASE, "blog/test", "en", default_language="EN") == "https://example.com/blog/test"

    record = ContentRecord(
        id="3",
        slug="p",
        language="fr",
        alternate_languages=(AlternateLanguage(language="EN", slug="p-en"),),
    )
    links = build_hreflang_links(record, mapper, BASE)
    assert links[1].url == "https://example.com/p-en"
    assert links[-1].url == "https://example.com/p-en"


def test_no_alternates_gives_self_and_x_default(mapper):
    record = ContentRecord(id="1", slug="about", language="fr")
    links = build_hreflang_links(record, mapper, BASE)

    assert [(link.lang, link.url) for link in links] == [
        ("fr", "https://example.com/fr/about"),
        ("x-default", "https://example.com/fr/about"),
    ]


def test_x_default_points_at_english_alternate(mapper):
    record = ContentRecord(
        id="2",
        slug="blog/post",
        language="zh",
        alternate_languages=(
            AlternateLanguage(language="ja", slug="blog/post"),
            AlternateLanguage(language="en", slug="blog/post-en"),
        ),
    )
    links = build_hreflang_links(record, mapper, BASE)

    assert links[0].lang == "zh-CN"
    assert [link.lang for link in links] == ["zh-CN", "ja-JP", "en", "x-default"]
    assert links[-1].url == "https://example.com/blog/post-en"


def test_exactly_one_x_default(mapper):
    record = ContentRecord(
        id="1",
        slug="p",
        language="en",
        alternate_languages=(AlternateLanguage(language="de", slug="p"),),
    )
    links = build_hreflang_links(record, mapper, BASE)
    assert sum(1 for link in links if link.lang == "x-default") == 1
    assert links[-1].url == "https://example.com/p"
