from __future__ import annotations

import pytest

from seokit.domain.errors import ConfigError
from seokit.seo.templates import (
    apply_template,
    character_limits,
    is_cjk_language,
    load_templates,
    resolve_template,
    truncate,
)


@pytest.fixture(scope="module")
def templates():
    return load_templates()


def test_character_limits():
    for lang in ("zh", "zh-tw", "ja", "ko", "ZH"):
        assert is_cjk_language(lang)
        assert character_limits(lang).title_max == 30
        assert character_limits(lang).description_max == 80
    assert character_limits("en").title_max == 60
    assert character_limits("fr").description_max == 160
    assert character_limits(None).title_max == 60


def test_resolve_base_template(templates):
    t = resolve_template(templates, "blog", "en")
    assert t.title == "{{title}} | {{siteName}} Blog"
    assert t.og_title == "{{title}}"
    # og/twitter descriptions fall back to the base description
    assert t.og_description == "{{excerpt}}"
    assert t.twitter_description == "{{excerpt}}"


def test_unknown_type_uses_default(templates):
    t = resolve_template(templates, "faq", "en")
    assert t.title == "{{title}} | {{siteName}}"
    assert t.og_title == t.title


def test_language_override_merges_key_by_key(templates):
    t = resolve_template(templates, "blog", "zh")
    assert t.title == "{{title}} | {{siteName}}博客"
    assert t.description == "{{excerpt}}"
    assert t.og_title == "{{title}}"
    assert t.limits.title_max == 30


def test_language_default_override_when_type_missing(templates):
    t = resolve_template(templates, "product", "ja")
    assert t.title == "{{title}} | {{siteName}}"
    assert t.og_title == "{{title}} - {{siteName}}"


def test_apply_template_substitutes_and_cleans():
    out = apply_template("{{title}} | {{ missing }} {{siteName}}", {"title": "A", "siteName": "S"})
    assert out == "A | S"


def test_apply_template_empty_and_none_values():
    assert apply_template("{{title}}  by {{author}}", {"title": "Post", "author": None}) == "Post by"
    assert apply_template(None, {"title": "x"}) == ""
    assert apply_template("", {"title": "x"}) == ""


def test_truncate_within_limit_is_verbatim():
    assert truncate("Short title", 60, "en") == "Short title"
    assert truncate("一二三", 30, "zh") == "一二三"
    assert truncate("", 10, "en") == ""
    assert truncate(None, 10, "en") == ""


def test_truncate_at_word_boundary():
    assert truncate("The quick brown fox jumps", 10, "en") == "The quick..."


def test_truncate_hard_cut_without_whitespace():
    assert truncate("abcdefghijkl", 5, "en") == "abcde..."


def test_truncate_cjk_weighted():
    text = "一二三四五六七八九十"
    # each ideograph costs 2 units
    assert truncate(text, 10, "zh") == "一二三四五..."
    assert truncate(text, 20, "ja") == text


def test_truncate_cjk_mixed_width():
    # "AB" = 2 units, each ideograph 2 units
    assert truncate("AB一二三", 6, "ko") == "AB一二..."


def test_load_templates_requires_default(tmp_path):
    path = tmp_path / "t.yaml"
    path.write_text("templates:\n  blog:\n    title: x\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="default"):
        load_templates(path)


def test_load_templates_rejects_unknown_keys(tmp_path):
    path = tmp_path / "t.yaml"
    path.write_text("templates:\n  default:\n    titel: x\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_templates(path)


def test_load_templates_rejects_bad_yaml(tmp_path):
    path = tmp_path / "t.yaml"
    path.write_text("templates: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_templates(path)
