from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from pathlib import Path

from seokit.domain.models import Author
from seokit.utils.dates import coerce_datetime, parse_date, to_iso8601
from seokit.utils.json_sanitize import json_sanitize
from seokit.utils.text import make_excerpt, strip_markdown, truncate_at_word


def test_strip_markdown():
    md = "> quote with `code`\n- item [link](http://x) and ![alt](a.png)\n<b>bold</b> __strong__ *em*"
    assert strip_markdown(md) == "quote with code\nitem link and alt\nbold strong em"


def test_strip_markdown_leaves_snake_case_alone():
    assert strip_markdown("use my_var_name here") == "use my_var_name here"


def test_make_excerpt_first_paragraph_only():
    body = "# Title\n\n```\ncode\n```\n\nFirst **real**\nparagraph.\n\nSecond paragraph."
    assert make_excerpt(body) == "First real paragraph."
    assert make_excerpt("") == ""
    assert make_excerpt("# Only a heading") == ""


def test_make_excerpt_truncates():
    body = "lorem ipsum " * 30
    excerpt = make_excerpt(body, 50)
    assert excerpt.endswith("...")
    assert len(excerpt) <= 53


def test_truncate_at_word_exact_limit():
    assert truncate_at_word("abc def", 7) == "abc def"
    assert truncate_at_word("abc def", 6) == "abc..."


def test_dates():
    assert parse_date("2025-01-15") == datetime(2025, 1, 15, tzinfo=timezone.utc)
    assert parse_date("garbage") is None
    assert parse_date("  ") is None
    assert coerce_datetime(date(2025, 1, 15)) == datetime(2025, 1, 15, tzinfo=timezone.utc)
    assert coerce_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert coerce_datetime(True) is None
    assert coerce_datetime(None) is None


def test_to_iso8601():
    plus_two = timezone(timedelta(hours=2))
    assert to_iso8601(datetime(2025, 1, 15, 12, 0, 0, 123456, tzinfo=plus_two)) == "2025-01-15T10:00:00Z"
    assert to_iso8601("2025-01-15") == "2025-01-15T00:00:00Z"
    assert to_iso8601("next week") == "next week"
    assert to_iso8601(None) is None


def test_json_sanitize():
    data = {
        "when": datetime(2025, 1, 15, tzinfo=timezone.utc),
        "path": Path("a/b"),
        "author": Author(name="Jo"),
        "tags": ("x", "y"),
        "set": {"b", "a"},
    }
    assert json_sanitize(data) == {
        "when": "2025-01-15T00:00:00Z",
        "path": "a/b",
        "author": {"name": "Jo"},
        "tags": ["x", "y"],
        "set": ["a", "b"],
    }
