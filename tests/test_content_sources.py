from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from seokit.adapters.caching.ttl_cache import TTLCache
from seokit.adapters.content.git_source import GitContentSource
from seokit.adapters.content.in_memory_source import InMemoryContentSource, default_fixture
from seokit.adapters.content.markdown_source import MarkdownContentSource
from seokit.adapters.parsing.markdown_parser import MarkdownParser
from seokit.domain.models import ContentRecord
from conftest import write


def test_in_memory_fixture():
    source = InMemoryContentSource()
    published = asyncio.run(source.get_all_published())

    assert len(published) == 3
    assert asyncio.run(source.get_by_slug("blog/ai-trends-2025", "zh")).id == "2"
    assert asyncio.run(source.get_by_slug("blog/ai-trends-2025")).id == "1"
    assert asyncio.run(source.get_by_id("3")).content_type == "product"
    assert asyncio.run(source.get_by_slug("nope")) is None
    assert asyncio.run(source.get_by_id("nope")) is None


def test_in_memory_filters_drafts():
    records = [*default_fixture(), ContentRecord(id="4", slug="wip", status="draft")]
    published = asyncio.run(InMemoryContentSource(records).get_all_published())
    assert [r.id for r in published] == ["1", "2", "3"]


@pytest.fixture
def content_dir(tmp_path):
    root = tmp_path / "content"
    write(root / "en" / "blog" / "one.md", "---\ntitle: One\ncategory: News\ntags: [a, b]\n---\nBody one.")
    write(root / "en" / "docs" / "two.md", "---\ntitle: Two\ntags: b\n---\nBody two.")
    write(root / "zh" / "blog" / "one.md", "---\ntitle: 一\n---\n正文。")
    write(root / "en" / "wip.md", "---\ntitle: WIP\ndraft: true\n---\nLater.")
    return root


def _source(root: Path, clock) -> MarkdownContentSource:
    return MarkdownContentSource(parser=MarkdownParser(base_dir=root), cache=TTLCache(ttl_seconds=300, clock=clock))


def test_markdown_source_published_and_lookups(content_dir, fake_clock):
    source = _source(content_dir, fake_clock)

    published = asyncio.run(source.get_all_published())
    assert sorted(r.title for r in published) == ["One", "Two", "一"]

    one = asyncio.run(source.get_by_slug("blog/one"))
    assert one is not None and one.language == "en"
    assert asyncio.run(source.get_by_slug("blog/one", "zh")).title == "一"
    assert asyncio.run(source.get_by_id(one.id)) == one
    assert asyncio.run(source.get_by_slug("wip")) is None


def test_markdown_source_filters(content_dir, fake_clock):
    source = _source(content_dir, fake_clock)

    assert [r.title for r in asyncio.run(source.get_by_category("News"))] == ["One"]
    assert sorted(r.title for r in asyncio.run(source.get_by_tag("b"))) == ["One", "Two"]
    assert [r.title for r in asyncio.run(source.get_by_language("zh"))] == ["一"]
    assert [r.title for r in asyncio.run(source.get_by_content_type("docs"))] == ["Two"]


def test_markdown_source_cache_expiry(content_dir, fake_clock):
    source = _source(content_dir, fake_clock)
    assert len(asyncio.run(source.get_all_published())) == 3

    write(content_dir / "en" / "three.md", "# Three\n\nNew.")
    fake_clock.advance(299)
    assert len(asyncio.run(source.get_all_published())) == 3

    fake_clock.advance(1)
    assert len(asyncio.run(source.get_all_published())) == 4


def test_markdown_source_returns_fresh_lists(content_dir, fake_clock):
    source = _source(content_dir, fake_clock)

    first = asyncio.run(source.get_all_published())
    first.clear()
    second = asyncio.run(source.get_all_published())
    assert len(second) == 3

    second.append(second[0])
    assert len(asyncio.run(source.get_all_published())) == 3


def test_markdown_source_clear_cache(content_dir, fake_clock):
    source = _source(content_dir, fake_clock)
    asyncio.run(source.get_all_published())

    write(content_dir / "en" / "three.md", "# Three\n\nNew.")
    source.clear_cache()
    assert len(asyncio.run(source.get_all_published())) == 4


def test_markdown_source_missing_directory(tmp_path, fake_clock):
    source = _source(tmp_path / "missing", fake_clock)
    assert asyncio.run(source.get_all_published()) == []
    assert asyncio.run(source.get_by_slug("anything")) is None


def test_git_source_is_empty(tmp_path):
    source = GitContentSource(content_dir=tmp_path)
    assert asyncio.run(source.get_all_published()) == []
    assert asyncio.run(source.get_by_slug("x")) is None
    assert asyncio.run(source.get_by_id("x")) is None
