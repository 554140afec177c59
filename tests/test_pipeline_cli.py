from __future__ import annotations

import asyncio
import xml.etree.ElementTree as ET

import pytest

from seokit.adapters.content.in_memory_source import InMemoryContentSource, default_fixture
from seokit.app.cli import main
from seokit.app.container import build_container
from seokit.app.pipeline import display_length, generate_sitemaps, validate_content
from seokit.domain.errors import ConfigError
from seokit.domain.models import ContentRecord
from seokit.seo.sitemap import MonitoredSitemapGenerator
from seokit.settings import ENV_BASE_URL, ENV_CONTENT_DIR, ENV_OUTPUT_DIR, load_settings
from conftest import write


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    for name in (ENV_BASE_URL, ENV_CONTENT_DIR, ENV_OUTPUT_DIR):
        monkeypatch.setenv(name, "unused")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


def test_fixture_validates_cleanly(engine):
    report = validate_content(default_fixture(), engine)
    assert report.checked == 3
    assert report.ok
    assert tuple(report.errors) == ()
    assert tuple(report.warnings) == ()


def test_missing_description_is_an_error(engine):
    report = validate_content([ContentRecord(id="1", slug="empty", title="Empty")], engine)
    assert not report.ok
    assert report.errors == ("empty (en): Missing description",)


def test_oversized_title_is_a_warning(engine):
    record = ContentRecord(id="1", slug="long", title="word " * 20, excerpt="Fine.")
    report = validate_content([record], engine)
    assert report.ok
    assert any("Title too long" in w for w in report.warnings)


def test_display_length_weights_cjk():
    assert display_length("一二", "zh") == 4
    assert display_length("一二", "en") == 2


def test_container_wiring(tmp_path):
    settings = load_settings(env_file=tmp_path / ".env")
    c = build_container(settings, source="mock", monitored=True)
    assert isinstance(c.content_source, InMemoryContentSource)
    assert isinstance(c.sitemap_generator, MonitoredSitemapGenerator)

    result = asyncio.run(generate_sitemaps(c.sitemap_generator))
    assert len(result.sitemaps) == 2
    assert result.index == (tmp_path / "public" / "sitemap.xml").resolve()


def test_container_rejects_unknown_source(tmp_path):
    with pytest.raises(ConfigError):
        build_container(load_settings(env_file=tmp_path / ".env"), source="ftp")


def test_cli_generate(tmp_path):
    out = tmp_path / "site"
    code = main(["generate", "--source", "mock", "--output-dir", str(out), "--base-url", "https://cli.example"])
    assert code == 0

    index = ET.parse(out / "sitemap.xml").getroot()
    ns = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}
    assert [el.text for el in index.findall("sm:sitemap/sm:loc", ns)] == [
        "https://cli.example/sitemaps/sitemap-en.xml",
        "https://cli.example/sitemaps/sitemap-zh.xml",
    ]


def test_cli_generate_from_markdown(tmp_path):
    write(tmp_path / "content" / "en" / "blog" / "post.md", "---\ntitle: Post\n---\nHello there.")
    write(tmp_path / "content" / "de" / "blog" / "post.md", "---\ntitle: Beitrag\n---\nHallo.")
    code = main(["generate", "--monitored"])
    assert code == 0
    assert (tmp_path / "public" / "sitemaps" / "sitemap-en.xml").exists()
    assert (tmp_path / "public" / "sitemaps" / "sitemap-de.xml").exists()


def test_cli_validate_exit_codes(tmp_path):
    assert main(["validate", "--source", "mock"]) == 0

    write(tmp_path / "content" / "en" / "blank.md", "---\ntitle: Blank\n---\n")
    assert main(["validate"]) == 1


def test_cli_meta(capsys):
    assert main(["meta", "blog/ai-trends-2025", "--source", "mock"]) == 0
    out = capsys.readouterr().out
    assert "BlogPosting" in out
    assert "x-default" in out

    assert main(["meta", "no/such/page", "--source", "mock"]) == 1


def test_cli_meta_record(capsys):
    assert main(["meta", "blog/ai-trends-2025", "--source", "mock", "--record"]) == 0
    out = capsys.readouterr().out
    assert '"slug": "blog/ai-trends-2025"' in out
    assert '"alternate_languages": [' in out
    assert "BlogPosting" not in out


def test_cli_parse(tmp_path, capsys):
    write(tmp_path / "content" / "en" / "docs" / "intro.md", "# Intro\n\nStart here.")
    assert main(["parse"]) == 0
    assert "docs/intro" in capsys.readouterr().out


def test_cli_missing_config(tmp_path):
    assert main(["validate", "--config", str(tmp_path / "missing.toml")]) == 2
