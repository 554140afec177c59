from __future__ import annotations

from datetime import datetime, timezone

import pytest

from seokit.seo.language_mapper import LanguageMapper
from seokit.seo.meta_tags import MetaTagEngine

BASE_URL = "https://example.com"
SITE_NAME = "Example"

# Five days after the fixture blog posts were published
NOW = datetime(2025, 1, 20, tzinfo=timezone.utc)


class FakeClock:
    """Monotonic-style clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="session")
def mapper() -> LanguageMapper:
    return LanguageMapper()


@pytest.fixture
def engine(mapper: LanguageMapper) -> MetaTagEngine:
    return MetaTagEngine(base_url=BASE_URL, site_name=SITE_NAME, language_mapper=mapper)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


def write(path, text: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
