from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Sequence

from seokit.domain.models import AlternateLanguage, Author, ContentRecord, ImageRef, Pricing
from seokit.domain.schema import DEFAULT_LANGUAGE, STATUS_PUBLISHED


def default_fixture() -> list[ContentRecord]:
    """
    Three records for development and tests: one blog post in English and
    Chinese, one English product page.
    """
    return [
        ContentRecord(
            id="1",
            slug="blog/ai-trends-2025",
            language="en",
            content_type="blog",
            title="AI Trends in 2025",
            excerpt="Discover the latest trends in artificial intelligence and how they will shape the future.",
            body="# AI Trends in 2025\n\nArtificial intelligence continues to evolve...",
            category="Technology",
            author=Author(name="John Doe"),
            featured_image="https://example.com/images/ai-trends.jpg",
            published_at=datetime(2025, 1, 15, tzinfo=timezone.utc),
            updated_at=datetime(2025, 1, 15, tzinfo=timezone.utc),
            status=STATUS_PUBLISHED,
            alternate_languages=(
                AlternateLanguage(language="zh", slug="blog/ai-trends-2025"),
                AlternateLanguage(language="ja", slug="blog/ai-trends-2025"),
            ),
            images=(
                ImageRef(
                    url="https://example.com/images/ai-trends.jpg",
                    title="AI Trends",
                    caption="The future of AI",
                ),
            ),
        ),
        ContentRecord(
            id="2",
            slug="blog/ai-trends-2025",
            language="zh",
            content_type="blog",
            title="2025年AI趋势",
            excerpt="探索人工智能的最新趋势以及它们如何塑造未来。",
            body="# 2025年AI趋势\n\n人工智能继续发展...",
            category="技术",
            author=Author(name="John Doe"),
            featured_image="https://example.com/images/ai-trends.jpg",
            published_at=datetime(2025, 1, 15, tzinfo=timezone.utc),
            updated_at=datetime(2025, 1, 15, tzinfo=timezone.utc),
            status=STATUS_PUBLISHED,
            alternate_languages=(
                AlternateLanguage(language="en", slug="blog/ai-trends-2025"),
                AlternateLanguage(language="ja", slug="blog/ai-trends-2025"),
            ),
        ),
        ContentRecord(
            id="3",
            slug="products/chatbot-platform",
            language="en",
            content_type="product",
            title="Chatbot Platform",
            excerpt="Build intelligent chatbots with our powerful AI platform.",
            body="# Chatbot Platform\n\nOur chatbot platform allows you to...",
            category="Products",
            featured_image="https://example.com/images/chatbot.jpg",
            published_at=datetime(2024, 12, 1, tzinfo=timezone.utc),
            updated_at=datetime(2025, 1, 10, tzinfo=timezone.utc),
            status=STATUS_PUBLISHED,
            pricing=Pricing(amount="99", currency="USD"),
            alternate_languages=(
                AlternateLanguage(language="zh", slug="products/chatbot-platform"),
            ),
        ),
    ]


@dataclass(slots=True)
class InMemoryContentSource:
    """
    Content source over a fixed list of records (the default fixture when
    none are given).
    """
    records: Sequence[ContentRecord] = field(default_factory=default_fixture)

    async def get_all_published(self) -> list[ContentRecord]:
        return [r for r in self.records if r.status == STATUS_PUBLISHED]

    async def get_by_slug(self, slug: str, language: str = DEFAULT_LANGUAGE) -> Optional[ContentRecord]:
        return next((r for r in self.records if r.slug == slug and r.language == language), None)

    async def get_by_id(self, content_id: str) -> Optional[ContentRecord]:
        return next((r for r in self.records if r.id == content_id), None)
