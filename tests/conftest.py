"""Shared fixtures: article factory and an HTTPClient wired to httpx.MockTransport."""

from datetime import datetime, timezone

import httpx
import pytest

from core.http_client import HTTPClient
from core.identity import make_id
from core.models import Article


@pytest.fixture
def make_article():
    def _make(
        url: str = "https://example.com/story",
        title: str = "Budget announced",
        summary: str = "The finance minister presented the annual budget in Parliament today.",
        published_at: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
        language: str = "en",
        category: str = "india",
        source: str = "NDTV",
        **kwargs,
    ) -> Article:
        return Article(
            id=kwargs.pop("id", make_id(url, title)),
            title=title,
            summary=summary,
            url=url,
            source=source,
            category=category,
            published_at=published_at,
            language=language,
            **kwargs,
        )

    return _make


@pytest.fixture
def mock_http():
    """Build an HTTPClient whose requests are answered by `handler(request)`."""

    def _make(handler) -> HTTPClient:
        return HTTPClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    return _make
