from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import httpx
import pytest

from app.schemas.search import PageSection


class WhitespaceEncoding:
    """Stands in for a tiktoken encoding: one token per whitespace-separated word."""

    def encode(self, text: str) -> list[str]:
        return text.split()


@pytest.fixture
def whitespace_encoding(monkeypatch: pytest.MonkeyPatch) -> WhitespaceEncoding:
    """Make ``count_tokens`` count words so token budgets are easy to reason about."""
    encoding = WhitespaceEncoding()
    monkeypatch.setattr("app.pipelines.context._get_encoding", MagicMock(return_value=encoding))
    return encoding


@pytest.fixture
def make_section() -> Callable[..., PageSection]:
    def _make(content: str, similarity: float = 0.9, **extra: object) -> PageSection:
        return PageSection(content=content, similarity=similarity, **extra)

    return _make


@pytest.fixture
def mock_http_client() -> Callable[..., httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by ``handler``."""

    def _build(handler: Callable[[httpx.Request], httpx.Response], base_url: str = "https://llm.test/v1"):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=base_url)

    return _build
