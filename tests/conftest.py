"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from tone_resizer.clients.llm_client import LLMClient, LLMResponse
from tone_resizer.models.rewrite import DocumentType, RewriteRequest


def make_words(count: int, stem: str = "word") -> str:
    """Return *count* space-separated distinct words."""
    return " ".join(f"{stem}{i}" for i in range(count))


@pytest.fixture
def sample_email_text() -> str:
    """A 100-word email body."""
    return make_words(100, stem="text")


@pytest.fixture
def sample_request(sample_email_text) -> RewriteRequest:
    return RewriteRequest(
        content=sample_email_text,
        tone="professional",
        target_words=50,
        document_type=DocumentType.EMAIL,
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client that reports itself as configured."""
    client = AsyncMock(spec=LLMClient)
    client.is_available = MagicMock(return_value=True)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="", input_tokens=100, output_tokens=50)
    )
    return client


@pytest.fixture
def llm_reply(mock_llm_client):
    """Set the text the mock LLM client returns next."""

    def _set(text: str) -> None:
        mock_llm_client.generate.return_value = LLMResponse(
            text=text, input_tokens=100, output_tokens=50
        )

    return _set
