"""Tests for the LLM client."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from nlp_content_optimizer.llm_client import (
    DEFAULT_MODEL,
    GRAMMAR_SYSTEM_PROMPT,
    LLMClient,
    LLMClientError,
    create_llm_client,
)


@pytest.fixture
def client() -> LLMClient:
    return LLMClient(api_key="test-key")


class TestLLMClientInit:
    """Tests for client construction."""

    def test_missing_api_key(self, monkeypatch):
        """Test construction without any key raises error."""
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with pytest.raises(LLMClientError, match="No API key provided"):
            LLMClient()

    def test_key_from_environment(self, monkeypatch):
        """Test the key falls back to the environment."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")
        assert LLMClient().api_key == "env-key"

    def test_factory(self):
        """Test the factory passes the model through."""
        llm = create_llm_client(api_key="test-key", model="claude-test")

        assert llm.model == "claude-test"
        assert create_llm_client(api_key="test-key").model == DEFAULT_MODEL


class TestCorrectGrammar:
    """Tests for correct_grammar."""

    def test_returns_stripped_text(self, client):
        """Test the response text is returned without surrounding whitespace."""
        create = AsyncMock(return_value=SimpleNamespace(content=[SimpleNamespace(text="  Fixed.\n")]))
        client.client = SimpleNamespace(messages=SimpleNamespace(create=create))

        assert asyncio.run(client.correct_grammar("Fixd.")) == "Fixed."

        kwargs = create.await_args.kwargs
        assert kwargs["system"] == GRAMMAR_SYSTEM_PROMPT
        assert kwargs["messages"] == [{"role": "user", "content": "Fixd."}]

    def test_empty_response(self, client):
        """Test an empty response raises error."""
        create = AsyncMock(return_value=SimpleNamespace(content=[]))
        client.client = SimpleNamespace(messages=SimpleNamespace(create=create))

        with pytest.raises(LLMClientError, match="empty response"):
            asyncio.run(client.correct_grammar("Text."))

    def test_api_failure_wrapped(self, client):
        """Test API exceptions become LLMClientError."""
        create = AsyncMock(side_effect=RuntimeError("network down"))
        client.client = SimpleNamespace(messages=SimpleNamespace(create=create))

        with pytest.raises(LLMClientError, match="Grammar correction failed: network down"):
            asyncio.run(client.correct_grammar("Text."))
