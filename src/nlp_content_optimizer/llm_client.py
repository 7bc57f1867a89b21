"""
LLM client abstraction for grammar correction.

This module provides an async interface for calling Claude (Anthropic) to
perform minimal grammar and punctuation correction on optimized prose.
"""

import os
from typing import Optional

import httpx

try:
    import anthropic
except ImportError:
    anthropic = None  # type: ignore


class LLMClientError(Exception):
    """Raised when LLM operations fail."""
    pass


DEFAULT_MODEL = "claude-sonnet-4-20250514"

GRAMMAR_SYSTEM_PROMPT = """You are a meticulous copy editor.

Correct ONLY grammar, spelling and punctuation errors in the text you are given.

RULES - MUST FOLLOW:
1. Do not rephrase sentences that are already correct
2. Do not add, remove or reorder sentences
3. Do not change terminology, names, numbers or claims
4. Keep the original tone and register

OUTPUT FORMAT:
- Return ONLY the corrected text
- Do NOT include any explanation or commentary
- If nothing needs correcting, return the text unchanged"""


class LLMClient:
    """
    Async client for LLM-based grammar correction.

    Supports Anthropic Claude API.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 60.0,
    ):
        """
        Initialize the LLM client.

        Args:
            api_key: API key for the LLM provider. If None, reads from ANTHROPIC_API_KEY env var.
            model: Model identifier to use.
            timeout: Request timeout in seconds.
        """
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model

        if not self.api_key:
            raise LLMClientError(
                "No API key provided. Set ANTHROPIC_API_KEY environment variable "
                "or pass api_key parameter."
            )

        if anthropic is None:
            raise LLMClientError(
                "anthropic package not installed. Run: pip install anthropic"
            )

        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=30.0),
            follow_redirects=True,
        )
        self.client = anthropic.AsyncAnthropic(
            api_key=self.api_key,
            http_client=http_client,
        )

    async def correct_grammar(self, content: str, max_tokens: int = 4096) -> str:
        """
        Ask the model for a minimally corrected version of the content.

        Args:
            content: Text to correct.
            max_tokens: Maximum tokens in response.

        Returns:
            Corrected text, stripped of surrounding whitespace.

        Raises:
            LLMClientError: If the API call fails or returns no text.
        """
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                system=GRAMMAR_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": content}],
            )
        except Exception as e:
            raise LLMClientError(f"Grammar correction failed: {e}")

        if not response.content:
            raise LLMClientError("Grammar correction returned an empty response")

        return response.content[0].text.strip()


def create_llm_client(
    api_key: Optional[str] = None,
    model: str = DEFAULT_MODEL,
) -> LLMClient:
    """
    Factory function to create an LLM client.

    Args:
        api_key: Optional API key. If None, uses environment variable.
        model: Model to use.

    Returns:
        Configured LLMClient instance.
    """
    return LLMClient(api_key=api_key, model=model)
