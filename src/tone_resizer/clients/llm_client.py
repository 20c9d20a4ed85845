"""Claude API wrapper used by the enhancer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import anthropic

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Async Claude API client.

    The SDK's built-in retries are switched off: one ``generate`` call is
    exactly one request upstream, and retrying is left to the caller.
    """

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        base_url: str | None = None,
        model: str = "claude-haiku-4-5-20251001",
    ):
        self.model = model
        key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.client: anthropic.AsyncAnthropic | None = None
        if not key:
            logger.warning("ANTHROPIC_API_KEY is not set; rewriting is disabled")
        else:
            kwargs: dict = {"api_key": key, "max_retries": 0}
            if timeout is not None:
                kwargs["timeout"] = timeout
            if base_url is not None:
                kwargs["base_url"] = base_url
            self.client = anthropic.AsyncAnthropic(**kwargs)
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    def is_available(self) -> bool:
        return self.client is not None

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the text response with usage."""
        if self.client is None:
            raise RuntimeError("LLM client is not configured (missing API key)")
        model = model or self.model
        logger.debug("LLM call: model=%s max_tokens=%d", model, max_tokens)
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system
        try:
            message = await self.client.messages.create(**kwargs)
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            raise
        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))
        text = "".join(
            block.text for block in message.content if getattr(block, "type", "text") == "text"
        )
        return LLMResponse(text=text, input_tokens=input_tokens, output_tokens=output_tokens)

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
