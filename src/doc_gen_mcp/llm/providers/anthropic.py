"""Anthropic Claude LLM provider."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from doc_gen_mcp.llm.client import LLMClient, LLMResponse
from doc_gen_mcp.llm.prompts import PromptTemplates


class AnthropicClient(LLMClient):
    """Claude API client."""

    def __init__(self, model: str | None = None, api_key: str | None = None):
        super().__init__(model)
        self._api_key = api_key
        self._client = None

    @property
    def default_model(self) -> str:
        return os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-20250514")

    @property
    def provider_name(self) -> str:
        return "anthropic"

    def _get_client(self):
        if self._client is None:
            import anthropic
            api_key = self._api_key or os.getenv("ANTHROPIC_API_KEY")
            if not api_key:
                msg = "ANTHROPIC_API_KEY environment variable not set"
                raise ValueError(msg)
            self._client = anthropic.AsyncAnthropic(api_key=api_key)
        return self._client

    async def complete(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 2048,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate documentation text with Claude."""
        client = self._get_client()

        try:
            response = await client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                system=system or PromptTemplates.SYSTEM,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                **kwargs,
            )
        except Exception as e:
            logger.error(f"Anthropic API error: {e}")
            raise

        text = "".join(block.text for block in response.content if getattr(block, "type", "") == "text")
        return LLMResponse(
            content=text,
            model=self.model,
            tokens_used=response.usage.input_tokens + response.usage.output_tokens,
            finish_reason=response.stop_reason,
        )
