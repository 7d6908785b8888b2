"""OpenAI GPT LLM provider."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from doc_gen_mcp.llm.client import LLMClient, LLMResponse
from doc_gen_mcp.llm.prompts import PromptTemplates


class OpenAIClient(LLMClient):
    """OpenAI chat completions client."""

    def __init__(self, model: str | None = None, api_key: str | None = None):
        super().__init__(model)
        self._api_key = api_key
        self._client = None

    @property
    def default_model(self) -> str:
        return os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    @property
    def provider_name(self) -> str:
        return "openai"

    def _get_client(self):
        if self._client is None:
            import openai
            api_key = self._api_key or os.getenv("OPENAI_API_KEY")
            if not api_key:
                msg = "OPENAI_API_KEY environment variable not set"
                raise ValueError(msg)
            self._client = openai.AsyncOpenAI(api_key=api_key)
        return self._client

    async def complete(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 2048,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate documentation text with a chat model."""
        client = self._get_client()
        messages = [
            {"role": "system", "content": system or PromptTemplates.SYSTEM},
            {"role": "user", "content": prompt},
        ]

        try:
            response = await client.chat.completions.create(
                model=self.model,
                max_tokens=max_tokens,
                messages=messages,
                temperature=temperature,
                **kwargs,
            )
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise

        choice = response.choices[0]
        return LLMResponse(
            content=choice.message.content or "",
            model=self.model,
            tokens_used=response.usage.total_tokens if response.usage else 0,
            finish_reason=choice.finish_reason,
        )
