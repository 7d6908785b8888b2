"""Ollama local LLM provider."""

from __future__ import annotations

import os
from typing import Any

import httpx
from loguru import logger

from doc_gen_mcp.llm.client import LLMClient, LLMResponse
from doc_gen_mcp.llm.prompts import PromptTemplates


class OllamaClient(LLMClient):
    """Client for a local Ollama server."""

    def __init__(
        self,
        model: str | None = None,
        host: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(model)
        self.host = (host or os.getenv("OLLAMA_HOST", "http://localhost:11434")).rstrip("/")
        self.timeout = float(os.getenv("OLLAMA_TIMEOUT", "300"))
        self._transport = transport

    @property
    def default_model(self) -> str:
        return os.getenv("OLLAMA_MODEL", "qwen2.5-coder:7b")

    @property
    def provider_name(self) -> str:
        return "local"

    async def complete(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 2048,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate documentation text with Ollama."""
        payload = {
            "model": self.model,
            "prompt": prompt,
            "system": system or PromptTemplates.SYSTEM,
            "stream": False,
            "options": {"temperature": temperature, "num_predict": max_tokens, **kwargs},
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(f"{self.host}/api/generate", json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Ollama API error: {e}")
            raise

        return LLMResponse(
            content=data.get("response", ""),
            model=self.model,
            tokens_used=data.get("eval_count", 0) + data.get("prompt_eval_count", 0),
            finish_reason="stop" if data.get("done") else None,
        )
