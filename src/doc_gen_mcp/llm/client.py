"""Abstract LLM client with provider factory."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any

from loguru import logger
from pydantic import BaseModel

from doc_gen_mcp.llm.prompts import PromptTemplates

# Keeps prompts within the smaller context windows of local models.
MAX_CODE_CHARS = 60_000


class LLMResponse(BaseModel):
    """Standardized LLM response."""
    content: str
    model: str
    tokens_used: int = 0
    finish_reason: str | None = None


class LLMClient(ABC):
    """Abstract base class for LLM providers."""

    def __init__(self, model: str | None = None):
        self.model = model or self.default_model

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Default model for this provider."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 2048,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate a completion."""

    async def summarize(self, code: str, filename: str) -> str:
        """Write Markdown documentation for one source file."""
        if len(code) > MAX_CODE_CHARS:
            logger.debug(f"Truncating {filename} to {MAX_CODE_CHARS} characters for the prompt")
            code = code[:MAX_CODE_CHARS]

        response = await self.complete(
            prompt=PromptTemplates.code_documentation(code, filename),
            system=PromptTemplates.SYSTEM,
        )
        logger.debug(f"Documented {filename} with {self.provider_name} ({response.tokens_used} tokens)")
        return response.content.strip()


def get_llm_client(provider: str | None = None) -> LLMClient:
    """Factory function to get appropriate LLM client.

    Args:
        provider: Provider name - anthropic, openai, or local. Defaults to env LLM_PROVIDER.

    Returns:
        Configured LLM client instance.
    """
    provider = provider or os.getenv("LLM_PROVIDER", "anthropic")

    # Lazy imports to avoid loading unused dependencies
    if provider == "anthropic":
        from doc_gen_mcp.llm.providers.anthropic import AnthropicClient
        client_cls: type[LLMClient] = AnthropicClient
    elif provider == "openai":
        from doc_gen_mcp.llm.providers.openai import OpenAIClient
        client_cls = OpenAIClient
    elif provider == "local":
        from doc_gen_mcp.llm.providers.local import OllamaClient
        client_cls = OllamaClient
    else:
        msg = f"Unknown LLM provider: {provider}"
        raise ValueError(msg)

    logger.info(f"Initializing LLM client: {provider}")
    return client_cls()
