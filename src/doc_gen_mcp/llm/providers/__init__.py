"""LLM provider implementations."""

from doc_gen_mcp.llm.providers.anthropic import AnthropicClient
from doc_gen_mcp.llm.providers.local import OllamaClient
from doc_gen_mcp.llm.providers.openai import OpenAIClient

__all__ = ["AnthropicClient", "OpenAIClient", "OllamaClient"]
