"""LLM module exports."""

from doc_gen_mcp.llm.client import LLMClient, LLMResponse, get_llm_client
from doc_gen_mcp.llm.prompts import PromptTemplates

__all__ = ["LLMClient", "LLMResponse", "get_llm_client", "PromptTemplates"]
