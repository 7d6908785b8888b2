"""Tests for the LLM client layer."""

import json

import httpx
import pytest

from doc_gen_mcp.llm import PromptTemplates, get_llm_client
from doc_gen_mcp.llm.client import MAX_CODE_CHARS
from doc_gen_mcp.llm.providers.local import OllamaClient


class TestFactory:
    def test_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="Unknown LLM provider: bard"):
            get_llm_client("bard")

    def test_local_provider(self, monkeypatch) -> None:
        monkeypatch.setenv("OLLAMA_MODEL", "llama3")
        client = get_llm_client("local")
        assert isinstance(client, OllamaClient)
        assert client.model == "llama3"


class TestPrompts:
    def test_language_from_suffix(self) -> None:
        prompt = PromptTemplates.code_documentation("let a = 1", "main.ts")
        assert "TypeScript code from `main.ts`" in prompt
        assert prompt.rstrip().endswith("DOCUMENTATION:")

    def test_unknown_suffix(self) -> None:
        assert "source code from `Makefile`" in PromptTemplates.code_documentation("all:", "Makefile")


class TestOllamaClient:
    @pytest.mark.asyncio
    async def test_summarize(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200, json={"response": "\n# app.py\nDoes things.\n", "done": True, "eval_count": 7}
            )

        client = OllamaClient(model="tiny", host="http://ollama:11434/", transport=httpx.MockTransport(handler))
        doc = await client.summarize("x" * (MAX_CODE_CHARS + 10), "app.py")

        assert doc == "# app.py\nDoes things."
        assert str(requests[0].url) == "http://ollama:11434/api/generate"
        payload = json.loads(requests[0].content)
        assert payload["model"] == "tiny"
        assert payload["stream"] is False
        assert payload["system"] == PromptTemplates.SYSTEM
        assert "x" * (MAX_CODE_CHARS + 1) not in payload["prompt"]

    @pytest.mark.asyncio
    async def test_http_errors_propagate(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        client = OllamaClient(transport=transport)

        with pytest.raises(httpx.HTTPStatusError):
            await client.complete("prompt")
