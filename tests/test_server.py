"""Tests for MCP tool dispatch."""

import json

import pytest

from doc_gen_mcp.server import TOOLS, call_tool_handler, create_server


class TestTools:
    def test_registered_tools(self) -> None:
        assert set(TOOLS) == {
            "generate_docs_from_input",
            "validate_documentation",
            "generate_docs_from_diff",
            "export_documentation",
            "list_exporters",
            "generate_docs_from_code",
        }

    def test_schemas_are_objects(self) -> None:
        for tool in TOOLS.values():
            assert tool["inputSchema"]["type"] == "object"
            assert callable(tool["handler"])

    def test_create_server(self, registry) -> None:
        assert create_server(registry).name == "doc-gen-mcp"


class TestCallToolHandler:
    @pytest.mark.asyncio
    async def test_generate(self, registry) -> None:
        output = await call_tool_handler(
            registry, "generate_docs_from_input", {"input": {"entries": [{"title": "T", "content": "C"}]}}
        )
        assert "### T" in json.loads(output)["markdown"]

    @pytest.mark.asyncio
    async def test_unknown_tool(self, registry) -> None:
        assert await call_tool_handler(registry, "make_coffee", {}) == "Unknown tool: make_coffee"

    @pytest.mark.asyncio
    async def test_errors_become_payload(self, registry) -> None:
        output = json.loads(
            await call_tool_handler(registry, "generate_docs_from_input", {"input": {"foo": []}})
        )
        assert output == {
            "error": True,
            "message": "Unknown input format. Supported: entries, rules, api, config",
            "tool": "generate_docs_from_input",
        }

    @pytest.mark.asyncio
    async def test_export_receives_registry(self, registry, sample_input) -> None:
        output = json.loads(await call_tool_handler(
            registry, "export_documentation", {"exporter": "markdown", "input": sample_input}
        ))
        assert output["success"] is True
        assert "## Install" in output["details"]["content"]

    @pytest.mark.asyncio
    async def test_list_exporters(self, registry, monkeypatch, tmp_path) -> None:
        monkeypatch.chdir(tmp_path)
        output = json.loads(await call_tool_handler(registry, "list_exporters", {}))

        exporters = {e["name"]: e for e in output["exporters"]}
        assert list(exporters) == ["confluence", "markdown", "html", "pdf"]
        assert exporters["markdown"]["configured"] is True
        assert exporters["confluence"]["configured"] is False
        assert '"exporter": "html"' in exporters["html"]["example"]

    @pytest.mark.asyncio
    async def test_validate(self, registry) -> None:
        output = json.loads(await call_tool_handler(
            registry, "validate_documentation", {"input": {"entries": [{"title": "T"}]}, "lang": "en"}
        ))
        assert output["valid"] is False
        assert output["issues"][0]["error"] == "Missing content"
