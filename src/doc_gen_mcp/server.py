"""MCP Server initialization and tool registration."""

from __future__ import annotations

import json
import os
from typing import Any

from dotenv import load_dotenv
from loguru import logger
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from doc_gen_mcp.exporters import create_registry
from doc_gen_mcp.plugins import ExporterRegistry
from doc_gen_mcp.tools import (
    export_documentation,
    generate_docs_from_code,
    generate_docs_from_diff,
    generate_docs_from_input,
    list_exporters,
    validate_documentation,
)

# Load environment variables
load_dotenv()

OUTPUT_FORMAT_SCHEMA = {
    "type": "string",
    "enum": ["markdown", "json"],
    "description": "Output format (default: markdown)",
}
OUTPUT_STYLE_SCHEMA = {
    "type": "object",
    "properties": {
        "headingLevel": {"type": "integer", "minimum": 1, "maximum": 5},
        "bullet": {"type": "string"},
    },
    "description": "Markdown heading level for categories (default: 2) and bullet character",
}
LANG_SCHEMA = {
    "type": "string",
    "enum": ["de", "en"],
    "description": "Language of generated labels (default: DOCGEN_LANG or de)",
}
INPUT_SCHEMA = {
    "type": "object",
    "description": "Object with one of the lists: entries, rules, api, config",
}

# Tool definitions with JSON schemas
TOOLS: dict[str, dict[str, Any]] = {
    "generate_docs_from_input": {
        "description": "Generate Markdown or JSON documentation from entries, rules, API descriptors or config values. Entries are grouped by category.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "input": INPUT_SCHEMA,
                "rules_dir": {
                    "type": "string",
                    "description": "Project directory with cursorrules.json or .cursorrules/ (used when input is omitted)",
                },
                "output_format": OUTPUT_FORMAT_SCHEMA,
                "output_style": OUTPUT_STYLE_SCHEMA,
                "languages": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Code example languages to include",
                },
                "lang": LANG_SCHEMA,
                "config": {"type": "object", "description": "Global config; arguments take precedence"},
            },
            "required": [],
        },
        "handler": generate_docs_from_input,
    },
    "validate_documentation": {
        "description": "Validate documentation input: reports entries without title or content.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "input": INPUT_SCHEMA,
                "lang": LANG_SCHEMA,
                "config": {"type": "object"},
            },
            "required": ["input"],
        },
        "handler": validate_documentation,
    },
    "generate_docs_from_diff": {
        "description": "Compare two documentation inputs and describe added, changed and removed entries.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "old": INPUT_SCHEMA,
                "new": INPUT_SCHEMA,
                "output_format": OUTPUT_FORMAT_SCHEMA,
                "lang": LANG_SCHEMA,
                "config": {"type": "object"},
            },
            "required": ["old", "new"],
        },
        "handler": generate_docs_from_diff,
    },
    "export_documentation": {
        "description": "Export documentation with a registered exporter (markdown, html, pdf, confluence or a plugin).",
        "inputSchema": {
            "type": "object",
            "properties": {
                "exporter": {"type": "string", "description": "Exporter name"},
                "input": {
                    "type": "object",
                    "description": "Input object (entries, rules, api, config) or {\"rawContent\": \"...\"}",
                },
                "options": {
                    "type": "object",
                    "description": "title, configPath, byCategory, labels, validateBeforeExport, outputFile, outputPath",
                },
                "lang": LANG_SCHEMA,
            },
            "required": ["exporter", "input"],
        },
        "handler": export_documentation,
        "uses_registry": True,
    },
    "list_exporters": {
        "description": "List registered exporters with their formats and configuration status.",
        "inputSchema": {"type": "object", "properties": {}, "required": []},
        "handler": list_exporters,
        "uses_registry": True,
    },
    "generate_docs_from_code": {
        "description": "Generate documentation from a source file or directory using docstrings/JSDoc, or an LLM summary per file.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "path": {"type": "string", "description": "Source file or directory"},
                "use_ai": {
                    "type": "boolean",
                    "description": "Summarize each file with the LLM (default: false)",
                    "default": False,
                },
                "provider": {
                    "type": "string",
                    "enum": ["anthropic", "openai", "local"],
                    "description": "LLM provider (default: LLM_PROVIDER)",
                },
                "output_format": OUTPUT_FORMAT_SCHEMA,
                "output_style": OUTPUT_STYLE_SCHEMA,
                "lang": LANG_SCHEMA,
            },
            "required": ["path"],
        },
        "handler": generate_docs_from_code,
    },
}


async def call_tool_handler(registry: ExporterRegistry, name: str, arguments: dict) -> str:
    """Run a tool and serialize its result; failures become a JSON error payload."""
    if name not in TOOLS:
        return f"Unknown tool: {name}"

    tool = TOOLS[name]
    kwargs = dict(arguments or {})
    if tool.get("uses_registry"):
        kwargs["registry"] = registry

    try:
        logger.info(f"Executing tool: {name}")
        result = await tool["handler"](**kwargs)

        if isinstance(result, dict):
            return json.dumps(result, indent=2, ensure_ascii=False, default=str)
        return str(result)

    except Exception as e:
        logger.error(f"Tool execution failed: {e}")
        return json.dumps({
            "error": True,
            "message": str(e),
            "tool": name,
        }, ensure_ascii=False)


def create_server(registry: ExporterRegistry) -> Server:
    """Create and configure the MCP server."""
    server = Server("doc-gen-mcp")

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List all available tools."""
        return [
            Tool(
                name=name,
                description=config["description"],
                inputSchema=config["inputSchema"],
            )
            for name, config in TOOLS.items()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        """Handle tool invocations."""
        output = await call_tool_handler(registry, name, arguments)
        return [TextContent(type="text", text=output)]

    return server


async def run_server() -> None:
    """Run the MCP server via stdio."""
    registry = await create_registry(
        manifest_path=os.getenv("DOCGEN_EXPORTERS_CONFIG"),
        directory=os.getenv("DOCGEN_EXPORTERS_DIR"),
    )
    server = create_server(registry)

    logger.info("Starting doc-gen-mcp server...")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    """CLI entry point."""
    import asyncio
    import sys

    # Configure logging
    log_level = os.getenv("LOG_LEVEL", "INFO")
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format="<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )

    asyncio.run(run_server())


if __name__ == "__main__":
    main()
