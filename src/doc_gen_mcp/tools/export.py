"""export_documentation and list_exporters MCP tools."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from doc_gen_mcp.core import generator
from doc_gen_mcp.core.i18n import DEFAULT_LANG
from doc_gen_mcp.plugins import ExporterRegistry
from doc_gen_mcp.plugins.base import get_cli_example


async def export_documentation(
    registry: ExporterRegistry,
    exporter: str,
    input: dict[str, Any] | None = None,
    options: dict[str, Any] | None = None,
    lang: str | None = None,
) -> dict:
    """Export documentation through a registered exporter.

    Args:
        registry: Registry created at server start-up
        exporter: Exporter name, e.g. "markdown", "html", "pdf" or "confluence"
        input: Input object, or {"rawContent": "..."} for pre-rendered Markdown
        options: Export options (title, byCategory, outputFile, ...)
        lang: "de" or "en"

    Returns:
        The exporter's result with success flag, error and details
    """
    result = await generator.export_documentation(
        registry,
        exporter,
        input,
        options,
        lang=lang or os.getenv("DOCGEN_LANG") or DEFAULT_LANG,
    )
    return result.model_dump(mode="json")


async def list_exporters(registry: ExporterRegistry) -> dict:
    """Describe every registered exporter and whether it is ready to use."""
    exporters = []
    for info in registry.list_exporters():
        instance = registry.get_exporter(info["name"])
        configured = await instance.is_configured()
        exporters.append({
            **info,
            "configured": configured,
            "example": get_cli_example(instance),
        })

    logger.debug(f"Listed {len(exporters)} exporters")
    return {"exporters": exporters}
