"""Built-in exporters and registry construction."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from doc_gen_mcp.exporters.confluence import ConfluenceExporter
from doc_gen_mcp.exporters.html import HtmlExporter
from doc_gen_mcp.exporters.markdown import MarkdownExporter
from doc_gen_mcp.exporters.pdf import PdfExporter
from doc_gen_mcp.plugins import ExporterFactory, ExporterRegistry

BUILTIN_EXPORTERS: dict[str, ExporterFactory] = {
    "confluence": ConfluenceExporter,
    "markdown": MarkdownExporter,
    "html": HtmlExporter,
    "pdf": PdfExporter,
}


def register_builtin_exporters(registry: ExporterRegistry) -> ExporterRegistry:
    for name, factory in BUILTIN_EXPORTERS.items():
        registry.register_exporter(name, factory)
    return registry


async def create_registry(
    manifest_path: str | Path | None = None,
    directory: str | Path | None = None,
) -> ExporterRegistry:
    """Registry with the built-in exporters plus any configured plugins.

    Args:
        manifest_path: Optional ``{"exporters": [{name, path}]}`` manifest.
        directory: Optional directory scanned for ``*_exporter.py`` modules.

    Returns:
        A ready registry. Plugins may override built-ins by name.
    """
    registry = register_builtin_exporters(ExporterRegistry())

    if directory:
        await registry.load_exporters_from_directory(directory)
    if manifest_path:
        await registry.load_exporters_from_config(manifest_path)

    logger.info(f"Available exporters: {', '.join(registry.get_available_exporters())}")
    return registry


__all__ = [
    "BUILTIN_EXPORTERS",
    "ConfluenceExporter",
    "HtmlExporter",
    "MarkdownExporter",
    "PdfExporter",
    "create_registry",
    "register_builtin_exporters",
]
