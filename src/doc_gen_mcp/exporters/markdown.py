"""Markdown file exporter."""

from __future__ import annotations

import asyncio
from pathlib import Path

from loguru import logger

from doc_gen_mcp.errors import ExporterConfigError
from doc_gen_mcp.plugins.base import (
    content_stats,
    read_json_config,
    slugify,
    validate_entries,
    validation_failure,
)
from doc_gen_mcp.schemas import (
    Entry,
    ExportContent,
    ExportOptions,
    ExportResult,
    MarkdownConfig,
    ValidationResult,
)

UNCATEGORIZED = "Uncategorized"


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class MarkdownExporter:
    """Export documentation to a Markdown file or string."""

    name = "markdown"
    description = "Exports documentation to Markdown files"
    supported_formats = ["md", "markdown", "gfm", "commonmark"]

    def __init__(self, config: MarkdownConfig | None = None):
        self.default_config_path = str(Path.cwd() / "config" / "markdown.json")
        self.config = config or MarkdownConfig()

    async def is_configured(self) -> bool:
        # No external connection needed.
        return True

    async def load_config(self, config_path: str | None = None) -> MarkdownConfig:
        self.config = await read_json_config(
            config_path or self.default_config_path, MarkdownConfig(), "Markdown"
        )
        return self.config

    async def validate_content(self, content: ExportContent) -> ValidationResult:
        return validate_entries(content)

    async def export(
        self, content: ExportContent, options: ExportOptions | None = None
    ) -> ExportResult:
        options = options or ExportOptions()
        try:
            if options.config_path:
                try:
                    await self.load_config(options.config_path)
                except ExporterConfigError as e:
                    logger.warning(f"Could not load Markdown config, using defaults: {e}")

            if options.validate_before_export:
                validation = await self.validate_content(content)
                if not validation.valid:
                    return validation_failure(validation)

            markdown = self.generate_markdown(content, options)

            if options.output_file:
                await asyncio.to_thread(_write_text, Path(options.output_file), markdown)
                logger.info(f"Markdown written to {options.output_file}")
                return ExportResult(
                    success=True,
                    details={"outputFile": options.output_file, **content_stats(markdown)},
                )

            return ExportResult(
                success=True,
                details={"content": markdown, **content_stats(markdown)},
            )
        except Exception as e:
            logger.error(f"Markdown export failed: {e}")
            return ExportResult(success=False, error=f"Failed to export to Markdown: {e}")

    def generate_markdown(self, content: ExportContent, options: ExportOptions | None = None) -> str:
        options = options or ExportOptions()
        entries = content.entries or []
        parts: list[str] = []

        if options.title:
            parts.append(f"# {options.title}\n\n")

        if self.config.table_of_contents and entries:
            parts.append(self._table_of_contents(entries))

        if content.raw_content:
            parts.append(content.raw_content)
        elif entries:
            level = self.config.heading_level
            if options.by_category:
                grouped: dict[str, list[Entry]] = {}
                for entry in entries:
                    grouped.setdefault(entry.category or UNCATEGORIZED, []).append(entry)
                for category, members in grouped.items():
                    parts.append(f"{'#' * level} {category}\n\n")
                    parts.extend(self._entry_block(entry, level + 1) for entry in members)
            else:
                parts.extend(self._entry_block(entry, level) for entry in entries)

        return "".join(parts)

    def _table_of_contents(self, entries: list[Entry]) -> str:
        bullet = self.config.bullet_char
        lines = ["## Table of Contents", ""]
        categories = list(dict.fromkeys(e.category for e in entries if e.category))

        if categories:
            for category in categories:
                lines.append(f"{bullet} [{category}](#{slugify(category)})")
                for entry in entries:
                    if entry.category == category:
                        title = entry.title or ""
                        lines.append(f"  {bullet} [{title}](#{slugify(title)})")
        else:
            for entry in entries:
                title = entry.title or ""
                lines.append(f"{bullet} [{title}](#{slugify(title)})")

        return "\n".join(lines) + "\n\n\n"

    def _entry_block(self, entry: Entry, level: int) -> str:
        block = f"{'#' * level} {entry.title or ''}\n\n{entry.content or ''}\n\n"
        code_blocks = self.config.code_blocks
        for language, code in (entry.code or {}).items():
            tag = (language or code_blocks.default_language) if code_blocks.add_language else ""
            block += f"```{tag}\n{code}\n```\n\n"
        return block
