"""PDF exporter built on WeasyPrint."""

from __future__ import annotations

import asyncio
import importlib.util
from datetime import datetime
from pathlib import Path

from loguru import logger
from markupsafe import escape

from doc_gen_mcp.errors import ExporterConfigError
from doc_gen_mcp.exporters.html import markdown_to_html
from doc_gen_mcp.plugins.base import read_json_config, slugify, validation_failure
from doc_gen_mcp.schemas import (
    Entry,
    ExportContent,
    ExportOptions,
    ExportResult,
    PdfConfig,
    Severity,
    ValidationIssue,
    ValidationResult,
)

DEFAULT_OUTPUT_PATH = "./output.pdf"
UNCATEGORIZED = "Uncategorized"


def _css_content(template: str, title: str) -> str:
    """Turn a ``{{title}}``/``{{page}}``/``{{pages}}`` template into a CSS content value."""
    quoted = '"' + template.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return (
        quoted.replace("{{title}}", title.replace('"', '\\"'))
        .replace("{{page}}", '" counter(page) "')
        .replace("{{pages}}", '" counter(pages) "')
    )


def _write_pdf(html: str, output_path: Path) -> int:
    import weasyprint

    output_path.parent.mkdir(parents=True, exist_ok=True)
    document = weasyprint.HTML(string=html, base_url=str(Path.cwd())).render()
    document.write_pdf(str(output_path))
    return len(document.pages)


class PdfExporter:
    """Export documentation to a styled PDF document."""

    name = "pdf"
    description = "Exports documentation to PDF files"
    supported_formats = ["pdf"]

    def __init__(self, config: PdfConfig | None = None):
        self.default_config_path = "./config/pdf-exporter.json"
        self.config = config or PdfConfig()

    async def is_configured(self) -> bool:
        try:
            return importlib.util.find_spec("weasyprint") is not None
        except (ImportError, ValueError) as e:
            logger.debug(f"PDF engine unavailable: {e}")
            return False

    async def load_config(self, config_path: str | None = None) -> PdfConfig:
        self.config = await read_json_config(
            config_path or self.default_config_path, PdfConfig(), "PDF"
        )
        return self.config

    async def validate_content(self, content: ExportContent) -> ValidationResult:
        if not content.entries:
            return ValidationResult.from_issues([
                ValidationIssue(message="No entries provided for PDF export", severity=Severity.ERROR)
            ])

        issues: list[ValidationIssue] = []
        for index, entry in enumerate(content.entries):
            if not entry.title:
                issues.append(ValidationIssue(
                    message=f"Entry at index {index} is missing a title",
                    severity=Severity.WARNING,
                ))
            if not entry.content:
                issues.append(ValidationIssue(
                    message=f"Entry at index {index} is missing content",
                    severity=Severity.WARNING,
                ))
        return ValidationResult.from_issues(issues)

    async def export(
        self, content: ExportContent, options: ExportOptions | None = None
    ) -> ExportResult:
        options = options or ExportOptions()
        try:
            if options.config_path:
                try:
                    await self.load_config(options.config_path)
                except ExporterConfigError as e:
                    logger.warning(f"Could not load PDF config, using defaults: {e}")

            validation = await self.validate_content(content)
            if not validation.valid:
                return validation_failure(validation)

            output_path = Path(options.output_path or DEFAULT_OUTPUT_PATH)
            html = self.generate_html(content, options)
            page_count = await asyncio.to_thread(_write_pdf, html, output_path)

            logger.info(f"PDF written to {output_path} ({page_count} pages)")
            return ExportResult(
                success=True,
                details={"outputPath": str(output_path), "pageCount": page_count},
            )
        except Exception as e:
            logger.error(f"PDF export failed: {e}")
            return ExportResult(success=False, error=f"Failed to export to PDF: {e}")

    def generate_html(self, content: ExportContent, options: ExportOptions | None = None) -> str:
        """Build the print-ready HTML handed to WeasyPrint."""
        options = options or ExportOptions()
        title = options.title or "Documentation"
        grouped: dict[str, list[Entry]] = {}
        for entry in content.entries or []:
            grouped.setdefault(entry.category or UNCATEGORIZED, []).append(entry)
        categories = sorted(grouped)

        body: list[str] = []
        if self.config.include_cover_page:
            body.append(
                '<section class="cover">'
                f"<h1>{escape(title)}</h1>"
                f'<p class="date">Generated on {datetime.now().strftime("%Y-%m-%d")}</p>'
                "</section>"
            )

        if self.config.include_table_of_contents:
            items = "".join(
                f'<li><a href="#{slugify(category)}">{escape(category)}</a></li>'
                for category in categories
            )
            body.append(f'<section class="toc"><h2>Table of Contents</h2><ul>{items}</ul></section>')

        for category in categories:
            sections = "".join(self._entry_html(entry) for entry in grouped[category])
            body.append(
                f'<section class="category" id="{slugify(category)}">'
                f"<h2>{escape(category)}</h2>{sections}</section>"
            )

        return (
            '<!DOCTYPE html><html><head><meta charset="UTF-8">'
            f"<title>{escape(title)}</title><style>{self._stylesheet(title)}</style>"
            f"</head><body>{''.join(body)}</body></html>"
        )

    def _entry_html(self, entry: Entry) -> str:
        html = (
            '<div class="entry">'
            f"<h3>{escape(entry.title or '')}</h3>"
            f"{markdown_to_html(entry.content)}"
        )
        for language, code in (entry.code or {}).items():
            html += (
                f'<div class="code-box"><div class="code-lang">{escape(language)}</div>'
                f"<pre><code>{escape(code)}</code></pre></div>"
            )
        return html + "</div>"

    def _stylesheet(self, title: str) -> str:
        cfg = self.config
        size, margins, colors = cfg.font_size, cfg.margins, cfg.colors
        return f"""
@page {{
  size: {cfg.page_size};
  margin: {margins.top}pt {margins.right}pt {margins.bottom}pt {margins.left}pt;
  @top-center {{ content: {_css_content(cfg.header_template, title)}; font-size: 9pt; color: {colors.secondary}; }}
  @bottom-center {{ content: {_css_content(cfg.footer_template, title)}; font-size: 9pt; color: {colors.secondary}; }}
}}
body {{ font-family: {cfg.font_family}, sans-serif; font-size: {size.body}pt; color: {colors.text}; }}
h1 {{ font-size: {size.title}pt; color: {colors.primary}; }}
h2 {{ font-size: {size.heading}pt; color: {colors.heading}; border-bottom: 1px solid {colors.border}; }}
h3 {{ font-size: {size.subheading}pt; color: {colors.heading}; }}
a {{ color: {colors.link}; }}
.cover {{ page-break-after: always; text-align: center; padding-top: 30%; }}
.toc {{ page-break-after: always; }}
.category {{ page-break-before: auto; }}
.code-box {{ background: {colors.code_background}; border: 1px solid {colors.border}; padding: 6pt; margin: 6pt 0; }}
.code-lang {{ font-size: {size.code}pt; color: {colors.secondary}; font-weight: bold; }}
pre, code {{ font-family: Courier, monospace; font-size: {size.code}pt; color: {colors.code}; white-space: pre-wrap; }}
"""
