"""HTML file exporter with templating, theming and interactive features."""

from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path

import markdown as md
from jinja2 import Environment, select_autoescape
from loguru import logger
from markupsafe import Markup, escape

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
    HtmlConfig,
    ValidationResult,
)

UNCATEGORIZED = "Uncategorized"
MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]

DEFAULT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
  {{ stylesheets }}
  <style>{{ styles }}</style>
</head>
<body class="theme-{{ theme }}">
  <header>
    <h1>{{ title }}</h1>
    {{ breadcrumbs }}
  </header>

  <div class="container">
    {% if show_toc %}
    <nav class="toc">
      <h2>Table of Contents</h2>
      {{ toc }}
    </nav>
    {% endif %}

    <main>
      {{ content }}
    </main>
  </div>

  <footer>
    {% if show_meta %}
    <div class="meta">
      Generated on {{ date }} with doc-gen-mcp
    </div>
    {% endif %}
  </footer>

  {{ scripts }}
  <script>{{ inline_script }}</script>
</body>
</html>"""

DEFAULT_STYLES = """
body { font-family: system-ui, -apple-system, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; margin: 0; padding: 0; color: #333; }
.theme-dark { background-color: #222; color: #eee; }
.theme-light { background-color: #fff; color: #333; }
.container { display: flex; max-width: 1200px; margin: 0 auto; padding: 1rem; }
header { background-color: #f4f4f4; padding: 1rem; border-bottom: 1px solid #ddd; }
.theme-dark header { background-color: #333; border-bottom: 1px solid #444; }
nav.toc { width: 250px; padding-right: 1rem; position: sticky; top: 0; align-self: flex-start; max-height: 100vh; overflow-y: auto; }
main { flex: 1; min-width: 0; }
footer { text-align: center; padding: 1rem; margin-top: 2rem; font-size: 0.875rem; color: #777; border-top: 1px solid #ddd; }
code { background-color: #f5f5f5; padding: 0.2rem 0.4rem; border-radius: 3px; font-family: 'SFMono-Regular', Consolas, monospace; font-size: 0.875em; }
.theme-dark code, .theme-dark pre { background-color: #333; }
pre { background-color: #f5f5f5; padding: 1rem; border-radius: 5px; overflow-x: auto; }
pre code { background-color: transparent; padding: 0; }
.collapsible { border: 1px solid #ddd; border-radius: 5px; margin-bottom: 1rem; }
.collapsible-header { background-color: #f5f5f5; padding: 0.5rem 1rem; cursor: pointer; font-weight: bold; }
.collapsible-content { padding: 1rem; display: none; }
.expanded .collapsible-content { display: block; }
.toc ul { list-style-type: none; padding-left: 1.5rem; }
.toc a { text-decoration: none; color: #0066cc; }
.theme-dark .toc a { color: #5bf; }
@media (max-width: 768px) { .container { flex-direction: column; } nav.toc { width: 100%; margin-bottom: 2rem; } }
"""

DEFAULT_SCRIPT = """
document.addEventListener('DOMContentLoaded', function() {
  document.querySelectorAll('.collapsible-header').forEach(function(header) {
    header.addEventListener('click', function() {
      this.parentElement.classList.toggle('expanded');
    });
  });
  if (document.getElementById('search-box')) {
    initSearch();
  }
});

function initSearch() {
  var searchBox = document.getElementById('search-box');
  var sections = document.querySelectorAll('main section.entry');
  searchBox.addEventListener('input', function(e) {
    var term = e.target.value.toLowerCase();
    sections.forEach(function(section) {
      var visible = term.length < 2 || section.textContent.toLowerCase().includes(term);
      section.style.display = visible ? 'block' : 'none';
    });
  });
}
"""


def _read_optional(path: str | None) -> str | None:
    if path and Path(path).is_file():
        return Path(path).read_text(encoding="utf-8")
    return None


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def markdown_to_html(text: str | None) -> str:
    """Convert entry content from Markdown to an HTML fragment."""
    if not text:
        return ""
    return md.markdown(text, extensions=MARKDOWN_EXTENSIONS)


class HtmlExporter:
    """Export documentation to a standalone HTML page."""

    name = "html"
    description = "Exports documentation to HTML files"
    supported_formats = ["html", "htm", "xhtml"]

    def __init__(self, config: HtmlConfig | None = None):
        self.default_config_path = str(Path.cwd() / "config" / "html.json")
        self.config = config or HtmlConfig()
        self._env = Environment(autoescape=select_autoescape(default_for_string=True))

    async def is_configured(self) -> bool:
        return True

    async def load_config(self, config_path: str | None = None) -> HtmlConfig:
        self.config = await read_json_config(
            config_path or self.default_config_path, HtmlConfig(), "HTML"
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
                    logger.warning(f"Could not load HTML config, using defaults: {e}")

            if options.validate_before_export:
                validation = await self.validate_content(content)
                if not validation.valid:
                    return validation_failure(validation)

            html = await asyncio.to_thread(self.generate_html, content, options)

            if options.output_file:
                await asyncio.to_thread(_write_text, Path(options.output_file), html)
                logger.info(f"HTML written to {options.output_file}")
                return ExportResult(
                    success=True,
                    details={"outputFile": options.output_file, **content_stats(html)},
                )

            return ExportResult(success=True, details={"content": html, **content_stats(html)})
        except Exception as e:
            logger.error(f"HTML export failed: {e}")
            return ExportResult(success=False, error=f"Failed to export to HTML: {e}")

    def generate_html(self, content: ExportContent, options: ExportOptions | None = None) -> str:
        """Render the full page. Reads optional template/CSS/JS files."""
        options = options or ExportOptions()
        styles_cfg = self.config.styles
        scripts_cfg = self.config.scripts
        display = self.config.display
        title = options.title or "Documentation"
        entries = content.entries or []

        template_source = _read_optional(self.config.template_file) or DEFAULT_TEMPLATE
        template = self._env.from_string(template_source)

        styles = _read_optional(styles_cfg.css_file) or styles_cfg.inline_styles or DEFAULT_STYLES

        inline_script = DEFAULT_SCRIPT if scripts_cfg.enable_interactive_features else ""
        inline_script = _read_optional(scripts_cfg.js_file) or scripts_cfg.inline_script or inline_script

        stylesheets = "\n  ".join(
            f'<link rel="stylesheet" href="{escape(href)}">'
            for href in styles_cfg.external_stylesheets
        )
        scripts = "\n  ".join(
            f'<script src="{escape(src)}"></script>' for src in scripts_cfg.external_scripts
        )

        breadcrumbs = ""
        if display.breadcrumbs:
            breadcrumbs = f'<div class="breadcrumbs"><a href="#">Home</a> &raquo; {escape(title)}</div>'

        show_toc = display.table_of_contents and bool(entries)
        toc = self._table_of_contents(entries) if show_toc and not content.raw_content else ""

        if content.raw_content:
            main = content.raw_content
        else:
            main = self._main_content(entries, options)

        return template.render(
            title=title,
            stylesheets=Markup(stylesheets),
            styles=Markup(styles),
            theme=styles_cfg.theme,
            breadcrumbs=Markup(breadcrumbs),
            show_toc=show_toc,
            toc=Markup(toc),
            content=Markup(main),
            show_meta=display.meta_info,
            date=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            scripts=Markup(scripts),
            inline_script=Markup(inline_script),
        )

    def _table_of_contents(self, entries: list[Entry]) -> str:
        categories = list(dict.fromkeys(e.category for e in entries if e.category))
        items: list[str] = []

        if categories:
            for category in categories:
                children = "".join(
                    self._toc_link(e.title or "") for e in entries if e.category == category
                )
                items.append(
                    f'<li><a href="#{slugify(category)}">{escape(category)}</a><ul>{children}</ul></li>'
                )
        else:
            items = [self._toc_link(e.title or "") for e in entries]

        return f"<ul>{''.join(items)}</ul>"

    @staticmethod
    def _toc_link(title: str) -> str:
        return f'<li><a href="#{slugify(title)}">{escape(title)}</a></li>'

    def _main_content(self, entries: list[Entry], options: ExportOptions) -> str:
        if not entries:
            return ""

        parts: list[str] = []
        if self.config.scripts.enable_search:
            parts.append(
                '<div class="search-container">'
                '<input type="text" id="search-box" placeholder="Search documentation...">'
                "</div>"
            )

        has_categories = any(e.category for e in entries)
        if options.by_category or has_categories:
            grouped: dict[str, list[Entry]] = {}
            for entry in entries:
                grouped.setdefault(entry.category or UNCATEGORIZED, []).append(entry)
            for category, members in grouped.items():
                body = "".join(self._entry_section(e, 3) for e in members)
                parts.append(
                    f'<section id="{slugify(category)}" class="category">'
                    f"<h2>{escape(category)}</h2>{body}</section>"
                )
        else:
            parts.extend(self._entry_section(e, 2) for e in entries)

        return "\n".join(parts)

    def _entry_section(self, entry: Entry, level: int) -> str:
        title = entry.title or ""
        html = (
            f'<section id="{slugify(title)}" class="entry">'
            f"<h{level}>{escape(title)}</h{level}>"
            f'<div class="content">{markdown_to_html(entry.content)}</div>'
        )
        if entry.code:
            html += self._code_examples(entry.code)
        return html + "</section>"

    def _code_examples(self, code: dict[str, str]) -> str:
        interactive = self.config.scripts.enable_interactive_features
        heading = "h4" if interactive else "h5"
        blocks = "".join(
            f"<{heading}>{escape(lang)}</{heading}>"
            f'<pre><code class="language-{escape(lang)}">{escape(snippet)}</code></pre>'
            for lang, snippet in code.items()
        )
        if interactive:
            return (
                '<div class="collapsible"><div class="collapsible-header">Code Examples</div>'
                f'<div class="collapsible-content">{blocks}</div></div>'
            )
        return f'<div class="code-examples"><h4>Code Examples</h4>{blocks}</div>'
