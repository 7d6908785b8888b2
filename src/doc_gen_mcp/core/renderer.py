"""Markdown and JSON rendering of grouped documentation entries."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from doc_gen_mcp.core.i18n import DEFAULT_LANG, label
from doc_gen_mcp.schemas import Entry, Lang, OutputStyle


def group_entries(entries: Iterable[Entry], lang: Lang = DEFAULT_LANG) -> dict[str, list[Entry]]:
    """Group entries by category in first-seen order."""
    default = label("general", lang)
    grouped: dict[str, list[Entry]] = {}
    for entry in entries:
        grouped.setdefault(entry.category or default, []).append(entry)
    return grouped


def _heading(level: int, text: str) -> str:
    return f"{'#' * level} {text}"


class DocumentRenderer:
    """Render grouped entries with configurable heading depth and bullets."""

    def __init__(
        self,
        style: OutputStyle | None = None,
        lang: Lang = DEFAULT_LANG,
        languages: list[str] | None = None,
    ):
        self.style = style or OutputStyle()
        self.lang = lang
        self.languages = languages or []

    def render_markdown(self, grouped: dict[str, list[Entry]]) -> str:
        level = self.style.heading_level
        parts = [_heading(level - 1, label("documentation", self.lang)), ""]

        if self.languages:
            parts += [f"{label('supported_languages', self.lang)} {', '.join(self.languages)}", ""]

        for category, entries in grouped.items():
            parts += [_heading(level, category), ""]
            for entry in entries:
                parts += self._render_entry(entry, level + 1)

        return "\n".join(parts) + "\n"

    def _render_entry(self, entry: Entry, level: int) -> list[str]:
        if not entry.is_complete():
            return [
                _heading(level, f"⚠️ {label('invalid_entry', self.lang)}"),
                f"{self.style.bullet} {entry.to_json()}",
                "",
            ]

        lines = [_heading(level, entry.title), "", entry.content, ""]
        if self.languages and entry.code:
            for language in self.languages:
                snippet = entry.code.get(language)
                if snippet:
                    lines += [f"```{language}", snippet, "```", ""]
        return lines

    def render_json(self, grouped: dict[str, list[Entry]]) -> dict[str, Any]:
        return {
            "documentation": {
                category: [entry.dump() for entry in entries]
                for category, entries in grouped.items()
            },
            "languages": list(self.languages),
        }


def render_markdown(
    entries: Iterable[Entry],
    style: OutputStyle | None = None,
    lang: Lang = DEFAULT_LANG,
    languages: list[str] | None = None,
) -> str:
    """Group and render entries as a Markdown document."""
    renderer = DocumentRenderer(style, lang, languages)
    return renderer.render_markdown(group_entries(entries, lang))


def render_json(
    entries: Iterable[Entry],
    lang: Lang = DEFAULT_LANG,
    languages: list[str] | None = None,
) -> dict[str, Any]:
    """Group entries and return the structural projection."""
    renderer = DocumentRenderer(lang=lang, languages=languages)
    return renderer.render_json(group_entries(entries, lang))
