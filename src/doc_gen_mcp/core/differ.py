"""Documentation diff engine."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from loguru import logger

from doc_gen_mcp.core.i18n import DEFAULT_LANG, label
from doc_gen_mcp.schemas import ChangedEntry, DiffResult, Entry, Lang


def entry_key(entry: Entry) -> str:
    """Identity key: title, then name, then id, then the full record."""
    return entry.identity()


def _index(entries: Iterable[Entry]) -> dict[str, Entry]:
    # Later records with the same key replace earlier ones.
    indexed: dict[str, Entry] = {}
    for entry in entries:
        indexed[entry_key(entry)] = entry
    return indexed


def diff_entries(old: Iterable[Entry], new: Iterable[Entry]) -> DiffResult:
    """Compare two normalized snapshots.

    Entries are matched by :func:`entry_key`. Matched entries count as changed
    when their full records differ, so a changed category is a change even if
    the content is identical. Key order in mappings does not matter; list
    order does.
    """
    old_map = _index(old)
    new_map = _index(new)
    result = DiffResult()

    for key, entry in new_map.items():
        before = old_map.get(key)
        if before is None:
            result.added.append(entry)
        elif before.dump() != entry.dump():
            result.changed.append(ChangedEntry(before=before, after=entry))

    for key, entry in old_map.items():
        if key not in new_map:
            result.removed.append(entry)

    logger.debug(
        f"Diff: {len(result.added)} added, {len(result.changed)} changed, "
        f"{len(result.removed)} removed"
    )
    return result


def _display_name(entry: Entry) -> str:
    return entry.title or entry.extra("name") or entry.extra("id") or ""


def _summary(entry: Entry) -> str:
    return entry.content or entry.extra("description") or ""


def render_diff_markdown(result: DiffResult, lang: Lang = DEFAULT_LANG) -> str:
    """Render a diff as Markdown with localized section headings."""
    lines = [f"# {label('diff_title', lang)}", ""]

    if result.added:
        lines += [f"## {label('added', lang)}", ""]
        lines += [f"- {_display_name(e)}: {_summary(e)}" for e in result.added]
        lines.append("")

    if result.changed:
        lines += [f"## {label('changed', lang)}", ""]
        for change in result.changed:
            lines.append(f"- {_display_name(change.after)}:")
            lines.append(f"  - {label('before', lang)}: {_summary(change.before)}")
            lines.append(f"  - {label('after', lang)}: {_summary(change.after)}")
        lines.append("")

    if result.removed:
        lines += [f"## {label('removed', lang)}", ""]
        lines += [f"- {_display_name(e)}: {_summary(e)}" for e in result.removed]
        lines.append("")

    if result.is_empty:
        lines.append(label("no_changes", lang))

    return "\n".join(lines)


def render_diff_json(result: DiffResult) -> dict[str, Any]:
    return {"diff": result.to_dict()}
