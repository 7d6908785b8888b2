"""Input format detection and normalization into canonical entries."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

from loguru import logger

from doc_gen_mcp.core.i18n import DEFAULT_LANG, label
from doc_gen_mcp.errors import UnknownFormatError
from doc_gen_mcp.schemas import Entry, InputFormat, Lang

# Checked in this order; the first list-valued field wins.
DETECTION_ORDER: tuple[InputFormat, ...] = (
    InputFormat.ENTRIES,
    InputFormat.RULES,
    InputFormat.API,
    InputFormat.CONFIG,
)


def detect_format(data: Any) -> InputFormat:
    """Determine which supported shape a raw input object has."""
    if not isinstance(data, Mapping):
        return InputFormat.UNKNOWN
    for fmt in DETECTION_ORDER:
        if isinstance(data.get(fmt.value), list):
            return fmt
    return InputFormat.UNKNOWN


def _dump(record: Any) -> str:
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"), default=str)


def _first(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def _rule_entry(rule: Mapping[str, Any], lang: Lang) -> Entry:
    return Entry.from_record({
        "category": rule.get("category") or label("rules", lang),
        "title": _first(rule, "name", "id") or label("unnamed_rule", lang),
        "content": _first(rule, "description", "text") or _dump(rule),
    })


def _api_entry(api: Mapping[str, Any], lang: Lang) -> Entry:
    return Entry.from_record({
        "category": api.get("group") or label("api", lang),
        "title": api.get("name") or label("unnamed_api", lang),
        "content": api.get("description") or _dump(api),
    })


def _config_entry(cfg: Mapping[str, Any], lang: Lang) -> Entry:
    value = cfg.get("value")
    return Entry.from_record({
        "category": cfg.get("section") or label("configuration", lang),
        "title": cfg.get("key") or label("unnamed_key", lang),
        "content": str(value) if value else _dump(cfg),
    })


_MAPPERS: dict[InputFormat, Callable[[Mapping[str, Any], Lang], Entry]] = {
    InputFormat.RULES: _rule_entry,
    InputFormat.API: _api_entry,
    InputFormat.CONFIG: _config_entry,
}


def normalize_entries(
    data: Mapping[str, Any],
    fmt: InputFormat,
    lang: Lang = DEFAULT_LANG,
) -> list[Entry]:
    """Convert a detected input shape into a list of entries.

    Args:
        data: Raw input object
        fmt: Format returned by :func:`detect_format`
        lang: Language used for fallback category and title labels

    Returns:
        Normalized entries in input order

    Raises:
        UnknownFormatError: If ``fmt`` is ``unknown``
    """
    if fmt == InputFormat.UNKNOWN:
        raise UnknownFormatError()

    records = data.get(fmt.value) or []
    entries: list[Entry] = []

    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            logger.warning(f"Skipping non-object {fmt.value} record at index {index}")
            continue
        if fmt == InputFormat.ENTRIES:
            entries.append(Entry.from_record(dict(record)))
        else:
            entries.append(_MAPPERS[fmt](record, lang))

    logger.debug(f"Normalized {len(entries)} entries from {fmt.value} input")
    return entries


def load_input(data: Any, lang: Lang = DEFAULT_LANG, context: str = "input") -> list[Entry]:
    """Detect and normalize in one step, raising on unsupported shapes."""
    fmt = detect_format(data)
    if fmt == InputFormat.UNKNOWN:
        raise UnknownFormatError(context)
    return normalize_entries(data, fmt, lang)
