"""Localized labels for rendered documentation."""

from __future__ import annotations

from doc_gen_mcp.schemas import Lang

DEFAULT_LANG: Lang = "de"

LABELS: dict[str, dict[str, str]] = {
    "general": {"de": "Allgemein", "en": "General"},
    "documentation": {"de": "Dokumentation", "en": "Documentation"},
    "supported_languages": {"de": "Unterstützte Sprachen:", "en": "Supported languages:"},
    "invalid_entry": {"de": "Ungültiger Eintrag", "en": "Invalid entry"},
    "rules": {"de": "Regeln", "en": "Rules"},
    "unnamed_rule": {"de": "Unbenannte Regel", "en": "Unnamed Rule"},
    "api": {"de": "API", "en": "API"},
    "unnamed_api": {"de": "Unbenannte API", "en": "Unnamed API"},
    "configuration": {"de": "Konfiguration", "en": "Configuration"},
    "unnamed_key": {"de": "Unbenannter Key", "en": "Unnamed Key"},
    "diff_title": {"de": "Dokumentations-Diff", "en": "Documentation Diff"},
    "added": {"de": "Hinzugefügt", "en": "Added"},
    "changed": {"de": "Geändert", "en": "Changed"},
    "removed": {"de": "Entfernt", "en": "Removed"},
    "before": {"de": "Vorher", "en": "Before"},
    "after": {"de": "Nachher", "en": "After"},
    "no_changes": {"de": "Keine Änderungen erkannt.", "en": "No changes detected."},
    "missing_title": {"de": "Fehlender Titel", "en": "Missing title"},
    "missing_content": {"de": "Fehlender Inhalt", "en": "Missing content"},
    "unknown_format": {"de": "Unbekanntes Eingabeformat", "en": "Unknown input format"},
    "format_not_supported": {
        "de": "Eingabeformat wird nicht unterstützt.",
        "en": "Input format not supported.",
    },
    "all_valid": {"de": "Alle Einträge gültig.", "en": "All entries valid."},
    "some_invalid": {"de": "Einige Einträge sind ungültig.", "en": "Some entries are invalid."},
}


def label(key: str, lang: Lang = DEFAULT_LANG) -> str:
    """Look up a label, falling back to German for unknown languages."""
    translations = LABELS[key]
    return translations.get(lang, translations[DEFAULT_LANG])
