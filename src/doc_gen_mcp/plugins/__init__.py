"""Exporter plugin contract and registry."""

from doc_gen_mcp.plugins.base import (
    Exporter,
    ExporterFactory,
    conforms_to_exporter,
    deep_merge,
    read_json_config,
    validate_entries,
)
from doc_gen_mcp.plugins.registry import ExporterRegistry

__all__ = [
    "Exporter",
    "ExporterFactory",
    "ExporterRegistry",
    "conforms_to_exporter",
    "deep_merge",
    "read_json_config",
    "validate_entries",
]
