"""Core module exports."""

from doc_gen_mcp.core.code_docs import collect_code_entries, extract_entries_from_code
from doc_gen_mcp.core.differ import diff_entries, render_diff_json, render_diff_markdown
from doc_gen_mcp.core.generator import (
    export_documentation,
    generate_docs_from_diff,
    generate_docs_from_input,
    merge_config,
    validate_documentation,
)
from doc_gen_mcp.core.normalizer import detect_format, load_input, normalize_entries
from doc_gen_mcp.core.renderer import DocumentRenderer, group_entries, render_json, render_markdown
from doc_gen_mcp.core.rules import load_rules

__all__ = [
    "DocumentRenderer",
    "collect_code_entries",
    "detect_format",
    "diff_entries",
    "export_documentation",
    "extract_entries_from_code",
    "generate_docs_from_diff",
    "generate_docs_from_input",
    "group_entries",
    "load_input",
    "load_rules",
    "merge_config",
    "normalize_entries",
    "render_diff_json",
    "render_diff_markdown",
    "render_json",
    "render_markdown",
    "validate_documentation",
]
