"""Pydantic schemas for doc-gen-mcp."""

from doc_gen_mcp.schemas.config import (
    CodeBlockOptions,
    ConfluenceAuth,
    ConfluenceConfig,
    GeneratorConfig,
    HtmlConfig,
    Lang,
    MarkdownConfig,
    OutputFormat,
    OutputStyle,
    PdfConfig,
)
from doc_gen_mcp.schemas.diff import ChangedEntry, DiffResult
from doc_gen_mcp.schemas.entry import (
    Entry,
    ExportContent,
    ExportOptions,
    ExportResult,
    InputFormat,
    Severity,
    ValidationIssue,
    ValidationResult,
    canonical_json,
)

__all__ = [
    "ChangedEntry",
    "CodeBlockOptions",
    "ConfluenceAuth",
    "ConfluenceConfig",
    "DiffResult",
    "Entry",
    "ExportContent",
    "ExportOptions",
    "ExportResult",
    "GeneratorConfig",
    "HtmlConfig",
    "InputFormat",
    "Lang",
    "MarkdownConfig",
    "OutputFormat",
    "OutputStyle",
    "PdfConfig",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "canonical_json",
]
