"""Exporter capability contract and shared helpers.

Exporters are matched structurally: any object that provides the attributes
and coroutines of :class:`Exporter` can be registered, no common base class
is required. The helpers below cover the behaviour all built-in exporters
share (config merging, canonical content validation).
"""

from __future__ import annotations

import asyncio
import inspect
import json
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol, TypeVar, runtime_checkable

from loguru import logger
from pydantic import BaseModel, ValidationError

from doc_gen_mcp.errors import ExporterConfigError
from doc_gen_mcp.schemas import (
    ExportContent,
    ExportOptions,
    ExportResult,
    Severity,
    ValidationIssue,
    ValidationResult,
)

ConfigT = TypeVar("ConfigT", bound=BaseModel)

REQUIRED_ATTRIBUTES = ("name", "description", "supported_formats", "default_config_path")
REQUIRED_COROUTINES = ("is_configured", "load_config", "validate_content", "export")


@runtime_checkable
class Exporter(Protocol):
    """Capability set every output backend implements."""

    name: str
    description: str
    supported_formats: list[str]
    default_config_path: str

    async def is_configured(self) -> bool:
        """Report whether the minimum settings are present. Never raises."""

    async def load_config(self, config_path: str | None = None) -> Any:
        """Merge a JSON config file over the compiled-in defaults."""

    async def validate_content(self, content: ExportContent) -> ValidationResult:
        """Check content before export; only errors make it invalid."""

    async def export(
        self, content: ExportContent, options: ExportOptions | None = None
    ) -> ExportResult:
        """Push content to the sink and report the outcome."""


ExporterFactory = Callable[[], Exporter]


def conforms_to_exporter(obj: Any) -> bool:
    """Structural check used when loading exporters from untrusted modules."""
    if not all(hasattr(obj, attr) for attr in REQUIRED_ATTRIBUTES):
        return False
    return all(
        inspect.iscoroutinefunction(getattr(obj, method, None))
        for method in REQUIRED_COROUTINES
    )


def get_cli_example(exporter: Exporter) -> str:
    """Example invocation of the MCP export tool for this exporter."""
    return f'export_documentation {{"exporter": "{exporter.name}", "input": {{"entries": [...]}}}}'


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``, recursing into nested dicts."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


async def read_json_config(
    path: str | Path,
    defaults: ConfigT,
    exporter_name: str,
) -> ConfigT:
    """Load a JSON config file and deep-merge it over ``defaults``.

    A missing file yields ``defaults`` unchanged. Malformed JSON, a non-object
    document or values that fail schema validation raise
    :class:`ExporterConfigError`.
    """
    config_file = Path(path)
    if not config_file.is_file():
        logger.debug(f"No {exporter_name} config at {config_file}, using defaults")
        return defaults

    try:
        raw = await asyncio.to_thread(_read_text, config_file)
        loaded = json.loads(raw)
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Failed to load {exporter_name} configuration: {e}"
        raise ExporterConfigError(msg) from e

    if not isinstance(loaded, dict):
        msg = f"Failed to load {exporter_name} configuration: expected a JSON object"
        raise ExporterConfigError(msg)

    merged = deep_merge(defaults.model_dump(by_alias=True), loaded)
    try:
        return type(defaults).model_validate(merged)
    except ValidationError as e:
        msg = f"Failed to load {exporter_name} configuration: {e}"
        raise ExporterConfigError(msg) from e


def validate_entries(content: ExportContent) -> ValidationResult:
    """Canonical checks: some content, every entry titled, every entry filled."""
    issues: list[ValidationIssue] = []

    if not content.has_content():
        issues.append(ValidationIssue(message="No content to export", severity=Severity.ERROR))

    for index, entry in enumerate(content.entries or []):
        if not entry.title:
            issues.append(ValidationIssue(
                message=f"Entry at index {index} has no title",
                severity=Severity.ERROR,
            ))
        if not entry.content:
            issues.append(ValidationIssue(
                message=f"Entry at index {index} has no content",
                severity=Severity.WARNING,
            ))

    return ValidationResult.from_issues(issues)


def validation_failure(validation: ValidationResult) -> ExportResult:
    """Failed result carrying the validation issues instead of doing I/O."""
    messages = ", ".join(issue.message for issue in validation.issues)
    return ExportResult(
        success=False,
        error=f"Validation failed: {messages}",
        details={"validation": validation.model_dump(mode="json")},
    )


def content_stats(text: str) -> dict[str, int]:
    return {
        "byteCount": len(text.encode("utf-8")),
        "lineCount": len(text.split("\n")),
    }


def slugify(text: str) -> str:
    """URL-friendly anchor for a heading."""
    slug = re.sub(r"[^\w\s-]", "", text.lower())
    slug = re.sub(r"\s+", "-", slug)
    return re.sub(r"--+", "-", slug)
