"""High-level documentation commands: generate, validate, diff and export."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from doc_gen_mcp.core.differ import diff_entries, render_diff_json, render_diff_markdown
from doc_gen_mcp.core.i18n import DEFAULT_LANG, label
from doc_gen_mcp.core.normalizer import detect_format, load_input, normalize_entries
from doc_gen_mcp.core.renderer import render_json, render_markdown
from doc_gen_mcp.errors import ExporterNotFoundError, MissingInputError
from doc_gen_mcp.plugins import ExporterRegistry
from doc_gen_mcp.schemas import (
    ExportContent,
    ExportOptions,
    ExportResult,
    GeneratorConfig,
    InputFormat,
    Lang,
    OutputFormat,
    OutputStyle,
)


def merge_config(
    config: Mapping[str, Any] | GeneratorConfig | None = None,
    *,
    output_format: str | None = None,
    output_style: Mapping[str, Any] | OutputStyle | None = None,
    languages: list[str] | None = None,
    lang: str | None = None,
    default_lang: str | None = None,
) -> GeneratorConfig:
    """Combine a global config object with per-call overrides.

    Per-call values win. ``outputStyle`` is merged key by key and the
    language falls back through ``lang``, the config's ``defaultLang`` and
    ``lang``, then ``default_lang`` (the server default) and finally ``"de"``.
    """
    if isinstance(config, GeneratorConfig):
        base: dict[str, Any] = config.model_dump(by_alias=True, exclude_unset=True)
    else:
        base = dict(config or {})

    if isinstance(output_style, OutputStyle):
        output_style = output_style.model_dump(by_alias=True, exclude_unset=True)

    return GeneratorConfig.model_validate({
        "outputFormat": output_format or base.get("outputFormat") or OutputFormat.MARKDOWN,
        "outputStyle": {**(base.get("outputStyle") or {}), **(output_style or {})},
        "languages": languages or base.get("languages") or [],
        "lang": lang or base.get("defaultLang") or base.get("lang") or default_lang or DEFAULT_LANG,
    })


def generate_docs_from_input(
    input: Mapping[str, Any] | None,
    config: Mapping[str, Any] | GeneratorConfig | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Render documentation for one input object.

    Returns:
        ``{"markdown": str}`` or, for JSON output,
        ``{"documentation": {...}, "languages": [...]}``

    Raises:
        MissingInputError: If no input is given
        UnknownFormatError: If the input matches no supported shape
    """
    if not input:
        raise MissingInputError("Missing input data")

    settings = merge_config(config, **overrides)
    entries = load_input(input, settings.lang)

    if settings.output_format == OutputFormat.JSON:
        return render_json(entries, settings.lang, settings.languages)

    markdown = render_markdown(entries, settings.output_style, settings.lang, settings.languages)
    return {"markdown": markdown}


def validate_documentation(
    input: Mapping[str, Any] | None,
    config: Mapping[str, Any] | GeneratorConfig | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Check that every normalized entry has a title and content.

    An unsupported input shape is reported as an issue instead of raised.
    """
    if not input:
        raise MissingInputError("Missing input data")

    lang: Lang = merge_config(config, **overrides).lang
    fmt = detect_format(input)
    if fmt == InputFormat.UNKNOWN:
        return {
            "valid": False,
            "issues": [{"index": None, "error": label("unknown_format", lang)}],
            "message": label("format_not_supported", lang),
        }

    issues: list[dict[str, Any]] = []
    for index, entry in enumerate(normalize_entries(input, fmt, lang)):
        if not entry.title:
            issues.append({"index": index, "error": label("missing_title", lang), "entry": entry.dump()})
        if not entry.content:
            issues.append({"index": index, "error": label("missing_content", lang), "entry": entry.dump()})

    return {
        "valid": not issues,
        "issues": issues,
        "message": label("some_invalid" if issues else "all_valid", lang),
    }


def generate_docs_from_diff(
    old: Mapping[str, Any] | None,
    new: Mapping[str, Any] | None,
    config: Mapping[str, Any] | GeneratorConfig | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Describe what was added, changed and removed between two inputs.

    Returns:
        ``{"markdown": str}`` or ``{"diff": {...}}`` for JSON output
    """
    if not old or not new:
        raise MissingInputError("Missing old or new input data")

    settings = merge_config(config, **overrides)
    result = diff_entries(
        load_input(old, settings.lang, "diff input"),
        load_input(new, settings.lang, "diff input"),
    )

    if settings.output_format == OutputFormat.JSON:
        return render_diff_json(result)
    return {"markdown": render_diff_markdown(result, settings.lang)}


def build_export_content(input: Mapping[str, Any] | ExportContent, lang: Lang = DEFAULT_LANG) -> ExportContent:
    """Raw Markdown passes through; any other input is normalized into entries."""
    if isinstance(input, ExportContent):
        return input
    raw = input.get("rawContent") or input.get("raw_content")
    if isinstance(raw, str):
        return ExportContent(raw_content=raw)
    return ExportContent(entries=load_input(input, lang))


async def export_documentation(
    registry: ExporterRegistry,
    exporter_name: str,
    input: Mapping[str, Any] | ExportContent | None,
    options: Mapping[str, Any] | ExportOptions | None = None,
    lang: Lang = DEFAULT_LANG,
) -> ExportResult:
    """Normalize an input and hand it to a registered exporter.

    Raises:
        ExporterNotFoundError: If ``exporter_name`` is not registered
        MissingInputError: If no input is given
        UnknownFormatError: If the input matches no supported shape
    """
    if not input:
        raise MissingInputError("Missing input data")

    exporter = registry.get_exporter(exporter_name)
    if exporter is None:
        raise ExporterNotFoundError(exporter_name, registry.get_available_exporters())

    content = build_export_content(input, lang)
    if isinstance(options, ExportOptions):
        export_options = options
    else:
        export_options = ExportOptions.model_validate({"lang": lang, **dict(options or {})})

    if not await exporter.is_configured():
        logger.warning(f'Exporter "{exporter_name}" is not configured')
        return ExportResult(
            success=False,
            error=f'Exporter "{exporter_name}" is not configured',
        )

    logger.info(f'Exporting documentation with "{exporter_name}"')
    result = await exporter.export(content, export_options)
    if not result.success:
        logger.warning(f'Export with "{exporter_name}" failed: {result.error}')
    return result
