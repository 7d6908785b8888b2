"""generate_docs_from_input, validate_documentation and generate_docs_from_diff MCP tools."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from doc_gen_mcp.core import generator
from doc_gen_mcp.core.rules import load_rules
from doc_gen_mcp.errors import MissingInputError


def _overrides(
    output_format: str | None,
    output_style: dict[str, Any] | None,
    languages: list[str] | None,
    lang: str | None,
) -> dict[str, Any]:
    return {
        "output_format": output_format,
        "output_style": output_style,
        "languages": languages,
        "lang": lang,
        "default_lang": os.getenv("DOCGEN_LANG"),
    }


async def generate_docs_from_input(
    input: dict[str, Any] | None = None,
    rules_dir: str | None = None,
    output_format: str | None = None,
    output_style: dict[str, Any] | None = None,
    languages: list[str] | None = None,
    lang: str | None = None,
    config: dict[str, Any] | None = None,
) -> dict:
    """Render documentation from an input object or a project's rule files.

    Args:
        input: Object with an entries, rules, api or config list
        rules_dir: Project root holding cursorrules.json or .cursorrules/ (used when input is omitted)
        output_format: "markdown" (default) or "json"
        output_style: Heading level and bullet character
        languages: Code languages to include
        lang: "de" or "en"
        config: Global config object; per-call arguments take precedence

    Returns:
        Rendered Markdown or the JSON projection
    """
    if input is None and rules_dir:
        logger.info(f"Loading rules from {rules_dir}")
        input = load_rules(rules_dir)
        if not input.get("rules"):
            raise MissingInputError(f"No rules found in {rules_dir}")

    return generator.generate_docs_from_input(
        input, config, **_overrides(output_format, output_style, languages, lang)
    )


async def validate_documentation(
    input: dict[str, Any] | None = None,
    lang: str | None = None,
    config: dict[str, Any] | None = None,
) -> dict:
    """Report entries that lack a title or content."""
    return generator.validate_documentation(input, config, **_overrides(None, None, None, lang))


async def generate_docs_from_diff(
    old: dict[str, Any] | None = None,
    new: dict[str, Any] | None = None,
    output_format: str | None = None,
    lang: str | None = None,
    config: dict[str, Any] | None = None,
) -> dict:
    """Document the changes between two input objects."""
    return generator.generate_docs_from_diff(
        old, new, config, **_overrides(output_format, None, None, lang)
    )
