"""generate_docs_from_code MCP tool implementation."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from doc_gen_mcp.core import generator
from doc_gen_mcp.core.code_docs import collect_code_entries
from doc_gen_mcp.llm import get_llm_client


async def generate_docs_from_code(
    path: str,
    use_ai: bool = False,
    provider: str | None = None,
    output_format: str | None = None,
    output_style: dict[str, Any] | None = None,
    lang: str | None = None,
) -> dict:
    """Document a code file or directory.

    Args:
        path: Source file or directory
        use_ai: Summarize each file with the configured LLM instead of reading docstrings
        provider: LLM provider (anthropic, openai, local); defaults to LLM_PROVIDER
        output_format: "markdown" (default) or "json"
        output_style: Heading level and bullet character
        lang: "de" or "en"

    Returns:
        Rendered documentation plus the number of extracted entries
    """
    llm_client = get_llm_client(provider) if use_ai else None
    entries = await collect_code_entries(path, use_ai=use_ai, llm_client=llm_client)
    logger.info(f"Extracted {len(entries)} entries from {path}")

    result = generator.generate_docs_from_input(
        {"entries": [entry.dump() for entry in entries]} if entries else None,
        output_format=output_format,
        output_style=output_style,
        lang=lang,
        default_lang=os.getenv("DOCGEN_LANG"),
    )
    return {**result, "entryCount": len(entries)}
