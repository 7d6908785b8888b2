"""Documentation entries extracted from source code."""

from __future__ import annotations

import ast
import asyncio
import re
from collections.abc import Awaitable, Callable, Iterable
from pathlib import Path

from loguru import logger

from doc_gen_mcp.errors import MissingInputError
from doc_gen_mcp.llm import LLMClient, get_llm_client
from doc_gen_mcp.schemas import Entry

CODE_CATEGORY = "Code"

PYTHON_SUFFIXES = {".py", ".pyi"}
SCRIPT_SUFFIXES = {".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx"}
SKIPPED_DIRS = {"node_modules", "dist", "build", ".git", "__pycache__", ".venv", "venv"}

JSDOC_BLOCK = re.compile(
    r"/\*\*(?P<comment>[\s\S]*?)\*/\s*"
    r"(?:export\s+)?(?:default\s+)?(?:async\s+)?"
    r"(?:function|class|const|let|var)\s+(?P<name>[A-Za-z0-9_$]+)"
)
JSDOC_DESCRIPTION = re.compile(r"@description\s+([\s\S]*?)(?=@|$)")

Summarizer = Callable[[str, str], Awaitable[str]]


def is_code_file(path: str | Path) -> bool:
    return Path(path).suffix.lower() in PYTHON_SUFFIXES | SCRIPT_SUFFIXES


def _entry(title: str, content: str) -> Entry:
    return Entry(category=CODE_CATEGORY, title=title, content=content)


def _python_entries(source: str, filename: str) -> list[Entry]:
    try:
        tree = ast.parse(source, filename=filename)
    except SyntaxError as e:
        logger.warning(f"Cannot parse {filename}: {e}")
        return []

    entries: list[Entry] = []
    module_doc = ast.get_docstring(tree)
    if module_doc:
        entries.append(_entry(filename, module_doc))

    def visit(node: ast.AST, prefix: str) -> None:
        for child in ast.iter_child_nodes(node):
            if isinstance(child, (ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)):
                qualified = f"{prefix}{child.name}"
                doc = ast.get_docstring(child)
                if doc:
                    entries.append(_entry(qualified, doc))
                if isinstance(child, ast.ClassDef):
                    visit(child, f"{qualified}.")

    visit(tree, "")
    return entries


def _clean_jsdoc(comment: str) -> str:
    match = JSDOC_DESCRIPTION.search(comment)
    if match:
        text = match.group(1)
    else:
        text = re.sub(r"@.*$", "", comment.replace("*", ""), flags=re.MULTILINE)
    lines = (line.strip().lstrip("*").strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line).strip()


def _script_entries(source: str) -> list[Entry]:
    return [
        _entry(match.group("name"), _clean_jsdoc(match.group("comment")))
        for match in JSDOC_BLOCK.finditer(source)
    ]


def extract_entries_from_code(source: str, filename: str) -> list[Entry]:
    """Turn docstrings (Python) or JSDoc blocks (JS/TS) into entries.

    Args:
        source: File contents
        filename: Name used for the module entry and to pick the parser

    Returns:
        One ``Code`` entry per documented module, class, function or
        declaration, in source order
    """
    suffix = Path(filename).suffix.lower()
    if suffix in PYTHON_SUFFIXES:
        return _python_entries(source, filename)
    if suffix in SCRIPT_SUFFIXES:
        return _script_entries(source)
    logger.debug(f"No extractor for {filename}")
    return []


def find_code_files(path: Path) -> list[Path]:
    """A single code file, or every code file below a directory."""
    if path.is_file():
        return [path]
    if not path.is_dir():
        raise MissingInputError(f"Code path not found: {path}")
    return sorted(
        p for p in path.rglob("*")
        if p.is_file() and is_code_file(p) and not SKIPPED_DIRS.intersection(p.parts)
    )


async def summarize_code_files(paths: Iterable[Path], summarizer: Summarizer) -> list[Entry]:
    """One entry per file, documented by ``summarizer(code, filename)``.

    A failing file still yields an entry that reports the failure.
    """
    entries: list[Entry] = []
    for path in paths:
        try:
            code = await asyncio.to_thread(path.read_text, encoding="utf-8")
            doc = await summarizer(code, path.name)
        except Exception as e:
            logger.warning(f"AI documentation failed for {path.name}: {e}")
            doc = f"AI documentation failed: {e}"
        entries.append(_entry(path.name, doc.strip()))
    return entries


async def collect_code_entries(
    path: str | Path,
    use_ai: bool = False,
    llm_client: LLMClient | None = None,
) -> list[Entry]:
    """Collect entries for a code file or directory.

    With ``use_ai`` every file is summarized by the LLM; otherwise
    docstrings and JSDoc comments are extracted statically.
    """
    files = await asyncio.to_thread(find_code_files, Path(path))
    logger.info(f"Collecting documentation from {len(files)} code files in {path}")

    if use_ai:
        client = llm_client or get_llm_client()
        return await summarize_code_files(files, client.summarize)

    entries: list[Entry] = []
    for file in files:
        source = await asyncio.to_thread(file.read_text, encoding="utf-8")
        entries.extend(extract_entries_from_code(source, file.name))
    return entries
