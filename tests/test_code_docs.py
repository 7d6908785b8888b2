"""Tests for documentation extracted from source code."""

import pytest

from doc_gen_mcp.core.code_docs import (
    collect_code_entries,
    extract_entries_from_code,
    find_code_files,
    summarize_code_files,
)
from doc_gen_mcp.errors import MissingInputError
from doc_gen_mcp.llm import LLMClient, LLMResponse

PYTHON_SOURCE = '''"""Billing helpers."""


class Invoice:
    """A customer invoice."""

    def total(self):
        """Sum of all line items."""

    def _hidden(self):
        pass


async def send(invoice):
    """Send the invoice by mail."""
'''

SCRIPT_SOURCE = """
/**
 * Formats a price.
 * @param {number} value
 */
export function formatPrice(value) {}

/**
 * @description Shopping cart state.
 * @type {object}
 */
const cart = {};
"""


class FakeLLMClient(LLMClient):
    def __init__(self):
        super().__init__()
        self.prompts: list[str] = []

    @property
    def default_model(self) -> str:
        return "fake"

    @property
    def provider_name(self) -> str:
        return "fake"

    async def complete(self, prompt, system=None, temperature=0.2, max_tokens=2048, **kwargs):
        self.prompts.append(prompt)
        return LLMResponse(content="  Generated docs\n", model=self.model)


class TestExtractEntries:
    def test_python_docstrings(self) -> None:
        entries = extract_entries_from_code(PYTHON_SOURCE, "billing.py")

        assert [(e.title, e.content) for e in entries] == [
            ("billing.py", "Billing helpers."),
            ("Invoice", "A customer invoice."),
            ("Invoice.total", "Sum of all line items."),
            ("send", "Send the invoice by mail."),
        ]
        assert {e.category for e in entries} == {"Code"}

    def test_jsdoc_blocks(self) -> None:
        entries = extract_entries_from_code(SCRIPT_SOURCE, "cart.ts")

        assert [(e.title, e.content) for e in entries] == [
            ("formatPrice", "Formats a price."),
            ("cart", "Shopping cart state."),
        ]

    def test_syntax_error_yields_nothing(self, log_messages) -> None:
        assert extract_entries_from_code("def broken(:\n", "broken.py") == []
        assert any("Cannot parse broken.py" in m for m in log_messages)

    def test_unknown_suffix(self) -> None:
        assert extract_entries_from_code("# Title", "README.md") == []


class TestFindCodeFiles:
    def test_skips_dependency_directories(self, tmp_path) -> None:
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "app.py").write_text("")
        (tmp_path / "src" / "notes.txt").write_text("")
        (tmp_path / "node_modules" / "lib").mkdir(parents=True)
        (tmp_path / "node_modules" / "lib" / "index.js").write_text("")

        assert find_code_files(tmp_path) == [tmp_path / "src" / "app.py"]

    def test_single_file(self, tmp_path) -> None:
        path = tmp_path / "main.js"
        path.write_text("")
        assert find_code_files(path) == [path]

    def test_missing_path(self, tmp_path) -> None:
        with pytest.raises(MissingInputError, match="Code path not found"):
            find_code_files(tmp_path / "nope")


class TestSummarize:
    @pytest.mark.asyncio
    async def test_failures_are_reported_per_file(self, tmp_path) -> None:
        good = tmp_path / "good.py"
        good.write_text("x = 1")
        bad = tmp_path / "bad.py"
        bad.write_text("y = 2")

        async def summarizer(code: str, filename: str) -> str:
            if filename == "bad.py":
                raise RuntimeError("quota exceeded")
            return f"Docs for {code}"

        entries = await summarize_code_files([good, bad], summarizer)

        assert [(e.title, e.content) for e in entries] == [
            ("good.py", "Docs for x = 1"),
            ("bad.py", "AI documentation failed: quota exceeded"),
        ]

    @pytest.mark.asyncio
    async def test_collect_with_llm_client(self, tmp_path) -> None:
        (tmp_path / "app.py").write_text("print('hi')")
        client = FakeLLMClient()

        entries = await collect_code_entries(tmp_path, use_ai=True, llm_client=client)

        assert [(e.title, e.content) for e in entries] == [("app.py", "Generated docs")]
        assert "print('hi')" in client.prompts[0]
        assert "app.py" in client.prompts[0]

    @pytest.mark.asyncio
    async def test_collect_static(self, tmp_path) -> None:
        (tmp_path / "billing.py").write_text(PYTHON_SOURCE)
        entries = await collect_code_entries(tmp_path)
        assert len(entries) == 4
