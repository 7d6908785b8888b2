"""Tests for loading project rule sets."""

import json

import pytest

from doc_gen_mcp.core.rules import find_rules, load_rules
from doc_gen_mcp.tools import generate_docs_from_input
from doc_gen_mcp.errors import MissingInputError


def _write(path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class TestLoadRules:
    def test_rules_file_wins_over_directory(self, tmp_path) -> None:
        _write(tmp_path / "cursorrules.json", {"rules": [{"name": "File rule"}]})
        (tmp_path / ".cursorrules").mkdir()

        assert find_rules(tmp_path) == tmp_path / "cursorrules.json"
        assert load_rules(tmp_path) == {"rules": [{"name": "File rule"}]}

    def test_directory_files_are_merged_in_name_order(self, tmp_path, log_messages) -> None:
        rules_dir = tmp_path / ".cursorrules"
        rules_dir.mkdir()
        _write(rules_dir / "b.json", {"rules": [{"name": "B"}]})
        _write(rules_dir / "a.json", {"rules": [{"name": "A"}]})
        (rules_dir / "broken.json").write_text("{", encoding="utf-8")

        assert load_rules(tmp_path) == {"rules": [{"name": "A"}, {"name": "B"}]}
        assert any("Failed to parse rules from" in m for m in log_messages)

    def test_nothing_found(self, tmp_path, log_messages) -> None:
        assert find_rules(tmp_path) is None
        assert load_rules(tmp_path) == {"rules": []}
        assert any("No cursorrules.json" in m for m in log_messages)

    def test_defaults_to_working_directory(self, tmp_path, monkeypatch) -> None:
        _write(tmp_path / "cursorrules.json", {"rules": []})
        monkeypatch.chdir(tmp_path)
        assert load_rules() == {"rules": []}


class TestGenerateFromRulesDir:
    @pytest.mark.asyncio
    async def test_renders_project_rules(self, tmp_path) -> None:
        _write(tmp_path / "cursorrules.json", {"rules": [{"name": "No tabs", "description": "Use spaces"}]})

        result = await generate_docs_from_input(rules_dir=str(tmp_path), lang="en")

        assert "## Rules" in result["markdown"]
        assert "### No tabs" in result["markdown"]

    @pytest.mark.asyncio
    async def test_empty_rules_dir(self, tmp_path) -> None:
        with pytest.raises(MissingInputError, match="No rules found"):
            await generate_docs_from_input(rules_dir=str(tmp_path))
