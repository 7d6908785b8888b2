"""Tests for the generate/validate/diff/export commands."""

import pytest

from doc_gen_mcp import tools
from doc_gen_mcp.core.generator import (
    export_documentation,
    generate_docs_from_diff,
    generate_docs_from_input,
    merge_config,
    validate_documentation,
)
from doc_gen_mcp.errors import ExporterNotFoundError, MissingInputError, UnknownFormatError
from doc_gen_mcp.exporters import MarkdownExporter
from doc_gen_mcp.schemas import OutputFormat


class TestMergeConfig:
    def test_defaults(self) -> None:
        config = merge_config()
        assert config.lang == "de"
        assert config.output_format == OutputFormat.MARKDOWN
        assert config.output_style.heading_level == 2
        assert config.languages == []

    def test_arguments_override_config(self) -> None:
        config = merge_config(
            {"outputStyle": {"headingLevel": 3, "bullet": "*"}, "defaultLang": "en", "languages": ["go"]},
            output_style={"bullet": "+"},
            output_format="json",
        )
        assert config.output_style.heading_level == 3
        assert config.output_style.bullet == "+"
        assert config.lang == "en"
        assert config.languages == ["go"]
        assert config.output_format == OutputFormat.JSON

    def test_lang_precedence(self) -> None:
        assert merge_config({"defaultLang": "en", "lang": "de"}).lang == "en"
        assert merge_config({"lang": "en"}).lang == "en"
        assert merge_config({"defaultLang": "en"}, lang="de").lang == "de"


class TestGenerateDocsFromInput:
    def test_markdown_scenario(self) -> None:
        result = generate_docs_from_input({"entries": [{"title": "T", "content": "C"}]})
        assert "## Allgemein" in result["markdown"]
        assert "### T" in result["markdown"]

    def test_json_output(self) -> None:
        result = generate_docs_from_input(
            {"rules": [{"name": "Rule 1", "description": "Desc"}]}, output_format="json", lang="en"
        )
        assert result == {
            "documentation": {"Rules": [{"category": "Rules", "title": "Rule 1", "content": "Desc"}]},
            "languages": [],
        }

    def test_missing_input(self) -> None:
        with pytest.raises(MissingInputError, match="Missing input data"):
            generate_docs_from_input(None)

    def test_unknown_format(self) -> None:
        with pytest.raises(UnknownFormatError, match="Unknown input format"):
            generate_docs_from_input({"foo": []})


class TestValidateDocumentation:
    def test_all_valid(self) -> None:
        result = validate_documentation({"entries": [{"title": "T", "content": "C"}]})
        assert result == {"valid": True, "issues": [], "message": "Alle Einträge gültig."}

    def test_missing_fields(self) -> None:
        result = validate_documentation({"entries": [{"title": "T"}, {"content": "C"}]}, lang="en")

        assert result["valid"] is False
        assert [(i["index"], i["error"]) for i in result["issues"]] == [
            (0, "Missing content"),
            (1, "Missing title"),
        ]
        assert result["issues"][0]["entry"] == {"title": "T"}
        assert result["message"] == "Some entries are invalid."

    def test_unknown_format_is_reported(self) -> None:
        result = validate_documentation({"foo": []})
        assert result["valid"] is False
        assert result["issues"] == [{"index": None, "error": "Unbekanntes Eingabeformat"}]
        assert result["message"] == "Eingabeformat wird nicht unterstützt."


class TestGenerateDocsFromDiff:
    def test_change_scenario(self) -> None:
        result = generate_docs_from_diff(
            {"entries": [{"title": "A", "content": "alt"}]},
            {"entries": [{"title": "A", "content": "neu"}]},
        )
        markdown = result["markdown"]
        assert "## Geändert" in markdown
        assert "  - Vorher: alt" in markdown
        assert "  - Nachher: neu" in markdown

    def test_json_output_across_formats(self) -> None:
        result = generate_docs_from_diff(
            {"rules": [{"name": "R", "description": "old"}]},
            {"entries": [{"category": "Regeln", "title": "R", "content": "old"}]},
            output_format="json",
        )
        assert result == {"diff": {"added": [], "changed": [], "removed": []}}

    def test_missing_side(self) -> None:
        with pytest.raises(MissingInputError, match="Missing old or new input data"):
            generate_docs_from_diff({"entries": []}, None)

    def test_unknown_side(self) -> None:
        with pytest.raises(UnknownFormatError, match="Unknown diff input format"):
            generate_docs_from_diff({"entries": [{"title": "x"}]}, {"foo": []})


class NotConfiguredExporter(MarkdownExporter):
    async def is_configured(self) -> bool:
        return False


class TestExportDocumentation:
    @pytest.mark.asyncio
    async def test_exports_through_registry(self, registry, sample_input) -> None:
        result = await export_documentation(
            registry, "markdown", sample_input, {"title": "Docs", "byCategory": True}
        )

        assert result.success
        content = result.details["content"]
        assert content.startswith("# Docs")
        assert "## Setup" in content
        assert "## Uncategorized" in content

    @pytest.mark.asyncio
    async def test_raw_content(self, registry) -> None:
        result = await export_documentation(registry, "markdown", {"rawContent": "# Raw"})
        assert result.details["content"] == "# Raw"

    @pytest.mark.asyncio
    async def test_unknown_exporter(self, registry, sample_input) -> None:
        with pytest.raises(ExporterNotFoundError, match="available: confluence, markdown, html, pdf"):
            await export_documentation(registry, "word", sample_input)

    @pytest.mark.asyncio
    async def test_not_configured(self, registry, sample_input) -> None:
        registry.register_exporter("markdown", NotConfiguredExporter)
        result = await export_documentation(registry, "markdown", sample_input)

        assert not result.success
        assert result.error == 'Exporter "markdown" is not configured'

    @pytest.mark.asyncio
    async def test_unknown_input_shape(self, registry) -> None:
        with pytest.raises(UnknownFormatError):
            await export_documentation(registry, "markdown", {"foo": []})


class TestMistypedInput:
    def test_generate_does_not_raise(self) -> None:
        result = generate_docs_from_input(
            {"entries": [
                {"title": "T", "content": ["a", "b"]},
                {"title": "U", "content": "C", "code": "print(1)"},
            ]},
            languages=["python"],
        )
        assert result["markdown"].count("⚠️ Ungültiger Eintrag") == 1
        assert "### U" in result["markdown"]

    def test_validate_reports_mistyped_fields(self) -> None:
        records = [{"title": {"x": 1}, "content": "C"}, {"title": "T", "content": True}]
        result = validate_documentation({"entries": records}, lang="en")

        assert [(i["index"], i["error"]) for i in result["issues"]] == [
            (0, "Missing title"),
            (1, "Missing content"),
        ]
        assert [i["entry"] for i in result["issues"]] == records

    def test_reflexive_diff_of_mistyped_entries(self) -> None:
        data = {"entries": [{"title": {"x": 1}, "content": "C"}]}
        result = generate_docs_from_diff(data, data, output_format="json")
        assert result == {"diff": {"added": [], "changed": [], "removed": []}}


class TestServerDefaultLanguage:
    @pytest.mark.asyncio
    async def test_applies_when_nothing_else_is_set(self, monkeypatch) -> None:
        monkeypatch.setenv("DOCGEN_LANG", "en")
        result = await tools.generate_docs_from_input({"entries": [{"title": "T", "content": "C"}]})
        assert result["markdown"].startswith("# Documentation")

    @pytest.mark.asyncio
    async def test_config_language_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("DOCGEN_LANG", "en")
        result = await tools.generate_docs_from_input(
            {"entries": [{"title": "T", "content": "C"}]}, config={"defaultLang": "de"}
        )
        assert result["markdown"].startswith("# Dokumentation")

    @pytest.mark.asyncio
    async def test_argument_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("DOCGEN_LANG", "de")
        result = await tools.validate_documentation({"entries": [{"title": "T"}]}, lang="en")
        assert result["issues"][0]["error"] == "Missing content"

    def test_merge_config_default_lang(self) -> None:
        assert merge_config(default_lang="en").lang == "en"
        assert merge_config({"lang": "de"}, default_lang="en").lang == "de"
