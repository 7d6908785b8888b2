"""Prompt templates for AI-generated code documentation."""

from __future__ import annotations


class PromptTemplates:
    """Prompts used when documentation is written by an LLM."""

    SYSTEM = "You are a technical writer who documents source code precisely and concisely."

    CODE_DOCUMENTATION = """Generate a concise, clear Markdown documentation for the following {language} code from `{filename}`.
Include a short description, the parameters and the return value where applicable.
Do not repeat the code itself.

CODE:

{code}

DOCUMENTATION:"""

    LANGUAGES: dict[str, str] = {
        ".py": "Python",
        ".pyi": "Python",
        ".js": "JavaScript",
        ".jsx": "JavaScript",
        ".mjs": "JavaScript",
        ".cjs": "JavaScript",
        ".ts": "TypeScript",
        ".tsx": "TypeScript",
    }

    @classmethod
    def code_documentation(cls, code: str, filename: str) -> str:
        suffix = filename[filename.rfind("."):].lower() if "." in filename else ""
        language = cls.LANGUAGES.get(suffix, "source")
        return cls.CODE_DOCUMENTATION.format(language=language, filename=filename, code=code)
