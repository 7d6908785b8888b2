"""MCP tool implementations."""

from doc_gen_mcp.tools.code_docs import generate_docs_from_code
from doc_gen_mcp.tools.export import export_documentation, list_exporters
from doc_gen_mcp.tools.generate_docs import (
    generate_docs_from_diff,
    generate_docs_from_input,
    validate_documentation,
)

__all__ = [
    "export_documentation",
    "generate_docs_from_code",
    "generate_docs_from_diff",
    "generate_docs_from_input",
    "list_exporters",
    "validate_documentation",
]
