"""doc-gen-mcp: documentation generation and export over MCP."""

__version__ = "0.3.0"
