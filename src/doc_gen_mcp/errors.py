"""Exception hierarchy for doc-gen-mcp."""

from __future__ import annotations


class DocGenError(Exception):
    """Base class for all doc-gen-mcp errors."""


class UnknownFormatError(DocGenError, ValueError):
    """Raised when an input object matches none of the supported shapes."""

    SUPPORTED = ("entries", "rules", "api", "config")

    def __init__(self, context: str = "input"):
        self.context = context
        super().__init__(
            f"Unknown {context} format. Supported: {', '.join(self.SUPPORTED)}"
        )


class MissingInputError(DocGenError, ValueError):
    """Raised when a command is invoked without its input data."""


class ExporterConfigError(DocGenError):
    """Raised when an exporter configuration file cannot be parsed."""


class ExporterNotFoundError(DocGenError, KeyError):
    """Raised when an export is requested for an unregistered exporter."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = available or []
        super().__init__(name)

    def __str__(self) -> str:
        known = ", ".join(self.available) or "none"
        return f"Unknown exporter: {self.name} (available: {known})"


class ConfluenceAPIError(DocGenError):
    """Raised for non-2xx responses from the Confluence REST API."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Confluence API request failed: {status_code} - {body}")
