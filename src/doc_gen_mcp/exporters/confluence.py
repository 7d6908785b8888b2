"""Confluence exporter: pushes documentation pages through the REST API."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import httpx
from loguru import logger

from doc_gen_mcp.core.i18n import label
from doc_gen_mcp.errors import ConfluenceAPIError
from doc_gen_mcp.exporters.confluence_markup import markdown_to_confluence
from doc_gen_mcp.plugins.base import read_json_config, validate_entries, validation_failure
from doc_gen_mcp.schemas import (
    ConfluenceConfig,
    Entry,
    ExportContent,
    ExportOptions,
    ExportResult,
    ValidationResult,
)

CONTENT_API = "/rest/api/content"


def entries_to_markdown(entries: list[Entry]) -> str:
    """Flat Markdown body for one Confluence page."""
    parts: list[str] = []
    for entry in entries:
        parts.append(f"## {entry.title or ''}\n\n{entry.content or ''}\n")
        for language, code in (entry.code or {}).items():
            parts.append(f"```{language}\n{code}\n```\n")
    return "\n".join(parts)


class ConfluenceExporter:
    """Export documentation to Confluence pages.

    Pages are matched by title inside the configured space: an existing page
    is updated with the next version number, otherwise a new page is created
    below ``parentPageId``.

    Args:
        config: Pre-loaded configuration. Loaded from ``config/confluence.json``
            on first use when omitted.
        transport: Optional httpx transport, used by tests to stub the API.
    """

    name = "confluence"
    description = "Exports documentation to Confluence pages"
    supported_formats = ["confluence", "storage"]

    def __init__(
        self,
        config: ConfluenceConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.default_config_path = str(Path.cwd() / "config" / "confluence.json")
        self.config = config
        self._transport = transport

    async def is_configured(self) -> bool:
        try:
            config = self.config or await self.load_config()
        except Exception as e:
            logger.debug(f"Confluence exporter not configured: {e}")
            return False
        return bool(config.base_url and config.space_key and config.auth.is_complete())

    async def load_config(self, config_path: str | None = None) -> ConfluenceConfig:
        config = await read_json_config(
            config_path or self.default_config_path, ConfluenceConfig(), "Confluence"
        )
        token = config.auth.token
        if token and token.startswith("$"):
            env_var = token[1:]
            resolved = os.getenv(env_var, "")
            if not resolved:
                logger.warning(f"Environment variable {env_var} not found for Confluence token")
            config.auth.token = resolved
        self.config = config
        return config

    async def validate_content(self, content: ExportContent) -> ValidationResult:
        return validate_entries(content)

    async def export(
        self, content: ExportContent, options: ExportOptions | None = None
    ) -> ExportResult:
        options = options or ExportOptions()
        try:
            if options.config_path or self.config is None:
                await self.load_config(options.config_path)

            if options.validate_before_export:
                validation = await self.validate_content(content)
                if not validation.valid:
                    return validation_failure(validation)

            lang = getattr(options, "lang", None) or "de"
            labels = [*self.config.default_labels, *options.labels]
            pages: list[dict[str, Any]] = []

            async with self._client() as client:
                if options.by_category and content.entries:
                    grouped: dict[str, list[Entry]] = {}
                    for entry in content.entries:
                        grouped.setdefault(entry.category or label("general", lang), []).append(entry)
                    for category, members in grouped.items():
                        title = f"{options.title} - {category}" if options.title else category
                        pages.append(
                            await self.push_page(client, title, entries_to_markdown(members), labels)
                        )
                else:
                    title = options.title or label("documentation", lang)
                    body = content.raw_content or entries_to_markdown(content.entries or [])
                    pages.append(await self.push_page(client, title, body, labels))

            return ExportResult(success=True, details={"pages": pages})
        except Exception as e:
            logger.error(f"Confluence export failed: {e}")
            return ExportResult(success=False, error=f"Failed to export to Confluence: {e}")

    def _client(self) -> httpx.AsyncClient:
        config = self.config
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        auth: httpx.Auth | None = None
        if config.auth.method == "token":
            headers["Authorization"] = f"Bearer {config.auth.token}"
        else:
            auth = httpx.BasicAuth(config.auth.username or "", config.auth.password or "")

        return httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            headers=headers,
            auth=auth,
            timeout=config.timeout,
            transport=self._transport,
        )

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        response = await client.request(method, path, params=params, json=json)
        if not response.is_success:
            raise ConfluenceAPIError(response.status_code, response.text)
        return response.json() if response.content else {}

    async def find_page_by_title(
        self, client: httpx.AsyncClient, title: str
    ) -> dict[str, Any] | None:
        """First page in the space with this exact title, or ``None``."""
        params = {"spaceKey": self.config.space_key, "title": title, "expand": "version"}
        try:
            data = await self._request(client, "GET", CONTENT_API, params=params)
        except (ConfluenceAPIError, httpx.HTTPError) as e:
            logger.error(f'Error finding page "{title}": {e}')
            return None

        results = data.get("results") or []
        return results[0] if results else None

    async def push_page(
        self,
        client: httpx.AsyncClient,
        title: str,
        markdown: str,
        labels: list[str],
    ) -> dict[str, Any]:
        """Create or update one page and return ``{title, id, status}``."""
        payload: dict[str, Any] = {
            "type": "page",
            "title": title,
            "space": {"key": self.config.space_key},
            "body": {
                "storage": {
                    "value": markdown_to_confluence(markdown),
                    "representation": "storage",
                },
            },
            "metadata": {"labels": [{"name": name} for name in labels]},
        }

        existing = await self.find_page_by_title(client, title)
        if existing:
            page_id = existing["id"]
            payload["id"] = page_id
            payload["version"] = {"number": existing["version"]["number"] + 1}
            data = await self._request(client, "PUT", f"{CONTENT_API}/{page_id}", json=payload)
            status = "updated"
        else:
            if self.config.parent_page_id:
                payload["ancestors"] = [{"id": self.config.parent_page_id}]
            data = await self._request(client, "POST", CONTENT_API, json=payload)
            status = "created"

        logger.info(f'Confluence page "{title}" {status}')
        return {"title": title, "id": data.get("id"), "status": status}
