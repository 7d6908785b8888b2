"""Shared fixtures for the doc-gen-mcp test suite.

- log_messages: captures loguru messages emitted during a test
- registry: an exporter registry with the built-in exporters
- sample_input: a small entries input object
"""

from __future__ import annotations

import pytest
from loguru import logger

from doc_gen_mcp.exporters import register_builtin_exporters
from doc_gen_mcp.plugins import ExporterRegistry


@pytest.fixture
def log_messages() -> list[str]:
    """Collect formatted loguru messages (``LEVEL: message``)."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda m: messages.append(f"{m.record['level'].name}: {m.record['message']}"),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def registry() -> ExporterRegistry:
    return register_builtin_exporters(ExporterRegistry())


@pytest.fixture
def sample_input() -> dict:
    return {
        "entries": [
            {"category": "Setup", "title": "Install", "content": "Run `pip install`."},
            {"category": "Setup", "title": "Configure", "content": "Edit the config file."},
            {"title": "Usage", "content": "Call the tool.", "code": {"python": "run()"}},
        ]
    }
