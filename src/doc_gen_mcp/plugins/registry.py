"""Exporter registry: name-keyed factories with lazily created instances."""

from __future__ import annotations

import asyncio
import hashlib
import importlib.util
import json
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from loguru import logger

from doc_gen_mcp.plugins.base import Exporter, ExporterFactory, conforms_to_exporter

EXPORTER_FILE_SUFFIX = "_exporter.py"
EXPORTER_ATTRIBUTE = "exporter"


class ExporterRegistry:
    """Registry of exporter factories and their cached instances.

    Each name maps to one factory. The first ``get_exporter`` call for a name
    invokes the factory and caches the instance; later calls return the same
    object until the name is registered again.

    Usage:
        registry = ExporterRegistry()
        registry.register_exporter("markdown", MarkdownExporter)
        exporter = registry.get_exporter("markdown")
        result = await exporter.export(content)
    """

    def __init__(self):
        self._factories: dict[str, ExporterFactory] = {}
        self._instances: dict[str, Exporter] = {}

    def register_exporter(self, name: str, factory: ExporterFactory) -> None:
        """Register a factory, replacing and evicting any previous one."""
        if name in self._factories:
            logger.warning(f'Exporter "{name}" is being overwritten')
        # Re-registration keeps the name's original position in the ordering.
        self._factories[name] = factory
        self._instances.pop(name, None)
        logger.debug(f"Registered exporter: {name}")

    def has_exporter(self, name: str) -> bool:
        return name in self._factories

    def get_exporter(self, name: str) -> Exporter | None:
        """Return the cached instance, creating it on first use."""
        instance = self._instances.get(name)
        if instance is not None:
            return instance

        factory = self._factories.get(name)
        if factory is None:
            return None

        instance = factory()
        self._instances[name] = instance
        return instance

    def get_available_exporters(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._factories)

    def list_exporters(self) -> list[dict[str, Any]]:
        """Metadata of every registered exporter (instantiates lazily)."""
        result = []
        for name in self._factories:
            exporter = self.get_exporter(name)
            result.append({
                "name": name,
                "description": getattr(exporter, "description", ""),
                "supported_formats": list(getattr(exporter, "supported_formats", [])),
            })
        return result

    async def load_exporters_from_directory(self, directory: str | Path) -> None:
        """Load every ``*_exporter.py`` module in a directory.

        Each module must expose an ``exporter`` attribute: an exporter class or
        a zero-argument factory. The resulting instance is registered under its
        own ``name``. Modules that fail to import or do not conform are skipped
        with a warning.
        """
        path = Path(directory)
        try:
            files = await asyncio.to_thread(_list_exporter_files, path)
        except OSError as e:
            logger.error(f"Failed to read exporter directory {path}: {e}")
            return

        for file in files:
            try:
                exporter = await _load_exporter_from_file(file)
            except Exception as e:
                logger.warning(f"Failed to load exporter {file.name}: {e}")
                continue

            if exporter is None:
                continue

            self.register_exporter(exporter.name, _constant(exporter))
            logger.info(f'Exporter "{exporter.name}" loaded from {file.name}')

    async def load_exporters_from_config(self, config_path: str | Path) -> None:
        """Load exporters listed in a ``{"exporters": [{name, path}]}`` manifest.

        Paths are resolved against the working directory. Exporters are
        registered under the manifest name, not their self-reported one.
        """
        manifest_file = Path(config_path)
        if not manifest_file.is_file():
            logger.warning(f"Exporter manifest {manifest_file} does not exist")
            return

        try:
            raw = await asyncio.to_thread(manifest_file.read_text, encoding="utf-8")
            manifest = json.loads(raw)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read exporter manifest {manifest_file}: {e}")
            return

        items = manifest.get("exporters") if isinstance(manifest, dict) else None
        if not isinstance(items, list):
            logger.warning(f"Exporter manifest {manifest_file} contains no valid exporters")
            return

        for item in items:
            if not isinstance(item, dict) or not item.get("name") or not item.get("path"):
                logger.warning(f"Invalid exporter manifest item: {item!r}")
                continue

            module_path = Path.cwd() / item["path"]
            try:
                exporter = await _load_exporter_from_file(module_path.resolve())
            except Exception as e:
                logger.warning(f"Failed to load exporter {item['path']}: {e}")
                continue

            if exporter is None:
                continue

            self.register_exporter(item["name"], _constant(exporter))
            logger.info(f'Exporter "{item["name"]}" loaded from {item["path"]}')


def _constant(exporter: Exporter) -> ExporterFactory:
    return lambda: exporter


def _list_exporter_files(directory: Path) -> list[Path]:
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.name.endswith(EXPORTER_FILE_SUFFIX)
    )


def _import_module_from_path(path: Path) -> ModuleType:
    digest = hashlib.sha256(str(path).encode()).hexdigest()[:8]
    module_name = f"doc_gen_mcp_plugin_{path.stem}_{digest}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot import {path}"
        raise ImportError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


async def _load_exporter_from_file(path: Path) -> Exporter | None:
    """Import a plugin module and build its default exporter, or ``None``."""
    module = await asyncio.to_thread(_import_module_from_path, path)

    default = getattr(module, EXPORTER_ATTRIBUTE, None)
    if default is None or not callable(default):
        logger.warning(f"Module {path.name} has no '{EXPORTER_ATTRIBUTE}' default export")
        return None

    exporter = default()
    if not conforms_to_exporter(exporter):
        logger.warning(f"{path.name} does not export a conforming exporter")
        return None
    return exporter
