"""Loading project rule sets from ``cursorrules.json`` or ``.cursorrules/``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

RULES_FILE = "cursorrules.json"
RULES_DIR = ".cursorrules"


def find_rules(root_dir: str | Path) -> Path | None:
    """Rules file if present, else the rules directory, else ``None``."""
    root = Path(root_dir)
    if (root / RULES_FILE).is_file():
        return root / RULES_FILE
    if (root / RULES_DIR).is_dir():
        return root / RULES_DIR
    return None


def _merge_rule_files(directory: Path) -> dict[str, Any]:
    merged: dict[str, Any] = {"rules": []}
    for file in sorted(directory.glob("*.json")):
        try:
            data = json.loads(file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to parse rules from {file}: {e}")
            continue
        rules = data.get("rules") if isinstance(data, dict) else None
        if isinstance(rules, list):
            merged["rules"].extend(rules)
    return merged


def load_rules(root_dir: str | Path | None = None) -> dict[str, Any]:
    """Load the project's rules as a ``{"rules": [...]}`` input object.

    Raises:
        json.JSONDecodeError: If ``cursorrules.json`` is not valid JSON
    """
    root = Path(root_dir) if root_dir else Path.cwd()
    location = find_rules(root)
    if location is None:
        logger.warning(f"No {RULES_FILE} or {RULES_DIR}/ directory found in {root}")
        return {"rules": []}

    if location.is_file():
        return json.loads(location.read_text(encoding="utf-8"))
    return _merge_rule_files(location)
