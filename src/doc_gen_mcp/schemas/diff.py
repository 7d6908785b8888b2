"""Diff schemas for comparing two documentation snapshots."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from doc_gen_mcp.schemas.entry import Entry


class ChangedEntry(BaseModel):
    """An entry whose identity matched on both sides but whose record differs."""
    before: Entry
    after: Entry


class DiffResult(BaseModel):
    """Added, changed and removed entries between two snapshots."""
    added: list[Entry] = Field(default_factory=list)
    changed: list[ChangedEntry] = Field(default_factory=list)
    removed: list[Entry] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.changed or self.removed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "added": [e.dump() for e in self.added],
            "changed": [
                {"before": c.before.dump(), "after": c.after.dump()}
                for c in self.changed
            ],
            "removed": [e.dump() for e in self.removed],
        }
