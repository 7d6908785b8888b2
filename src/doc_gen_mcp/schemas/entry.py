"""Canonical entry model and exporter payload schemas."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel


class InputFormat(str, Enum):
    """Structural shape of a raw documentation input."""
    ENTRIES = "entries"
    RULES = "rules"
    API = "api"
    CONFIG = "config"
    UNKNOWN = "unknown"


def canonical_json(data: Any) -> str:
    """Serialize with sorted keys so equal structures produce equal strings."""
    return json.dumps(data, sort_keys=True, ensure_ascii=False, default=str)


TEXT_FIELDS = ("category", "title", "content")


def _scalar_text(value: Any) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    return str(value)


def _well_typed(record: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of ``record`` without the known fields whose type is wrong."""
    kept: dict[str, Any] = {}
    for key, value in record.items():
        if key in TEXT_FIELDS:
            value = _scalar_text(value)
            if value is None:
                continue
        elif key == "code":
            if not isinstance(value, Mapping) or not all(isinstance(v, str) for v in value.values()):
                continue
            value = {str(k): v for k, v in value.items()}
        kept[key] = value
    return kept


class Entry(BaseModel):
    """A single documentation unit.

    Title and content are optional on the model so that malformed records
    survive normalization and stay visible to rendering and validation.
    Unknown keys (``name``, ``id``, ...) are kept as extra fields.
    """
    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)

    category: str | None = None
    title: str | None = None
    content: str | None = None
    code: dict[str, str] | None = None

    # Original record of an entry whose known fields had the wrong type.
    _raw: dict[str, Any] | None = PrivateAttr(default=None)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Entry:
        """Build an entry without rejecting malformed field types.

        Mistyped ``category``, ``title``, ``content`` or ``code`` values are
        left unset on the entry, so it reads as incomplete, while
        :meth:`dump` still reports the record as given.
        """
        try:
            return cls.model_validate(record)
        except ValueError:
            entry = cls.model_construct(**_well_typed(record))
            entry._raw = dict(record)
            return entry

    def extra(self, key: str) -> Any:
        return (self.model_extra or {}).get(key)

    def dump(self) -> dict[str, Any]:
        """Structural dict of the fields the record actually carries."""
        if self._raw is not None:
            return dict(self._raw)
        return self.model_dump(exclude_unset=True)

    def to_json(self) -> str:
        return json.dumps(self.dump(), ensure_ascii=False, default=str)

    def identity(self) -> str:
        """Key used to match entries across two snapshots.

        The first non-empty scalar among title, name and id, else the
        canonical dump of the whole record.
        """
        for value in (self.title, self.extra("name"), self.extra("id")):
            key = _scalar_text(value)
            if key:
                return key
        return canonical_json(self.dump())

    def is_complete(self) -> bool:
        return bool(self.title) and bool(self.content)


class Severity(str, Enum):
    """Severity of a validation issue."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationIssue(BaseModel):
    """A single problem found while validating export content."""
    message: str
    severity: Severity = Severity.ERROR


class ValidationResult(BaseModel):
    """Outcome of ``validate_content``; warnings never make it invalid."""
    valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @classmethod
    def from_issues(cls, issues: list[ValidationIssue]) -> ValidationResult:
        return cls(
            valid=not any(i.severity == Severity.ERROR for i in issues),
            issues=issues,
        )

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]


class ExportContent(BaseModel):
    """Normalized payload handed to an exporter."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    entries: list[Entry] | None = None
    raw_content: str | None = None

    def has_content(self) -> bool:
        return bool(self.raw_content) or bool(self.entries)


class ExportOptions(BaseModel):
    """Recognized export options plus exporter-specific extension fields."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    title: str | None = None
    config_path: str | None = None
    by_category: bool = False
    labels: list[str] = Field(default_factory=list)
    validate_before_export: bool = False
    output_file: str | None = None
    output_path: str | None = None


class ExportResult(BaseModel):
    """Result of a single ``export`` call."""
    success: bool
    error: str | None = None
    details: Any = None
