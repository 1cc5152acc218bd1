from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import yaml
from jsonschema import Draft202012Validator

from .errors import ConfigError


class ParentNumbering(str, Enum):
    """Trace numbering strategy for a chapter that has subchapters."""

    # 1st trace and 1st subchapter of chapter 1 are both numbered 1.1
    ALLOW_DUPLICATES = "allow-duplicates"
    # chapter 1 with 2 subchapters numbers its 1st trace 1.3
    OFFSET = "offset"
    # chapter 1 with subchapters numbers its 1st trace 1.0.1
    ZERO = "zero"


CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "qualified-footnotes": {"type": "boolean"},
        "chapter-numbers": {"type": "boolean"},
        "footnote-divider": {"type": "boolean"},
        "parent-numbering": {
            "enum": [member.value for member in ParentNumbering],
        },
        "record-heading": {"type": "string"},
        "trace-heading": {"type": "string"},
        "targets": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {"name": {"type": "string"}},
                "required": ["name"],
            },
        },
    },
}


@dataclass(frozen=True)
class TargetConfig:
    name: str


@dataclass(frozen=True)
class Config:
    # Use the fully qualified trace number as the in-page footnote number.
    qualified_footnotes: bool = False
    # Prefix each page title with its chapter number.
    chapter_numbers: bool = False
    # Put a horizontal rule between the page body and the generated footnotes.
    footnote_divider: bool = False
    parent_numbering: ParentNumbering = ParentNumbering.ZERO
    record_heading: str = "Record"
    trace_heading: str = "Traces"
    targets: dict[str, TargetConfig] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> Config:
        """Build a config from the kebab-case ``[preprocessor.trace]`` table.

        Keys outside the schema (mdBook adds ``command``, ``before`` and the
        like to every preprocessor table) are ignored.
        """
        payload = dict(data or {})
        validate_config(payload)

        defaults = cls()
        targets = {
            str(target_id): TargetConfig(name=str(value["name"]))
            for target_id, value in payload.get("targets", {}).items()
        }
        return cls(
            qualified_footnotes=payload.get(
                "qualified-footnotes", defaults.qualified_footnotes
            ),
            chapter_numbers=payload.get("chapter-numbers", defaults.chapter_numbers),
            footnote_divider=payload.get("footnote-divider", defaults.footnote_divider),
            parent_numbering=ParentNumbering(
                payload.get("parent-numbering", defaults.parent_numbering.value)
            ),
            record_heading=payload.get("record-heading", defaults.record_heading),
            trace_heading=payload.get("trace-heading", defaults.trace_heading),
            targets=targets,
        )


def validate_config(payload: Mapping[str, Any]) -> None:
    validator = Draft202012Validator(CONFIG_SCHEMA)
    errors = sorted(
        validator.iter_errors(payload), key=lambda err: list(err.absolute_path)
    )
    if errors:
        details = "\n".join(
            f"- {'/'.join(str(part) for part in err.absolute_path) or '<root>'}: "
            f"{err.message}"
            for err in errors
        )
        raise ConfigError(f"invalid trace configuration:\n{details}")


def load_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"trace configuration file missing: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"trace configuration root must be a mapping: {path}")
    return data
