from __future__ import annotations

from pathlib import Path

import pytest

from trace_preprocessor.config import (
    Config,
    ParentNumbering,
    TargetConfig,
    load_config_file,
)
from trace_preprocessor.errors import ConfigError


def test_defaults_when_table_missing() -> None:
    config = Config.from_mapping(None)

    assert config == Config()
    assert config.parent_numbering is ParentNumbering.ZERO
    assert config.record_heading == "Record"
    assert config.trace_heading == "Traces"
    assert config.targets == {}
    assert not config.qualified_footnotes
    assert not config.chapter_numbers
    assert not config.footnote_divider


def test_kebab_case_table_is_read() -> None:
    config = Config.from_mapping(
        {
            "command": "trace-preprocessor",
            "qualified-footnotes": True,
            "chapter-numbers": True,
            "footnote-divider": True,
            "parent-numbering": "offset",
            "record-heading": "Requirement",
            "trace-heading": "Locations",
            "targets": {"req": {"name": "Requirements"}},
        }
    )

    assert config.qualified_footnotes
    assert config.chapter_numbers
    assert config.footnote_divider
    assert config.parent_numbering is ParentNumbering.OFFSET
    assert config.record_heading == "Requirement"
    assert config.trace_heading == "Locations"
    assert config.targets == {"req": TargetConfig("Requirements")}


def test_invalid_parent_numbering_is_rejected() -> None:
    with pytest.raises(ConfigError, match="parent-numbering"):
        Config.from_mapping({"parent-numbering": "sideways"})


def test_invalid_types_are_all_reported() -> None:
    with pytest.raises(ConfigError) as excinfo:
        Config.from_mapping(
            {"qualified-footnotes": "yes", "targets": {"req": {"title": "x"}}}
        )

    message = str(excinfo.value)
    assert "qualified-footnotes" in message
    assert "targets/req" in message


def test_load_config_file_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "trace.yaml"
    path.write_text(
        "parent-numbering: allow-duplicates\n"
        "targets:\n"
        "  req:\n"
        "    name: Requirements\n",
        encoding="utf-8",
    )

    config = Config.from_mapping(load_config_file(path))

    assert config.parent_numbering is ParentNumbering.ALLOW_DUPLICATES
    assert config.targets["req"].name == "Requirements"


def test_load_config_file_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="missing"):
        load_config_file(tmp_path / "absent.yaml")

    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config_file(path)

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_config_file(empty) == {}
