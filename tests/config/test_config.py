# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the settings loader."""

from pathlib import Path

import pytest

from shapegen.config import (
    DEFAULT_DOC_LINE_LENGTH,
    DEFAULT_OUTPUT_FILE,
    CodegenSettings,
    SettingsError,
    load_settings,
    parse_settings,
)
from shapegen.model.shapes import ShapeId, prelude_id

# ###############
# Helpers
# ###############


def _write_settings(tmp_path: Path, content: str) -> Path:
    """Write a settings file and return its path."""
    settings_file = tmp_path / "shapegen.yaml"
    settings_file.write_text(content, encoding="utf-8")
    return settings_file


# ###############
# Normal Cases
# ###############


def test_defaults() -> None:
    settings = CodegenSettings()
    assert settings.output_file == DEFAULT_OUTPUT_FILE
    assert settings.doc_line_length == DEFAULT_DOC_LINE_LENGTH
    assert settings.documentation is True
    assert settings.is_excluded(prelude_id("documentation"))
    assert settings.is_excluded(prelude_id("enumValue"))
    assert not settings.is_excluded(prelude_id("length"))


def test_empty_document_yields_defaults() -> None:
    assert parse_settings("") == CodegenSettings()


def test_full_settings_file(tmp_path: Path) -> None:
    content = """\
output-file: shapes.rs
doc-line-length: 100
documentation: false
exclude-annotations:
  - documentation
  - com.example#internal
"""
    settings = load_settings(_write_settings(tmp_path, content))

    assert settings.output_file == "shapes.rs"
    assert settings.doc_line_length == 100
    assert settings.documentation is False
    assert settings.exclude_annotations == [prelude_id("documentation"), ShapeId("com.example", "internal")]


def test_settings_instances_do_not_share_exclusions() -> None:
    first = CodegenSettings()
    first.exclude_annotations.append(prelude_id("length"))
    assert not CodegenSettings().is_excluded(prelude_id("length"))


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="not found"):
        load_settings(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="Invalid YAML"):
        load_settings(_write_settings(tmp_path, "output-file: [unclosed\n"))


def test_not_a_mapping() -> None:
    with pytest.raises(SettingsError, match="must be a YAML mapping"):
        parse_settings("- a\n- b\n")


def test_unknown_key_is_rejected() -> None:
    with pytest.raises(SettingsError, match="unknown setting"):
        parse_settings("output: x.rs\n")


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("output-file: 3\n", "'output-file' must be a non-empty string"),
        ("doc-line-length: 0\n", "'doc-line-length' must be a positive integer"),
        ("doc-line-length: true\n", "'doc-line-length' must be a positive integer"),
        ("documentation: yes-please\n", "'documentation' must be a boolean"),
        ("exclude-annotations: documentation\n", "'exclude-annotations' must be a list"),
        ("exclude-annotations: [1]\n", r"exclude-annotations\[0\] must be a string"),
        ("exclude-annotations: ['bad name']\n", r"exclude-annotations\[0\]"),
    ],
)
def test_invalid_field_values(content: str, message: str) -> None:
    with pytest.raises(SettingsError, match=message):
        parse_settings(content, source_label="settings.yaml")


def test_errors_name_the_source(tmp_path: Path) -> None:
    path = _write_settings(tmp_path, "documentation: 1\n")
    with pytest.raises(SettingsError, match="shapegen.yaml"):
        load_settings(path)
