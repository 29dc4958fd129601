# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for code generation settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from shapegen.model.shapes import ShapeId, prelude_id

# ###############
# Public Interface
# ###############

DEFAULT_OUTPUT_FILE = "smithy-generated.rs"
DEFAULT_DOC_LINE_LENGTH = 88

# Annotations handled by documentation or by the runtime macros instead of initializers.
DEFAULT_EXCLUDED_ANNOTATIONS: tuple[ShapeId, ...] = tuple(
    prelude_id(name)
    for name in (
        "documentation",
        "externalDocumentation",
        "unstable",
        "deprecated",
        "since",
        "default",
        "enumValue",
    )
)


class SettingsError(Exception):
    """Raised when a settings file is invalid or cannot be loaded."""


@dataclass
class CodegenSettings:
    """Settings for one generation run.

    Attributes:
        output_file: Name of the generated file.
        exclude_annotations: Annotations never rendered as schema initializers.
        doc_line_length: Column at which doc comments are wrapped.
        documentation: Whether doc comments are generated at all.
    """

    output_file: str = DEFAULT_OUTPUT_FILE
    exclude_annotations: list[ShapeId] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_ANNOTATIONS))
    doc_line_length: int = DEFAULT_DOC_LINE_LENGTH
    documentation: bool = True

    def is_excluded(self, annotation_id: ShapeId) -> bool:
        return annotation_id in self.exclude_annotations


def load_settings(path: Path) -> CodegenSettings:
    """Load and parse a settings file.

    Args:
        path: Path to the YAML settings file.

    Returns:
        The settings, with defaults for every field the file omits.

    Raises:
        SettingsError: If the file cannot be read or the settings are invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SettingsError(f"Settings file not found: {path}") from None
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file: {exc}") from exc

    return parse_settings(text, source_label=str(path))


def parse_settings(text: str, source_label: str = "<string>") -> CodegenSettings:
    """Parse settings YAML text.

    An empty document yields the default settings.

    Raises:
        SettingsError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return CodegenSettings()
    if not isinstance(data, dict):
        raise SettingsError(f"{source_label}: settings must be a YAML mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise SettingsError(f"{source_label}: unknown setting(s): {', '.join(map(str, unknown))}")

    settings = CodegenSettings()
    if "output-file" in data:
        settings.output_file = _require_string(data, "output-file", source_label)
    if "exclude-annotations" in data:
        settings.exclude_annotations = _parse_annotation_ids(data["exclude-annotations"], source_label)
    if "doc-line-length" in data:
        settings.doc_line_length = _require_positive_int(data, "doc-line-length", source_label)
    if "documentation" in data:
        value = data["documentation"]
        if not isinstance(value, bool):
            raise SettingsError(f"{source_label}: 'documentation' must be a boolean")
        settings.documentation = value
    return settings


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"output-file", "exclude-annotations", "doc-line-length", "documentation"})


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a string field from a mapping, raising SettingsError on the wrong type."""
    value = mapping[key]
    if not isinstance(value, str) or not value:
        raise SettingsError(f"{source_label}: '{key}' must be a non-empty string")
    return value


def _require_positive_int(mapping: dict[str, object], key: str, source_label: str) -> int:
    value = mapping[key]
    # bool is an int subclass and is rejected explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise SettingsError(f"{source_label}: '{key}' must be a positive integer")
    return value


def _parse_annotation_ids(raw: object, source_label: str) -> list[ShapeId]:
    """Parse the list of excluded annotation ids; bare names refer to the prelude."""
    if not isinstance(raw, list):
        raise SettingsError(f"{source_label}: 'exclude-annotations' must be a list")
    result = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, str):
            raise SettingsError(f"{source_label}: exclude-annotations[{index}] must be a string")
        try:
            result.append(ShapeId.parse(entry) if "#" in entry else prelude_id(entry))
        except ValueError as exc:
            raise SettingsError(f"{source_label}: exclude-annotations[{index}]: {exc}") from exc
    return result
