# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for doc comment generation."""

import pytest

from shapegen.codegen.context import CodeGenerationContext
from shapegen.codegen.sections import DocstringSection, DocumentedSection, MemberSection, SchemaSection, ShapeSection
from shapegen.config import CodegenSettings
from shapegen.errors import UnmatchedAnnotationError
from shapegen.integrations.docs import DocstringIntegration, SinceTraitInterceptor
from shapegen.model.model import Model
from shapegen.model.nodes import to_node
from shapegen.model.shapes import Annotation, Shape, ShapeType, marker
from shapegen.writer.writer import CodeWriter

# ###############
# Helpers
# ###############


def _shape(shape_type: ShapeType = ShapeType.STRUCTURE, **annotations: object) -> Shape:
    """Build ``com.test#S`` carrying prelude annotations given as keyword arguments."""
    return Shape(
        id="com.test#S",
        type=shape_type,
        annotations=[Annotation(id=f"smithy.api#{name}", value=to_node(value)) for name, value in annotations.items()],
    )


def _emit(section: DocumentedSection, settings: CodegenSettings | None = None) -> str:
    """Write ``body`` inside *section* with the documentation interceptors registered."""
    context = CodeGenerationContext(Model(), settings or CodegenSettings(), [DocstringIntegration()])
    writer = CodeWriter(context.interceptors)
    with writer.state(section):
        writer.write("body")
    return writer.to_string()


# ###############
# Tests
# ###############


def test_integration_registers_nothing_when_disabled() -> None:
    context = CodeGenerationContext(Model(), CodegenSettings(documentation=False), [DocstringIntegration()])
    assert len(context.interceptors) == 0


def test_documentation() -> None:
    assert _emit(ShapeSection(_shape(documentation="A shape."))) == "/// A shape.\nbody\n"


def test_multi_line_documentation() -> None:
    assert _emit(ShapeSection(_shape(documentation="First.\n\nSecond."))) == "/// First.\n///\n/// Second.\nbody\n"


def test_undocumented_shape_is_unchanged() -> None:
    assert _emit(ShapeSection(_shape())) == "body\n"


def test_section_without_target_is_unchanged() -> None:
    assert _emit(ShapeSection()) == "body\n"


def test_since() -> None:
    assert _emit(ShapeSection(_shape(documentation="Docs.", since="1.0"))) == (
        "/// Docs.\n"
        '/// <div class="note">\n'
        "///\n"
        "/// **Since**: 1.0\n"
        "///\n"
        "/// </div>\n"
        "///\n"
        "body\n"
    )


def test_unstable() -> None:
    assert _emit(MemberSection(_shape(unstable={}))) == (
        '/// <div class="warning">\n'
        "///\n"
        "/// **WARNING**: Unstable feature\n"
        "///\n"
        "/// </div>\n"
        "///\n"
        "body\n"
    )


def test_external_documentation() -> None:
    shape = _shape(externalDocumentation={"Home": "https://example.com/home"})
    assert _emit(ShapeSection(shape)) == (
        "/// ## References\n/// - [**Home**](https://example.com/home)\n///\nbody\n"
    )


def test_deprecated_marker() -> None:
    assert _emit(ShapeSection(_shape(deprecated={}))) == "#[deprecated]\nbody\n"


def test_deprecated_follows_the_docs() -> None:
    shape = _shape(documentation="Old.", deprecated={"message": "Use T.", "since": "2.0"})
    assert _emit(ShapeSection(shape)) == '/// Old.\n#[deprecated(since = "2.0", note = "Use T.")]\nbody\n'


def test_schemas_are_never_deprecated() -> None:
    shape = _shape(ShapeType.STRING, deprecated={})
    assert _emit(SchemaSection(shape)) == "body\n"


def test_schema_of_generated_type_links_to_the_type() -> None:
    shape = _shape(documentation="A shape.", since="1.0")
    assert _emit(SchemaSection(shape)) == "/// Schema for [`S`]\nbody\n"


def test_schema_of_scalar_keeps_its_documentation() -> None:
    assert _emit(SchemaSection(_shape(ShapeType.STRING, documentation="Text."))) == "/// Text.\nbody\n"


def test_long_lines_are_wrapped() -> None:
    settings = CodegenSettings(doc_line_length=20)
    shape = _shape(documentation="one two three four five six")
    assert _emit(ShapeSection(shape), settings) == "/// one two three four\n/// five six\nbody\n"


def test_markers_on_members() -> None:
    member = Shape(
        id="com.test#S$m",
        type=ShapeType.MEMBER,
        target="smithy.api#String",
        annotations=[marker("smithy.api#deprecated"), Annotation(id="smithy.api#documentation", value=to_node("M."))],
    )
    assert _emit(MemberSection(member)) == "/// M.\n#[deprecated]\nbody\n"


def test_missing_annotation_is_reported() -> None:
    with pytest.raises(UnmatchedAnnotationError, match="'smithy.api#since' on 'com.test#S'"):
        SinceTraitInterceptor().append(CodeWriter(), DocstringSection(_shape()))
