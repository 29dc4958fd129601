# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Doc comments and deprecation attributes for generated declarations.

Every documented section gets a docstring section injected in front of it.
The interceptors below fill that section from the documentation related
annotations of the shape, and the formatter turns the result into ``///``
comment lines.
"""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

from shapegen.codegen.integration import CodegenIntegration
from shapegen.codegen.resolver import GENERATED_TYPES
from shapegen.codegen.sections import (
    DocstringSection,
    DocumentedSection,
    MemberSection,
    SchemaSection,
    ShapeSection,
)
from shapegen.errors import UnmatchedAnnotationError
from shapegen.model.nodes import ObjectNode, StringNode, to_python
from shapegen.model.shapes import Annotation, ShapeId, prelude_id
from shapegen.writer.interceptors import Appender, CodeInterceptor, Prepender
from shapegen.writer.writer import CodeWriter

if TYPE_CHECKING:
    from shapegen.codegen.context import CodeGenerationContext

# ###############
# Public Interface
# ###############

DOCUMENTATION = prelude_id("documentation")
EXTERNAL_DOCUMENTATION = prelude_id("externalDocumentation")
SINCE = prelude_id("since")
UNSTABLE = prelude_id("unstable")
DEPRECATED = prelude_id("deprecated")


class DocstringIntegration(CodegenIntegration):
    """Registers the documentation interceptors unless documentation is disabled."""

    name = "docs"

    def interceptors(self, context: CodeGenerationContext) -> list[CodeInterceptor]:
        if not context.settings.documentation:
            return []
        return [
            DocInjectorInterceptor(),
            SchemaDocInterceptor(),
            DocumentationTraitInterceptor(),
            SinceTraitInterceptor(),
            UnstableTraitInterceptor(),
            ExternalDocumentationTraitInterceptor(),
            DocFormatterInterceptor(context.settings.doc_line_length),
        ]


class DocInjectorInterceptor(Prepender[DocumentedSection]):
    """Injects a docstring section, then a ``#[deprecated]`` attribute, before documented sections."""

    section_type = DocumentedSection

    def prepend(self, writer: CodeWriter, section: DocumentedSection) -> None:
        shape = section.target
        writer.inject_section(DocstringSection(shape, parent=section))
        if shape is None or not isinstance(section, (ShapeSection, MemberSection)):
            return
        deprecated = shape.annotation(DEPRECATED)
        if deprecated is None:
            return
        args = []
        if isinstance(deprecated.value, ObjectNode):
            for key, name in (("since", "since"), ("message", "note")):
                value = deprecated.value.get(key)
                if isinstance(value, StringNode):
                    args.append(writer.format("$L = $S", name, value.value))
        with writer.state():
            writer.put_context("args", args)
            writer.write("#[deprecated${?args}(${#args}${value:L}${^key.last}, ${/key.last}${/args})${/args}]")


class SchemaDocInterceptor(CodeInterceptor[DocstringSection]):
    """Documents the schema of a generated type with a link to the type."""

    section_type = DocstringSection

    def is_intercepted(self, section: DocstringSection) -> bool:
        return _is_generated_schema(section)

    def write(self, writer: CodeWriter, previous_text: str, section: DocstringSection) -> None:
        if section.target is not None:
            writer.write("Schema for [`$L`]", section.target.id.name)


class DocumentationTraitInterceptor(CodeInterceptor[DocstringSection]):
    """Writes the documentation text, followed by anything written before it."""

    section_type = DocstringSection

    def is_intercepted(self, section: DocstringSection) -> bool:
        return _has_annotation(section, DOCUMENTATION)

    def write(self, writer: CodeWriter, previous_text: str, section: DocstringSection) -> None:
        writer.write_with_no_formatting(_string_value(section, DOCUMENTATION))
        if previous_text:
            writer.write_inline_with_no_formatting("\n")
            writer.write_inline_with_no_formatting(previous_text)


class SinceTraitInterceptor(Appender[DocstringSection]):
    """Appends a note naming the version a shape was added in."""

    section_type = DocstringSection
    TEMPLATE = '<div class="note">\n\n**Since**: ${since:L}\n\n</div>\n'

    def is_intercepted(self, section: DocstringSection) -> bool:
        return _has_annotation(section, SINCE)

    def append(self, writer: CodeWriter, section: DocstringSection) -> None:
        with writer.state():
            writer.put_context("since", _string_value(section, SINCE))
            writer.write(self.TEMPLATE)


class UnstableTraitInterceptor(Appender[DocstringSection]):
    """Appends a warning that a shape is unstable."""

    section_type = DocstringSection
    TEMPLATE = '<div class="warning">\n\n**WARNING**: Unstable feature\n\n</div>\n'

    def is_intercepted(self, section: DocstringSection) -> bool:
        return _has_annotation(section, UNSTABLE)

    def append(self, writer: CodeWriter, section: DocstringSection) -> None:
        writer.write(self.TEMPLATE)


class ExternalDocumentationTraitInterceptor(Appender[DocstringSection]):
    """Appends a list of reference links."""

    section_type = DocstringSection
    TEMPLATE = "## References\n${#links}- [**${key:L}**](${value:L})\n${/links}"

    def is_intercepted(self, section: DocstringSection) -> bool:
        return _has_annotation(section, EXTERNAL_DOCUMENTATION)

    def append(self, writer: CodeWriter, section: DocstringSection) -> None:
        links = to_python(_expect_annotation(section, EXTERNAL_DOCUMENTATION).value)
        with writer.state():
            writer.put_context("links", links if isinstance(links, dict) else {})
            writer.write(self.TEMPLATE)


class DocFormatterInterceptor(CodeInterceptor[DocstringSection]):
    """Turns the collected docstring text into wrapped ``///`` lines."""

    section_type = DocstringSection

    def __init__(self, line_length: int = 88) -> None:
        self._line_length = line_length

    def write(self, writer: CodeWriter, previous_text: str, section: DocstringSection) -> None:
        if not previous_text:
            return
        lines = []
        for line in previous_text.splitlines():
            for wrapped in self._wrap(line):
                lines.append(f"/// {wrapped}" if wrapped else "///")
        writer.write_with_no_formatting("\n".join(lines))

    def _wrap(self, line: str) -> list[str]:
        if len(line) <= self._line_length:
            return [line]
        return textwrap.wrap(line, self._line_length, break_long_words=False, break_on_hyphens=False) or [""]


# ################
# Implementation
# ################


def _is_generated_schema(section: DocstringSection) -> bool:
    # Schemas of generated types link to the type, which carries the real docs.
    return (
        isinstance(section.parent, SchemaSection)
        and section.target is not None
        and section.target.type in GENERATED_TYPES
    )


def _has_annotation(section: DocstringSection, annotation_id: ShapeId) -> bool:
    return (
        section.target is not None
        and section.target.has_annotation(annotation_id)
        and not _is_generated_schema(section)
    )


def _expect_annotation(section: DocstringSection, annotation_id: ShapeId) -> Annotation:
    target = section.target
    annotation = target.annotation(annotation_id) if target is not None else None
    if annotation is None:
        owner = str(target.id) if target is not None else "<no shape>"
        raise UnmatchedAnnotationError(str(annotation_id), owner, "the documented shape does not carry it")
    return annotation


def _string_value(section: DocstringSection, annotation_id: ShapeId) -> str:
    return str(to_python(_expect_annotation(section, annotation_id).value))
