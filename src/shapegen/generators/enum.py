# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator for enum and intEnum shapes."""

from __future__ import annotations

from collections.abc import Callable

from shapegen.codegen.context import CodeGenerationContext
from shapegen.codegen.sections import MemberSection, ShapeSection
from shapegen.codegen.symbols import ENUM_MACRO, SHAPE_DERIVE
from shapegen.errors import UnmatchedAnnotationError
from shapegen.generators.schema import is_generated, write_schema_block
from shapegen.generators.traits import TraitInitializerGenerator
from shapegen.model.nodes import NumberNode, StringNode
from shapegen.model.shapes import Shape, ShapeType, prelude_id
from shapegen.writer.writer import CodeWriter

# ###############
# Public Interface
# ###############

ENUM_VALUE = prelude_id("enumValue")


class EnumGenerator:
    """Emits the schema of an enum or intEnum and a ``pub enum`` with valued variants.

    Variants are named after the members in PascalCase. String enums fall
    back to the member name when a member carries no ``enumValue``.
    """

    SCHEMA_TEMPLATE = "enum ${shape:I} {${#variants}\n    ${value:C|}${/variants}\n}"
    ENUM_TEMPLATE = (
        "#[${enum:T}]\n"
        "#[derive(${derive:T})]\n"
        "#[smithy_schema(${shape:I})]\n"
        "pub enum ${shape:T} {${#variants}\n"
        "    ${value:C|}${/variants}\n"
        "}"
    )

    def __call__(self, context: CodeGenerationContext, shape: Shape) -> None:
        if not is_generated(shape):
            return
        context.writer_delegator.use_shape_writer(shape, lambda writer: self._write(writer, context, shape))

    def _write(self, writer: CodeWriter, context: CodeGenerationContext, shape: Shape) -> None:
        values = [enum_value(shape, member) for member in shape.members]
        with writer.state():
            writer.put_context(
                "variants",
                [self._schema_variant(writer, context, m, v) for m, v in zip(shape.members, values)],
            )
            write_schema_block(writer, context, shape, self.SCHEMA_TEMPLATE)
        writer.write()
        with writer.state(ShapeSection(shape)):
            writer.put_context("enum", ENUM_MACRO)
            writer.put_context("derive", SHAPE_DERIVE)
            writer.put_context("shape", context.symbol_provider.resolve(shape))
            writer.put_context(
                "variants",
                [self._variant(writer, context, m, v) for m, v in zip(shape.members, values)],
            )
            writer.write(self.ENUM_TEMPLATE)

    def _schema_variant(
        self, writer: CodeWriter, context: CodeGenerationContext, member: Shape, value: str | int
    ) -> Callable[[], None]:
        def write() -> None:
            TraitInitializerGenerator(writer, member, context)()
            writer.write("$L = $L", context.symbol_provider.variant_name(member), _literal(writer, value))

        return write

    def _variant(
        self, writer: CodeWriter, context: CodeGenerationContext, member: Shape, value: str | int
    ) -> Callable[[], None]:
        def write() -> None:
            with writer.state(MemberSection(member)):
                writer.write("$L = $L,", context.symbol_provider.variant_name(member), _literal(writer, value))

        return write


def enum_value(shape: Shape, member: Shape) -> str | int:
    """Return the value of an enum *member*: a string for enums, an integer for intEnums.

    Raises:
        UnmatchedAnnotationError: If the ``enumValue`` annotation is missing
            on an intEnum member or does not match the kind of the enum.
    """
    annotation = member.annotation(ENUM_VALUE)
    if shape.type is ShapeType.INT_ENUM:
        if annotation is not None and isinstance(annotation.value, NumberNode) and not annotation.value.is_float:
            return int(annotation.value.value)
        raise UnmatchedAnnotationError(str(ENUM_VALUE), str(member.id), "intEnum members need an integer value")
    if annotation is None:
        return member.name
    if isinstance(annotation.value, StringNode):
        return annotation.value.value
    raise UnmatchedAnnotationError(str(ENUM_VALUE), str(member.id), "enum members need a string value")


# ################
# Implementation
# ################


def _literal(writer: CodeWriter, value: str | int) -> str:
    if isinstance(value, str):
        return writer.format("$S", value)
    return str(value)
