# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator for structure shapes."""

from __future__ import annotations

from collections.abc import Callable

from shapegen.codegen.context import CodeGenerationContext
from shapegen.codegen.sections import MemberSection, ShapeSection
from shapegen.codegen.symbols import SHAPE_DERIVE
from shapegen.generators.schema import is_generated, member_schema_writer, write_schema_block
from shapegen.model.shapes import Shape
from shapegen.writer.writer import CodeWriter

# ###############
# Public Interface
# ###############


class StructureGenerator:
    """Emits the schema and the ``pub struct`` of a structure.

    Members referring back to the structure are boxed so the type has a
    finite size.
    """

    SCHEMA_TEMPLATE = "structure ${shape:I} {${#memberSchemas}\n    ${value:C|}${/memberSchemas}\n}"
    MEMBER_SCHEMA_TEMPLATE = "${memberIdent:L}: ${member:I} = ${memberName:S}"
    STRUCT_TEMPLATE = (
        "#[derive(${derive:T}, PartialEq, Clone)]\n"
        "#[smithy_schema(${shape:I})]\n"
        "pub struct ${shape:T} {${#memberFields}\n"
        "    ${value:C|}${/memberFields}\n"
        "}"
    )
    FIELD_TEMPLATE = "#[smithy_schema(${memberIdent:L})]\npub ${fieldName:L}: ${fieldType:T},"

    def __call__(self, context: CodeGenerationContext, shape: Shape) -> None:
        if not is_generated(shape):
            return
        context.writer_delegator.use_shape_writer(shape, lambda writer: self._write(writer, context, shape))

    def _write(self, writer: CodeWriter, context: CodeGenerationContext, shape: Shape) -> None:
        with writer.state():
            writer.put_context(
                "memberSchemas",
                [member_schema_writer(writer, context, m, self.MEMBER_SCHEMA_TEMPLATE) for m in shape.members],
            )
            write_schema_block(writer, context, shape, self.SCHEMA_TEMPLATE)
        writer.write()
        with writer.state(ShapeSection(shape)):
            writer.put_context("derive", SHAPE_DERIVE)
            writer.put_context("shape", context.symbol_provider.resolve(shape))
            writer.put_context("memberFields", [self._field_writer(writer, context, shape, m) for m in shape.members])
            writer.write(self.STRUCT_TEMPLATE)

    def _field_writer(
        self, writer: CodeWriter, context: CodeGenerationContext, shape: Shape, member: Shape
    ) -> Callable[[], None]:
        provider = context.symbol_provider

        def write() -> None:
            with writer.state(MemberSection(member)):
                writer.put_context("memberIdent", provider.member_schema_name(member))
                writer.put_context("fieldName", provider.member_name(member))
                writer.put_context("fieldType", provider.member_type(shape, member))
                writer.write(self.FIELD_TEMPLATE)

        return write
