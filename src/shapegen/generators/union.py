# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator for union shapes."""

from __future__ import annotations

from collections.abc import Callable

from shapegen.codegen.context import CodeGenerationContext
from shapegen.codegen.sections import MemberSection, ShapeSection
from shapegen.codegen.symbols import SHAPE_DERIVE, UNION_MACRO
from shapegen.generators.schema import is_generated, member_schema_writer, write_schema_block
from shapegen.model.shapes import Shape
from shapegen.writer.writer import CodeWriter

# ###############
# Public Interface
# ###############


class UnionGenerator:
    """Emits the schema of a union and a ``pub enum`` with one tuple variant per member."""

    SCHEMA_TEMPLATE = "union ${shape:I} {${#memberSchemas}\n    ${value:C|}${/memberSchemas}\n}"
    MEMBER_SCHEMA_TEMPLATE = "${memberIdent:L}: ${member:I} = ${memberName:S}"
    ENUM_TEMPLATE = (
        "#[${union:T}]\n"
        "#[derive(${derive:T})]\n"
        "#[smithy_schema(${shape:I})]\n"
        "pub enum ${shape:T} {${#variants}\n"
        "    ${value:C|}${/variants}\n"
        "}"
    )
    VARIANT_TEMPLATE = "#[smithy_schema(${memberIdent:L})]\n${variant:L}(${variantType:T}),"

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
            writer.put_context("union", UNION_MACRO)
            writer.put_context("derive", SHAPE_DERIVE)
            writer.put_context("shape", context.symbol_provider.resolve(shape))
            writer.put_context("variants", [self._variant_writer(writer, context, shape, m) for m in shape.members])
            writer.write(self.ENUM_TEMPLATE)

    def _variant_writer(
        self, writer: CodeWriter, context: CodeGenerationContext, shape: Shape, member: Shape
    ) -> Callable[[], None]:
        provider = context.symbol_provider

        def write() -> None:
            with writer.state(MemberSection(member)):
                writer.put_context("memberIdent", provider.member_schema_name(member))
                writer.put_context("variant", provider.variant_name(member))
                writer.put_context("variantType", provider.member_type(shape, member))
                writer.write(self.VARIANT_TEMPLATE)

        return write
