# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generators for list and map shapes.

Collections are declared as schemas only: their Rust types are ``Vec`` and
``IndexMap`` of the member types.
"""

from __future__ import annotations

from shapegen.codegen.context import CodeGenerationContext
from shapegen.errors import UnresolvedReferenceError
from shapegen.generators.schema import is_generated, member_schema_writer, write_schema_block
from shapegen.model.shapes import Shape
from shapegen.writer.writer import CodeWriter

# ###############
# Public Interface
# ###############


class ListGenerator:
    """Emits ``list <NAME> { member: <SCHEMA> }``."""

    SCHEMA_TEMPLATE = "list ${shape:I} {\n    ${member:C|}\n}"

    def __call__(self, context: CodeGenerationContext, shape: Shape) -> None:
        if not is_generated(shape):
            return
        context.writer_delegator.use_shape_writer(shape, lambda writer: self._write(writer, context, shape))

    def _write(self, writer: CodeWriter, context: CodeGenerationContext, shape: Shape) -> None:
        with writer.state():
            writer.put_context(
                "member",
                member_schema_writer(writer, context, _expect_member(shape, "member"), _MEMBER_TEMPLATE),
            )
            write_schema_block(writer, context, shape, self.SCHEMA_TEMPLATE)


class MapGenerator:
    """Emits ``map <NAME> { key: <SCHEMA> value: <SCHEMA> }``."""

    SCHEMA_TEMPLATE = "map ${shape:I} {\n    ${key:C|}\n    ${value:C|}\n}"

    def __call__(self, context: CodeGenerationContext, shape: Shape) -> None:
        if not is_generated(shape):
            return
        context.writer_delegator.use_shape_writer(shape, lambda writer: self._write(writer, context, shape))

    def _write(self, writer: CodeWriter, context: CodeGenerationContext, shape: Shape) -> None:
        with writer.state():
            for name in ("key", "value"):
                member = _expect_member(shape, name)
                writer.put_context(name, member_schema_writer(writer, context, member, _MEMBER_TEMPLATE))
            write_schema_block(writer, context, shape, self.SCHEMA_TEMPLATE)


# ################
# Implementation
# ################

# Collection members are named after their role, not after a schema constant.
_MEMBER_TEMPLATE = "${memberName:L}: ${member:I}"


def _expect_member(shape: Shape, name: str) -> Shape:
    member = shape.member(name)
    if member is None:
        raise UnresolvedReferenceError(str(shape.id.with_member(name)), str(shape.id))
    return member
