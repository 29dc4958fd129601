# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator for the schemas of user-defined simple shapes."""

from __future__ import annotations

from shapegen.codegen.context import CodeGenerationContext
from shapegen.generators.schema import is_generated, write_schema_block
from shapegen.logging import get_logger
from shapegen.model.shapes import Shape, ShapeType
from shapegen.writer.writer import CodeWriter

_LOG = get_logger(__name__)

# ###############
# Public Interface
# ###############


class ScalarSchemaGenerator:
    """Emits one ``smithy!`` block per simple shape declared outside the prelude.

    A scalar such as ``com.example#MyString`` targeting ``String`` becomes
    ``string MY_STRING``. Scalars have no type declaration of their own:
    members targeting them use the Rust type of the underlying primitive.
    """

    SCHEMA_TEMPLATE = "${type:L} ${shape:I}"

    def __call__(self, context: CodeGenerationContext) -> None:
        scalars = self.scalars(context)
        _LOG.debug("Generating %d scalar schemas", len(scalars))
        for shape in scalars:
            context.writer_delegator.use_shape_writer(shape, lambda writer, s=shape: self._write(writer, context, s))

    @staticmethod
    def scalars(context: CodeGenerationContext) -> list[Shape]:
        """Return the simple shapes to declare, sorted by id."""
        return [shape for shape in context.model.shapes(*_SCALAR_TYPES) if is_generated(shape)]

    def _write(self, writer: CodeWriter, context: CodeGenerationContext, shape: Shape) -> None:
        with writer.state():
            writer.put_context("type", shape.type.value.lower())
            write_schema_block(writer, context, shape, self.SCHEMA_TEMPLATE)


# ################
# Implementation
# ################

_SCALAR_TYPES = tuple(t for t in ShapeType if t.is_simple and t not in (ShapeType.ENUM, ShapeType.INT_ENUM))
