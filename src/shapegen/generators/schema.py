# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""The ``smithy!`` schema block shared by every generator."""

from __future__ import annotations

from collections.abc import Callable

from shapegen.codegen.context import CodeGenerationContext
from shapegen.codegen.sections import SchemaSection
from shapegen.codegen.symbols import SMITHY_MACRO
from shapegen.generators.traits import TraitInitializerGenerator
from shapegen.model.model import Model
from shapegen.model.shapes import Shape
from shapegen.transforms.closure import is_synthetic
from shapegen.writer.writer import CodeWriter

# ###############
# Public Interface
# ###############


def write_schema_block(
    writer: CodeWriter,
    context: CodeGenerationContext,
    shape: Shape,
    template: str,
) -> None:
    """Write ``smithy!("<id>": { ... });`` around *template*.

    The body is a :class:`SchemaSection` holding the initializers of the
    shape followed by *template*, rendered in the current context.
    """
    with writer.state():
        writer.put_context("smithy", SMITHY_MACRO)
        writer.put_context("id", shape.id)
        writer.put_context("shape", context.symbol_provider.resolve(shape))

        def body() -> None:
            with writer.state(SchemaSection(shape)):
                TraitInitializerGenerator(writer, shape, context)()
                writer.write(template)

        writer.open_block("${smithy:T}!(${id:S}: {", "});", body)


def member_schema_writer(
    writer: CodeWriter,
    context: CodeGenerationContext,
    member: Shape,
    template: str,
) -> Callable[[], None]:
    """Return a callable writing the initializers of *member* followed by *template*.

    *template* can use ``memberIdent`` (the member schema constant),
    ``memberName`` (the member name as modeled) and ``member`` (the
    member's type descriptor).
    """

    def write() -> None:
        TraitInitializerGenerator(writer, member, context)()
        with writer.state():
            writer.put_context("memberIdent", context.symbol_provider.member_schema_name(member))
            writer.put_context("memberName", member.name)
            writer.put_context("member", context.symbol_provider.resolve(member))
            writer.write(template)

    return write


def is_generated(shape: Shape) -> bool:
    """True unless *shape* comes from the prelude or the synthetic closure wrappers."""
    return not (Model.is_prelude(shape) or is_synthetic(shape.id))
