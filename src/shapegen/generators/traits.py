# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Writes the ``@<initializer>;`` lines of a shape or member schema."""

from __future__ import annotations

from shapegen.codegen.context import CodeGenerationContext
from shapegen.model.shapes import Annotation, Shape
from shapegen.writer.writer import CodeWriter

# ###############
# Public Interface
# ###############


class TraitInitializerGenerator:
    """Writes one initializer line per annotation of *shape*, in annotation order.

    Annotations listed in the ``exclude-annotations`` setting are skipped:
    documentation is rendered as doc comments and defaults by the runtime macros.
    """

    def __init__(self, writer: CodeWriter, shape: Shape, context: CodeGenerationContext) -> None:
        self._writer = writer
        self._shape = shape
        self._context = context

    @staticmethod
    def annotations_to_render(shape: Shape, context: CodeGenerationContext) -> list[Annotation]:
        return [a for a in shape.annotations if not context.settings.is_excluded(a.id)]

    def __call__(self) -> None:
        for annotation in self.annotations_to_render(self._shape, self._context):
            expression = self._context.initializers.render(annotation, self._shape)
            for reference in expression.references:
                self._writer.add_import(reference)
            self._writer.write("@$L;", expression.text)
