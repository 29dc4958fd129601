# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Drives a generation run from a loaded model to the text of the generated files.

The run is all or nothing: any error raised by the transform, the resolver
or a generator propagates before a single file is returned.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable

from shapegen.codegen.context import CodeGenerationContext
from shapegen.codegen.integration import CodegenIntegration, discover_integrations
from shapegen.config import CodegenSettings
from shapegen.generators.collection import ListGenerator, MapGenerator
from shapegen.generators.enum import EnumGenerator
from shapegen.generators.scalar import ScalarSchemaGenerator
from shapegen.generators.schema import is_generated
from shapegen.generators.structure import StructureGenerator
from shapegen.generators.union import UnionGenerator
from shapegen.logging import get_logger
from shapegen.model.model import Model
from shapegen.model.shapes import Shape, ShapeId, ShapeType
from shapegen.transforms.closure import SYNTHETIC_SERVICE_ID, synthesize_service

_LOG = get_logger(__name__)

# ###############
# Public Interface
# ###############

ShapeGenerator = Callable[[CodeGenerationContext, Shape], None]

GENERATORS: dict[ShapeType, ShapeGenerator] = {
    ShapeType.STRUCTURE: StructureGenerator(),
    ShapeType.UNION: UnionGenerator(),
    ShapeType.ENUM: EnumGenerator(),
    ShapeType.INT_ENUM: EnumGenerator(),
    ShapeType.LIST: ListGenerator(),
    ShapeType.MAP: MapGenerator(),
}


def generate(
    model: Model,
    settings: CodegenSettings | None = None,
    integrations: list[CodegenIntegration] | None = None,
) -> dict[str, str]:
    """Generate Rust sources for every top-level shape of *model*.

    Args:
        model: The loaded model.
        settings: Settings of the run. Defaults to :class:`CodegenSettings`.
        integrations: Integrations to apply. Defaults to the built-in ones
            plus those installed under the ``shapegen.integrations``
            entry-point group.

    Returns:
        The text of each generated file, keyed by file name.

    Raises:
        CodegenError: If the model has no top-level shapes, a reference
            cannot be resolved, or an annotation cannot be rendered.
    """
    settings = settings if settings is not None else CodegenSettings()
    if integrations is None:
        integrations = discover_integrations()
    synthesized = synthesize_service(model)
    context = CodeGenerationContext(synthesized, settings, integrations)

    service = synthesized.expect_shape(SYNTHETIC_SERVICE_ID)
    generated: Counter[ShapeType] = Counter()
    for shape in generation_order(synthesized, synthesized.walk(service)):
        GENERATORS[shape.type](context, shape)
        generated[shape.type] += 1
    for shape_type, count in sorted(generated.items(), key=lambda item: item[0].value):
        _LOG.debug("Generated %d %s shape(s)", count, shape_type.value)
    ScalarSchemaGenerator()(context)

    files = context.writer_delegator.render()
    _LOG.info("Generated %d file(s)", len(files))
    return files


def generation_order(model: Model, shapes: list[Shape]) -> list[Shape]:
    """Return the shapes with a generator, dependencies first and ties broken by id.

    A shape depends on the targets of its members. Cycles are cut where
    they close, so every shape appears exactly once.
    """
    candidates = {s.id: s for s in shapes if s.type in GENERATORS and not s.is_member and is_generated(s)}
    ordered: list[Shape] = []
    visited: set[ShapeId] = set()
    for shape_id in sorted(candidates):
        if shape_id in visited:
            continue
        # Iterative post-order walk: (shape id, dependencies expanded?)
        stack: list[tuple[ShapeId, bool]] = [(shape_id, False)]
        while stack:
            current, expanded = stack.pop()
            if expanded:
                ordered.append(candidates[current])
                continue
            if current in visited:
                continue
            visited.add(current)
            stack.append((current, True))
            dependencies = sorted(
                {m.target for m in candidates[current].members if m.target in candidates and m.target not in visited}
            )
            stack.extend((dependency, False) for dependency in reversed(dependencies))
    return ordered
