# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Closure transform: find the top-level shapes of a model and wrap them in a synthetic service.

Generators are driven from a service: the service's operations, their
inputs and outputs, and everything reachable from those. To generate types
for a model without a service, every top-level shape (one no other shape
contains) is wrapped in a synthetic operation of a synthetic service.
"""

from __future__ import annotations

from collections import Counter

from shapegen.codegen.naming import pascal_case
from shapegen.errors import EmptyClosureError
from shapegen.logging import get_logger
from shapegen.model.model import Model
from shapegen.model.shapes import Shape, ShapeId, ShapeType, member_shape, prelude_id

_LOG = get_logger(__name__)

# ###############
# Public Interface
# ###############

SYNTHETIC_NAMESPACE = "smithy.synthetic"
SYNTHETIC_SERVICE_ID = ShapeId(SYNTHETIC_NAMESPACE, "SyntheticService")
SYNTHETIC_MEMBER = "syntheticMember"
ERROR = prelude_id("error")

# Top-level shape kinds that are wrapped in synthetic operations.
WRAPPED_TYPES = frozenset(
    {ShapeType.STRUCTURE, ShapeType.UNION, ShapeType.ENUM, ShapeType.INT_ENUM, ShapeType.LIST, ShapeType.MAP}
)


def compute_closure(model: Model) -> list[Shape]:
    """Return the top-level shapes of *model*, sorted by id.

    Every non-member shape outside the prelude is a candidate. A candidate
    reachable from another candidate is nested and dropped, unless the two
    reach each other, in which case neither contains the other and both stay.

    Raises:
        EmptyClosureError: If no top-level shape remains.
    """
    candidates = [s for s in model.shapes() if not s.is_member and not model.is_prelude(s)]
    candidate_ids = {s.id for s in candidates}
    reachable: dict[ShapeId, set[ShapeId]] = {}
    for shape in candidates:
        reachable[shape.id] = {s.id for s in model.walk(shape) if s.id != shape.id and s.id in candidate_ids}

    nested: set[ShapeId] = set()
    for shape_id, reached in reachable.items():
        for other in reached:
            if shape_id not in reachable[other]:
                nested.add(other)

    closure = [s for s in candidates if s.id not in nested]
    if not closure:
        raise EmptyClosureError()
    _LOG.info("Found %d shapes in synthetic service closure.", len(closure))
    return closure


def synthesize_service(model: Model) -> Model:
    """Return *model* plus a synthetic service whose closure covers every top-level shape.

    Operations join the service directly, as do the operations bound to
    top-level services and resources. Other wrapped shapes get ``<Name>Input`` and ``<Name>Output``
    structures holding the shape in a ``syntheticMember`` and a
    ``<Name>Operation`` taking the input wrapper, all in the
    ``smithy.synthetic`` namespace. Shapes carrying ``smithy.api#error``
    become the operation's error instead.

    Raises:
        EmptyClosureError: If the model has no top-level shapes.
    """
    closure = compute_closure(model)
    # Local names shared by several top-level shapes are qualified with their namespace.
    name_counts = Counter(s.id.name for s in closure)

    operations: list[ShapeId] = []
    added: list[Shape] = []
    for shape in closure:
        if shape.type in (ShapeType.SERVICE, ShapeType.RESOURCE):
            bound = [s.id for s in model.walk(shape) if s.type is ShapeType.OPERATION]
            _LOG.debug("Adding %d operation(s) bound to %s", len(bound), shape.id)
            for operation_id in bound:
                if operation_id not in operations:
                    operations.append(operation_id)
        elif shape.type is ShapeType.OPERATION:
            operations.append(shape.id)
        elif shape.type in WRAPPED_TYPES:
            base = shape.id.name
            if name_counts[base] > 1:
                base = pascal_case(shape.id.namespace) + base
            synthetic_input = _wrapper(shape, base + "Input")
            synthetic_output = _wrapper(shape, base + "Output")
            operation = _operation(shape, base + "Operation", synthetic_input.id, synthetic_output.id)
            added.extend([synthetic_input, synthetic_output, operation])
            operations.append(operation.id)

    service = Shape(id=SYNTHETIC_SERVICE_ID, type=ShapeType.SERVICE, operations=operations)
    return model.with_shapes([*added, service])


def is_synthetic(shape_id: ShapeId) -> bool:
    return shape_id.namespace == SYNTHETIC_NAMESPACE


# ################
# Implementation
# ################


def _wrapper(shape: Shape, name: str) -> Shape:
    shape_id = ShapeId(SYNTHETIC_NAMESPACE, name)
    return Shape(
        id=shape_id,
        type=ShapeType.STRUCTURE,
        members=[member_shape(shape_id, SYNTHETIC_MEMBER, shape.id)],
    )


def _operation(shape: Shape, name: str, synthetic_input: ShapeId, output: ShapeId) -> Shape:
    shape_id = ShapeId(SYNTHETIC_NAMESPACE, name)
    if shape.has_annotation(ERROR):
        return Shape(id=shape_id, type=ShapeType.OPERATION, errors=[shape.id], output=output)
    return Shape(id=shape_id, type=ShapeType.OPERATION, input=synthetic_input, output=output)
