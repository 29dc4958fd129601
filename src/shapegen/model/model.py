# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""The in-memory service model: an id-indexed set of shapes plus the prelude."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from shapegen.errors import UnresolvedReferenceError
from shapegen.model.shapes import PRELUDE_NAMESPACE, Shape, ShapeId, ShapeType, prelude_id

# ###############
# Public Interface
# ###############


class Model:
    """An immutable collection of shapes indexed by id.

    The prelude shapes (``smithy.api#String``, ``smithy.api#Unit`` ...) are
    always present unless *include_prelude* is False. Member shapes are
    indexed alongside their containers so member ids resolve directly.
    """

    def __init__(self, shapes: Iterable[Shape] = (), *, include_prelude: bool = True) -> None:
        self._shapes: dict[ShapeId, Shape] = {}
        self._members: dict[ShapeId, Shape] = {}
        if include_prelude:
            for shape in PRELUDE_SHAPES:
                self._add(shape)
        for shape in shapes:
            self._add(shape)

    def __len__(self) -> int:
        return len(self._shapes)

    def __contains__(self, shape_id: object) -> bool:
        return shape_id in self._shapes or shape_id in self._members

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes())

    def get_shape(self, shape_id: ShapeId) -> Shape | None:
        """Return the shape or member with *shape_id*, or None."""
        if shape_id.member is not None:
            return self._members.get(shape_id)
        return self._shapes.get(shape_id)

    def expect_shape(self, shape_id: ShapeId, referenced_by: ShapeId | None = None) -> Shape:
        """Return the shape with *shape_id*.

        Raises:
            UnresolvedReferenceError: If the model has no such shape.
        """
        shape = self.get_shape(shape_id)
        if shape is None:
            raise UnresolvedReferenceError(str(shape_id), str(referenced_by) if referenced_by else None)
        return shape

    def shapes(self, *types: ShapeType) -> list[Shape]:
        """Return the non-member shapes sorted by id, optionally filtered by type."""
        result = [s for s in self._shapes.values() if not types or s.type in types]
        return sorted(result, key=lambda s: s.id)

    def with_shapes(self, shapes: Iterable[Shape]) -> Model:
        """Return a new model with *shapes* added, replacing shapes with the same id."""
        merged = dict(self._shapes)
        for shape in shapes:
            merged[shape.id] = shape
        return Model(merged.values(), include_prelude=False)

    def target_of(self, member: Shape) -> Shape:
        """Return the shape a member points at."""
        if member.target is None:
            raise UnresolvedReferenceError("<none>", str(member.id))
        return self.expect_shape(member.target, member.id)

    def walk(self, shape: Shape) -> list[Shape]:
        """Return every shape reachable from *shape*, including itself.

        Members, member targets, operation inputs/outputs/errors and the
        operations and resources bound to services and resources are followed.
        Shapes are returned in discovery order.

        Raises:
            UnresolvedReferenceError: If a reference points to a missing shape.
        """
        visited: dict[ShapeId, Shape] = {}
        stack = [shape]
        while stack:
            current = stack.pop()
            if current.id in visited:
                continue
            visited[current.id] = current
            for ref in reversed(_neighbours(current)):
                if ref not in visited:
                    stack.append(self.expect_shape(ref, current.id))
            for member in reversed(current.members):
                if member.id not in visited:
                    stack.append(member)
        return list(visited.values())

    @staticmethod
    def is_prelude(shape: Shape | ShapeId) -> bool:
        """True if the shape lives in the prelude namespace."""
        shape_id = shape.id if isinstance(shape, Shape) else shape
        return shape_id.namespace == PRELUDE_NAMESPACE

    # ------------------------------------------------------------------

    def _add(self, shape: Shape) -> None:
        if shape.id.member is not None:
            raise ValueError(f"Member shape {shape.id} cannot be added at the top level")
        self._shapes[shape.id] = shape
        for member in shape.members:
            self._members[member.id] = member


# The prelude shapes every model can reference without declaring them.
PRELUDE_SHAPES: tuple[Shape, ...] = tuple(
    Shape(id=prelude_id(name), type=shape_type)
    for name, shape_type in (
        ("Blob", ShapeType.BLOB),
        ("Boolean", ShapeType.BOOLEAN),
        ("String", ShapeType.STRING),
        ("Byte", ShapeType.BYTE),
        ("Short", ShapeType.SHORT),
        ("Integer", ShapeType.INTEGER),
        ("Long", ShapeType.LONG),
        ("Float", ShapeType.FLOAT),
        ("Double", ShapeType.DOUBLE),
        ("BigInteger", ShapeType.BIG_INTEGER),
        ("BigDecimal", ShapeType.BIG_DECIMAL),
        ("Timestamp", ShapeType.TIMESTAMP),
        ("Document", ShapeType.DOCUMENT),
        ("PrimitiveBoolean", ShapeType.BOOLEAN),
        ("PrimitiveByte", ShapeType.BYTE),
        ("PrimitiveShort", ShapeType.SHORT),
        ("PrimitiveInteger", ShapeType.INTEGER),
        ("PrimitiveLong", ShapeType.LONG),
        ("PrimitiveFloat", ShapeType.FLOAT),
        ("PrimitiveDouble", ShapeType.DOUBLE),
        ("Unit", ShapeType.STRUCTURE),
    )
)

# ################
# Implementation
# ################


def _neighbours(shape: Shape) -> list[ShapeId]:
    refs: list[ShapeId] = []
    if shape.target is not None:
        refs.append(shape.target)
    if shape.input is not None:
        refs.append(shape.input)
    if shape.output is not None:
        refs.append(shape.output)
    refs.extend(shape.errors)
    refs.extend(shape.operations)
    refs.extend(shape.resources)
    return refs
