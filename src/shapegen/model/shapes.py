# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shape identifiers, shape kinds and the shapes of a service model."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as _Field

from shapegen.model.nodes import MetadataValue, NullNode, ObjectNode

# ###############
# Public Interface
# ###############

PRELUDE_NAMESPACE = "smithy.api"


@dataclass(frozen=True)
class ShapeId:
    """Absolute identifier of a shape: ``namespace#Name`` or ``namespace#Name$member``."""

    namespace: str
    name: str
    member: str | None = None

    def __post_init__(self) -> None:
        if not _NAMESPACE_RE.match(self.namespace):
            raise ValueError(f"Invalid shape namespace: {self.namespace!r}")
        if not _IDENTIFIER_RE.match(self.name):
            raise ValueError(f"Invalid shape name: {self.name!r}")
        if self.member is not None and not _IDENTIFIER_RE.match(self.member):
            raise ValueError(f"Invalid member name: {self.member!r}")

    @classmethod
    def parse(cls, text: str) -> ShapeId:
        """Parse an absolute shape id such as ``com.example#Pet$name``.

        Raises:
            ValueError: If *text* is not an absolute shape id.
        """
        namespace, sep, rest = text.partition("#")
        if not sep:
            raise ValueError(f"Shape id is missing a namespace: {text!r}")
        name, sep, member = rest.partition("$")
        return cls(namespace, name, member if sep else None)

    def with_member(self, member: str) -> ShapeId:
        """Return the id of the member *member* of this shape."""
        return ShapeId(self.namespace, self.name, member)

    def without_member(self) -> ShapeId:
        """Return the id of the containing shape."""
        return ShapeId(self.namespace, self.name)

    def __str__(self) -> str:
        base = f"{self.namespace}#{self.name}"
        return f"{base}${self.member}" if self.member is not None else base

    def __lt__(self, other: ShapeId) -> bool:
        if not isinstance(other, ShapeId):
            return NotImplemented
        return _sort_key(self) < _sort_key(other)


class ShapeType(Enum):
    """Every kind of shape a model may contain."""

    BLOB = "blob"
    BOOLEAN = "boolean"
    STRING = "string"
    BYTE = "byte"
    SHORT = "short"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BIG_INTEGER = "bigInteger"
    BIG_DECIMAL = "bigDecimal"
    TIMESTAMP = "timestamp"
    DOCUMENT = "document"
    ENUM = "enum"
    INT_ENUM = "intEnum"
    LIST = "list"
    MAP = "map"
    STRUCTURE = "structure"
    UNION = "union"
    MEMBER = "member"
    OPERATION = "operation"
    SERVICE = "service"
    RESOURCE = "resource"

    @property
    def is_simple(self) -> bool:
        """True for scalar shapes, including enums."""
        return self in _SIMPLE_TYPES

    @property
    def is_aggregate(self) -> bool:
        """True for shapes that own members."""
        return self in _AGGREGATE_TYPES


class Annotation(BaseModel):
    """A trait applied to a shape: an id plus a metadata value."""

    model_config = ConfigDict(frozen=True)

    id: ShapeId
    value: MetadataValue = _Field(default_factory=lambda: ObjectNode())

    @field_validator("id", mode="before")
    @classmethod
    def _parse_id(cls, value: Any) -> Any:
        return ShapeId.parse(value) if isinstance(value, str) else value


class Shape(BaseModel):
    """A node of the service model.

    Aggregate shapes own their member shapes. Members point at a target shape.
    Operations, services and resources reference other shapes by id.
    """

    model_config = ConfigDict(frozen=True)

    id: ShapeId
    type: ShapeType
    members: list[Shape] = _Field(default_factory=list)
    target: ShapeId | None = None
    annotations: list[Annotation] = _Field(default_factory=list)
    input: ShapeId | None = None
    output: ShapeId | None = None
    errors: list[ShapeId] = _Field(default_factory=list)
    operations: list[ShapeId] = _Field(default_factory=list)
    resources: list[ShapeId] = _Field(default_factory=list)

    @field_validator("id", "target", "input", "output", mode="before")
    @classmethod
    def _parse_id(cls, value: Any) -> Any:
        return ShapeId.parse(value) if isinstance(value, str) else value

    @field_validator("errors", "operations", "resources", mode="before")
    @classmethod
    def _parse_ids(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [ShapeId.parse(v) if isinstance(v, str) else v for v in value]
        return value

    @property
    def name(self) -> str:
        """The member name for members, the shape name otherwise."""
        return self.id.member if self.id.member is not None else self.id.name

    @property
    def is_member(self) -> bool:
        return self.type is ShapeType.MEMBER

    def member(self, name: str) -> Shape | None:
        """Return the member called *name*, or None."""
        for member in self.members:
            if member.id.member == name:
                return member
        return None

    def annotation(self, annotation_id: ShapeId | str) -> Annotation | None:
        """Return the annotation with the given id, or None."""
        if isinstance(annotation_id, str):
            annotation_id = ShapeId.parse(annotation_id)
        for annotation in self.annotations:
            if annotation.id == annotation_id:
                return annotation
        return None

    def has_annotation(self, annotation_id: ShapeId | str) -> bool:
        return self.annotation(annotation_id) is not None


def prelude_id(name: str) -> ShapeId:
    """Return the id of the prelude shape *name*."""
    return ShapeId(PRELUDE_NAMESPACE, name)


def member_shape(
    container: ShapeId,
    name: str,
    target: ShapeId | str,
    annotations: list[Annotation] | None = None,
) -> Shape:
    """Build a member shape named *name* of *container* pointing at *target*."""
    return Shape(
        id=container.with_member(name),
        type=ShapeType.MEMBER,
        target=target,
        annotations=annotations or [],
    )


def marker(annotation_id: ShapeId | str) -> Annotation:
    """Build an annotation whose value is an empty object, e.g. ``@sensitive``."""
    return Annotation(id=annotation_id, value=ObjectNode())


def null_annotation(annotation_id: ShapeId | str) -> Annotation:
    """Build an annotation carrying an explicit null value."""
    return Annotation(id=annotation_id, value=NullNode())


# ################
# Implementation
# ################

_NAMESPACE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_SIMPLE_TYPES = frozenset(
    {
        ShapeType.BLOB,
        ShapeType.BOOLEAN,
        ShapeType.STRING,
        ShapeType.BYTE,
        ShapeType.SHORT,
        ShapeType.INTEGER,
        ShapeType.LONG,
        ShapeType.FLOAT,
        ShapeType.DOUBLE,
        ShapeType.BIG_INTEGER,
        ShapeType.BIG_DECIMAL,
        ShapeType.TIMESTAMP,
        ShapeType.DOCUMENT,
        ShapeType.ENUM,
        ShapeType.INT_ENUM,
    }
)

_AGGREGATE_TYPES = frozenset(
    {ShapeType.LIST, ShapeType.MAP, ShapeType.STRUCTURE, ShapeType.UNION, ShapeType.ENUM, ShapeType.INT_ENUM}
)


def _sort_key(shape_id: ShapeId) -> tuple[str, str, str]:
    # Container ids sort before their members.
    return (shape_id.namespace, shape_id.name, shape_id.member or "")


Shape.model_rebuild()
