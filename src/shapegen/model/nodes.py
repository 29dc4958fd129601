# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generic metadata values carried by annotations."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, field_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class NullNode(BaseModel):
    """An explicit null value."""

    kind: Literal["null"] = "null"


class BooleanNode(BaseModel):
    """A boolean value."""

    kind: Literal["boolean"] = "boolean"
    value: bool


class NumberNode(BaseModel):
    """An integer or floating point number."""

    kind: Literal["number"] = "number"
    value: int | float

    @property
    def is_float(self) -> bool:
        """Return True if the number was written in floating point form."""
        return isinstance(self.value, float)


class StringNode(BaseModel):
    """A string value."""

    kind: Literal["string"] = "string"
    value: str


class ArrayNode(BaseModel):
    """An ordered sequence of values."""

    kind: Literal["array"] = "array"
    elements: list[MetadataValue] = _Field(default_factory=list)


class ObjectMember(BaseModel):
    """One key/value pair of an object value."""

    key: StringNode
    value: MetadataValue


class ObjectNode(BaseModel):
    """An ordered mapping of string keys to values.

    Members keep their insertion order so generated output is deterministic.
    """

    kind: Literal["object"] = "object"
    members: list[ObjectMember] = _Field(default_factory=list)

    @field_validator("members")
    @classmethod
    def _unique_keys(cls, members: list[ObjectMember]) -> list[ObjectMember]:
        seen: set[str] = set()
        for member in members:
            if member.key.value in seen:
                raise ValueError(f"duplicate object key: {member.key.value!r}")
            seen.add(member.key.value)
        return members

    def get(self, key: str) -> MetadataValue | None:
        """Return the value stored under *key*, or None if absent."""
        for member in self.members:
            if member.key.value == key:
                return member.value
        return None

    def keys(self) -> list[str]:
        """Return the member keys in insertion order."""
        return [member.key.value for member in self.members]


# A metadata value: scalar, array or object.
# The `kind` discriminator keeps deserialization unambiguous.
MetadataValue = Annotated[
    NullNode | BooleanNode | NumberNode | StringNode | ArrayNode | ObjectNode,
    _Field(discriminator="kind"),
]


def to_node(value: Any) -> MetadataValue:
    """Convert a JSON-like Python value into a metadata value.

    Args:
        value: ``None``, a bool, int, float, str, list/tuple or dict with
            string keys, nested arbitrarily.

    Returns:
        The equivalent metadata value.

    Raises:
        TypeError: If *value* (or a nested value) has no metadata equivalent.
    """
    if value is None:
        return NullNode()
    # bool is a subclass of int and must be checked first.
    if isinstance(value, bool):
        return BooleanNode(value=value)
    if isinstance(value, (int, float)):
        return NumberNode(value=value)
    if isinstance(value, str):
        return StringNode(value=value)
    if isinstance(value, (list, tuple)):
        return ArrayNode(elements=[to_node(v) for v in value])
    if isinstance(value, dict):
        members = []
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be strings, found {type(key).__name__}")
            members.append(ObjectMember(key=StringNode(value=key), value=to_node(item)))
        return ObjectNode(members=members)
    raise TypeError(f"Cannot convert {type(value).__name__} to a metadata value")


def to_python(node: MetadataValue) -> Any:
    """Convert a metadata value back into plain Python values."""
    if isinstance(node, NullNode):
        return None
    if isinstance(node, (BooleanNode, NumberNode, StringNode)):
        return node.value
    if isinstance(node, ArrayNode):
        return [to_python(e) for e in node.elements]
    # ObjectNode is the only remaining variant.
    assert isinstance(node, ObjectNode)
    return {m.key.value: to_python(m.value) for m in node.members}


# Resolve forward references for the recursive variants.
ArrayNode.model_rebuild()
ObjectMember.model_rebuild()
ObjectNode.model_rebuild()
