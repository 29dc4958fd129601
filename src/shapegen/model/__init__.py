# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Service model for shapegen (shapes, annotations and metadata values)."""

from shapegen.model.loader import ModelLoadError, load_model, parse_model
from shapegen.model.model import PRELUDE_SHAPES, Model
from shapegen.model.nodes import (
    ArrayNode,
    BooleanNode,
    MetadataValue,
    NullNode,
    NumberNode,
    ObjectMember,
    ObjectNode,
    StringNode,
    to_node,
    to_python,
)
from shapegen.model.shapes import (
    PRELUDE_NAMESPACE,
    Annotation,
    Shape,
    ShapeId,
    ShapeType,
    marker,
    member_shape,
    null_annotation,
    prelude_id,
)

__all__ = [
    # Metadata values
    "MetadataValue",
    "NullNode",
    "BooleanNode",
    "NumberNode",
    "StringNode",
    "ArrayNode",
    "ObjectMember",
    "ObjectNode",
    "to_node",
    "to_python",
    # Shapes
    "PRELUDE_NAMESPACE",
    "ShapeId",
    "ShapeType",
    "Annotation",
    "Shape",
    "prelude_id",
    "member_shape",
    "marker",
    "null_annotation",
    # Model
    "Model",
    "PRELUDE_SHAPES",
    "ModelLoadError",
    "load_model",
    "parse_model",
]
