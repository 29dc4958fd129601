# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Built-in initializers and prelude annotation mappings."""

from __future__ import annotations

from shapegen.codegen.initializers import (
    InitializerRegistry,
    always,
    annotation_id,
    any_annotation,
    is_marker,
    is_string_valued,
)
from shapegen.codegen.integration import CodegenIntegration, InitializerSpec
from shapegen.codegen.metadata import Expression, rust_string
from shapegen.codegen.naming import pascal_case
from shapegen.codegen.symbols import DYNAMIC_TRAIT, TypeDescriptor, prelude_type
from shapegen.errors import UnmatchedAnnotationError
from shapegen.model.nodes import NumberNode, ObjectNode, StringNode
from shapegen.model.shapes import Annotation, Shape, ShapeId, prelude_id

# ###############
# Public Interface
# ###############

LENGTH = prelude_id("length")
RANGE = prelude_id("range")

# Prelude annotations the runtime provides typed counterparts for.
MAPPED_PRELUDE_ANNOTATIONS = (
    # Validation
    "length",
    "pattern",
    "range",
    "required",
    "sensitive",
    "sparse",
    "uniqueItems",
    "requiresLength",
    "error",
    "default",
    # Protocol
    "jsonName",
    "timestampFormat",
    "mediaType",
    "xmlName",
    "xmlFlattened",
    "xmlAttribute",
    "xmlNamespace",
    "eventHeader",
    "eventPayload",
    "hostLabel",
    "endpoint",
    # Behavior
    "paginated",
    "idempotencyToken",
    "retryable",
    "requestCompression",
    "streaming",
)


class CoreIntegration(CodegenIntegration):
    """Typed initializers for common prelude annotations plus the dynamic fallback.

    The priority is negative so the catch-all is registered after the
    initializers of every other integration.
    """

    name = "core"
    priority = -1

    def initializers(self) -> list[InitializerSpec]:
        return [
            InitializerSpec(annotation_id(LENGTH), render_length, always),
            InitializerSpec(annotation_id(RANGE), render_range, always),
            InitializerSpec(is_marker, render_marker),
            InitializerSpec(is_string_valued, render_string),
            InitializerSpec(any_annotation, render_dynamic, always),
        ]

    def trait_mappings(self) -> dict[ShapeId, TypeDescriptor]:
        return {prelude_id(name): prelude_type(pascal_case(name)) for name in MAPPED_PRELUDE_ANNOTATIONS}


def render_marker(annotation: Annotation, owner: Shape, registry: InitializerRegistry) -> Expression:
    """``@sensitive`` -> ``Sensitive``."""
    mapping = registry.expect_mapping(annotation, owner)
    return Expression(mapping.render(), (mapping,))


def render_string(annotation: Annotation, owner: Shape, registry: InitializerRegistry) -> Expression:
    """``@jsonName("x")`` -> ``JsonName::new("x")``."""
    mapping = registry.expect_mapping(annotation, owner)
    if not isinstance(annotation.value, StringNode):
        raise UnmatchedAnnotationError(str(annotation.id), str(owner.id), "expected a string value")
    return Expression(f"{mapping.render()}::new({rust_string(annotation.value.value)})", (mapping,))


def render_length(annotation: Annotation, owner: Shape, registry: InitializerRegistry) -> Expression:
    """``@length(min: 1, max: 4)`` -> ``Length::builder().min(1).max(4).build()``."""
    mapping = registry.expect_mapping(annotation, owner)
    bounds = _bounds(annotation, owner)
    calls = "".join(f".{key}({_integer(value, annotation, owner)})" for key, value in bounds)
    return Expression(f"{mapping.render()}::builder(){calls}.build()", (mapping,))


def render_range(annotation: Annotation, owner: Shape, registry: InitializerRegistry) -> Expression:
    """``@range(min: 1)`` -> ``Range::builder().min("1").build()``.

    Bounds are passed as strings since they may be arbitrary precision decimals.
    """
    mapping = registry.expect_mapping(annotation, owner)
    calls = "".join(f".{key}({rust_string(str(value.value))})" for key, value in _bounds(annotation, owner))
    return Expression(f"{mapping.render()}::builder(){calls}.build()", (mapping,))


def render_dynamic(annotation: Annotation, owner: Shape, registry: InitializerRegistry) -> Expression:
    """Any annotation -> ``DynamicTrait::from("ns#id", <value literal>)``."""
    value = registry.compiler.compile_expression(annotation.value)
    text = f"{DYNAMIC_TRAIT.render()}::from({rust_string(str(annotation.id))}, {value.text})"
    return Expression(text, (DYNAMIC_TRAIT, *value.references))


# ################
# Implementation
# ################


def _bounds(annotation: Annotation, owner: Shape) -> list[tuple[str, NumberNode]]:
    """Return the present ``min``/``max`` members of a bounds annotation, in that order."""
    if not isinstance(annotation.value, ObjectNode):
        raise UnmatchedAnnotationError(str(annotation.id), str(owner.id), "expected an object value")
    result = []
    for key in ("min", "max"):
        value = annotation.value.get(key)
        if value is None:
            continue
        if not isinstance(value, NumberNode):
            raise UnmatchedAnnotationError(str(annotation.id), str(owner.id), f"'{key}' must be a number")
        result.append((key, value))
    return result


def _integer(value: NumberNode, annotation: Annotation, owner: Shape) -> str:
    if value.is_float:
        if not float(value.value).is_integer():
            raise UnmatchedAnnotationError(str(annotation.id), str(owner.id), "length bounds must be integers")
        return str(int(value.value))
    return str(value.value)
