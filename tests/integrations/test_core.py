# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the built-in annotation initializers."""

import pytest

from shapegen.codegen.initializers import InitializerRegistry
from shapegen.codegen.symbols import DOC_MAP_MACRO, DYNAMIC_TRAIT, prelude_type
from shapegen.errors import UnmatchedAnnotationError, UnsupportedValueError
from shapegen.integrations.core import CoreIntegration, render_string
from shapegen.model.nodes import StringNode, to_node
from shapegen.model.shapes import Annotation, Shape, ShapeType, marker, null_annotation, prelude_id

# ###############
# Helpers
# ###############

_OWNER = Shape(id="com.test#S", type=ShapeType.STRUCTURE)


def _registry() -> InitializerRegistry:
    """Build a frozen registry holding only the core integration."""
    integration = CoreIntegration()
    registry = InitializerRegistry()
    registry.add_mappings(integration.trait_mappings())
    for spec in integration.initializers():
        registry.register(spec.kind, spec.renderer, spec.applies)
    registry.freeze()
    return registry


def _render(annotation: Annotation) -> str:
    return _registry().render(annotation, _OWNER).text


def _annotation(annotation_id: str, value: object) -> Annotation:
    return Annotation(id=annotation_id, value=to_node(value))


# ###############
# Tests
# ###############


class TestMappings:
    def test_prelude_annotations_map_to_pascal_case_types(self) -> None:
        mappings = CoreIntegration().trait_mappings()
        assert mappings[prelude_id("length")] == prelude_type("Length")
        assert mappings[prelude_id("jsonName")] == prelude_type("JsonName")
        assert prelude_id("documentation") not in mappings


class TestMarkers:
    def test_marker(self) -> None:
        expression = _registry().render(marker("smithy.api#sensitive"), _OWNER)
        assert expression.text == "Sensitive"
        assert expression.references == (prelude_type("Sensitive"),)

    def test_required(self) -> None:
        assert _render(marker("smithy.api#required")) == "Required"


class TestStringValued:
    def test_json_name(self) -> None:
        assert _render(Annotation(id="smithy.api#jsonName", value=StringNode(value="x"))) == 'JsonName::new("x")'

    def test_pattern_is_escaped(self) -> None:
        assert _render(_annotation("smithy.api#pattern", '^\\d+"$')) == 'Pattern::new("^\\\\d+\\"$")'

    def test_error(self) -> None:
        assert _render(_annotation("smithy.api#error", "client")) == 'Error::new("client")'

    def test_non_string_value_is_rejected(self) -> None:
        with pytest.raises(UnmatchedAnnotationError, match="expected a string value"):
            render_string(_annotation("smithy.api#jsonName", 3), _OWNER, _registry())


class TestBounds:
    def test_length(self) -> None:
        assert _render(_annotation("smithy.api#length", {"min": 1, "max": 4})) == (
            "Length::builder().min(1).max(4).build()"
        )

    def test_length_with_only_max(self) -> None:
        assert _render(_annotation("smithy.api#length", {"max": 10})) == "Length::builder().max(10).build()"

    def test_length_accepts_integral_floats(self) -> None:
        assert _render(_annotation("smithy.api#length", {"min": 2.0})) == "Length::builder().min(2).build()"

    def test_length_rejects_fractions(self) -> None:
        with pytest.raises(UnmatchedAnnotationError, match="length bounds must be integers"):
            _render(_annotation("smithy.api#length", {"min": 1.5}))

    def test_length_rejects_non_numbers(self) -> None:
        with pytest.raises(UnmatchedAnnotationError, match="'min' must be a number"):
            _render(_annotation("smithy.api#length", {"min": "one"}))

    def test_range_bounds_are_strings(self) -> None:
        assert _render(_annotation("smithy.api#range", {"min": 1, "max": 10.5})) == (
            'Range::builder().min("1").max("10.5").build()'
        )

    def test_empty_bounds_still_use_the_builder(self) -> None:
        assert _render(_annotation("smithy.api#length", {})) == "Length::builder().build()"
        assert _render(_annotation("smithy.api#range", {})) == "Range::builder().build()"

    def test_range_requires_an_object(self) -> None:
        with pytest.raises(UnmatchedAnnotationError, match="expected an object value"):
            _render(_annotation("smithy.api#range", [1, 2]))


class TestDynamicFallback:
    def test_unmapped_marker(self) -> None:
        expression = _registry().render(marker("com.test#flag"), _OWNER)
        assert expression.text == 'DynamicTrait::from("com.test#flag", doc_map![])'
        assert expression.references == (DYNAMIC_TRAIT, DOC_MAP_MACRO)

    def test_unmapped_string(self) -> None:
        assert _render(_annotation("com.test#tag", "v")) == 'DynamicTrait::from("com.test#tag", "v")'

    def test_unmapped_object(self) -> None:
        assert _render(_annotation("com.test#meta", {"a": [1, True]})) == (
            'DynamicTrait::from("com.test#meta", doc_map!["a" => vec![1, true]])'
        )

    def test_null_is_rejected(self) -> None:
        with pytest.raises(UnsupportedValueError):
            _render(null_annotation("com.test#nothing"))
