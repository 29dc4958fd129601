# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the JSON model loader."""

import json
from pathlib import Path

import pytest

from shapegen.model.loader import ModelLoadError, load_model, parse_model
from shapegen.model.model import Model
from shapegen.model.nodes import NumberNode, ObjectNode, StringNode
from shapegen.model.shapes import ShapeId, ShapeType, prelude_id

DATA_DIR = Path(__file__).parent.parent / "data"

# ###############
# Helpers
# ###############


def _parse(shapes: dict) -> Model:
    """Parse a version 2.0 document holding *shapes*."""
    return parse_model(json.dumps({"smithy": "2.0", "shapes": shapes}))


# ###############
# Normal Cases
# ###############


class TestParseModel:
    def test_structure_members_and_traits(self) -> None:
        model = _parse(
            {
                "com.test#S": {
                    "type": "structure",
                    "members": {"m": {"target": "smithy.api#String", "traits": {"smithy.api#length": {"min": 1}}}},
                }
            }
        )
        shape = model.expect_shape(ShapeId("com.test", "S"))
        member = shape.member("m")
        assert member is not None
        assert member.target == prelude_id("String")
        length = member.annotation("smithy.api#length")
        assert isinstance(length.value, ObjectNode)
        assert length.value.get("min") == NumberNode(value=1)

    def test_bare_trait_names_refer_to_the_prelude(self) -> None:
        model = _parse({"com.test#S": {"type": "structure", "traits": {"documentation": "Hi"}}})
        shape = model.expect_shape(ShapeId("com.test", "S"))
        assert shape.annotation(prelude_id("documentation")).value == StringNode(value="Hi")

    def test_list_and_map_members(self) -> None:
        model = _parse(
            {
                "com.test#L": {"type": "list", "member": {"target": "smithy.api#String"}},
                "com.test#M": {
                    "type": "map",
                    "key": {"target": "smithy.api#String"},
                    "value": {"target": "smithy.api#Integer"},
                },
            }
        )
        assert [m.name for m in model.expect_shape(ShapeId("com.test", "L")).members] == ["member"]
        assert [m.name for m in model.expect_shape(ShapeId("com.test", "M")).members] == ["key", "value"]

    def test_operation_references(self) -> None:
        model = load_model(DATA_DIR / "operations.json")
        operation = model.expect_shape(ShapeId("com.test", "GetItem"))
        assert operation.type is ShapeType.OPERATION
        assert operation.input == ShapeId("com.test", "GetItemInput")
        assert operation.errors == [ShapeId("com.test", "NotFound")]
        service = model.expect_shape(ShapeId("com.test", "Shop"))
        assert service.operations == [operation.id]

    def test_member_order_is_kept(self) -> None:
        model = load_model(DATA_DIR / "structures.json")
        suits = model.expect_shape(ShapeId("com.test", "Suits"))
        assert [m.name for m in suits.members] == ["SPADE", "HEART"]

    def test_prelude_is_included(self) -> None:
        assert prelude_id("Integer") in _parse({})


# ###############
# Error Cases
# ###############


class TestParseErrors:
    def test_invalid_json(self) -> None:
        with pytest.raises(ModelLoadError, match="invalid JSON"):
            parse_model("{", source="model.json")

    def test_error_message_names_the_source(self) -> None:
        with pytest.raises(ModelLoadError, match="^model.json: "):
            parse_model("[]", source="model.json")

    def test_unsupported_version(self) -> None:
        with pytest.raises(ModelLoadError, match="unsupported model version"):
            load_model(DATA_DIR / "invalid_version.json")

    def test_unknown_shape_type(self) -> None:
        with pytest.raises(ModelLoadError, match="invalid shape 'com.test#X'"):
            _parse({"com.test#X": {"type": "widget"}})

    def test_list_without_member(self) -> None:
        with pytest.raises(ModelLoadError, match="invalid shape"):
            _parse({"com.test#L": {"type": "list"}})

    def test_malformed_shape_id(self) -> None:
        with pytest.raises(ModelLoadError, match="invalid shape"):
            _parse({"NoNamespace": {"type": "structure"}})

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ModelLoadError, match="cannot read model"):
            load_model(tmp_path / "missing.json")
