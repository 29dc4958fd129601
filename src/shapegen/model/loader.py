# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reading service models from the JSON model format.

Only the subset the generator needs is understood: shapes, their members,
traits and the operation/service/resource bindings. Mixins, ``apply``
statements and model validation are out of scope.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from shapegen.model.model import Model
from shapegen.model.nodes import to_node
from shapegen.model.shapes import PRELUDE_NAMESPACE, Annotation, Shape, ShapeId, ShapeType, member_shape

# ###############
# Public Interface
# ###############

SUPPORTED_VERSIONS = ("2", "2.0")


class ModelLoadError(Exception):
    """Raised when a model document cannot be read or is malformed.

    Attributes:
        source: Label of the document (a file path or ``<string>``).
    """

    def __init__(self, message: str, source: str = "<string>") -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


def parse_model(text: str, source: str = "<string>") -> Model:
    """Parse a JSON model document into a :class:`Model`.

    Args:
        text: The JSON document.
        source: Label used in error messages.

    Returns:
        The model, including the prelude shapes.

    Raises:
        ModelLoadError: If the text is not valid JSON, the version is not
            supported or a shape is malformed.
    """
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ModelLoadError(f"invalid JSON: {exc}", source) from exc
    if not isinstance(obj, dict):
        raise ModelLoadError("expected a JSON object at the top level", source)
    version = str(obj.get("smithy", ""))
    if version not in SUPPORTED_VERSIONS:
        raise ModelLoadError(f"unsupported model version: {version!r}", source)

    shapes: list[Shape] = []
    for raw_id, raw_shape in obj.get("shapes", {}).items():
        try:
            shapes.append(_shape_from_dict(ShapeId.parse(raw_id), raw_shape))
        except (ValueError, TypeError, KeyError) as exc:
            raise ModelLoadError(f"invalid shape '{raw_id}': {exc}", source) from exc
    return Model(shapes)


def load_model(path: Path) -> Model:
    """Read and parse the JSON model at *path*.

    Raises:
        ModelLoadError: If the file cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ModelLoadError(f"cannot read model: {exc}", str(path)) from exc
    return parse_model(text, str(path))


# ################
# Implementation
# ################

_MEMBER_KEYS: dict[ShapeType, tuple[str, ...]] = {
    ShapeType.LIST: ("member",),
    ShapeType.MAP: ("key", "value"),
}


def _shape_from_dict(shape_id: ShapeId, obj: dict[str, Any]) -> Shape:
    if not isinstance(obj, dict):
        raise TypeError("shape definition must be an object")
    shape_type = ShapeType(obj["type"])
    if shape_type is ShapeType.MEMBER:
        raise ValueError("member shapes cannot be declared at the top level")

    members: list[Shape] = []
    if shape_type in _MEMBER_KEYS:
        for key in _MEMBER_KEYS[shape_type]:
            members.append(_member_from_dict(shape_id, key, obj[key]))
    else:
        for name, member in obj.get("members", {}).items():
            members.append(_member_from_dict(shape_id, name, member))

    return Shape(
        id=shape_id,
        type=shape_type,
        members=members,
        annotations=_annotations_from_dict(obj.get("traits", {})),
        input=_ref(obj["input"]) if "input" in obj else None,
        output=_ref(obj["output"]) if "output" in obj else None,
        errors=[_ref(r) for r in obj.get("errors", [])],
        operations=[_ref(r) for r in obj.get("operations", [])],
        resources=[_ref(r) for r in obj.get("resources", [])],
    )


def _member_from_dict(container: ShapeId, name: str, obj: dict[str, Any]) -> Shape:
    return member_shape(
        container,
        name,
        _ref(obj),
        _annotations_from_dict(obj.get("traits", {})),
    )


def _annotations_from_dict(obj: dict[str, Any]) -> list[Annotation]:
    return [Annotation(id=_trait_id(key), value=to_node(value)) for key, value in obj.items()]


def _trait_id(text: str) -> ShapeId:
    # Bare trait names refer to the prelude.
    if "#" not in text:
        return ShapeId(PRELUDE_NAMESPACE, text)
    return ShapeId.parse(text)


def _ref(obj: dict[str, Any]) -> ShapeId:
    return ShapeId.parse(obj["target"])
