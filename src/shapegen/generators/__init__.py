# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-kind generators writing schemas and type declarations."""

from shapegen.generators.collection import ListGenerator, MapGenerator
from shapegen.generators.enum import EnumGenerator, enum_value
from shapegen.generators.scalar import ScalarSchemaGenerator
from shapegen.generators.schema import is_generated, member_schema_writer, write_schema_block
from shapegen.generators.structure import StructureGenerator
from shapegen.generators.traits import TraitInitializerGenerator
from shapegen.generators.union import UnionGenerator

__all__ = [
    "EnumGenerator",
    "ListGenerator",
    "MapGenerator",
    "ScalarSchemaGenerator",
    "StructureGenerator",
    "TraitInitializerGenerator",
    "UnionGenerator",
    "enum_value",
    "is_generated",
    "member_schema_writer",
    "write_schema_block",
]
