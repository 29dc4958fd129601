# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of shapes to Rust types and of annotations to initializer expressions.

The run-level pieces (context, integrations, director) live in their own
modules and are imported from there.
"""

from shapegen.codegen.initializers import (
    InitializerRegistry,
    Registration,
    always,
    annotation_id,
    any_annotation,
    has_mapping,
    is_marker,
    is_string_valued,
)
from shapegen.codegen.metadata import EMPTY_SEQUENCE, Expression, MetadataCompiler, rust_string
from shapegen.codegen.naming import (
    RESERVED_WORDS,
    escape_identifier,
    pascal_case,
    snake_case,
    split_words,
    upper_snake_case,
)
from shapegen.codegen.resolver import GENERATED_TYPES, SCHEMA_SUFFIX, SymbolProvider
from shapegen.codegen.sections import (
    CodeSection,
    DocstringSection,
    DocumentedSection,
    MemberSection,
    SchemaSection,
    ShapeSection,
)
from shapegen.codegen.symbols import (
    LOCAL_NAMESPACE,
    PRELUDE_MODULE,
    RUNTIME_CRATE,
    TypeDescriptor,
    prelude_type,
    runtime_type,
)

__all__ = [
    "EMPTY_SEQUENCE",
    "GENERATED_TYPES",
    "LOCAL_NAMESPACE",
    "PRELUDE_MODULE",
    "RESERVED_WORDS",
    "RUNTIME_CRATE",
    "SCHEMA_SUFFIX",
    "CodeSection",
    "DocstringSection",
    "DocumentedSection",
    "Expression",
    "InitializerRegistry",
    "MemberSection",
    "MetadataCompiler",
    "Registration",
    "SchemaSection",
    "ShapeSection",
    "SymbolProvider",
    "TypeDescriptor",
    "always",
    "annotation_id",
    "any_annotation",
    "escape_identifier",
    "has_mapping",
    "is_marker",
    "is_string_valued",
    "pascal_case",
    "prelude_type",
    "runtime_type",
    "rust_string",
    "snake_case",
    "split_words",
    "upper_snake_case",
]
