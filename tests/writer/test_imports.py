# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for import aggregation."""

from shapegen.codegen.symbols import LOCAL_NAMESPACE, TypeDescriptor, prelude_type, runtime_type
from shapegen.writer.imports import ImportContainer


def test_empty_container_renders_nothing() -> None:
    container = ImportContainer()
    assert container.is_empty()
    assert container.render() == ""


def test_single_path_stays_on_one_line() -> None:
    container = ImportContainer()
    container.record(runtime_type("smithy", is_macro=True))
    assert container.render() == "use smithy4rs_core::smithy;\n"


def test_shared_prefixes_are_grouped_and_sorted() -> None:
    container = ImportContainer()
    container.record(prelude_type("STRING"))
    container.record(runtime_type("SmithyShape", "derive"))
    container.record(prelude_type("Length"))
    container.record(runtime_type("smithy", is_macro=True))
    assert container.render() == (
        "use smithy4rs_core::{\n"
        "    derive::SmithyShape,\n"
        "    prelude::{\n"
        "        Length,\n"
        "        STRING,\n"
        "    },\n"
        "    smithy,\n"
        "};\n"
    )


def test_recording_twice_has_no_effect() -> None:
    container = ImportContainer()
    container.record(prelude_type("STRING"))
    container.record(prelude_type("STRING"))
    assert container.render() == "use smithy4rs_core::prelude::STRING;\n"


def test_std_local_and_bare_types_are_skipped() -> None:
    container = ImportContainer()
    container.record(TypeDescriptor(name="String", namespace="std::string"))
    container.record(TypeDescriptor(name="Shape", namespace=LOCAL_NAMESPACE))
    container.record(TypeDescriptor(name="i32"))
    assert container.is_empty()


def test_record_all_includes_type_arguments() -> None:
    container = ImportContainer()
    container.record_all(TypeDescriptor(name="Vec", namespace="std::vec", references=(prelude_type("Document"),)))
    assert container.render() == "use smithy4rs_core::prelude::Document;\n"


def test_name_used_as_leaf_and_namespace_imports_self() -> None:
    container = ImportContainer()
    container.record(TypeDescriptor(name="schema", namespace="smithy4rs_core"))
    container.record(runtime_type("DynamicTrait", "schema"))
    assert container.render() == (
        "use smithy4rs_core::schema::{\n"
        "    DynamicTrait,\n"
        "    self,\n"
        "};\n"
    )


def test_separate_crates_get_separate_statements() -> None:
    container = ImportContainer()
    container.record(TypeDescriptor(name="IndexMap", namespace="indexmap"))
    container.record(prelude_type("STRING"))
    assert container.render() == "use indexmap::IndexMap;\nuse smithy4rs_core::prelude::STRING;\n"
