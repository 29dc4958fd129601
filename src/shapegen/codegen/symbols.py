# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Target type descriptors and the runtime crate descriptors generated code uses."""

from __future__ import annotations

from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############

# Namespace of types declared in the generated file itself.
LOCAL_NAMESPACE = "local"
RUNTIME_CRATE = "smithy4rs_core"
PRELUDE_MODULE = f"{RUNTIME_CRATE}::prelude"


@dataclass(frozen=True)
class TypeDescriptor:
    """The target-language projection of a shape.

    Attributes:
        name: Unqualified type name (``String``, ``Vec``, ``MyStruct``).
        namespace: Module path, ``""`` for none.
        delimiter: Separator between namespace segments.
        references: Type arguments, rendered as ``Name<A, B>``.
        schema: Descriptor of the schema constant associated with the type.
        is_macro: True for macros, which are invoked as ``name!``.
    """

    name: str
    namespace: str = ""
    delimiter: str = "::"
    references: tuple[TypeDescriptor, ...] = field(default=())
    schema: TypeDescriptor | None = None
    is_macro: bool = False

    @property
    def full_name(self) -> str:
        """The fully qualified name, e.g. ``smithy4rs_core::prelude::STRING``."""
        if not self.namespace:
            return self.name
        return f"{self.namespace}{self.delimiter}{self.name}"

    @property
    def namespace_segments(self) -> list[str]:
        """The namespace split on the delimiter."""
        if not self.namespace:
            return []
        return self.namespace.split(self.delimiter)

    def render(self) -> str:
        """Render the type with its type arguments, ``IndexMap<String, i32>``."""
        if not self.references:
            return self.name
        return f"{self.name}<{', '.join(r.render() for r in self.references)}>"

    def with_references(self, *references: TypeDescriptor) -> TypeDescriptor:
        return TypeDescriptor(
            name=self.name,
            namespace=self.namespace,
            delimiter=self.delimiter,
            references=tuple(references),
            schema=self.schema,
            is_macro=self.is_macro,
        )

    def __str__(self) -> str:
        return self.render()


def runtime_type(name: str, module: str = "", *, is_macro: bool = False) -> TypeDescriptor:
    """Return a descriptor for *name* exported by the runtime crate (optionally a sub-module)."""
    namespace = f"{RUNTIME_CRATE}::{module}" if module else RUNTIME_CRATE
    return TypeDescriptor(name=name, namespace=namespace, is_macro=is_macro)


def prelude_type(name: str) -> TypeDescriptor:
    """Return a descriptor for *name* in the runtime prelude."""
    return TypeDescriptor(name=name, namespace=PRELUDE_MODULE)


# Macros and derives of the runtime crate referenced by the generators.
SMITHY_MACRO = runtime_type("smithy", is_macro=True)
DOC_MAP_MACRO = runtime_type("doc_map", is_macro=True)
SHAPE_DERIVE = runtime_type("SmithyShape", "derive")
ENUM_MACRO = runtime_type("smithy_enum", "derive")
UNION_MACRO = runtime_type("smithy_union", "derive")
DYNAMIC_TRAIT = runtime_type("DynamicTrait", "schema")
BOX = TypeDescriptor(name="Box", namespace="std::boxed")
