# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of model shapes to target type descriptors.

The resolver is pure: it keeps no state between calls, so the same shape
always resolves to an equal descriptor and one instance can be shared by
every generator.
"""

from __future__ import annotations

from collections.abc import Callable

from shapegen.codegen.naming import escape_identifier, pascal_case, snake_case, upper_snake_case
from shapegen.codegen.symbols import BOX, LOCAL_NAMESPACE, PRELUDE_MODULE, RUNTIME_CRATE, TypeDescriptor
from shapegen.errors import ConfigurationError, UnresolvedReferenceError
from shapegen.model.model import Model
from shapegen.model.shapes import Shape, ShapeId, ShapeType

# ###############
# Public Interface
# ###############

# Shape kinds that become declarations in the generated file.
GENERATED_TYPES = frozenset({ShapeType.STRUCTURE, ShapeType.UNION, ShapeType.ENUM, ShapeType.INT_ENUM})

SCHEMA_SUFFIX = "_SCHEMA"

Resolver = Callable[["SymbolProvider", Shape, frozenset[ShapeId]], TypeDescriptor]


class SymbolProvider:
    """Maps shapes of a model to :class:`TypeDescriptor` values.

    Args:
        model: The model member targets are looked up in.
        dispatch: Resolution function per shape kind. Defaults to the built-in
            table. Every :class:`ShapeType` must be covered.

    Raises:
        ConfigurationError: If *dispatch* does not cover every shape kind.
    """

    def __init__(self, model: Model, dispatch: dict[ShapeType, Resolver] | None = None) -> None:
        self._model = model
        self._dispatch = dict(_DISPATCH if dispatch is None else dispatch)
        missing = [t.value for t in ShapeType if t not in self._dispatch]
        if missing:
            raise ConfigurationError(f"No resolution rule for shape kinds: {', '.join(missing)}")

    @property
    def model(self) -> Model:
        return self._model

    def resolve(self, shape: Shape) -> TypeDescriptor:
        """Return the type descriptor of *shape*.

        Members resolve to the descriptor of their target.

        Raises:
            UnresolvedReferenceError: If a member target is missing, or a
                list/map chain refers back to itself without a structure
                or union in between.
        """
        return self._resolve(shape, frozenset())

    def schema_descriptor(self, shape: Shape) -> TypeDescriptor:
        """Return the descriptor of the schema constant of *shape*."""
        return _schema_symbol(shape)

    def member_type(self, container: Shape, member: Shape) -> TypeDescriptor:
        """Return the field type of *member*, boxed when it refers back to *container*."""
        descriptor = self.resolve(member)
        if self.is_recursive_member(container, member):
            return BOX.with_references(descriptor)
        return descriptor

    def is_recursive_member(self, container: Shape, member: Shape) -> bool:
        """True if *member*'s target reaches *container* through structure or union members.

        Lists and maps already store their elements on the heap, so paths
        through them are not followed.
        """
        if member.target is None:
            return False
        stack = [member.target]
        visited: set[ShapeId] = set()
        while stack:
            current_id = stack.pop()
            if current_id == container.id:
                return True
            if current_id in visited:
                continue
            visited.add(current_id)
            current = self._model.expect_shape(current_id, member.id)
            if current.type in (ShapeType.STRUCTURE, ShapeType.UNION):
                stack.extend(m.target for m in current.members if m.target is not None)
        return False

    @staticmethod
    def member_name(member: Shape) -> str:
        """Field name of a member: snake_case, keywords escaped."""
        return escape_identifier(snake_case(member.name))

    @staticmethod
    def member_schema_name(member: Shape) -> str:
        """Name of the member schema constant: ``myMember`` -> ``MY_MEMBER``."""
        return upper_snake_case(member.name)

    @staticmethod
    def variant_name(member: Shape) -> str:
        """Name of a union or enum variant: ``string_variant`` -> ``StringVariant``."""
        return escape_identifier(pascal_case(member.name))

    # ------------------------------------------------------------------

    def _resolve(self, shape: Shape, in_progress: frozenset[ShapeId]) -> TypeDescriptor:
        if shape.id in in_progress:
            # The shape refers back to itself with no indirection in between.
            raise UnresolvedReferenceError(str(shape.id), str(shape.id))
        return self._dispatch[shape.type](self, shape, in_progress | {shape.id})

    def _target(self, member: Shape) -> Shape:
        if member.target is None:
            raise UnresolvedReferenceError("<none>", str(member.id))
        return self._model.expect_shape(member.target, member.id)


# ################
# Implementation
# ################


def _schema_symbol(shape: Shape) -> TypeDescriptor:
    name = upper_snake_case(shape.id.name)
    if shape.type in GENERATED_TYPES:
        name += SCHEMA_SUFFIX
    namespace = PRELUDE_MODULE if Model.is_prelude(shape) else LOCAL_NAMESPACE
    return TypeDescriptor(name=name, namespace=namespace)


def _builtin(name: str, namespace: str) -> Resolver:
    def resolve(provider: SymbolProvider, shape: Shape, in_progress: frozenset[ShapeId]) -> TypeDescriptor:
        return TypeDescriptor(name=name, namespace=namespace, schema=_schema_symbol(shape))

    return resolve


def _resolve_list(provider: SymbolProvider, shape: Shape, in_progress: frozenset[ShapeId]) -> TypeDescriptor:
    member = _expect_member(shape, "member")
    element = provider._resolve(provider._target(member), in_progress)
    return TypeDescriptor(name="Vec", namespace="std::vec", references=(element,), schema=_schema_symbol(shape))


def _resolve_map(provider: SymbolProvider, shape: Shape, in_progress: frozenset[ShapeId]) -> TypeDescriptor:
    key = provider._resolve(provider._target(_expect_member(shape, "key")), in_progress)
    value = provider._resolve(provider._target(_expect_member(shape, "value")), in_progress)
    return TypeDescriptor(
        name="IndexMap",
        namespace=RUNTIME_CRATE,
        references=(key, value),
        schema=_schema_symbol(shape),
    )


def _resolve_generated(provider: SymbolProvider, shape: Shape, in_progress: frozenset[ShapeId]) -> TypeDescriptor:
    # Prelude structures (Unit) are provided by the runtime.
    namespace = PRELUDE_MODULE if Model.is_prelude(shape) else LOCAL_NAMESPACE
    return TypeDescriptor(name=shape.id.name, namespace=namespace, schema=_schema_symbol(shape))


def _resolve_member(provider: SymbolProvider, shape: Shape, in_progress: frozenset[ShapeId]) -> TypeDescriptor:
    return provider._resolve(provider._target(shape), in_progress)


def _resolve_service_like(
    provider: SymbolProvider, shape: Shape, in_progress: frozenset[ShapeId]
) -> TypeDescriptor:
    return TypeDescriptor(name=shape.id.name, namespace=LOCAL_NAMESPACE)


def _expect_member(shape: Shape, name: str) -> Shape:
    member = shape.member(name)
    if member is None:
        raise UnresolvedReferenceError(str(shape.id.with_member(name)), str(shape.id))
    return member


_DISPATCH: dict[ShapeType, Resolver] = {
    ShapeType.BLOB: _builtin("ByteBuffer", RUNTIME_CRATE),
    ShapeType.BOOLEAN: _builtin("bool", "std"),
    ShapeType.STRING: _builtin("String", "std"),
    ShapeType.BYTE: _builtin("i8", "std"),
    ShapeType.SHORT: _builtin("i16", "std"),
    ShapeType.INTEGER: _builtin("i32", "std"),
    ShapeType.LONG: _builtin("i64", "std"),
    ShapeType.FLOAT: _builtin("f32", "std"),
    ShapeType.DOUBLE: _builtin("f64", "std"),
    ShapeType.BIG_INTEGER: _builtin("BigInt", RUNTIME_CRATE),
    ShapeType.BIG_DECIMAL: _builtin("BigDecimal", RUNTIME_CRATE),
    ShapeType.TIMESTAMP: _builtin("Instant", RUNTIME_CRATE),
    ShapeType.DOCUMENT: _builtin("Document", RUNTIME_CRATE),
    ShapeType.LIST: _resolve_list,
    ShapeType.MAP: _resolve_map,
    ShapeType.STRUCTURE: _resolve_generated,
    ShapeType.UNION: _resolve_generated,
    ShapeType.ENUM: _resolve_generated,
    ShapeType.INT_ENUM: _resolve_generated,
    ShapeType.MEMBER: _resolve_member,
    ShapeType.OPERATION: _resolve_service_like,
    ShapeType.SERVICE: _resolve_service_like,
    ShapeType.RESOURCE: _resolve_service_like,
}
