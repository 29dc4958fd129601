# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Registry mapping annotations to the expressions that initialize them.

Registrations are tried in order. The first one whose kind predicate
matches the annotation and whose applicability check passes renders it.
A catch-all registered last makes lookup total.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from shapegen.codegen.metadata import Expression, MetadataCompiler
from shapegen.codegen.symbols import TypeDescriptor
from shapegen.errors import ConfigurationError, UnmatchedAnnotationError
from shapegen.logging import get_logger
from shapegen.model.nodes import ObjectNode, StringNode
from shapegen.model.shapes import Annotation, Shape, ShapeId

_LOG = get_logger(__name__)

# ###############
# Public Interface
# ###############

KindPredicate = Callable[[Annotation], bool]
Renderer = Callable[[Annotation, Shape, "InitializerRegistry"], Expression]
Applicability = Callable[[Annotation, "InitializerRegistry"], bool]


@dataclass(frozen=True)
class Registration:
    """One (kind predicate, renderer, applicability check) entry."""

    kind: KindPredicate
    renderer: Renderer
    applies: Applicability


class InitializerRegistry:
    """Ordered annotation renderers plus the annotation-id to type mappings they use.

    The registry is assembled once, then frozen. Rendering never mutates it.

    Args:
        compiler: Metadata compiler handed to renderers. A new one is
            created if omitted.
    """

    def __init__(self, compiler: MetadataCompiler | None = None) -> None:
        self._compiler = compiler or MetadataCompiler()
        self._registrations: list[Registration] = []
        self._mappings: dict[ShapeId, TypeDescriptor] = {}
        self._frozen = False

    @property
    def compiler(self) -> MetadataCompiler:
        return self._compiler

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def registrations(self) -> list[Registration]:
        return list(self._registrations)

    def register(self, kind: KindPredicate, renderer: Renderer, applies: Applicability | None = None) -> None:
        """Append a renderer.

        Args:
            kind: Coarse match on the annotation (its id or value shape).
            renderer: Produces the initializer expression.
            applies: Fine-grained check, run after *kind* matched. Defaults
                to "a type mapping exists for the annotation id".

        Raises:
            ConfigurationError: If the registry is frozen.
        """
        self._check_not_frozen()
        self._registrations.append(Registration(kind, renderer, applies or has_mapping))

    def add_mappings(self, mappings: Mapping[ShapeId, TypeDescriptor]) -> None:
        """Add annotation-id to type mappings. Later mappings win.

        Raises:
            ConfigurationError: If the registry is frozen.
        """
        self._check_not_frozen()
        self._mappings.update(mappings)

    def freeze(self) -> None:
        """Reject any further registration."""
        self._frozen = True
        _LOG.debug("Initializer registry frozen with %d registrations", len(self._registrations))

    def mapping(self, annotation_id: ShapeId) -> TypeDescriptor | None:
        return self._mappings.get(annotation_id)

    def expect_mapping(self, annotation: Annotation, owner: Shape) -> TypeDescriptor:
        """Return the type mapped to *annotation*.

        Raises:
            UnmatchedAnnotationError: If no mapping was registered for it.
        """
        descriptor = self._mappings.get(annotation.id)
        if descriptor is None:
            raise UnmatchedAnnotationError(str(annotation.id), str(owner.id), "no type mapping is registered")
        return descriptor

    def render(self, annotation: Annotation, owner: Shape) -> Expression:
        """Render the initializer for *annotation* applied to *owner*.

        Raises:
            UnmatchedAnnotationError: If no registration accepts the
                annotation, or the accepting renderer cannot produce output.
        """
        for registration in self._registrations:
            if registration.kind(annotation) and registration.applies(annotation, self):
                return registration.renderer(annotation, owner, self)
        raise UnmatchedAnnotationError(str(annotation.id), str(owner.id), "no initializer accepts it")

    def _check_not_frozen(self) -> None:
        if self._frozen:
            raise ConfigurationError("Initializer registry is frozen; register initializers before generating")


# -- Kind predicates -------------------------------------------------------


def is_marker(annotation: Annotation) -> bool:
    """True for annotations whose value is an empty object (``@sensitive``)."""
    return isinstance(annotation.value, ObjectNode) and not annotation.value.members


def is_string_valued(annotation: Annotation) -> bool:
    """True for annotations whose value is a string (``@jsonName("x")``)."""
    return isinstance(annotation.value, StringNode)


def annotation_id(shape_id: ShapeId | str) -> KindPredicate:
    """Return a predicate matching exactly the annotation *shape_id*."""
    expected = ShapeId.parse(shape_id) if isinstance(shape_id, str) else shape_id

    def matches(annotation: Annotation) -> bool:
        return annotation.id == expected

    return matches


def any_annotation(annotation: Annotation) -> bool:
    return True


# -- Applicability checks --------------------------------------------------


def has_mapping(annotation: Annotation, registry: InitializerRegistry) -> bool:
    """True if a type mapping is registered for the annotation id."""
    return registry.mapping(annotation.id) is not None


def always(annotation: Annotation, registry: InitializerRegistry) -> bool:
    return True
