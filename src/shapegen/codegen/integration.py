# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Extension point for contributing initializers, type mappings and interceptors."""

from __future__ import annotations

from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import TYPE_CHECKING

from shapegen.codegen.initializers import Applicability, KindPredicate, Renderer
from shapegen.codegen.symbols import TypeDescriptor
from shapegen.errors import ConfigurationError
from shapegen.logging import get_logger
from shapegen.model.shapes import ShapeId
from shapegen.writer.interceptors import CodeInterceptor

if TYPE_CHECKING:
    from shapegen.codegen.context import CodeGenerationContext

_LOG = get_logger(__name__)

# ###############
# Public Interface
# ###############

ENTRY_POINT_GROUP = "shapegen.integrations"


@dataclass(frozen=True)
class InitializerSpec:
    """An initializer an integration contributes to the registry."""

    kind: KindPredicate
    renderer: Renderer
    applies: Applicability | None = None


class CodegenIntegration:
    """Base class of integrations.

    Integrations are applied in descending :attr:`priority`. Their
    initializers are registered in that order, so a low priority keeps an
    integration's catch-all initializers after everyone else's.
    """

    name: str = ""
    priority: int = 0

    def initializers(self) -> list[InitializerSpec]:
        return []

    def trait_mappings(self) -> dict[ShapeId, TypeDescriptor]:
        return {}

    def interceptors(self, context: CodeGenerationContext) -> list[CodeInterceptor]:
        return []


def sort_integrations(integrations: list[CodegenIntegration]) -> list[CodegenIntegration]:
    """Order integrations by descending priority, keeping the given order for ties.

    Raises:
        ConfigurationError: If two integrations share a name.
    """
    seen: set[str] = set()
    for integration in integrations:
        if integration.name in seen:
            raise ConfigurationError(f"Duplicate integration name: '{integration.name}'")
        seen.add(integration.name)
    return sorted(integrations, key=lambda i: -i.priority)


def discover_integrations(*, include_builtin: bool = True) -> list[CodegenIntegration]:
    """Return the built-in integrations plus those registered under the entry-point group."""
    # Imported here because the built-ins depend on this module.
    from shapegen.integrations.core import CoreIntegration
    from shapegen.integrations.docs import DocstringIntegration

    found: list[CodegenIntegration] = [CoreIntegration(), DocstringIntegration()] if include_builtin else []
    for entry_point in entry_points(group=ENTRY_POINT_GROUP):
        loaded = entry_point.load()
        integration = loaded() if isinstance(loaded, type) else loaded
        if not isinstance(integration, CodegenIntegration):
            raise ConfigurationError(f"Entry point '{entry_point.name}' is not a CodegenIntegration")
        _LOG.debug("Loaded integration '%s' from entry point '%s'", integration.name, entry_point.name)
        found.append(integration)
    return sort_integrations(found)
