# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-run state shared by the generators."""

from __future__ import annotations

from collections.abc import Callable

from shapegen.codegen.initializers import InitializerRegistry
from shapegen.codegen.integration import CodegenIntegration, sort_integrations
from shapegen.codegen.resolver import SymbolProvider
from shapegen.config import CodegenSettings
from shapegen.model.model import Model
from shapegen.model.shapes import Shape
from shapegen.writer.interceptors import InterceptorRegistry
from shapegen.writer.writer import CodeWriter

# ###############
# Public Interface
# ###############


class WriterDelegator:
    """Hands out one :class:`CodeWriter` per output file."""

    def __init__(self, settings: CodegenSettings, interceptors: InterceptorRegistry) -> None:
        self._settings = settings
        self._interceptors = interceptors
        self._writers: dict[str, CodeWriter] = {}

    def use_file_writer(self, filename: str, block: Callable[[CodeWriter], None]) -> None:
        """Call *block* with the writer of *filename*, creating it on first use."""
        writer = self._writers.get(filename)
        if writer is None:
            writer = CodeWriter(self._interceptors)
            self._writers[filename] = writer
        else:
            # Separate consecutive contributions to the same file.
            writer.write()
        block(writer)

    def use_shape_writer(self, shape: Shape, block: Callable[[CodeWriter], None]) -> None:
        """Call *block* with the writer of the file *shape* is declared in."""
        self.use_file_writer(self._settings.output_file, block)

    def filenames(self) -> list[str]:
        return list(self._writers)

    def render(self) -> dict[str, str]:
        """Return the text of every file, in the order the files were first used."""
        return {name: writer.to_string() for name, writer in self._writers.items()}


class CodeGenerationContext:
    """Everything a generator needs: model, settings, resolver, registries and writers.

    Args:
        model: The model being generated, after the closure transform.
        settings: Settings of the run.
        integrations: Integrations to apply. They are sorted by priority.
    """

    def __init__(
        self,
        model: Model,
        settings: CodegenSettings,
        integrations: list[CodegenIntegration],
    ) -> None:
        self._model = model
        self._settings = settings
        self._symbol_provider = SymbolProvider(model)
        self._integrations = sort_integrations(integrations)
        self._initializers = InitializerRegistry()
        for integration in self._integrations:
            self._initializers.add_mappings(integration.trait_mappings())
            for spec in integration.initializers():
                self._initializers.register(spec.kind, spec.renderer, spec.applies)
        self._initializers.freeze()
        self._interceptors = InterceptorRegistry()
        for integration in self._integrations:
            for interceptor in integration.interceptors(self):
                self._interceptors.register(interceptor)
        self._writer_delegator = WriterDelegator(settings, self._interceptors)

    @property
    def model(self) -> Model:
        return self._model

    @property
    def settings(self) -> CodegenSettings:
        return self._settings

    @property
    def symbol_provider(self) -> SymbolProvider:
        return self._symbol_provider

    @property
    def integrations(self) -> list[CodegenIntegration]:
        return list(self._integrations)

    @property
    def initializers(self) -> InitializerRegistry:
        return self._initializers

    @property
    def interceptors(self) -> InterceptorRegistry:
        return self._interceptors

    @property
    def writer_delegator(self) -> WriterDelegator:
        return self._writer_delegator
